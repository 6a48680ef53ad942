"""Smoke tests for the matplotlib path preview."""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from lightcycle.config import VARIANTS  # noqa: E402
from lightcycle.controller.orchestrator import SegmentOrchestrator  # noqa: E402
from lightcycle.model.projections import RenderTarget  # noqa: E402
from lightcycle.model.registry import combine, demo_path  # noqa: E402
from lightcycle.view.preview import render_preview, show_or_save, target_geometry  # noqa: E402


@pytest.mark.parametrize("target", list(RenderTarget))
def test_target_geometry(target):
    lines = target_geometry(target)
    assert lines
    assert all(line.ndim == 2 and line.shape[1] == 3 for line in lines)


@pytest.mark.parametrize("target", list(RenderTarget))
def test_preview_is_saved(tmp_path, target):
    orchestrator = SegmentOrchestrator(combine(demo_path().segments).segments, VARIANTS[target])
    output = tmp_path / f"{target}.png"

    fig = render_preview(orchestrator, title="Figure eight")
    show_or_save(fig, str(output))

    assert output.exists()
    assert output.stat().st_size > 0
    assert not plt.get_fignums()

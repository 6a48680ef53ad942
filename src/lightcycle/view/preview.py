"""
Static path preview.

Draws the target geometry and every segment's full-cycle path with
matplotlib. The paths come from `SegmentOrchestrator.full_paths`, i.e. from
the same interpolation the animation uses.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from lightcycle.controller.orchestrator import SegmentOrchestrator
from lightcycle.model import geometry
from lightcycle.model.projections import RenderTarget

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)

GRID_COLOR = "0.6"
BACKGROUND = (0.08, 0.09, 0.15)


def target_geometry(target: RenderTarget) -> list[npt.NDArray[np.float64]]:
    """Polylines outlining the render target."""
    match target:
        case RenderTarget.SPHERE:
            return geometry.sphere_scale_lines()
        case RenderTarget.PLANE:
            return geometry.plane_grid()
        case RenderTarget.TORUS:
            vertices, indices = geometry.torus_wireframe(major_segments=24, minor_segments=12)
            lines = [vertices[list(pair)] for pair in indices]
            return lines + geometry.torus_cross_sections()
        case RenderTarget.CYLINDER:
            return geometry.cylinder_wireframe()
    return []


def _draw_lines(ax: Axes, lines: Sequence[npt.NDArray[np.float64]], planar: bool, **kwargs) -> None:
    for line in lines:
        if planar:
            ax.plot(line[:, 0], line[:, 2], **kwargs)
        else:
            ax.plot(line[:, 0], line[:, 2], line[:, 1], **kwargs)


def render_preview(orchestrator: SegmentOrchestrator, title: Optional[str] = None) -> Figure:
    """
    Build a matplotlib figure of the target and every segment's path.

    Args:
        orchestrator: Provides the segments, colors and active target.
        title: Figure title; defaults to the target name.
    """
    target = orchestrator.config.target
    planar = target is RenderTarget.PLANE

    plt.rcParams["figure.constrained_layout.use"] = True
    fig = plt.figure(figsize=(7, 7), facecolor=BACKGROUND)
    if planar:
        ax = fig.add_subplot(1, 1, 1)
        ax.set_aspect("equal")
    else:
        ax = fig.add_subplot(1, 1, 1, projection="3d")
        ax.set_box_aspect((1, 1, 1))
    ax.set_facecolor(BACKGROUND)
    ax.set_axis_off()

    _draw_lines(ax, target_geometry(target), planar, color=GRID_COLOR, lw=0.4, alpha=0.5)

    paths = orchestrator.full_paths()
    for seg, path in zip(orchestrator.segments, paths):
        _draw_lines(ax, [path], planar, color=seg.color, lw=2)
        start = path[0]
        if planar:
            ax.plot(start[0], start[2], "o", color=seg.color, ms=6)
        else:
            ax.plot([start[0]], [start[2]], [start[1]], "o", color=seg.color, ms=6)

    if not planar:
        # Y is up in path coordinates, Z is up in matplotlib
        limit = max(float(np.abs(np.vstack(paths)).max()), 1.0) * 1.1
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.set_zlim(-limit, limit)

    ax.set_title(title or f"{str(target).capitalize()} view", color="white")
    logger.info(f"Rendered preview of {len(paths)} path(s) on the {target} target.")
    return fig


def show_or_save(fig: Figure, output: Optional[str] = None) -> None:
    if output:
        fig.savefig(output, dpi=150, facecolor=fig.get_facecolor())
        logger.info(f"Preview saved to: {output}")
        plt.close(fig)
    else:
        plt.show()

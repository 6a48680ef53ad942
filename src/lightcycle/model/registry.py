"""
Path Registry
=============
Named light-angle paths, each made of one or more independently animated
segments.

The registry is an explicit object handed to the orchestrator. Showing
other paths alongside the selected one is done with `combine`, which builds
a new dataset and leaves the registry untouched.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from lightcycle.model.keyframes import Timeline, DEFAULT_CYCLE_DURATION
from lightcycle.model.vector import Vector

logger = logging.getLogger(__name__)

Color = tuple[float, float, float]

SEGMENT_PALETTE: tuple[Color, ...] = (
    (1.0, 0.85, 0.3),
    (0.35, 0.75, 1.0),
    (1.0, 0.45, 0.45),
    (0.5, 0.95, 0.55),
    (0.85, 0.55, 1.0),
    (1.0, 0.65, 0.2),
    (0.3, 0.95, 0.9),
    (0.95, 0.95, 0.95),
)


def palette_color(index: int) -> Color:
    """Color of the `index`-th segment, cycling through the palette."""
    return SEGMENT_PALETTE[index % len(SEGMENT_PALETTE)]


@dataclass(frozen=True)
class SegmentSpec:
    """Static description of one animated segment: identity, keyframes and color."""
    id: int
    timeline: Timeline
    color: Color


@dataclass
class PathEntry:
    """A named path with its segments, ordered by segment id."""
    name: str
    segments: list[SegmentSpec]
    title: Optional[str] = None

    @property
    def label(self) -> str:
        return self.title or self.name

    @property
    def main_segment(self) -> SegmentSpec:
        return self.segments[0]


@dataclass(frozen=True)
class CombinedDataset:
    """Segments of a main path followed by overlay segments, with unique ids."""
    segments: tuple[SegmentSpec, ...]
    main_count: int
    sources: tuple[str, ...] = field(default_factory=tuple)

    @property
    def overlay_count(self) -> int:
        return len(self.segments) - self.main_count


def _segment_sort_key(key: Any) -> tuple[int, Any]:
    try:
        return 0, int(key)
    except (TypeError, ValueError):
        return 1, str(key)


class PathRegistry:
    """Registry of named paths, built once from raw angle data."""

    def __init__(self) -> None:
        self._paths: dict[str, PathEntry] = {}

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Mapping[Any, Any]],
        cycle_duration: float = DEFAULT_CYCLE_DURATION,
    ) -> PathRegistry:
        """
        Build a registry from the raw angle mapping.

        Args:
            raw: path name -> {segment id -> {hour -> angle pair}}. A "title"
                entry inside a path is taken as its display title.
            cycle_duration: Cycle length shared by all timelines.

        Raises:
            ValueError: If a segment cannot be turned into a timeline.
        """
        registry = cls()
        for name, path_data in raw.items():
            title = path_data.get("title") if isinstance(path_data, Mapping) else None
            segment_keys = sorted((k for k in path_data if k != "title"), key=_segment_sort_key)
            if not segment_keys:
                logger.warning(f"Path '{name}' has no segments, skipping.")
                continue

            segments = []
            for index, key in enumerate(segment_keys):
                try:
                    timeline = Timeline.build(path_data[key], cycle_duration=cycle_duration)
                except ValueError as e:
                    raise ValueError(f"Path '{name}', segment {key!r}: {e}") from e
                seg_id = int(key) if _segment_sort_key(key)[0] == 0 else index
                segments.append(SegmentSpec(id=seg_id, timeline=timeline, color=palette_color(index)))

            registry.add(name, segments, title=title if isinstance(title, str) else None)

        logger.info(f"Loaded {len(registry)} light-angle paths.")
        return registry

    def add(self, name: str, segments: Sequence[SegmentSpec], title: Optional[str] = None) -> PathEntry:
        if not segments:
            raise ValueError(f"Path '{name}' needs at least one segment.")
        entry = PathEntry(name=name, segments=list(segments), title=title)
        self._paths[name] = entry
        return entry

    def get(self, name: str) -> PathEntry:
        try:
            return self._paths[name]
        except KeyError:
            raise KeyError(f"Unknown path '{name}'. Available: {', '.join(self.names()) or 'none'}") from None

    def names(self) -> list[str]:
        return sorted(self._paths)

    def __contains__(self, name: object) -> bool:
        return name in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[PathEntry]:
        return (self._paths[name] for name in self.names())


def combine(main: Sequence[SegmentSpec], overlays: Iterable[Sequence[SegmentSpec]] = ()) -> CombinedDataset:
    """
    Combine a main path with overlay paths into one dataset.

    Main segments keep their colors; overlay segments are recolored by their
    position in the combined dataset. Ids are renumbered 0..N-1. The inputs
    are not modified.
    """
    combined: list[SegmentSpec] = [replace(seg, id=i) for i, seg in enumerate(main)]
    main_count = len(combined)
    for overlay in overlays:
        for seg in overlay:
            new_id = len(combined)
            combined.append(replace(seg, id=new_id, color=palette_color(new_id)))
    return CombinedDataset(segments=tuple(combined), main_count=main_count)


def combine_paths(registry: PathRegistry, main: str, overlays: Sequence[str] = ()) -> CombinedDataset:
    """`combine` by path name; the dataset records which paths it was built from."""
    dataset = combine(registry.get(main).segments, [registry.get(name).segments for name in overlays])
    return replace(dataset, sources=(main, *overlays))


def demo_timeline(num_points: int = 200, duration: float = 20.0) -> Timeline:
    """Figure-eight (lemniscate) path over the sphere, used by the card demo."""
    samples = []
    a = 0.8
    for i in range(num_points):
        t = (i / num_points) * 2.0 * math.pi
        time = (i / num_points) * duration
        denominator = 1.0 + math.sin(t) ** 2
        direction = Vector(
            a * math.cos(t) / denominator,
            a * math.sin(t) * math.cos(t) / denominator,
            math.sin(t * 0.5) * 0.5,
        )
        samples.append((time, direction))
    return Timeline.from_directions(samples, cycle_duration=duration)


def demo_path() -> PathEntry:
    return PathEntry(name="demo", segments=[SegmentSpec(id=0, timeline=demo_timeline(), color=palette_color(0))],
                     title="Figure eight")

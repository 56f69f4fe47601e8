"""Per-pixel contour bands of the loss surface.

Every pixel column ``px`` and scan row ``j`` of the drawing surface stands
for one ``(w, b)`` pair. A pixel belongs to a level when its loss lies within
an absolute band of that level, and each member is emitted as a one pixel
wide horizontal tick. The result is a dotted band rather than a smooth curve.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .dataset import Dataset
from .loss import mean_squared_error
from .mapping import ParameterSpaceMapper

logger = logging.getLogger(__name__)

DEFAULT_BAND = 0.1
HUE_BASE = 180
HUE_STEP = 30
STROKE_ALPHA = 0.5
LEGEND_ALPHA = 1.0

PixelPoint = Tuple[float, float]


@dataclass(frozen=True)
class ContourLevel:
    """A target loss value with a stable legend identity."""
    value: float
    index: int

    @property
    def hue(self) -> int:
        return HUE_BASE + HUE_STEP * self.index

    def color(self, alpha: float = STROKE_ALPHA) -> str:
        return f"hsla({self.hue}, 100%, 50%, {alpha:g})"

    @property
    def label(self) -> str:
        return f"Loss: {self.value:g}"


@dataclass(frozen=True)
class ContourSegment:
    p1: PixelPoint
    p2: PixelPoint
    level: ContourLevel


@dataclass(frozen=True)
class LegendEntry:
    level: ContourLevel
    text: str
    position: PixelPoint
    color: str


def make_levels(values: Iterable[float]) -> Tuple[ContourLevel, ...]:
    """Index levels in ascending order so colours stay stable across redraws."""
    return tuple(ContourLevel(float(v), i) for i, v in enumerate(sorted(values)))


def legend_entries(levels: Sequence[ContourLevel], width: int, height: int) -> Tuple[LegendEntry, ...]:
    """Legend stacked upward from the bottom-right corner of the surface."""
    return tuple(
        LegendEntry(
            level=level,
            text=level.label,
            position=(width - 60, height - level.index * 20 - 10),
            color=level.color(LEGEND_ALPHA),
        )
        for level in levels
    )


class LossGrid:
    """Loss sampled once per pixel for one dataset.

    ``values[px, j]`` is the loss at ``w = w_min + px/W * dw`` and
    ``b = b_min + j/H * db``; scan row ``j`` is drawn on pixel row ``H - j``.
    """

    def __init__(self, dataset: Dataset, mapper: ParameterSpaceMapper):
        self.dataset = dataset
        self.mapper = mapper
        width, height = mapper.width, mapper.height

        px = np.arange(width, dtype=float)[:, None]
        rows = height - np.arange(height, dtype=float)[None, :]
        w, b = mapper.to_parameter(px, rows)
        self.values: np.ndarray = np.asarray(mean_squared_error(dataset, w, b), dtype=float)
        self.values = np.broadcast_to(self.values, (width, height))
        logger.debug("Sampled loss grid %dx%d over %d points", width, height, len(dataset))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.values.shape

    @property
    def minimum(self) -> float:
        return float(self.values.min())

    @property
    def maximum(self) -> float:
        return float(self.values.max())

    def level_mask(self, level: float, band: float = DEFAULT_BAND) -> np.ndarray:
        """Boolean ``(W, H)`` mask of pixels within ``band`` of ``level``."""
        return np.abs(self.values - level) < band


class ContourExtractor:
    """Turns a dataset's loss surface into pixel segments for each level."""

    def __init__(self, mapper: ParameterSpaceMapper, levels: Iterable[float],
                 band: float = DEFAULT_BAND):
        self.mapper = mapper
        self.levels = make_levels(levels)
        self.band = band

    def grid(self, dataset: Dataset) -> LossGrid:
        return LossGrid(dataset, self.mapper)

    def segments_for_level(self, grid: LossGrid, level: ContourLevel) -> List[ContourSegment]:
        height = self.mapper.height
        columns, scan_rows = np.nonzero(grid.level_mask(level.value, self.band))
        segments = []
        for px, j in zip(columns.tolist(), scan_rows.tolist()):
            row = height - j
            segments.append(ContourSegment((px, row), (px + 1, row), level))
        return segments

    def extract(self, dataset: Dataset, grid: Optional[LossGrid] = None) -> Tuple[ContourSegment, ...]:
        """All segments, ordered by level, then pixel column, then scan row."""
        if grid is None:
            grid = self.grid(dataset)
        segments: List[ContourSegment] = []
        for level in self.levels:
            level_segments = self.segments_for_level(grid, level)
            logger.debug("Level %g: %d segments", level.value, len(level_segments))
            segments.extend(level_segments)
        return tuple(segments)

    def legend(self) -> Tuple[LegendEntry, ...]:
        return legend_entries(self.levels, self.mapper.width, self.mapper.height)

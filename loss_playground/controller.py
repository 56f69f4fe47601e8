"""Session state and recomputation for one visualization session."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

import numpy as np

from .config import INITIAL_RANDOM, PlaygroundConfig
from .contours import ContourExtractor, ContourSegment, LegendEntry, LossGrid
from .dataset import Dataset, Point, PointLike, as_point, default_dataset, random_point
from .drivers import ClickDriver, ProgressDriver
from .errors import DegenerateDatasetError
from .loss import loss_curve, mean_squared_error
from .mapping import ParameterSpaceMapper, Range
from .path import PROGRESS_MAX, PROGRESS_MIN
from .regression import ZERO, FitSummary, Parameters, fit_best_line, summarize_fit

logger = logging.getLogger(__name__)

PixelPoint = Tuple[float, float]


class ControllerState(Enum):
    IDLE = "idle"
    REFITTING = "refitting"
    RECOMPUTING = "recomputing"


@dataclass(frozen=True)
class CurrentState:
    """Values shown as text next to the plots."""
    w: float
    b: float
    loss: float
    best_w: float
    best_b: float


@dataclass(frozen=True)
class PathSegment:
    start: PixelPoint
    end: PixelPoint


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs for one paint."""
    dataset: Dataset
    regression_line: Tuple[PixelPoint, PixelPoint]
    contour_segments: Tuple[ContourSegment, ...]
    legend: Tuple[LegendEntry, ...]
    path: PathSegment
    marker: PixelPoint
    state: CurrentState


Renderer = Callable[[Frame], None]


class VisualizationController:
    """Owns the dataset and every parameter derived from it.

    Dataset changes refit the best line and rebuild the contour bands.
    Progress and click changes only move the current point. Each change
    finishes with a fresh ``Frame`` handed to the optional renderer.
    """

    def __init__(self, points: Optional[Iterable[PointLike]] = None,
                 config: Optional[PlaygroundConfig] = None,
                 renderer: Optional[Renderer] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or PlaygroundConfig()
        self.renderer = renderer
        self._rng = rng if rng is not None else np.random.default_rng(self.config.seed)

        self.mapper = ParameterSpaceMapper(
            w_range=Range(self.config.w_min, self.config.w_max),
            b_range=Range(self.config.b_min, self.config.b_max),
            width=self.config.canvas_width,
            height=self.config.canvas_height,
        )
        self.extractor = ContourExtractor(self.mapper, self.config.levels, self.config.band)
        self._click_driver = ClickDriver(self.mapper)

        self.state = ControllerState.IDLE
        self.last_error: Optional[DegenerateDatasetError] = None
        self._generation = 0

        self._progress = 0.0
        self._selection: Optional[Parameters] = None
        self._initial = self._draw_initial()

        dataset = Dataset(points) if points is not None else default_dataset()
        self._dataset = dataset
        # No session without a best-fit line; a degenerate dataset raises here
        self._best = fit_best_line(dataset)
        self._grid = self.extractor.grid(dataset)
        self._segments = self.extractor.extract(dataset, self._grid)
        self._current = ZERO
        self._loss = 0.0
        self._recompute_current()

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def set_dataset(self, points: Iterable[PointLike]) -> None:
        """Replace the dataset; refits and rebuilds contours."""
        self._apply_dataset(Dataset(points))

    def append_point(self, point: PointLike) -> None:
        self._apply_dataset(self._dataset.appended(as_point(point)))

    def append_random_point(self) -> Point:
        point = random_point(self._rng,
                             x_bounds=(self.config.line_x_start, self.config.line_x_end),
                             y_bounds=(0.0, self.config.chart_y_max))
        self.append_point(point)
        return point

    def set_progress(self, value: float) -> None:
        """Move along the path from the initial anchor to the best fit."""
        clamped = max(PROGRESS_MIN, min(PROGRESS_MAX, float(value)))
        if clamped != value:
            logger.debug("Clamped progress %s to %s", value, clamped)
        self._progress = clamped
        self._selection = None
        self._refresh_current()

    def select_parameters(self, w: float, b: float) -> None:
        """Show an arbitrary parameter pair, inside the visible ranges or not."""
        self._selection = Parameters(float(w), float(b))
        self._refresh_current()

    def select_pixel(self, px: float, py: float) -> None:
        self._selection = self._click_driver.parameters(px, py)
        self._refresh_current()

    def set_initial(self, params: Parameters) -> None:
        self._initial = params
        self._refresh_current()

    def randomize_initial(self) -> Parameters:
        self._initial = self._random_parameters()
        self._refresh_current()
        return self._initial

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def best(self) -> Parameters:
        return self._best

    @property
    def initial(self) -> Parameters:
        return self._initial

    @property
    def current(self) -> Parameters:
        return self._current

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def selection(self) -> Optional[Parameters]:
        return self._selection

    @property
    def grid(self) -> LossGrid:
        return self._grid

    def get_dataset(self) -> Dataset:
        return self._dataset

    def get_current_state(self) -> CurrentState:
        return CurrentState(
            w=self._current.w,
            b=self._current.b,
            loss=self._loss,
            best_w=self._best.w,
            best_b=self._best.b,
        )

    def get_contour_segments(self) -> Tuple[ContourSegment, ...]:
        return self._segments

    def get_legend(self) -> Tuple[LegendEntry, ...]:
        return self.extractor.legend()

    def get_path_segment(self) -> PathSegment:
        """Pixel segment from the best fit to the current point."""
        return PathSegment(
            start=self._to_pixel(self._best),
            end=self._to_pixel(self._current),
        )

    def get_current_marker(self) -> PixelPoint:
        return self._to_pixel(self._current)

    def get_regression_line(self) -> Tuple[PixelPoint, PixelPoint]:
        """Endpoints of the current line across the scatter chart."""
        x0, x1 = self.config.line_x_start, self.config.line_x_end
        return (x0, self._current.predict(x0)), (x1, self._current.predict(x1))

    def get_loss_curve(self, samples: int = 300) -> Tuple[np.ndarray, np.ndarray]:
        """Loss against ``w`` at the current intercept."""
        return loss_curve(self._dataset, self._current.b,
                          self.config.w_min, self.config.w_max, samples)

    def get_fit_summary(self, params: Optional[Parameters] = None) -> FitSummary:
        return summarize_fit(self._dataset, params or self._best)

    def snapshot(self) -> Frame:
        return Frame(
            dataset=self._dataset,
            regression_line=self.get_regression_line(),
            contour_segments=self._segments,
            legend=self.get_legend(),
            path=self.get_path_segment(),
            marker=self.get_current_marker(),
            state=self.get_current_state(),
        )

    # ------------------------------------------------------------------
    # Recompute
    # ------------------------------------------------------------------

    def _apply_dataset(self, dataset: Dataset) -> None:
        self._generation += 1
        generation = self._generation
        self.state = ControllerState.REFITTING
        try:
            best = fit_best_line(dataset)
        except DegenerateDatasetError as e:
            self.state = ControllerState.IDLE
            self.last_error = e
            logger.warning("Keeping previous fit, dataset rejected: %s", e)
            raise

        grid = self.extractor.grid(dataset)
        segments = self.extractor.extract(dataset, grid)
        if generation != self._generation:
            logger.debug("Discarding stale refit %d (latest is %d)", generation, self._generation)
            return

        self._dataset = dataset
        self._best = best
        self._grid = grid
        self._segments = segments
        self.last_error = None
        logger.debug("Refit %d points: %d contour segments", len(dataset), len(segments))
        self._refresh_current()

    def _refresh_current(self) -> None:
        self.state = ControllerState.RECOMPUTING
        self._recompute_current()
        self.state = ControllerState.IDLE
        self._emit()

    def _recompute_current(self) -> None:
        if self._selection is not None:
            current = self._selection
        else:
            current = ProgressDriver(self._initial, self._best).parameters(self._progress)
        self._current = current
        self._loss = float(mean_squared_error(self._dataset, current.w, current.b))

    def _emit(self) -> None:
        if self.renderer is not None:
            self.renderer(self.snapshot())

    def _draw_initial(self) -> Parameters:
        if self.config.initial_mode == INITIAL_RANDOM:
            return self._random_parameters()
        return ZERO

    def _random_parameters(self) -> Parameters:
        return Parameters(
            float(self._rng.uniform(self.config.w_min, self.config.w_max)),
            float(self._rng.uniform(self.config.b_min, self.config.b_max)),
        )

    def _to_pixel(self, params: Parameters) -> PixelPoint:
        px, py = self.mapper.to_pixel(params.w, params.b)
        return float(px), float(py)

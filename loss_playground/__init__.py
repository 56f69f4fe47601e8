"""Parameter-space loss engine for an interactive linear regression playground."""

from .config import PlaygroundConfig
from .contours import ContourExtractor, ContourLevel, ContourSegment, LegendEntry, LossGrid
from .controller import ControllerState, CurrentState, Frame, PathSegment, VisualizationController
from .dataset import Dataset, Point
from .drivers import ClickDriver, ProgressDriver
from .errors import DegenerateDatasetError, InvalidDatasetError, InvalidRangeError, LossPlaygroundError
from .loss import loss_curve, mean_squared_error
from .mapping import ParameterSpaceMapper, Range
from .path import interpolate, interpolate_progress
from .regression import FitSummary, Parameters, fit_best_line, summarize_fit

__version__ = "0.1.0"

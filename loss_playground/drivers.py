"""Input drivers that turn raw widget values into candidate parameters."""

from abc import ABC, abstractmethod

from .mapping import ParameterSpaceMapper
from .path import interpolate_progress
from .regression import Parameters


class ParameterDriver(ABC):
    """Source of the currently displayed parameters."""

    @abstractmethod
    def parameters(self, *args) -> Parameters:
        pass


class ProgressDriver(ParameterDriver):
    """Slider input: walks from the initial anchor to the best fit."""

    def __init__(self, initial: Parameters, best: Parameters):
        self.initial = initial
        self.best = best

    def parameters(self, progress: float) -> Parameters:
        return interpolate_progress(self.initial, self.best, progress)


class ClickDriver(ParameterDriver):
    """Pointer input: the clicked pixel on the contour surface."""

    def __init__(self, mapper: ParameterSpaceMapper):
        self.mapper = mapper

    def parameters(self, px: float, py: float) -> Parameters:
        w, b = self.mapper.to_parameter(float(px), float(py))
        return Parameters(float(w), float(b))

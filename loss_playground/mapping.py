"""Mapping between the (w, b) parameter plane and a pixel drawing surface."""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .errors import InvalidRangeError

ArrayOrFloat = Union[float, np.ndarray]


@dataclass(frozen=True)
class Range:
    """Closed interval ``[min, max]`` with ``min < max``."""
    min: float
    max: float

    def __post_init__(self):
        if not self.min < self.max:
            raise InvalidRangeError(f"Range minimum {self.min} must be below maximum {self.max}")

    @property
    def span(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class ParameterSpaceMapper:
    """Bidirectional affine map between parameter space and pixels.

    ``w`` grows to the right. ``b`` grows upward while pixel rows grow
    downward, so the vertical axis is flipped: ``b_range.max`` sits on row 0
    and ``b_range.min`` on row ``height``.
    """
    w_range: Range
    b_range: Range
    width: int
    height: int

    def to_pixel(self, w: ArrayOrFloat, b: ArrayOrFloat) -> Tuple[ArrayOrFloat, ArrayOrFloat]:
        px = (w - self.w_range.min) / self.w_range.span * self.width
        py = self.height - (b - self.b_range.min) / self.b_range.span * self.height
        return px, py

    def to_parameter(self, px: ArrayOrFloat, py: ArrayOrFloat) -> Tuple[ArrayOrFloat, ArrayOrFloat]:
        w = self.w_range.min + (px / self.width) * self.w_range.span
        b = self.b_range.min + ((self.height - py) / self.height) * self.b_range.span
        return w, b

"""Sample points and the ordered dataset the playground fits."""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import InvalidDatasetError

# Points drawn by "add random point" stay inside the visible scatter chart
RANDOM_X_BOUNDS = (0.0, 5.0)
RANDOM_Y_BOUNDS = (0.0, 6.0)


@dataclass(frozen=True)
class Point:
    """One observed sample."""
    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidDatasetError(f"Point coordinates must be finite, got ({self.x}, {self.y})")


PointLike = Union[Point, Tuple[float, float], Sequence[float]]


def as_point(value: PointLike) -> Point:
    if isinstance(value, Point):
        return value
    try:
        x, y = value
        x, y = float(x), float(y)
    except (TypeError, ValueError) as e:
        raise InvalidDatasetError(f"Cannot read {value!r} as an (x, y) pair") from e
    return Point(x, y)


class Dataset:
    """Immutable ordered sequence of points.

    Growing a dataset returns a new instance, so anything holding the old
    one keeps a consistent view.
    """

    __slots__ = ('_points',)

    def __init__(self, points: Iterable[PointLike] = ()):
        self._points: Tuple[Point, ...] = tuple(as_point(p) for p in points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"Dataset({list((p.x, p.y) for p in self._points)})"

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def xs(self) -> np.ndarray:
        return np.array([p.x for p in self._points], dtype=float)

    @property
    def ys(self) -> np.ndarray:
        return np.array([p.y for p in self._points], dtype=float)

    def appended(self, point: PointLike) -> 'Dataset':
        """Return a new dataset with ``point`` added at the end."""
        return Dataset(self._points + (as_point(point),))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({'x': self.xs, 'y': self.ys})

    @classmethod
    def from_frame(cls, df: pd.DataFrame, x_col: str = 'x', y_col: str = 'y') -> 'Dataset':
        """Build a dataset from two numeric columns, dropping incomplete rows."""
        missing = [col for col in (x_col, y_col) if col not in df.columns]
        if missing:
            raise InvalidDatasetError(f"Missing columns: {missing}")

        values = df[[x_col, y_col]].apply(pd.to_numeric, errors='coerce')
        values = values.replace([np.inf, -np.inf], np.nan).dropna()
        return cls(zip(values[x_col].tolist(), values[y_col].tolist()))


def random_point(rng: Optional[np.random.Generator] = None,
                 x_bounds: Tuple[float, float] = RANDOM_X_BOUNDS,
                 y_bounds: Tuple[float, float] = RANDOM_Y_BOUNDS) -> Point:
    """Draw a point uniformly inside the visible chart area."""
    rng = rng if rng is not None else np.random.default_rng()
    return Point(float(rng.uniform(*x_bounds)), float(rng.uniform(*y_bounds)))


DEFAULT_POINTS: Tuple[Point, ...] = (Point(1.0, 2.0), Point(4.0, 4.0))


def default_dataset() -> Dataset:
    return Dataset(DEFAULT_POINTS)

"""Mean squared error over the (w, b) parameter plane."""

from typing import Tuple, Union

import numpy as np

from .dataset import Dataset
from .errors import DegenerateDatasetError

ArrayOrFloat = Union[float, np.ndarray]


def mean_squared_error(dataset: Dataset, w: ArrayOrFloat, b: ArrayOrFloat) -> ArrayOrFloat:
    """Loss of the line ``y = w*x + b``, halved: sum((w*x + b - y)^2) / (2n).

    ``w`` and ``b`` may be numpy arrays; they broadcast against each other and
    every point is accumulated in dataset order, so a grid evaluation gives
    bit-for-bit the same values as evaluating each pair on its own.
    """
    n = len(dataset)
    if n == 0:
        raise DegenerateDatasetError("Loss is undefined for an empty dataset")

    total = 0.0
    for point in dataset:
        residual = w * point.x + b - point.y
        total = total + residual * residual
    return total / (2 * n)


def loss_curve(dataset: Dataset, b: float, w_min: float, w_max: float,
               samples: int = 300) -> Tuple[np.ndarray, np.ndarray]:
    """Loss as a function of ``w`` with the intercept held at ``b``."""
    samples = max(2, int(samples))
    w_values = np.linspace(w_min, w_max, samples)
    return w_values, np.asarray(mean_squared_error(dataset, w_values, b), dtype=float)

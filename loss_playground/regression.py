"""Closed-form ordinary least squares for a single feature."""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy import stats

from .dataset import Dataset
from .errors import DegenerateDatasetError
from .loss import mean_squared_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parameters:
    """A candidate model ``y = w*x + b``."""
    w: float
    b: float

    def predict(self, x):
        return self.w * x + self.b


ZERO = Parameters(0.0, 0.0)


@dataclass(frozen=True)
class FitSummary:
    """Goodness-of-fit statistics for a line against a dataset."""
    r_squared: float
    rmse: float
    loss: float
    slope_std_error: Optional[float] = None
    slope_t_stat: Optional[float] = None
    slope_p_value: Optional[float] = None


def fit_best_line(dataset: Dataset) -> Parameters:
    """Fit slope and intercept with the normal-equation sums.

    Raises DegenerateDatasetError when fewer than two points are given or
    every point shares the same x, since the slope denominator vanishes.
    """
    n = len(dataset)
    if n < 2:
        raise DegenerateDatasetError(f"Need at least 2 points to fit a line, got {n}")

    first_x = dataset[0].x
    if all(point.x == first_x for point in dataset):
        raise DegenerateDatasetError("All points share the same x; the slope is undefined")

    sum_x = sum_y = sum_xy = sum_xx = 0.0
    for point in dataset:
        sum_x += point.x
        sum_y += point.y
        sum_xy += point.x * point.y
        sum_xx += point.x * point.x

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        raise DegenerateDatasetError("x has zero variance; the slope is undefined")

    w = (n * sum_xy - sum_x * sum_y) / denominator
    b = (sum_y - w * sum_x) / n
    if not (math.isfinite(w) and math.isfinite(b)):
        raise DegenerateDatasetError(f"Fit produced non-finite parameters (w={w}, b={b})")

    logger.debug("Fitted %d points: w=%.6f b=%.6f", n, w, b)
    return Parameters(w, b)


def summarize_fit(dataset: Dataset, params: Parameters) -> FitSummary:
    """R², RMSE and slope significance for ``params`` on ``dataset``."""
    x, y = dataset.xs, dataset.ys
    n = len(x)
    if n == 0:
        raise DegenerateDatasetError("Cannot summarize a fit on an empty dataset")

    residuals = y - params.predict(x)
    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))

    if ss_tot < 1e-10:  # Constant target
        r_squared = 0.0
    else:
        r_squared = max(0.0, 1 - ss_res / ss_tot)

    rmse = math.sqrt(ss_res / n)
    loss = float(mean_squared_error(dataset, params.w, params.b))

    std_error = t_stat = p_value = None
    sxx = float(np.sum((x - np.mean(x)) ** 2))
    if n > 2 and sxx > 1e-12:
        sigma2 = ss_res / (n - 2)
        std_error = math.sqrt(sigma2 / sxx)
        if std_error > 1e-12:
            t_stat = params.w / std_error
            p_value = float(2 * stats.t.sf(abs(t_stat), n - 2))

    return FitSummary(
        r_squared=r_squared,
        rmse=rmse,
        loss=loss,
        slope_std_error=std_error,
        slope_t_stat=t_stat,
        slope_p_value=p_value,
    )

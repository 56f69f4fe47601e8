"""Straight-line path between two anchor parameter points."""

from .regression import Parameters

PROGRESS_MIN = 0.0
PROGRESS_MAX = 100.0


def interpolate(start: Parameters, end: Parameters, t: float) -> Parameters:
    """Point at fraction ``t`` of the way from ``start`` to ``end``.

    The endpoints are returned as-is so that ``t == 1`` lands exactly on
    ``end`` instead of accumulating rounding error.
    """
    if t == 0:
        return start
    if t == 1:
        return end
    return Parameters(
        start.w + (end.w - start.w) * t,
        start.b + (end.b - start.b) * t,
    )


def interpolate_progress(start: Parameters, end: Parameters, progress: float) -> Parameters:
    """Same as ``interpolate`` with a slider value in ``[0, 100]``."""
    return interpolate(start, end, progress / PROGRESS_MAX)

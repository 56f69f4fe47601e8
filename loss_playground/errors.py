"""Exceptions raised by the loss playground core."""


class LossPlaygroundError(Exception):
    """Base class for all loss playground errors."""


class DegenerateDatasetError(LossPlaygroundError, ValueError):
    """The dataset cannot define a best-fit line (too few points or no x-variance)."""


class InvalidRangeError(LossPlaygroundError, ValueError):
    """A parameter range whose minimum is not strictly below its maximum."""


class InvalidDatasetError(LossPlaygroundError, ValueError):
    """Point data that is non-finite or cannot be read as x/y columns."""

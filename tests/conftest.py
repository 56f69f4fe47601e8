import pytest

from loss_playground import Dataset, PlaygroundConfig


@pytest.fixture
def two_points():
    return Dataset([(1, 2), (4, 4)])


@pytest.fixture
def noisy_points():
    """Best fit w=0.5, b=1 with a minimum loss of 0.25."""
    return Dataset([(1, 1), (2, 3), (3, 2)])


@pytest.fixture
def small_config():
    return PlaygroundConfig(canvas_width=60, canvas_height=60)

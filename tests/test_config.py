import pytest

from loss_playground import PlaygroundConfig
from loss_playground.config import DEFAULT_LEVELS, INITIAL_RANDOM


class TestPlaygroundConfig:

    def test_defaults(self):
        config = PlaygroundConfig()
        assert (config.w_min, config.w_max) == (-1.0, 3.0)
        assert (config.b_min, config.b_max) == (-1.0, 5.0)
        assert config.levels == DEFAULT_LEVELS == (0.5, 1.0, 2.0, 4.0, 8.0, 16.0)
        assert config.band == 0.1
        assert (config.canvas_width, config.canvas_height) == (300, 300)

    def test_levels_sorted(self):
        assert PlaygroundConfig(levels=(4, 1, 2)).levels == (1.0, 2.0, 4.0)

    def test_canvas_clamped(self):
        config = PlaygroundConfig(canvas_width=0, canvas_height=5000)
        assert config.canvas_width == 1
        assert config.canvas_height == 1000

    def test_unknown_initial_mode(self):
        with pytest.raises(ValueError):
            PlaygroundConfig(initial_mode="sideways")

    def test_with_overrides(self):
        config = PlaygroundConfig().with_overrides(initial_mode=INITIAL_RANDOM, seed=3)
        assert config.initial_mode == INITIAL_RANDOM
        assert config.seed == 3
        assert config != PlaygroundConfig()

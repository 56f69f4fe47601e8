"""Session-wide settings for the playground."""

from dataclasses import dataclass, replace
from typing import Tuple

DEFAULT_LEVELS: Tuple[float, ...] = (0.5, 1.0, 2.0, 4.0, 8.0, 16.0)

INITIAL_ZERO = "zero"
INITIAL_RANDOM = "random"


@dataclass(frozen=True)
class PlaygroundConfig:
    """Visible parameter domain, drawing surface and contour settings."""
    w_min: float = -1.0
    w_max: float = 3.0
    b_min: float = -1.0
    b_max: float = 5.0
    canvas_width: int = 300
    canvas_height: int = 300
    levels: Tuple[float, ...] = DEFAULT_LEVELS
    band: float = 0.1
    line_x_start: float = 0.0
    line_x_end: float = 5.0
    chart_y_max: float = 6.0
    initial_mode: str = INITIAL_ZERO
    seed: int = 42

    def __post_init__(self):
        # Keep the canvas usable no matter what the sidebar hands us
        object.__setattr__(self, 'canvas_width', max(1, min(1000, int(self.canvas_width))))
        object.__setattr__(self, 'canvas_height', max(1, min(1000, int(self.canvas_height))))
        object.__setattr__(self, 'levels', tuple(sorted(float(level) for level in self.levels)))
        if self.initial_mode not in (INITIAL_ZERO, INITIAL_RANDOM):
            raise ValueError(f"Unknown initial mode: {self.initial_mode!r}")

    def with_overrides(self, **overrides) -> 'PlaygroundConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

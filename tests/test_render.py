import numpy as np
import pytest

from loss_playground import PlaygroundConfig, VisualizationController
from loss_playground.render import (
    CLICK_TARGET_NAME,
    contour_figure,
    loss_curve_figure,
    regression_figure,
)


@pytest.fixture
def config():
    return PlaygroundConfig(canvas_width=60, canvas_height=60)


@pytest.fixture
def frame(config):
    controller = VisualizationController([(1, 2), (4, 4)], config=config)
    controller.set_progress(100)
    return controller.snapshot()


class TestRegressionFigure:

    def test_points_and_line(self, frame, config):
        fig = regression_figure(frame, config)
        points, line = fig.data
        assert list(points.x) == [1.0, 4.0]
        assert list(line.x) == [0.0, 5.0]
        assert line.y[0] == pytest.approx(4 / 3)
        assert line.y[1] == pytest.approx(5 * 2 / 3 + 4 / 3)
        assert tuple(fig.layout.xaxis.range) == (0.0, 5.0)


class TestContourFigure:

    def test_one_trace_per_drawn_level(self, frame, config):
        """Level traces, then the path and the current marker."""
        fig = contour_figure(frame, config)
        drawn_levels = {s.level.index for s in frame.contour_segments}
        assert len(fig.data) == len(drawn_levels) + 2
        assert fig.data[-1].name == 'Current'

    def test_segments_separated_by_gaps(self, frame, config):
        fig = contour_figure(frame, config)
        first_level = fig.data[0]
        count = sum(1 for s in frame.contour_segments if s.level.label == first_level.name)
        assert len(first_level.x) == 3 * count
        assert first_level.x[2] is None
        assert first_level.line.color.startswith('hsla(')

    def test_pixel_axes_flipped(self, frame, config):
        fig = contour_figure(frame, config)
        assert tuple(fig.layout.yaxis.range) == (60, 0)
        assert tuple(fig.layout.xaxis.range) == (0, 60)

    def test_legend_annotations(self, frame, config):
        fig = contour_figure(frame, config)
        assert [a.text for a in fig.layout.annotations] == [e.text for e in frame.legend]

    def test_click_targets(self, frame, config):
        fig = contour_figure(frame, config, click_step=10)
        targets = [t for t in fig.data if t.name == CLICK_TARGET_NAME]
        assert len(targets) == 1
        assert len(targets[0].x) == 7 * 7


class TestLossCurveFigure:

    def test_curve_and_marker(self):
        ws = np.linspace(-1, 3, 10)
        fig = loss_curve_figure(ws, ws ** 2, current_w=1.0, current_loss=1.0, b=0.5)
        assert len(fig.data) == 2
        assert list(fig.data[1].x) == [1.0]
        assert "b = 0.500" in fig.layout.title.text

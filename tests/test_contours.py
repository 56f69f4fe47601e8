"""Tests for the per-pixel contour bands and their legend identity."""

import numpy as np
import pytest

from loss_playground import (
    ContourExtractor,
    ContourLevel,
    Dataset,
    LossGrid,
    ParameterSpaceMapper,
    Range,
    mean_squared_error,
)
from loss_playground.contours import legend_entries, make_levels

W = H = 40


@pytest.fixture
def mapper():
    return ParameterSpaceMapper(Range(-1, 3), Range(-1, 5), width=W, height=H)


def brute_force_pixels(dataset, level, band=0.1):
    """Direct scan over every pixel with the scalar loss."""
    pixels = []
    for x in range(W):
        for y in range(H):
            w = -1 + (x / W) * 4
            b = -1 + (y / H) * 6
            if abs(mean_squared_error(dataset, w, b) - level) < band:
                pixels.append((x, H - y))
    return pixels


class TestLevels:

    def test_levels_indexed_in_ascending_order(self):
        levels = make_levels([4, 0.5, 1])
        assert [lv.value for lv in levels] == [0.5, 1.0, 4.0]
        assert [lv.index for lv in levels] == [0, 1, 2]

    def test_hue_identity(self):
        """Each level keeps hue 180 + 30 * index for strokes and legend."""
        levels = make_levels([0.5, 1, 2, 4, 8, 16])
        assert [lv.hue for lv in levels] == [180, 210, 240, 270, 300, 330]
        assert levels[1].color() == "hsla(210, 100%, 50%, 0.5)"
        assert levels[1].color(1.0) == "hsla(210, 100%, 50%, 1)"

    def test_label(self):
        assert ContourLevel(0.5, 0).label == "Loss: 0.5"
        assert ContourLevel(16.0, 5).label == "Loss: 16"

    def test_legend_positions(self):
        levels = make_levels([0.5, 1, 2])
        entries = legend_entries(levels, 300, 300)
        assert [e.position for e in entries] == [(240, 290), (240, 270), (240, 250)]
        assert [e.text for e in entries] == ["Loss: 0.5", "Loss: 1", "Loss: 2"]
        assert entries[2].color == "hsla(240, 100%, 50%, 1)"


class TestLossGrid:

    def test_shape_and_orientation(self, mapper, two_points):
        """values[px, j] is the loss at w_min + px/W*dw, b_min + j/H*db."""
        grid = LossGrid(two_points, mapper)
        assert grid.shape == (W, H)
        assert grid.values[0, 0] == mean_squared_error(two_points, -1.0, -1.0)
        assert grid.values[10, 20] == mean_squared_error(two_points, -1 + (10 / W) * 4, -1 + (20 / H) * 6)

    def test_minimum_near_best_fit(self, mapper, noisy_points):
        grid = LossGrid(noisy_points, mapper)
        assert grid.minimum >= 0.25 - 1e-12
        assert grid.maximum > grid.minimum


class TestContourExtractor:

    def test_matches_pixel_scan(self, mapper, noisy_points):
        """Qualifying pixels are exactly those of a direct per-pixel scan."""
        extractor = ContourExtractor(mapper, [0.5, 1, 2, 4])
        segments = extractor.extract(noisy_points)
        for level in extractor.levels:
            found = [s.p1 for s in segments if s.level == level]
            assert found == brute_force_pixels(noisy_points, level.value)

    def test_segments_are_one_pixel_ticks(self, mapper, two_points):
        segments = ContourExtractor(mapper, [1, 2]).extract(two_points)
        assert segments
        for segment in segments:
            assert segment.p2 == (segment.p1[0] + 1, segment.p1[1])
            assert 0 <= segment.p1[0] < W
            assert 0 < segment.p1[1] <= H

    def test_ordered_by_level(self, mapper, two_points):
        segments = ContourExtractor(mapper, [2, 0.5, 1]).extract(two_points)
        indices = [s.level.index for s in segments]
        assert indices == sorted(indices)

    def test_no_segments_below_minimum(self, mapper, noisy_points):
        """A level below the global minimum minus the band never qualifies."""
        segments = ContourExtractor(mapper, [0.1]).extract(noisy_points)
        assert segments == ()

    def test_attained_level_has_segments(self, mapper, noisy_points):
        grid = LossGrid(noisy_points, mapper)
        attained = float(grid.values[7, 23])
        segments = ContourExtractor(mapper, [attained]).extract(noisy_points, grid)
        assert (7, H - 23) in [s.p1 for s in segments]

    def test_reuses_supplied_grid(self, mapper, two_points):
        extractor = ContourExtractor(mapper, [0.5, 1, 2])
        grid = extractor.grid(two_points)
        assert extractor.extract(two_points, grid) == extractor.extract(two_points)

    def test_band_is_absolute(self, mapper, noisy_points):
        """Widening the band only adds pixels."""
        narrow = set(s.p1 for s in ContourExtractor(mapper, [2], band=0.1).extract(noisy_points))
        wide = set(s.p1 for s in ContourExtractor(mapper, [2], band=0.5).extract(noisy_points))
        assert narrow < wide

    def test_output_is_immutable(self, mapper, two_points):
        segments = ContourExtractor(mapper, [1]).extract(two_points)
        assert isinstance(segments, tuple)

    def test_legend_follows_mapper(self, mapper):
        legend = ContourExtractor(mapper, [0.5, 1]).legend()
        assert legend[0].position == (W - 60, H - 10)

"""
Tests for the coordinate transform and zoom handling.
"""

import numpy as np
import pytest

from mark_counter.core.marking.transform import (
    ZoomState,
    points_to_screen_space,
    scaled_size,
    to_image_space,
    to_screen_space,
    zoom_in,
    zoom_out,
)


class TestCoordinateTransform:
    def test_to_image_space(self):
        assert to_image_space((150, 90), (50, 10), 2.0) == (50.0, 40.0)

    def test_to_image_space_unzoomed(self):
        assert to_image_space((12.5, 7), (0, 0), 1.0) == (12.5, 7.0)

    def test_to_screen_space(self):
        assert to_screen_space((50, 40), 0.5) == (25.0, 20.0)

    @pytest.mark.parametrize("zoom", [0.2, 0.3, 1.0, 1.7, 3.3])
    @pytest.mark.parametrize("point", [(0.0, 0.0), (12.3, 45.6), (799.9, 0.1)])
    def test_round_trip(self, zoom, point):
        screen = to_screen_space(point, zoom)
        image = to_image_space(screen, (0, 0), zoom)
        np.testing.assert_allclose(to_screen_space(image, zoom), screen)
        np.testing.assert_allclose(image, point)

    def test_round_trip_with_origin(self):
        origin = (35.0, 12.0)
        screen = to_screen_space((10.0, 20.0), 1.3)
        pointer = (screen[0] + origin[0], screen[1] + origin[1])
        np.testing.assert_allclose(to_image_space(pointer, origin, 1.3), (10.0, 20.0))

    @pytest.mark.parametrize("zoom", [0, -1.0])
    def test_rejects_non_positive_zoom(self, zoom):
        with pytest.raises(ValueError):
            to_image_space((1, 1), (0, 0), zoom)
        with pytest.raises(ValueError):
            to_screen_space((1, 1), zoom)

    def test_points_to_screen_space(self):
        points = np.array([[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_allclose(
            points_to_screen_space(points, 2.0), [[2.0, 4.0], [6.0, 8.0]]
        )

    def test_scaled_size(self):
        assert scaled_size(200, 100, 1.5) == (300, 150)
        assert scaled_size(3, 3, 0.2) == (1, 1)


class TestZoom:
    def test_zoom_in_has_no_ceiling(self):
        z = 1.0
        for _ in range(50):
            z = zoom_in(z)
        assert z == pytest.approx(6.0)

    def test_zoom_out_clamps_to_floor(self):
        assert zoom_out(0.25) == 0.2
        assert zoom_out(0.2) == 0.2

    def test_repeated_steps_do_not_drift(self):
        z = 1.0
        for _ in range(3):
            z = zoom_in(z)
        assert z == 1.3
        for _ in range(3):
            z = zoom_out(z)
        assert z == 1.0

    def test_zoom_state(self):
        zoom = ZoomState()
        assert zoom.value == 1.0
        assert zoom.zoom_in() == 1.1
        for _ in range(20):
            zoom.zoom_out()
        assert zoom.value == 0.2
        assert zoom.reset() == 1.0

    def test_zoom_state_custom_step(self):
        zoom = ZoomState(initial=1.0, step=0.25, minimum=0.5)
        assert zoom.zoom_in() == 1.25
        zoom.zoom_out()
        zoom.zoom_out()
        zoom.zoom_out()
        assert zoom.value == 0.5

    def test_zoom_state_rejects_bad_step(self):
        with pytest.raises(ValueError):
            ZoomState(step=0)

    def test_initial_below_minimum_rejected(self):
        with pytest.raises(ValueError):
            ZoomState(initial=0.1, minimum=0.2)

    def test_zoom_does_not_move_marks(self, session):
        mark = session.add_mark(40.0, 30.0)
        session.zoom_in()
        session.zoom_in()
        session.zoom_out()
        assert session.store.get(mark.id).position == (40.0, 30.0)
        assert to_screen_space(mark.position, session.zoom.value) == pytest.approx(
            (44.0, 33.0)
        )

"""
Tests for the GUI adapter rendering.
"""

import numpy as np
import pytest
from unittest.mock import Mock

from mark_counter.core.marking import MarkingSession, Section
from mark_counter.interfaces import GUIMarkingAdapter
from mark_counter.interfaces.gui_adapter import color_to_rgb, draw_mark


@pytest.fixture
def dark_session(registry, black_image):
    session = MarkingSession(registry)
    session.load_image(black_image)
    return session


class TestColorToRgb:
    def test_named_colors(self):
        assert color_to_rgb("red") == (255, 0, 0)
        assert color_to_rgb("lime") == (0, 255, 0)
        assert color_to_rgb("#0000ff") == (0, 0, 255)

    def test_unknown_color(self):
        with pytest.raises(ValueError):
            color_to_rgb("not-a-color")


class TestDrawMark:
    def test_whole_fills_center(self, black_image):
        draw_mark(black_image, (40, 30), (255, 0, 0), Section.WHOLE)
        assert tuple(black_image[30, 40]) == (255, 0, 0)

    def test_half_vertical_fills_left_half(self, black_image):
        draw_mark(black_image, (40, 30), (255, 0, 0), Section.HALF_VERTICAL, radius=10)
        assert tuple(black_image[30, 35]) == (255, 0, 0)
        assert tuple(black_image[30, 45]) == (0, 0, 0)

    def test_half_horizontal_fills_top_half(self, black_image):
        draw_mark(
            black_image, (40, 30), (255, 0, 0), Section.HALF_HORIZONTAL, radius=10
        )
        assert tuple(black_image[25, 40]) == (255, 0, 0)
        assert tuple(black_image[35, 40]) == (0, 0, 0)


class TestGUIMarkingAdapter:
    def test_no_image(self, registry):
        adapter = GUIMarkingAdapter(MarkingSession(registry))
        assert adapter.get_visualization() is None

    def test_visualization_follows_zoom(self, dark_session):
        adapter = GUIMarkingAdapter(dark_session)
        assert adapter.get_visualization().shape == (60, 80, 3)
        for _ in range(10):
            dark_session.zoom_in()
        assert adapter.get_visualization().shape == (120, 160, 3)

    def test_marks_are_drawn_at_screen_position(self, dark_session):
        dark_session.add_mark(20, 10, color="lime")
        dark_session.zoom.value = 2.0
        vis = GUIMarkingAdapter(dark_session).get_visualization()
        assert tuple(vis[20, 40]) == (0, 255, 0)
        assert tuple(vis[10, 20]) == (0, 0, 0)

    def test_does_not_modify_source_image(self, dark_session):
        dark_session.add_mark(20, 10)
        GUIMarkingAdapter(dark_session).get_visualization()
        assert not dark_session.image.any()

    def test_selected_mark_is_highlighted(self, dark_session):
        mark = dark_session.add_mark(40, 30)
        adapter = GUIMarkingAdapter(dark_session, mark_radius=7, border=2)
        plain = adapter.get_visualization()
        dark_session.selection.click_mark(mark.id)
        selected = adapter.get_visualization()
        assert not np.array_equal(plain, selected)

    def test_click_forwards_to_session(self, dark_session):
        adapter = GUIMarkingAdapter(dark_session)
        dark_session.selection.enable_add_mode()
        mark = adapter.click(10, 20)
        assert mark.position == (10.0, 20.0)

    def test_callback_on_changes(self, dark_session):
        callback = Mock()
        GUIMarkingAdapter(dark_session, update_image_callback=callback)
        dark_session.zoom_in()
        mark = dark_session.add_mark(5, 5)
        dark_session.selection.click_mark(mark.id)
        assert callback.call_count == 3

"""
Tests for MarkStore and the mark data model.
"""

import pytest

from mark_counter.core.marking import ColorRegistry, Mark, Section, Thickness
from mark_counter.core.marking.state import parse_section, parse_thickness


class TestMarkModel:
    def test_defaults(self):
        mark = Mark(id=1, x=1, y=2, color="red")
        assert mark.thickness is None
        assert mark.section is Section.WHOLE
        assert isinstance(mark.x, float)

    def test_coerces_raw_values(self):
        mark = Mark(id=1, x=0, y=0, color="red", thickness=30, section="half-vertical")
        assert mark.thickness is Thickness.T30
        assert mark.section is Section.HALF_VERTICAL

    @pytest.mark.parametrize("thickness", [0, 25, 60, "thick", 20.9, True])
    def test_rejects_unknown_thickness(self, thickness):
        with pytest.raises(ValueError):
            Mark(id=1, x=0, y=0, color="red", thickness=thickness)

    def test_rejects_unknown_section(self):
        with pytest.raises(ValueError):
            Mark(id=1, x=0, y=0, color="red", section="quarter")

    def test_is_immutable(self):
        mark = Mark(id=1, x=0, y=0, color="red")
        with pytest.raises(AttributeError):
            mark.id = 2

    def test_parse_thickness_unspecified(self):
        assert parse_thickness(None) is None
        assert parse_thickness("") is None
        assert parse_thickness("40") is Thickness.T40

    def test_accepts_integral_float_thickness(self):
        assert parse_thickness(30.0) is Thickness.T30

    def test_parse_section(self):
        assert parse_section(Section.WHOLE) is Section.WHOLE
        assert parse_section("half-horizontal") is Section.HALF_HORIZONTAL

    def test_to_dict(self):
        mark = Mark(id=3, x=1.5, y=2.5, color="red", thickness=20)
        assert mark.to_dict() == {
            "id": 3,
            "x": 1.5,
            "y": 2.5,
            "color": "red",
            "thickness": 20,
            "section": "whole",
        }


class TestColorRegistry:
    def test_label_is_editable(self, registry):
        registry.get("red").label = "Rebar"
        assert registry.label_for("red") == "Rebar"

    def test_color_key_is_read_only(self, registry):
        with pytest.raises(AttributeError):
            registry.get("red").color = "blue"
        assert registry.colors == ["red", "yellow", "lime"]

    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError):
            ColorRegistry.from_pairs([("red", "Red"), ("red", "Also red")])


class TestMarkStore:
    def test_add_assigns_unique_ids(self, store):
        ids = [store.add(i, i, "red").id for i in range(10)]
        assert len(set(ids)) == 10

    def test_add_preserves_insertion_order(self, store):
        a = store.add(5, 5, "red")
        b = store.add(1, 1, "yellow")
        c = store.add(3, 3, "red")
        assert [m.id for m in store] == [a.id, b.id, c.id]

    def test_add_then_remove_restores_store(self, store):
        store.add(1, 1, "red")
        store.add(2, 2, "yellow")
        before = store.marks

        mark = store.add(3, 3, "red")
        assert len(store) == 3
        assert store.remove_by_id(mark.id)

        assert len(store) == 2
        assert store.marks == before
        assert mark.id not in store

    def test_ids_are_not_reused(self, store):
        first = store.add(1, 1, "red")
        store.remove_by_id(first.id)
        second = store.add(1, 1, "red")
        assert second.id != first.id

    def test_remove_absent_is_noop(self, store):
        store.add(1, 1, "red")
        assert not store.remove_by_id(999)
        assert len(store) == 1

    def test_update_by_id(self, store):
        mark = store.add(10, 20, "red")
        other = store.add(30, 40, "red")

        updated = store.update_by_id(
            mark.id, color="yellow", thickness=50, section=Section.HALF_HORIZONTAL
        )

        assert updated.id == mark.id
        assert updated.position == (10.0, 20.0)
        assert updated.color == "yellow"
        assert updated.thickness is Thickness.T50
        assert updated.section is Section.HALF_HORIZONTAL
        # position in the collection is kept
        assert [m.id for m in store] == [mark.id, other.id]

    def test_update_partial(self, store):
        mark = store.add(10, 20, "red", thickness=20)
        updated = store.update_by_id(mark.id, section="half-vertical")
        assert updated.color == "red"
        assert updated.thickness is Thickness.T20

    def test_update_absent_is_noop(self, store):
        store.add(1, 1, "red")
        assert store.update_by_id(42, color="yellow") is None
        assert [m.color for m in store] == ["red"]

    def test_update_rejects_position_changes(self, store):
        mark = store.add(1, 1, "red")
        with pytest.raises(ValueError):
            store.update_by_id(mark.id, x=5)

    def test_update_rejects_invalid_values(self, store):
        mark = store.add(1, 1, "red")
        with pytest.raises(ValueError):
            store.update_by_id(mark.id, thickness=35)
        assert store.get(mark.id).thickness is None

    def test_clear(self, store):
        store.add(1, 1, "red")
        store.add(2, 2, "red")
        store.clear()
        assert len(store) == 0
        assert list(store) == []

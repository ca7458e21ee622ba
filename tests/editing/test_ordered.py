"""Tests for the ordered-list edit primitives."""

import pytest

from insights.content.models import ArticleSection
from insights.editing.ordered import (
    Direction,
    append,
    append_to_nested,
    ids_of,
    move_adjacent,
    new_id,
    remove_at,
    replace_at,
)
from insights.errors import OutOfRangeError, PolicyViolation, ValidationError


def _records() -> list[dict]:
    return [{"id": "a", "title": "A"}, {"id": "b", "title": "B"}, {"id": "c", "title": "C"}]


class TestNewId:
    def test_avoids_existing(self):
        existing = {new_id() for _ in range(50)}
        assert new_id(existing) not in existing

    def test_is_short_string(self):
        ident = new_id()
        assert isinstance(ident, str)
        assert 0 < len(ident) <= 12

    def test_ids_of(self):
        assert ids_of(_records()) == ["a", "b", "c"]
        assert ids_of(["plain", "strings"]) == []


class TestAppend:
    def test_appends_without_mutating(self):
        items = _records()
        result = append(items, {"id": "d", "title": "D"})

        assert [r["id"] for r in result] == ["a", "b", "c", "d"]
        assert len(items) == 3


class TestRemoveAt:
    def test_removes(self):
        items = _records()
        result = remove_at(items, 1)

        assert [r["id"] for r in result] == ["a", "c"]
        assert len(items) == 3

    @pytest.mark.parametrize("index", [-1, 3, 10])
    def test_out_of_range(self, index):
        with pytest.raises(OutOfRangeError):
            remove_at(_records(), index)

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            remove_at([], 0)

    def test_last_paragraph_refused(self):
        paragraphs = ["only one"]
        with pytest.raises(PolicyViolation) as excinfo:
            remove_at(paragraphs, 0, min_length=1)

        assert excinfo.value.items == ["only one"]
        assert paragraphs == ["only one"]

    def test_min_length_allows_above(self):
        assert remove_at(["one", "two"], 0, min_length=1) == ["two"]

    def test_can_empty_without_min_length(self):
        assert remove_at(["one"], 0) == []


class TestMoveAdjacent:
    def test_move_down(self):
        result = move_adjacent(_records(), 0, Direction.DOWN)
        assert [r["id"] for r in result] == ["b", "a", "c"]

    def test_move_up(self):
        result = move_adjacent(_records(), 2, "up")
        assert [r["id"] for r in result] == ["a", "c", "b"]

    def test_first_up_is_noop(self):
        items = _records()
        result = move_adjacent(items, 0, Direction.UP)

        assert result == items
        assert result is not items

    def test_last_down_is_noop(self):
        items = _records()
        assert move_adjacent(items, 2, Direction.DOWN) == items

    def test_does_not_mutate(self):
        items = _records()
        move_adjacent(items, 0, Direction.DOWN)
        assert [r["id"] for r in items] == ["a", "b", "c"]

    def test_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            move_adjacent(_records(), 5, Direction.UP)

    def test_bad_direction(self):
        with pytest.raises(ValidationError) as excinfo:
            move_adjacent(_records(), 0, "sideways")
        assert excinfo.value.field == "direction"


class TestReplaceAt:
    def test_merges_mapping(self):
        result = replace_at(_records(), 1, {"title": "Bee"})
        assert result[1] == {"id": "b", "title": "Bee"}

    def test_id_is_preserved(self):
        result = replace_at(_records(), 1, {"id": "zzz", "title": "Bee"})
        assert result[1]["id"] == "b"

    def test_model_record(self):
        sections = [ArticleSection(id="s1", heading="Old", paragraphs=["p"])]
        result = replace_at(sections, 0, {"heading": "New", "id": "other"})

        assert isinstance(result[0], ArticleSection)
        assert result[0].heading == "New"
        assert result[0].id == "s1"
        assert result[0].paragraphs == ["p"]
        assert sections[0].heading == "Old"

    def test_plain_value_replaced(self):
        assert replace_at(["a", "b"], 0, "z") == ["z", "b"]

    def test_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            replace_at([], 0, {})


class TestAppendToNested:
    def test_appends_to_list_field(self):
        sections = [ArticleSection(id="s1", paragraphs=["one"])]
        result = append_to_nested(sections, 0, "paragraphs", "two")

        assert result[0].paragraphs == ["one", "two"]
        assert sections[0].paragraphs == ["one"]

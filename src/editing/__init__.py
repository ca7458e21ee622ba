"""Ordered-list editing for article sections and homepage strips."""

from insights.editing.ordered import (
    Direction,
    append,
    append_to_nested,
    move_adjacent,
    new_id,
    remove_at,
    replace_at,
)

__all__ = [
    "Direction",
    "append",
    "append_to_nested",
    "move_adjacent",
    "new_id",
    "remove_at",
    "replace_at",
]

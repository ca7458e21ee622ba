"""Editing helpers for the ordered sections of an article.

Each section owns a list of paragraphs that may never become empty.
All helpers are pure: they take the current section list and return a new
one, ready to hand to ``ContentStore.update_sections``.
"""

from __future__ import annotations

from collections.abc import Sequence

from insights.content.models import ArticleSection
from insights.editing import ordered
from insights.editing.ordered import Direction

MIN_PARAGRAPHS = 1


def new_section(existing: Sequence[ArticleSection] = ()) -> ArticleSection:
    """Return an empty section whose id is unique within *existing*."""
    return ArticleSection(
        id=ordered.new_id(ordered.ids_of(existing)),
        heading="",
        paragraphs=[""],
        image="",
    )


def ensure_sections(sections: Sequence[ArticleSection] | None) -> list[ArticleSection]:
    """Start editing from one empty section when an article has none."""
    if not sections:
        return [new_section()]
    return list(sections)


def add_section(sections: Sequence[ArticleSection]) -> list[ArticleSection]:
    return ordered.append(sections, new_section(sections))


def remove_section(sections: Sequence[ArticleSection], index: int) -> list[ArticleSection]:
    return ordered.remove_at(sections, index)


def move_section(
    sections: Sequence[ArticleSection], index: int, direction: Direction | str
) -> list[ArticleSection]:
    return ordered.move_adjacent(sections, index, direction)


def update_section(
    sections: Sequence[ArticleSection], index: int, **patch: object
) -> list[ArticleSection]:
    """Patch heading, image or paragraphs of one section, keeping its id and position."""
    return ordered.replace_at(sections, index, patch)


def add_paragraph(
    sections: Sequence[ArticleSection], index: int, text: str = ""
) -> list[ArticleSection]:
    return ordered.append_to_nested(sections, index, "paragraphs", text)


def update_paragraph(
    sections: Sequence[ArticleSection], index: int, paragraph: int, text: str
) -> list[ArticleSection]:
    paragraphs = ordered.replace_at(_paragraphs(sections, index), paragraph, text)
    return ordered.replace_at(sections, index, {"paragraphs": paragraphs})


def remove_paragraph(
    sections: Sequence[ArticleSection], index: int, paragraph: int
) -> list[ArticleSection]:
    """Remove one paragraph of a section.

    Raises:
        PolicyViolation: it is the section's last paragraph.
    """
    paragraphs = ordered.remove_at(
        _paragraphs(sections, index), paragraph, min_length=MIN_PARAGRAPHS
    )
    return ordered.replace_at(sections, index, {"paragraphs": paragraphs})


def _paragraphs(sections: Sequence[ArticleSection], index: int) -> list[str]:
    ordered.check_index(sections, index)
    return list(sections[index].paragraphs)

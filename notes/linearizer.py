"""
Outline linearization for the summarization prompt.
"""
from typing import Sequence

from core.constants import FLASHCARD_PROMPT_TEMPLATE, OUTLINE_BULLET, OUTLINE_INDENT
from core.models import Note

from .tree import iter_notes


def linearize(forest: Sequence[Note]) -> str:
    """
    Flatten the forest into an indented bullet outline.

    Each note becomes one line, "<indent>- <text>\\n", in depth-first
    pre-order with two spaces of indent per level.

    Args:
        forest: Forest snapshot

    Returns:
        Outline text, empty for an empty forest
    """
    return ''.join(
        f"{OUTLINE_INDENT * depth}{OUTLINE_BULLET}{note.text}\n"
        for note, depth in iter_notes(forest)
    )


def build_flashcard_prompt(forest: Sequence[Note]) -> str:
    """Embed the outline in the flashcard instruction template."""
    return FLASHCARD_PROMPT_TEMPLATE.format(notes=linearize(forest))

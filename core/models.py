"""
Core domain models for note capture and export.

These are pure data structures without business logic. Snapshots are
immutable: every tree operation returns new values and shares untouched
subtrees with the previous snapshot.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple


class NoteStatus(str, Enum):
    """Importance marker on a note. Cycles in declaration order."""
    DEFAULT = 'default'
    IMPORTANT = 'important'
    CRUCIAL = 'crucial'

    def next(self) -> 'NoteStatus':
        """Return the following status in the fixed cycle."""
        members = list(NoteStatus)
        return members[(members.index(self) + 1) % len(members)]


@dataclass(frozen=True)
class Note:
    """A captured snippet plus its nested sub-notes."""
    id: str
    text: str
    status: NoteStatus = NoteStatus.DEFAULT
    children: Tuple['Note', ...] = ()

    def with_text(self, text: str) -> 'Note':
        return replace(self, text=text)

    def with_status(self, status: NoteStatus) -> 'Note':
        return replace(self, status=status)

    def with_children(self, children: Tuple['Note', ...]) -> 'Note':
        return replace(self, children=tuple(children))


# The ordered top-level collection of notes
NoteForest = Tuple[Note, ...]


@dataclass(frozen=True)
class RowDescriptor:
    """
    One report row, self-contained for drawing.

    ancestor_continues[k] is True when the ancestor at depth k has a later
    sibling, so its vertical trunk must pass through this row.
    """
    indent: int
    text: str
    status: NoteStatus
    is_last_child: bool
    ancestor_continues: Tuple[bool, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'indent': self.indent,
            'text': self.text,
            'status': self.status.value,
            'is_last_child': self.is_last_child,
            'ancestor_continues': list(self.ancestor_continues)
        }


@dataclass(frozen=True)
class SelectionEvent:
    """Text under the user's selection as reported by the document viewer."""
    text: str
    within_viewer: bool
    page_number: Optional[int] = None


@dataclass
class GenerationResult:
    """Outcome of one flashcard generation request."""
    text: str
    ok: bool
    prompt_tokens: int = 0
    cards: list = field(default_factory=list)

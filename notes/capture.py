"""
Capture workflow.

Turns viewer selections into note tree mutations. The capture flags and the
forest travel together as an explicit `NoteSession` value; every transition
returns a new session instead of mutating shared state.
"""
import uuid
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

from core.models import Note, NoteForest, NoteStatus, SelectionEvent
from utils.log_utils import get_logger

from . import tree

logger = get_logger('notes.capture')


@dataclass(frozen=True)
class CaptureState:
    """Capture mode flag and the note new captures attach under."""
    active: bool = False
    active_parent_id: Optional[str] = None


@dataclass(frozen=True)
class NoteSession:
    """Working state: the forest snapshot plus capture state."""
    forest: NoteForest = ()
    capture: CaptureState = CaptureState()


class SelectionSurface(Protocol):
    """The part of the document viewer the capture workflow needs."""

    def clear_selection(self) -> None:
        ...


def new_note_id() -> str:
    return uuid.uuid4().hex


def toggle_capture(session: NoteSession) -> NoteSession:
    """Flip capture mode. The active parent is left alone."""
    capture = replace(session.capture, active=not session.capture.active)
    return replace(session, capture=capture)


def set_active_note(session: NoteSession, note_id: str) -> NoteSession:
    """
    Make a note the active parent, or clear it if it already is.

    Ids that are not in the forest are ignored so the active parent never
    points at a missing note.
    """
    if session.capture.active_parent_id == note_id:
        parent_id = None
    elif tree.contains(session.forest, note_id):
        parent_id = note_id
    else:
        return session
    return replace(session, capture=replace(session.capture, active_parent_id=parent_id))


def delete_note(session: NoteSession, note_id: str) -> NoteSession:
    """
    Delete a note and its subtree.

    When the active parent is the deleted note or one of its descendants it
    is reset to None in the same step.
    """
    target = tree.find_note(session.forest, note_id)
    if target is None:
        return session

    capture = session.capture
    if capture.active_parent_id is not None and capture.active_parent_id in tree.subtree_ids(target):
        capture = replace(capture, active_parent_id=None)

    return NoteSession(forest=tree.delete_note(session.forest, note_id), capture=capture)


def update_note_text(session: NoteSession, note_id: str, text: str) -> NoteSession:
    return replace(session, forest=tree.update_text(session.forest, note_id, text))


def set_note_status(session: NoteSession, note_id: str, status: NoteStatus) -> NoteSession:
    return replace(session, forest=tree.set_status(session.forest, note_id, status))


def cycle_note_status(session: NoteSession, note_id: str) -> NoteSession:
    return replace(session, forest=tree.cycle_status(session.forest, note_id))


def clear_notes(session: NoteSession) -> NoteSession:
    """Drop every note. Capture mode survives; the active parent does not."""
    capture = replace(session.capture, active_parent_id=None)
    return NoteSession(forest=tree.clear(), capture=capture)


def reset_for_document(session: NoteSession) -> NoteSession:
    """Opening a new document starts an empty outline."""
    return clear_notes(session)


class CaptureController:
    """
    Bridges selection events from the document viewer into the note tree.
    """

    def __init__(
        self,
        surface: Optional[SelectionSurface] = None,
        id_factory: Callable[[], str] = new_note_id
    ):
        """
        Initialize capture controller.

        Args:
            surface: Viewer whose native selection is cleared after a capture
            id_factory: Source of fresh note ids
        """
        self.surface = surface
        self.id_factory = id_factory

    def on_selection(self, session: NoteSession, selection: SelectionEvent) -> NoteSession:
        """
        Capture a selection as a new note.

        Selections are ignored while capture mode is off, when they fall
        outside the viewer, or when they contain only whitespace.

        Args:
            session: Current session
            selection: Text under the user's selection

        Returns:
            Session with the new note inserted under the active parent
        """
        if not session.capture.active or not selection.within_viewer:
            return session

        text = selection.text.strip()
        if not text:
            return session

        note = Note(id=self.id_factory(), text=text, status=NoteStatus.DEFAULT)
        forest = tree.insert_child(session.forest, session.capture.active_parent_id, note)
        if not tree.contains(forest, note.id):
            logger.warning(f"Capture under {session.capture.active_parent_id} was not applied")
            return session

        logger.debug(f"Captured note {note.id} ({len(text)} chars)")
        if self.surface is not None:
            self.surface.clear_selection()
        return replace(session, forest=forest)

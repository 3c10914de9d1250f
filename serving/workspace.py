"""
In-memory workspace behind the HTTP API.

Holds the open document and the single note session. Every mutation swaps
in a new session snapshot; readers that took the previous snapshot keep a
consistent view.
"""
from typing import Callable, Dict, Optional

from core.models import SelectionEvent
from notes import capture
from notes.capture import CaptureController, NoteSession, new_note_id
from viewer.document_viewer import DocumentViewer


class Workspace:
    """One user's document, notes and capture state."""

    def __init__(
        self,
        viewer: Optional[DocumentViewer] = None,
        id_factory: Callable[[], str] = new_note_id
    ):
        self.viewer = viewer or DocumentViewer()
        self.controller = CaptureController(self.viewer, id_factory)
        self.session = NoteSession()

    @property
    def forest(self):
        return self.session.forest

    def apply(self, transition: Callable[..., NoteSession], *args) -> NoteSession:
        """Run a session transition and store the result."""
        self.session = transition(self.session, *args)
        return self.session

    def open_document(self, data: bytes, filename: str) -> int:
        """Open a PDF; a new document starts with an empty outline."""
        total_pages = self.viewer.open(data, filename)
        self.apply(capture.reset_for_document)
        return total_pages

    def capture_region(self, page_number: int, bbox: Dict) -> SelectionEvent:
        """Select text under a rectangle and capture it if capture is on."""
        selection = self.viewer.select_region(page_number, bbox)
        self.session = self.controller.on_selection(self.session, selection)
        return selection

    def replace_forest(self, forest) -> NoteSession:
        """Swap in an imported forest; the active parent is dropped."""
        self.session = NoteSession(
            forest=tuple(forest),
            capture=capture.CaptureState(active=self.session.capture.active)
        )
        return self.session

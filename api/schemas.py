"""
Pydantic schemas for API request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

from core.models import NoteStatus


class NoteSchema(BaseModel):
    """One note in pre-order; parent_id is None for roots."""
    id: str
    parent_id: Optional[str] = None
    depth: int = 0
    text: str
    status: NoteStatus = NoteStatus.DEFAULT


class SessionResponse(BaseModel):
    """Current notes and capture state."""
    notes: List[NoteSchema]
    capture_active: bool
    active_parent_id: Optional[str] = None
    note_count: int


class SelectionRequest(BaseModel):
    """Rectangle drawn over a rendered page, in display pixels."""
    page_number: int = Field(ge=1)
    x1: float
    y1: float
    x2: float
    y2: float


class TextUpdateRequest(BaseModel):
    text: str


class StatusUpdateRequest(BaseModel):
    status: NoteStatus


class DocumentResponse(BaseModel):
    """Response for the open document."""
    filename: str
    total_pages: int


class PageResponse(BaseModel):
    """A rendered page for display."""
    page_number: int
    image_base64: str
    width: float
    height: float


class PromptResponse(BaseModel):
    """Linearized outline and the full flashcard prompt."""
    outline: str
    prompt: str


class FlashcardRequest(BaseModel):
    """Optional user-edited prompt; the default prompt is built from the notes."""
    prompt: Optional[str] = None


class FlashcardSchema(BaseModel):
    term: str
    definition: str


class FlashcardResponse(BaseModel):
    """Generated flashcard text, or an error message when ok is False."""
    text: str
    ok: bool
    prompt_tokens: int = 0
    cards: List[FlashcardSchema] = Field(default_factory=list)

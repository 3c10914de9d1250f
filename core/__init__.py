"""Core package - Domain models, constants and exceptions."""

from .models import (
    Note,
    NoteForest,
    NoteStatus,
    RowDescriptor,
    SelectionEvent,
    GenerationResult
)
from .constants import (
    OUTLINE_INDENT,
    STATUS_COLORS,
    REPORT_LAYOUT,
    FLASHCARD_PROMPT_TEMPLATE,
    DEFAULT_VIEWER_PARAMS
)
from .exceptions import (
    NotesError,
    ExternalServiceError,
    RenderingUnavailableError,
    GenerationInProgressError,
    SnapshotFormatError
)

__all__ = [
    'Note',
    'NoteForest',
    'NoteStatus',
    'RowDescriptor',
    'SelectionEvent',
    'GenerationResult',
    'OUTLINE_INDENT',
    'STATUS_COLORS',
    'REPORT_LAYOUT',
    'FLASHCARD_PROMPT_TEMPLATE',
    'DEFAULT_VIEWER_PARAMS',
    'NotesError',
    'ExternalServiceError',
    'RenderingUnavailableError',
    'GenerationInProgressError',
    'SnapshotFormatError'
]

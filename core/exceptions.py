"""
Exception types raised at the edges of the note workflow.

Tree operations never raise; these cover the external collaborators
(generative-text service, document viewer, report backend) and file import.
"""


class NotesError(Exception):
    """Base class for note workflow errors."""


class ExternalServiceError(NotesError):
    """The generative-text service failed or returned an unusable payload."""


class RenderingUnavailableError(NotesError):
    """The document viewer or report backend is not ready."""


class GenerationInProgressError(NotesError):
    """A generation request is already in flight."""


class SnapshotFormatError(NotesError):
    """A forest snapshot could not be decoded."""

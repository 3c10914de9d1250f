"""Viewer package - PDF display and text selection."""

from .document_viewer import DocumentViewer

__all__ = ['DocumentViewer']

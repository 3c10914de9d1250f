"""
API Dependencies - Dependency injection for FastAPI.

Provides the shared workspace and the export services.
"""
from typing import Optional

from fastapi import HTTPException

from config.settings import settings
from llm.client_factory import LLMClientFactory
from serving.workspace import Workspace
from services.flashcard_service import FlashcardService
from services.report_service import ReportService
from viewer.document_viewer import DocumentViewer

_workspace: Optional[Workspace] = None
_flashcard_service: Optional[FlashcardService] = None
_report_service: Optional[ReportService] = None


def get_workspace() -> Workspace:
    """
    Dependency for the in-memory workspace.

    Returns:
        The process-wide Workspace
    """
    global _workspace
    if _workspace is None:
        _workspace = Workspace(
            viewer=DocumentViewer(
                target_dpi=settings.viewer_target_dpi,
                max_image_size=settings.viewer_max_image_size
            )
        )
    return _workspace


def get_flashcard_service() -> FlashcardService:
    """
    Dependency for flashcard generation.

    Raises:
        HTTPException: 503 if the configured provider cannot be created
    """
    global _flashcard_service
    if _flashcard_service is None:
        try:
            client = LLMClientFactory.from_settings(settings)
        except ValueError as e:
            raise HTTPException(status_code=503, detail=f"Generative-text service is not configured: {e}")
        _flashcard_service = FlashcardService(client, temperature=settings.llm_temperature)
    return _flashcard_service


def get_report_service() -> ReportService:
    """Dependency for PDF report rendering."""
    global _report_service
    if _report_service is None:
        _report_service = ReportService.from_settings(settings)
    return _report_service

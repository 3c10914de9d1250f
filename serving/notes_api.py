"""
Notes API for highlight capture and export.

Provides endpoints for:
- Opening a PDF and rendering its pages
- Capture mode, active note and selection capture
- Note editing, status changes and deletion
- Exports (outline prompt, flashcards, PDF report, JSON snapshot)

Requests are handled on a single event loop; every note mutation completes
synchronously inside its handler, so mutations never interleave.
"""
from typing import Any, Dict, List, Union

from fastapi import Body, Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.responses import Response

from api.dependencies import get_flashcard_service, get_report_service, get_workspace
from api.schemas import (
    DocumentResponse,
    FlashcardRequest,
    FlashcardResponse,
    FlashcardSchema,
    PageResponse,
    PromptResponse,
    SelectionRequest,
    SessionResponse,
    StatusUpdateRequest,
    TextUpdateRequest
)
from config.settings import settings
from core.exceptions import GenerationInProgressError, RenderingUnavailableError, SnapshotFormatError
from notes import capture, tree
from notes.linearizer import build_flashcard_prompt, linearize
from notes.serialization import forest_from_dict, forest_to_dict, forest_to_entries
from serving.workspace import Workspace
from services.flashcard_service import FlashcardService
from services.report_service import ReportService
from utils.log_utils import get_logger, setup_logging

logger = get_logger('serving.notes_api')


def session_response(workspace: Workspace) -> SessionResponse:
    session = workspace.session
    entries = forest_to_entries(session.forest)
    return SessionResponse(
        notes=entries,
        capture_active=session.capture.active,
        active_parent_id=session.capture.active_parent_id,
        note_count=len(entries)
    )


def require_note(workspace: Workspace, note_id: str) -> None:
    if not tree.contains(workspace.forest, note_id):
        raise HTTPException(status_code=404, detail="Note not found")


# Create FastAPI app
notes_app = FastAPI(
    title="Curio Notes API",
    description="Capture highlighted PDF passages into a note outline and export it",
    version="1.0.0"
)


@notes_app.on_event("startup")
async def startup_event():
    """Configure logging on startup."""
    setup_logging(settings.log_level)
    logger.info("Notes API initialized")


# --- Document ---

@notes_app.post("/document", response_model=DocumentResponse)
async def open_document(
    file: UploadFile = File(...),
    workspace: Workspace = Depends(get_workspace)
):
    """
    Open a PDF in the viewer. Existing notes are cleared.
    """
    filename = file.filename or "document.pdf"
    if file.content_type != "application/pdf" and not filename.lower().endswith('.pdf'):
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    content = await file.read()
    try:
        total_pages = workspace.open_document(content, filename)
    except RenderingUnavailableError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DocumentResponse(filename=filename, total_pages=total_pages)


@notes_app.get("/document/pages/{page_number}", response_model=PageResponse)
async def get_page(page_number: int, workspace: Workspace = Depends(get_workspace)):
    """Render a page of the open document."""
    viewer = workspace.viewer
    try:
        image = viewer.render_page(page_number)
        width, height = viewer.page_size(page_number)
    except RenderingUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PageResponse(page_number=page_number, image_base64=image, width=width, height=height)


# --- Capture ---

@notes_app.get("/notes", response_model=SessionResponse)
async def get_notes(workspace: Workspace = Depends(get_workspace)):
    return session_response(workspace)


@notes_app.post("/capture/toggle", response_model=SessionResponse)
async def toggle_capture(workspace: Workspace = Depends(get_workspace)):
    """Turn capture mode on or off."""
    workspace.apply(capture.toggle_capture)
    return session_response(workspace)


@notes_app.post("/capture/active-note/{note_id}", response_model=SessionResponse)
async def set_active_note(note_id: str, workspace: Workspace = Depends(get_workspace)):
    """Make a note the capture target, or clear it if it already is."""
    require_note(workspace, note_id)
    workspace.apply(capture.set_active_note, note_id)
    return session_response(workspace)


@notes_app.post("/capture/selection", response_model=SessionResponse)
async def capture_selection(
    request: SelectionRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """
    Capture the text under a selection rectangle.

    Blank selections, selections off the page and selections made while
    capture mode is off leave the notes unchanged.
    """
    bbox = {'x1': request.x1, 'y1': request.y1, 'x2': request.x2, 'y2': request.y2}
    try:
        workspace.capture_region(request.page_number, bbox)
    except RenderingUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session_response(workspace)


# --- Notes ---

@notes_app.patch("/notes/{note_id}", response_model=SessionResponse)
async def update_note_text(
    note_id: str,
    request: TextUpdateRequest,
    workspace: Workspace = Depends(get_workspace)
):
    """Edit a note's text. Blank text leaves the note as it was."""
    require_note(workspace, note_id)
    workspace.apply(capture.update_note_text, note_id, request.text.strip())
    return session_response(workspace)


@notes_app.put("/notes/{note_id}/status", response_model=SessionResponse)
async def set_note_status(
    note_id: str,
    request: StatusUpdateRequest,
    workspace: Workspace = Depends(get_workspace)
):
    require_note(workspace, note_id)
    workspace.apply(capture.set_note_status, note_id, request.status)
    return session_response(workspace)


@notes_app.post("/notes/{note_id}/cycle-status", response_model=SessionResponse)
async def cycle_note_status(note_id: str, workspace: Workspace = Depends(get_workspace)):
    """Advance default -> important -> crucial -> default."""
    require_note(workspace, note_id)
    workspace.apply(capture.cycle_note_status, note_id)
    return session_response(workspace)


@notes_app.delete("/notes/{note_id}", response_model=SessionResponse)
async def delete_note(note_id: str, workspace: Workspace = Depends(get_workspace)):
    """Delete a note and everything under it."""
    require_note(workspace, note_id)
    workspace.apply(capture.delete_note, note_id)
    return session_response(workspace)


@notes_app.delete("/notes", response_model=SessionResponse)
async def clear_notes(workspace: Workspace = Depends(get_workspace)):
    workspace.apply(capture.clear_notes)
    return session_response(workspace)


# --- Snapshot import/export ---

@notes_app.get("/export/json")
async def export_json(workspace: Workspace = Depends(get_workspace)):
    return forest_to_dict(workspace.forest)


@notes_app.post("/import/json", response_model=SessionResponse)
async def import_json(
    payload: Union[Dict[str, Any], List[Any]] = Body(...),
    workspace: Workspace = Depends(get_workspace)
):
    """Replace the notes with a JSON snapshot or a bare list of note entries."""
    try:
        forest = forest_from_dict(payload)
    except SnapshotFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    workspace.replace_forest(forest)
    return session_response(workspace)


# --- Exports ---

@notes_app.get("/export/prompt", response_model=PromptResponse)
async def export_prompt(workspace: Workspace = Depends(get_workspace)):
    forest = workspace.forest
    return PromptResponse(outline=linearize(forest), prompt=build_flashcard_prompt(forest))


@notes_app.post("/export/flashcards", response_model=FlashcardResponse)
async def export_flashcards(
    request: FlashcardRequest,
    workspace: Workspace = Depends(get_workspace),
    service: FlashcardService = Depends(get_flashcard_service)
):
    """
    Generate flashcards from the notes or from an edited prompt.

    Service failures come back as ok=False with a readable message.
    """
    try:
        result = await service.generate(workspace.forest, prompt=request.prompt)
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return FlashcardResponse(
        text=result.text,
        ok=result.ok,
        prompt_tokens=result.prompt_tokens,
        cards=[FlashcardSchema(term=term, definition=definition) for term, definition in result.cards]
    )


@notes_app.get("/export/report")
async def export_report(
    workspace: Workspace = Depends(get_workspace),
    service: ReportService = Depends(get_report_service)
):
    """Download the notes as a paginated PDF report."""
    forest = workspace.forest
    try:
        data = service.render(forest)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RenderingUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return Response(
        content=data,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="notes.pdf"'}
    )


# Export app for uvicorn
app = notes_app

"""
Unit tests for serving.notes_api endpoints.
"""
import fitz
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_flashcard_service, get_report_service, get_workspace
from core.models import Note
from notes import tree
from notes.serialization import forest_to_dict
from serving.notes_api import notes_app
from serving.workspace import Workspace
from services.flashcard_service import FlashcardService
from services.report_service import ReportService
from viewer.document_viewer import DocumentViewer

FIRST_LINE = {'page_number': 1, 'x1': 60, 'y1': 80, 'x2': 500, 'y2': 115}


@pytest.fixture
def workspace(id_factory):
    return Workspace(viewer=DocumentViewer(target_dpi=72), id_factory=id_factory)


@pytest.fixture
def flashcard_service(fake_llm_client):
    return FlashcardService(fake_llm_client)


@pytest.fixture
def client(workspace, flashcard_service):
    notes_app.dependency_overrides[get_workspace] = lambda: workspace
    notes_app.dependency_overrides[get_flashcard_service] = lambda: flashcard_service
    notes_app.dependency_overrides[get_report_service] = lambda: ReportService()
    yield TestClient(notes_app)
    notes_app.dependency_overrides.clear()


@pytest.fixture
def loaded(client, cell_biology_forest):
    response = client.post("/import/json", json=forest_to_dict(cell_biology_forest))
    assert response.status_code == 200
    return client


def upload(client, data, filename="cells.pdf", content_type="application/pdf"):
    return client.post("/document", files={"file": (filename, data, content_type)})


class TestDocument:
    """Tests for document endpoints."""

    def test_open_document(self, client, sample_pdf_bytes):
        response = upload(client, sample_pdf_bytes)

        assert response.status_code == 200
        assert response.json() == {"filename": "cells.pdf", "total_pages": 1}

    def test_rejects_non_pdf(self, client):
        response = upload(client, b"hello", filename="notes.txt", content_type="text/plain")

        assert response.status_code == 400

    def test_rejects_broken_pdf(self, client):
        assert upload(client, b"not really a pdf").status_code == 400

    def test_open_document_clears_notes(self, loaded, sample_pdf_bytes):
        upload(loaded, sample_pdf_bytes)

        assert loaded.get("/notes").json()["note_count"] == 0

    def test_get_page(self, client, sample_pdf_bytes):
        upload(client, sample_pdf_bytes)

        data = client.get("/document/pages/1").json()

        assert data["page_number"] == 1
        assert data["width"] == pytest.approx(595)
        assert data["image_base64"]

    def test_page_without_document(self, client):
        assert client.get("/document/pages/1").status_code == 409

    def test_page_out_of_range(self, client, sample_pdf_bytes):
        upload(client, sample_pdf_bytes)

        assert client.get("/document/pages/5").status_code == 404


class TestCapture:
    """Tests for capture endpoints."""

    def test_capture_flow(self, client, sample_pdf_bytes):
        upload(client, sample_pdf_bytes)
        assert client.post("/capture/toggle").json()["capture_active"] is True

        data = client.post("/capture/selection", json=FIRST_LINE).json()

        assert data["note_count"] == 1
        assert data["notes"][0]["text"] == "Mitochondria are the powerhouse of the cell"
        assert data["notes"][0]["status"] == "default"

    def test_capture_under_active_note(self, client, sample_pdf_bytes):
        upload(client, sample_pdf_bytes)
        client.post("/capture/toggle")
        root_id = client.post("/capture/selection", json=FIRST_LINE).json()["notes"][0]["id"]

        assert client.post(f"/capture/active-note/{root_id}").json()["active_parent_id"] == root_id
        second = {'page_number': 1, 'x1': 60, 'y1': 380, 'x2': 500, 'y2': 415}
        data = client.post("/capture/selection", json=second).json()

        assert data["notes"][1]["text"] == "Nucleus stores DNA"
        assert data["notes"][1]["parent_id"] == root_id
        assert data["notes"][1]["depth"] == 1

    def test_capture_off_changes_nothing(self, client, sample_pdf_bytes):
        upload(client, sample_pdf_bytes)

        assert client.post("/capture/selection", json=FIRST_LINE).json()["note_count"] == 0

    def test_capture_without_document(self, client):
        client.post("/capture/toggle")

        assert client.post("/capture/selection", json=FIRST_LINE).status_code == 409

    def test_invalid_page_number(self, client):
        assert client.post("/capture/selection", json={**FIRST_LINE, 'page_number': 0}).status_code == 422

    def test_active_note_toggles(self, loaded):
        loaded.post("/capture/active-note/B")

        assert loaded.post("/capture/active-note/B").json()["active_parent_id"] is None

    def test_active_note_unknown(self, loaded):
        assert loaded.post("/capture/active-note/missing").status_code == 404


class TestNotes:
    """Tests for note editing endpoints."""

    def test_update_text_strips(self, loaded):
        data = loaded.patch("/notes/B", json={"text": "  Mitochondrion  "}).json()

        assert data["notes"][1]["text"] == "Mitochondrion"

    def test_blank_text_reverts(self, loaded):
        data = loaded.patch("/notes/B", json={"text": "   "}).json()

        assert data["notes"][1]["text"] == "Mitochondria"

    def test_set_status(self, loaded):
        data = loaded.put("/notes/C/status", json={"status": "crucial"}).json()

        assert data["notes"][2]["status"] == "crucial"

    def test_unknown_status(self, loaded):
        assert loaded.put("/notes/C/status", json={"status": "urgent"}).status_code == 422

    def test_cycle_status(self, loaded):
        data = loaded.post("/notes/A/cycle-status").json()

        assert data["notes"][0]["status"] == "important"

    def test_delete_note_resets_active_parent(self, loaded):
        loaded.post("/capture/active-note/B")

        data = loaded.delete("/notes/B").json()

        assert data["active_parent_id"] is None
        assert [(n["id"], n["parent_id"]) for n in data["notes"]] == [("A", None), ("C", "A")]

    def test_unknown_note(self, loaded):
        assert loaded.delete("/notes/missing").status_code == 404
        assert loaded.patch("/notes/missing", json={"text": "x"}).status_code == 404

    def test_clear_notes(self, loaded):
        data = loaded.delete("/notes").json()

        assert data["notes"] == []
        assert data["note_count"] == 0


class TestSnapshots:
    """Tests for JSON import and export."""

    def test_round_trip(self, loaded, cell_biology_forest):
        assert loaded.get("/export/json").json() == forest_to_dict(cell_biology_forest)

    def test_import_bare_list(self, client):
        payload = [
            {"id": "A", "text": "Cell biology"},
            {"id": "B", "parent_id": "A", "text": "Mitochondria"},
        ]

        response = client.post("/import/json", json=payload)

        assert response.status_code == 200
        assert response.json()["note_count"] == 2

    def test_import_rejects_duplicates(self, client):
        payload = {"notes": [{"id": "A", "text": "one"}, {"id": "A", "text": "two"}]}

        response = client.post("/import/json", json=payload)

        assert response.status_code == 422
        assert "Duplicate" in response.json()["detail"]


class TestExports:
    """Tests for prompt, flashcard and report exports."""

    def test_prompt(self, loaded):
        data = loaded.get("/export/prompt").json()

        assert data["outline"] == "- Cell biology\n  - Mitochondria\n  - Nucleus\n"
        assert data["outline"] in data["prompt"]

    def test_flashcards(self, loaded, fake_llm_client):
        data = loaded.post("/export/flashcards", json={}).json()

        assert data["ok"] is True
        assert data["cards"] == [{"term": "What is the powerhouse of the cell?", "definition": "Mitochondria"}]
        assert "- Cell biology" in fake_llm_client.prompts[0]

    def test_flashcards_with_edited_prompt(self, loaded, fake_llm_client):
        loaded.post("/export/flashcards", json={"prompt": "One card only"})

        assert fake_llm_client.prompts == ["One card only"]

    def test_flashcards_error_message(self, client, workspace, make_llm_client):
        notes_app.dependency_overrides[get_flashcard_service] = lambda: FlashcardService(
            make_llm_client(error=RuntimeError("service down"))
        )

        data = client.post("/export/flashcards", json={}).json()

        assert data == {"text": "An error occurred: service down", "ok": False, "prompt_tokens": 0, "cards": []}

    def test_flashcards_in_progress(self, loaded, flashcard_service):
        flashcard_service._in_flight = True

        assert loaded.post("/export/flashcards", json={}).status_code == 409

    def test_report(self, loaded):
        response = loaded.get("/export/report")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "notes.pdf" in response.headers["content-disposition"]
        with fitz.open(stream=response.content, filetype="pdf") as doc:
            assert "Nucleus" in doc.load_page(0).get_text()

    def test_report_empty(self, client):
        assert client.get("/export/report").status_code == 400


class TestDeepOutline:
    """Tests for outlines deeper than the serializer recursion limits."""

    @pytest.fixture
    def deep(self, client, workspace):
        forest = (Note(id="0", text="level 0"),)
        for i in range(1, 400):
            forest = tree.insert_child(forest, str(i - 1), Note(id=str(i), text=f"level {i}"))
        workspace.replace_forest(forest)
        return client

    def test_get_notes(self, deep):
        response = deep.get("/notes")

        assert response.status_code == 200
        data = response.json()
        assert data["note_count"] == 400
        assert data["notes"][-1] == {
            "id": "399", "parent_id": "398", "depth": 399, "text": "level 399", "status": "default"
        }

    def test_mutation_response(self, deep):
        response = deep.post("/notes/399/cycle-status")

        assert response.status_code == 200
        assert response.json()["notes"][-1]["status"] == "important"

    def test_export_and_reimport(self, deep):
        snapshot = deep.get("/export/json").json()
        deep.delete("/notes")

        response = deep.post("/import/json", json=snapshot)

        assert response.status_code == 200
        assert response.json()["note_count"] == 400

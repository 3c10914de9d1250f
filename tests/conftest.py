"""
Pytest configuration and global fixtures.
"""
import itertools
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import Note, NoteStatus
from llm.llm_client_base import BaseLLMClient


class FakeLLMClient(BaseLLMClient):
    """Records prompts and answers with a canned response or error."""

    def __init__(self, response: str = "", error: Exception = None):
        super().__init__("fake-model")
        self.response = response
        self.error = error
        self.prompts = []
        self.calls = []

    async def chat_completion(self, prompt, chat_history=None, **kwargs):
        self.prompts.append(prompt)
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response

    def count_tokens(self, text: str) -> int:
        return len(text.split())


@pytest.fixture
def id_factory():
    """Deterministic note ids: n1, n2, ..."""
    counter = itertools.count(1)
    return lambda: f"n{next(counter)}"


@pytest.fixture
def cell_biology_forest():
    """A{Cell biology} with children B{Mitochondria}, C{Nucleus}."""
    return (
        Note(
            id="A",
            text="Cell biology",
            children=(
                Note(id="B", text="Mitochondria"),
                Note(id="C", text="Nucleus"),
            )
        ),
    )


@pytest.fixture
def nested_forest():
    """
    Two roots with mixed depth:

    R1
      R1a
        R1a-i
      R1b
    R2
      R2a
    """
    return (
        Note(
            id="R1",
            text="Photosynthesis",
            status=NoteStatus.IMPORTANT,
            children=(
                Note(
                    id="R1a",
                    text="Light reactions",
                    children=(Note(id="R1a-i", text="Thylakoid membrane", status=NoteStatus.CRUCIAL),)
                ),
                Note(id="R1b", text="Calvin cycle"),
            )
        ),
        Note(
            id="R2",
            text="Respiration",
            children=(Note(id="R2a", text="Glycolysis"),)
        ),
    )


@pytest.fixture
def make_llm_client():
    """Factory for fake LLM clients."""
    return FakeLLMClient


@pytest.fixture
def fake_llm_client():
    return FakeLLMClient(response="What is the powerhouse of the cell?\tMitochondria\n")


@pytest.fixture
def sample_pdf_bytes():
    """Single-page PDF with two lines of text."""
    import fitz

    doc = fitz.open()
    page = doc.new_page(width=595, height=842)
    page.insert_text((72, 100), "Mitochondria are the powerhouse of the cell", fontsize=12)
    page.insert_text((72, 400), "Nucleus stores DNA", fontsize=12)
    data = doc.tobytes()
    doc.close()
    return data

"""
Unit tests for notes.linearizer module.
"""
from core.constants import FLASHCARD_PROMPT_TEMPLATE
from core.models import Note
from notes import tree
from notes.linearizer import build_flashcard_prompt, linearize


class TestLinearize:
    """Tests for linearize."""

    def test_empty_forest(self):
        assert linearize(()) == ""

    def test_cell_biology_outline(self, cell_biology_forest):
        assert linearize(cell_biology_forest) == "- Cell biology\n  - Mitochondria\n  - Nucleus\n"

    def test_nested_outline(self, nested_forest):
        expected = (
            "- Photosynthesis\n"
            "  - Light reactions\n"
            "    - Thylakoid membrane\n"
            "  - Calvin cycle\n"
            "- Respiration\n"
            "  - Glycolysis\n"
        )

        assert linearize(nested_forest) == expected

    def test_one_line_per_note(self, nested_forest):
        lines = linearize(nested_forest).splitlines()

        assert len(lines) == tree.count_notes(nested_forest)

    def test_status_not_rendered(self, nested_forest):
        assert "crucial" not in linearize(nested_forest)

    def test_after_delete(self, cell_biology_forest):
        forest = tree.delete_note(cell_biology_forest, "B")

        assert linearize(forest) == "- Cell biology\n  - Nucleus\n"

    def test_deep_chain(self):
        forest = (Note(id="0", text="level 0"),)
        for i in range(1, 1500):
            forest = tree.insert_child(forest, str(i - 1), Note(id=str(i), text=f"level {i}"))

        last_line = linearize(forest).splitlines()[-1]

        assert last_line == "  " * 1499 + "- level 1499"


class TestFlashcardPrompt:
    """Tests for build_flashcard_prompt."""

    def test_outline_embedded(self, cell_biology_forest):
        prompt = build_flashcard_prompt(cell_biology_forest)

        assert "Here are the notes:\n- Cell biology\n  - Mitochondria\n  - Nucleus\n" in prompt
        assert prompt == FLASHCARD_PROMPT_TEMPLATE.format(notes=linearize(cell_biology_forest))

    def test_mentions_tab_separator(self, cell_biology_forest):
        assert "tab character" in build_flashcard_prompt(cell_biology_forest)

"""
Unit tests for notes.serialization module.
"""
import json

import pytest
from core.exceptions import SnapshotFormatError
from core.models import Note, NoteStatus
from notes import tree
from notes.serialization import (
    dump_forest,
    forest_from_dict,
    forest_to_dict,
    forest_to_entries,
    load_forest
)


def chain(depth):
    """A single path of `depth` notes, ids "0" .. str(depth - 1)."""
    forest = (Note(id="0", text="level 0"),)
    for i in range(1, depth):
        forest = tree.insert_child(forest, str(i - 1), Note(id=str(i), text=f"level {i}"))
    return forest


class TestForestToDict:
    """Tests for forest_to_dict."""

    def test_empty(self):
        assert forest_to_dict(()) == {'notes': []}

    def test_flat_layout(self, cell_biology_forest):
        data = forest_to_dict(cell_biology_forest)

        assert data == {
            'notes': [
                {'id': 'A', 'parent_id': None, 'depth': 0, 'text': 'Cell biology', 'status': 'default'},
                {'id': 'B', 'parent_id': 'A', 'depth': 1, 'text': 'Mitochondria', 'status': 'default'},
                {'id': 'C', 'parent_id': 'A', 'depth': 1, 'text': 'Nucleus', 'status': 'default'},
            ]
        }

    def test_preorder_parents_and_status(self, nested_forest):
        entries = forest_to_entries(nested_forest)

        assert [(e['id'], e['parent_id'], e['depth']) for e in entries] == [
            ('R1', None, 0),
            ('R1a', 'R1', 1),
            ('R1a-i', 'R1a', 2),
            ('R1b', 'R1', 1),
            ('R2', None, 0),
            ('R2a', 'R2', 1),
        ]
        assert entries[0]['status'] == 'important'
        assert entries[2]['status'] == 'crucial'


class TestForestFromDict:
    """Tests for forest_from_dict."""

    def test_restores_snapshot(self, nested_forest):
        assert forest_from_dict(forest_to_dict(nested_forest)) == nested_forest

    def test_accepts_bare_list(self):
        forest = forest_from_dict([{'id': 'A', 'text': 'Cell biology'}])

        assert forest[0].id == 'A'
        assert forest[0].status == NoteStatus.DEFAULT
        assert forest[0].children == ()

    def test_siblings_keep_entry_order(self):
        forest = forest_from_dict([
            {'id': 'A', 'text': 'Cell biology'},
            {'id': 'B', 'parent_id': 'A', 'text': 'Mitochondria'},
            {'id': 'Z', 'text': 'Genetics'},
            {'id': 'C', 'parent_id': 'A', 'text': 'Nucleus'},
        ])

        assert [n.id for n in forest] == ['A', 'Z']
        assert [c.id for c in forest[0].children] == ['B', 'C']

    def test_ids_coerced_to_str(self):
        forest = forest_from_dict({'notes': [{'id': 7, 'text': 'Seven'}, {'id': 8, 'parent_id': 7, 'text': 'Eight'}]})

        assert forest[0].id == '7'
        assert forest[0].children[0].id == '8'

    def test_duplicate_id_rejected(self):
        data = {'notes': [{'id': 'A', 'text': 'one'}, {'id': 'A', 'parent_id': 'A', 'text': 'two'}]}

        with pytest.raises(SnapshotFormatError, match="Duplicate"):
            forest_from_dict(data)

    def test_child_before_parent_rejected(self):
        data = [{'id': 'B', 'parent_id': 'A', 'text': 'Mitochondria'}, {'id': 'A', 'text': 'Cell biology'}]

        with pytest.raises(SnapshotFormatError, match="unknown parent"):
            forest_from_dict(data)

    def test_blank_text_rejected(self):
        with pytest.raises(SnapshotFormatError, match="blank"):
            forest_from_dict({'notes': [{'id': 'A', 'text': '  '}]})

    def test_unknown_status_rejected(self):
        with pytest.raises(SnapshotFormatError, match="Unknown status"):
            forest_from_dict({'notes': [{'id': 'A', 'text': 'x', 'status': 'urgent'}]})

    @pytest.mark.parametrize("data", [
        {'notes': 'nope'},
        {'other': []},
        'text',
        {'notes': ['not an object']},
        {'notes': [{'text': 'no id'}]},
    ])
    def test_bad_structure_rejected(self, data):
        with pytest.raises(SnapshotFormatError):
            forest_from_dict(data)


class TestJson:
    """Tests for dump_forest and load_forest."""

    def test_dump_is_valid_json(self, cell_biology_forest):
        assert json.loads(dump_forest(cell_biology_forest)) == forest_to_dict(cell_biology_forest)

    def test_non_ascii_kept(self):
        forest = load_forest('{"notes": [{"id": "A", "text": "Zellkern \\u00fcber"}]}')

        assert "Zellkern über" in dump_forest(forest)

    def test_invalid_json(self):
        with pytest.raises(SnapshotFormatError, match="Invalid JSON"):
            load_forest("{not json")

    def test_deep_outline_round_trips_through_json(self):
        """Test a 1500-level outline survives dump and load."""
        forest = chain(1500)

        restored = load_forest(dump_forest(forest))

        assert tree.count_notes(restored) == 1500
        assert forest_to_entries(restored) == forest_to_entries(forest)
        assert tree.find_note(restored, "1499").text == "level 1499"

    def test_deeply_nested_json_rejected(self):
        content = '{"notes": ' + '[' * 100000 + ']' * 100000 + '}'

        with pytest.raises(SnapshotFormatError):
            load_forest(content)

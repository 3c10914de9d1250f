"""
JSON snapshot format for a note forest.

Used by the CLI, the HTTP import/export endpoints and the session payload.
Notes are stored flat, in depth-first pre-order, each pointing at its parent:

    {"notes": [{"id": "...", "parent_id": null, "depth": 0,
                "text": "...", "status": "default"}, ...]}

A flat list keeps the JSON nesting constant however deep the outline is.
"""
import json
from typing import Any, Dict, List, Sequence

from core.exceptions import SnapshotFormatError
from core.models import Note, NoteForest, NoteStatus

from .tree import iter_notes


def forest_to_entries(forest: Sequence[Note]) -> List[Dict[str, Any]]:
    """Flatten a forest into pre-order entries with parent ids and depths."""
    entries = []
    parents: List[str] = []
    for note, depth in iter_notes(forest):
        del parents[depth:]
        entries.append({
            'id': note.id,
            'parent_id': parents[-1] if parents else None,
            'depth': depth,
            'text': note.text,
            'status': note.status.value
        })
        parents.append(note.id)
    return entries


def forest_to_dict(forest: Sequence[Note]) -> Dict[str, Any]:
    return {'notes': forest_to_entries(forest)}


def _check_entry(raw: Any) -> None:
    if not isinstance(raw, dict):
        raise SnapshotFormatError(f"Note entry must be an object, got {type(raw).__name__}")
    if 'id' not in raw or 'text' not in raw:
        raise SnapshotFormatError(f"Note entry is missing 'id' or 'text': {raw!r:.80}")
    if not isinstance(raw['text'], str) or not raw['text'].strip():
        raise SnapshotFormatError(f"Note {raw['id']!r} has blank text")


def forest_from_dict(data: Any) -> NoteForest:
    """
    Build a forest snapshot from flat entries.

    Accepts either {"notes": [...]} or a bare list of entries. Entries must
    come parent first; siblings keep their order. The optional "depth" key
    is informational and ignored.

    Raises:
        SnapshotFormatError: If the structure is invalid, a status is
            unknown, a note has blank text, an id repeats or a parent id
            does not precede its child
    """
    entries = data.get('notes') if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise SnapshotFormatError("Snapshot must contain a list of notes")

    order = []
    parent_of = {}
    fields = {}
    for raw in entries:
        _check_entry(raw)
        note_id = str(raw['id'])
        if note_id in fields:
            raise SnapshotFormatError(f"Duplicate note id: {note_id}")

        parent_id = raw.get('parent_id')
        if parent_id is not None:
            parent_id = str(parent_id)
            if parent_id not in fields:
                raise SnapshotFormatError(f"Note {note_id!r} refers to unknown parent {parent_id!r}")

        try:
            status = NoteStatus(raw.get('status', NoteStatus.DEFAULT.value))
        except ValueError:
            raise SnapshotFormatError(f"Unknown status {raw.get('status')!r} on note {note_id!r}")

        order.append(note_id)
        parent_of[note_id] = parent_id
        fields[note_id] = (raw['text'], status)

    # Children always follow their parent, so a reverse pass builds leaves first
    children: Dict[str, List[Note]] = {note_id: [] for note_id in order}
    roots: List[Note] = []
    for note_id in reversed(order):
        text, status = fields[note_id]
        note = Note(
            id=note_id,
            text=text,
            status=status,
            children=tuple(reversed(children.pop(note_id)))
        )
        parent_id = parent_of[note_id]
        if parent_id is None:
            roots.append(note)
        else:
            children[parent_id].append(note)

    return tuple(reversed(roots))


def dump_forest(forest: Sequence[Note], indent: int = 2) -> str:
    return json.dumps(forest_to_dict(forest), ensure_ascii=False, indent=indent)


def load_forest(content: str) -> NoteForest:
    """Parse a JSON snapshot string."""
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"Invalid JSON snapshot: {e}")
    except RecursionError:
        raise SnapshotFormatError("Invalid JSON snapshot: nesting too deep")
    return forest_from_dict(data)

"""
Notes package - Hierarchical note tree, capture workflow and exports.
"""

from .tree import (
    clear,
    insert_child,
    update_text,
    set_status,
    cycle_status,
    delete_note,
    find_note,
    iter_notes,
    count_notes
)
from .capture import (
    CaptureController,
    CaptureState,
    NoteSession,
    toggle_capture,
    set_active_note
)
from .linearizer import linearize, build_flashcard_prompt
from .projector import project
from .serialization import forest_to_entries, forest_to_dict, forest_from_dict, dump_forest, load_forest

__all__ = [
    # Tree operations
    'clear',
    'insert_child',
    'update_text',
    'set_status',
    'cycle_status',
    'delete_note',
    'find_note',
    'iter_notes',
    'count_notes',

    # Capture
    'CaptureController',
    'CaptureState',
    'NoteSession',
    'toggle_capture',
    'set_active_note',

    # Exports
    'linearize',
    'build_flashcard_prompt',
    'project',
    'forest_to_entries',
    'forest_to_dict',
    'forest_from_dict',
    'dump_forest',
    'load_forest'
]

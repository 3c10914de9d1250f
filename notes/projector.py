"""
Report projection.

Flattens the forest into row descriptors for the paginated report. Each row
carries everything needed to draw its connector lines, so the layout engine
can break a page between any two rows and still draw a continuous tree.
"""
from typing import List, Sequence

from core.models import Note, RowDescriptor


def project(forest: Sequence[Note]) -> List[RowDescriptor]:
    """
    Build one row descriptor per note, depth-first pre-order.

    The trunk flags are carried down the walk: a child of note N inherits
    N's flags plus one more saying whether N has a later sibling.

    Args:
        forest: Forest snapshot

    Returns:
        Row descriptors in the same order as the linearized outline
    """
    forest = tuple(forest)
    rows = []

    # (note, depth, is_last_child, ancestor_continues)
    stack = [
        (note, 0, i == len(forest) - 1, ())
        for i, note in reversed(list(enumerate(forest)))
    ]
    while stack:
        note, depth, is_last, chain = stack.pop()
        rows.append(RowDescriptor(
            indent=depth,
            text=note.text,
            status=note.status,
            is_last_child=is_last,
            ancestor_continues=chain
        ))

        child_chain = chain + (not is_last,)
        last_index = len(note.children) - 1
        for i in range(last_index, -1, -1):
            stack.append((note.children[i], depth + 1, i == last_index, child_chain))

    return rows

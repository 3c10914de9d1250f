"""
Note tree operations.

Every function takes a forest snapshot and returns a new one; the input is
never modified. Untouched subtrees are shared between snapshots. Lookups use
an explicit stack instead of recursion so arbitrarily deep imported trees do
not hit the interpreter recursion limit.

All operations are total: a reference to an id that is not in the forest
returns the forest unchanged.
"""
from typing import Callable, Iterator, List, Optional, Sequence, Set, Tuple

from core.models import Note, NoteForest, NoteStatus


def clear() -> NoteForest:
    """Return an empty forest."""
    return ()


def iter_notes(forest: Sequence[Note]) -> Iterator[Tuple[Note, int]]:
    """
    Walk the forest depth-first, pre-order.

    Yields:
        (note, depth) pairs, roots at depth 0
    """
    stack = [(node, 0) for node in reversed(tuple(forest))]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        for child in reversed(node.children):
            stack.append((child, depth + 1))


def subtree_ids(note: Note) -> Set[str]:
    """Collect the ids of a note and all of its descendants."""
    return {node.id for node, _ in iter_notes((note,))}


def count_notes(forest: Sequence[Note]) -> int:
    return sum(1 for _ in iter_notes(forest))


def find_note(forest: Sequence[Note], note_id: str) -> Optional[Note]:
    """Find a note anywhere in the forest by id."""
    for node, _ in iter_notes(forest):
        if node.id == note_id:
            return node
    return None


def contains(forest: Sequence[Note], note_id: Optional[str]) -> bool:
    if note_id is None:
        return False
    return find_note(forest, note_id) is not None


def _find_path(forest: NoteForest, note_id: str) -> Optional[List[int]]:
    """Return the sibling indices leading from the roots to a note."""
    stack = [((i,), node) for i, node in reversed(list(enumerate(forest)))]
    while stack:
        path, node = stack.pop()
        if node.id == note_id:
            return list(path)
        for i in range(len(node.children) - 1, -1, -1):
            stack.append((path + (i,), node.children[i]))
    return None


def _rebuild(
    forest: NoteForest,
    path: List[int],
    transform: Callable[[NoteForest, int], NoteForest]
) -> NoteForest:
    """
    Rewrite the sibling tuple holding the note at `path`, then copy every
    ancestor on the way back up to the roots.
    """
    chain = []
    siblings = forest
    for idx in path:
        chain.append((siblings, idx))
        siblings = siblings[idx].children

    siblings, idx = chain.pop()
    new_siblings = transform(siblings, idx)
    while chain:
        parent_siblings, parent_idx = chain.pop()
        parent = parent_siblings[parent_idx].with_children(new_siblings)
        new_siblings = parent_siblings[:parent_idx] + (parent,) + parent_siblings[parent_idx + 1:]
    return new_siblings


def _map_note(
    forest: Sequence[Note],
    note_id: str,
    fn: Callable[[Note], Note]
) -> NoteForest:
    forest = tuple(forest)
    path = _find_path(forest, note_id)
    if path is None:
        return forest
    return _rebuild(
        forest,
        path,
        lambda sibs, i: sibs[:i] + (fn(sibs[i]),) + sibs[i + 1:]
    )


def insert_child(
    forest: Sequence[Note],
    parent_id: Optional[str],
    note: Note
) -> NoteForest:
    """
    Append a note under a parent, or as a new root when parent_id is None.

    The forest is returned unchanged when the parent does not exist, when
    the note's text is blank, or when any id in the note's subtree is
    already present in the forest.
    """
    forest = tuple(forest)
    if not note.text.strip():
        return forest

    incoming = [node.id for node, _ in iter_notes((note,))]
    if len(set(incoming)) != len(incoming):
        return forest
    existing = {node.id for node, _ in iter_notes(forest)}
    if existing.intersection(incoming):
        return forest

    if parent_id is None:
        return forest + (note,)
    return _map_note(
        forest,
        parent_id,
        lambda parent: parent.with_children(parent.children + (note,))
    )


def update_text(forest: Sequence[Note], note_id: str, text: str) -> NoteForest:
    """
    Replace a note's text verbatim.

    Blank text is ignored; callers revert their edit buffer instead of
    committing an empty note.
    """
    if not text.strip():
        return tuple(forest)
    return _map_note(forest, note_id, lambda node: node.with_text(text))


def set_status(forest: Sequence[Note], note_id: str, status: NoteStatus) -> NoteForest:
    return _map_note(forest, note_id, lambda node: node.with_status(NoteStatus(status)))


def cycle_status(forest: Sequence[Note], note_id: str) -> NoteForest:
    """Advance a note's status: default -> important -> crucial -> default."""
    return _map_note(forest, note_id, lambda node: node.with_status(node.status.next()))


def delete_note(forest: Sequence[Note], note_id: str) -> NoteForest:
    """Remove a note and its whole subtree, wherever it sits."""
    forest = tuple(forest)
    path = _find_path(forest, note_id)
    if path is None:
        return forest
    return _rebuild(forest, path, lambda sibs, i: sibs[:i] + sibs[i + 1:])

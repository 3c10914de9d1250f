#!/usr/bin/env python3
"""
CLI for note snapshots.

Captures PDF passages into a JSON note snapshot and exports snapshots as an
outline, a flashcard prompt, generated flashcards or a PDF report.
"""
import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import settings
from core.exceptions import RenderingUnavailableError, SnapshotFormatError
from core.models import NoteStatus
from llm.client_factory import LLMClientFactory
from notes import capture, tree
from notes.capture import CaptureController, CaptureState, NoteSession
from notes.linearizer import build_flashcard_prompt, linearize
from notes.serialization import dump_forest, load_forest
from services.flashcard_service import FlashcardService, flashcards_to_tsv
from services.report_service import ReportService
from utils.log_utils import setup_logging
from viewer.document_viewer import DocumentViewer

STATUS_MARKERS = {
    NoteStatus.DEFAULT: ' ',
    NoteStatus.IMPORTANT: '*',
    NoteStatus.CRUCIAL: '!',
}


def load_snapshot(path: str, allow_missing: bool = False):
    """Read a forest snapshot file."""
    if not os.path.exists(path):
        if allow_missing:
            return tree.clear()
        print(f"❌ Error: Snapshot not found: {path}")
        return None
    with open(path, 'r', encoding='utf-8') as f:
        content = f.read()
    try:
        return load_forest(content)
    except SnapshotFormatError as e:
        print(f"❌ Error: {e}")
        return None


def save_snapshot(forest, path: str):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dump_forest(forest))


def write_or_print(content: str, output_path: str = None):
    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(content)
        print(f"✓ Written to: {output_path}")
    else:
        sys.stdout.write(content)


def show_cli(snapshot_path: str):
    """Print the note tree with ids and status markers."""
    forest = load_snapshot(snapshot_path)
    if forest is None:
        return
    if not forest:
        print("No notes.")
        return
    for note, depth in tree.iter_notes(forest):
        print(f"[{STATUS_MARKERS[note.status]}] {'  ' * depth}{note.text}  ({note.id})")
    print(f"\n{tree.count_notes(forest)} notes")


def capture_cli(
    pdf_path: str,
    snapshot_path: str,
    page_number: int,
    rect: list,
    parent_id: str = None,
    dpi: int = 72
):
    """Capture the text under a rectangle on a PDF page into a snapshot."""
    if not os.path.exists(pdf_path):
        print(f"❌ Error: File not found: {pdf_path}")
        return

    forest = load_snapshot(snapshot_path, allow_missing=True)
    if forest is None:
        return
    if parent_id is not None and not tree.contains(forest, parent_id):
        print(f"❌ Error: Parent note not found: {parent_id}")
        return

    viewer = DocumentViewer(target_dpi=dpi)
    with open(pdf_path, 'rb') as f:
        try:
            viewer.open(f.read(), os.path.basename(pdf_path))
        except RenderingUnavailableError as e:
            print(f"❌ Error: {e}")
            return

    session = NoteSession(forest=forest, capture=CaptureState(active=True, active_parent_id=parent_id))
    selection = viewer.select_region(page_number, dict(zip(('x1', 'y1', 'x2', 'y2'), rect)))
    updated = CaptureController(viewer).on_selection(session, selection)
    viewer.close()

    if updated is session:
        print("⚠️  Nothing captured (empty selection or outside the page)")
        return

    save_snapshot(updated.forest, snapshot_path)
    print(f"✓ Captured: {selection.text.strip()}")
    print(f"  Notes: {tree.count_notes(updated.forest)}")


def edit_cli(snapshot_path: str, note_id: str, text: str = None, cycle: bool = False, delete: bool = False):
    """Edit, cycle or delete a note in a snapshot."""
    forest = load_snapshot(snapshot_path)
    if forest is None:
        return
    if not tree.contains(forest, note_id):
        print(f"❌ Error: Note not found: {note_id}")
        return

    session = NoteSession(forest=forest)
    if delete:
        session = capture.delete_note(session, note_id)
    if text is not None and not delete:
        session = capture.update_note_text(session, note_id, text.strip())
    if cycle and not delete:
        session = capture.cycle_note_status(session, note_id)

    save_snapshot(session.forest, snapshot_path)
    print(f"✓ Snapshot updated: {snapshot_path}")


async def flashcards_cli(
    snapshot_path: str,
    output_path: str = None,
    llm_provider: str = None,
    model: str = None
):
    """Generate flashcards for a snapshot."""
    forest = load_snapshot(snapshot_path)
    if forest is None:
        return
    if not forest:
        print("❌ Error: Snapshot has no notes")
        return

    config = settings.get_llm_config()
    default_provider = config.pop('provider')
    default_model = config.pop('model')
    provider = llm_provider or default_provider
    model = model or default_model
    try:
        client = LLMClientFactory.create_client(provider, model, **config)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return

    print(f"Generating flashcards with {provider}/{model}...", file=sys.stderr)
    service = FlashcardService(client, temperature=settings.llm_temperature)
    try:
        result = await service.generate(forest)
    finally:
        await client.close()

    if not result.ok:
        print(f"❌ {result.text}")
        return

    content = flashcards_to_tsv(result.cards) if result.cards else result.text + '\n'
    write_or_print(content, output_path)
    print(f"✓ {len(result.cards)} flashcards", file=sys.stderr)


def report_cli(snapshot_path: str, output_path: str):
    """Export a snapshot as a PDF report."""
    forest = load_snapshot(snapshot_path)
    if forest is None:
        return
    service = ReportService.from_settings(settings)
    try:
        service.export(forest, output_path)
    except (ValueError, RenderingUnavailableError) as e:
        print(f"❌ Error: {e}")
        return
    print(f"✓ Report exported to: {output_path}")
    print(f"  Notes: {tree.count_notes(forest)}")


def main():
    parser = argparse.ArgumentParser(
        description='Capture PDF highlights into notes and export them'
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Show command
    show_parser = subparsers.add_parser('show', help='Show the note tree')
    show_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')

    # Capture command
    capture_parser = subparsers.add_parser('capture', help='Capture text under a rectangle of a PDF page')
    capture_parser.add_argument('pdf', type=str, help='PDF file')
    capture_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON), created if missing')
    capture_parser.add_argument('--page', type=int, default=1, help='1-indexed page number')
    capture_parser.add_argument('--rect', type=float, nargs=4, required=True,
                                metavar=('X1', 'Y1', 'X2', 'Y2'), help='Selection rectangle')
    capture_parser.add_argument('--parent', type=str, help='Attach under this note id')
    capture_parser.add_argument('--dpi', type=int, default=72, help='Resolution the rectangle is expressed in (72 = PDF points)')

    # Edit command
    edit_parser = subparsers.add_parser('edit', help='Edit a note')
    edit_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')
    edit_parser.add_argument('note_id', type=str, help='Note ID')
    edit_parser.add_argument('--text', type=str, help='New text')
    edit_parser.add_argument('--cycle-status', action='store_true', help='Advance the note status')
    edit_parser.add_argument('--delete', action='store_true', help='Delete the note and its sub-notes')

    # Outline / prompt commands
    outline_parser = subparsers.add_parser('outline', help='Print the indented outline')
    outline_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')
    outline_parser.add_argument('-o', '--output', type=str, help='Output file path')

    prompt_parser = subparsers.add_parser('prompt', help='Print the flashcard prompt')
    prompt_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')
    prompt_parser.add_argument('-o', '--output', type=str, help='Output file path')

    # Flashcards command
    cards_parser = subparsers.add_parser('flashcards', help='Generate flashcards')
    cards_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')
    cards_parser.add_argument('-o', '--output', type=str, help='Output TSV path')
    cards_parser.add_argument('--llm-provider', type=str, choices=LLMClientFactory.get_supported_providers(), help='LLM provider')
    cards_parser.add_argument('--model', type=str, help='Model name')

    # Report command
    report_parser = subparsers.add_parser('report', help='Export a PDF report')
    report_parser.add_argument('snapshot', type=str, help='Note snapshot (JSON)')
    report_parser.add_argument('-o', '--output', type=str, default='notes.pdf', help='Output PDF path')

    args = parser.parse_args()
    setup_logging(settings.log_level)

    if args.command == 'show':
        show_cli(args.snapshot)
    elif args.command == 'capture':
        capture_cli(args.pdf, args.snapshot, args.page, args.rect, args.parent, args.dpi)
    elif args.command == 'edit':
        edit_cli(args.snapshot, args.note_id, args.text, args.cycle_status, args.delete)
    elif args.command == 'outline':
        forest = load_snapshot(args.snapshot)
        if forest is not None:
            write_or_print(linearize(forest), args.output)
    elif args.command == 'prompt':
        forest = load_snapshot(args.snapshot)
        if forest is not None:
            write_or_print(build_flashcard_prompt(forest), args.output)
    elif args.command == 'flashcards':
        asyncio.run(flashcards_cli(args.snapshot, args.output, args.llm_provider, args.model))
    elif args.command == 'report':
        report_cli(args.snapshot, args.output)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()

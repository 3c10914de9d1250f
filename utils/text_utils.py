"""
Text utilities for captured selections.

PDF text extraction returns one line per visual line; a highlighted passage
should read as a single snippet.
"""
import re


def join_hyphenated_lines(text: str) -> str:
    """
    Rejoin words broken across lines with a trailing hyphen.

    Args:
        text: Extracted text

    Returns:
        Text with "mito-\\nchondria" turned into "mitochondria"
    """
    return re.sub(r'(\w)-\n(\w)', r'\1\2', text)


def collapse_whitespace(text: str) -> str:
    """Replace runs of whitespace, including newlines, with single spaces."""
    return re.sub(r'\s+', ' ', text)


def normalize_selection_text(text: str) -> str:
    """
    Clean text extracted under a selection.

    Leading and trailing whitespace is kept; trimming is the capture
    workflow's job.
    """
    if not text:
        return ""
    return collapse_whitespace(join_hyphenated_lines(text))

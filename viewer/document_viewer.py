"""
Document viewer backed by PyMuPDF.

Renders PDF pages for display and answers "what text is under this
selection". Selection rectangles arrive in display pixels of the rendered
page images, so they share the viewer's render DPI.
"""
from typing import Dict, Optional, Tuple

import fitz  # PyMuPDF

from core.constants import DEFAULT_VIEWER_PARAMS
from core.exceptions import RenderingUnavailableError
from core.models import SelectionEvent
from utils.bbox_utils import intersect_bbox, order_bbox, pixels_to_points
from utils.image_utils import render_page_to_base64
from utils.log_utils import get_logger
from utils.text_utils import normalize_selection_text

logger = get_logger('viewer')


class DocumentViewer:
    """Holds one open PDF and the user's current text selection."""

    def __init__(
        self,
        target_dpi: int = DEFAULT_VIEWER_PARAMS['target_dpi'],
        max_image_size: int = DEFAULT_VIEWER_PARAMS['max_image_size']
    ):
        """
        Initialize viewer.

        Args:
            target_dpi: DPI pages are rendered at; selections use the same scale
            max_image_size: Maximum rendered image dimension
        """
        self.target_dpi = target_dpi
        self.max_image_size = max_image_size
        self.filename: Optional[str] = None
        self._doc: Optional[fitz.Document] = None
        self._selection: Optional[SelectionEvent] = None

    @property
    def is_open(self) -> bool:
        return self._doc is not None

    @property
    def page_count(self) -> int:
        return self._require_document().page_count

    @property
    def current_selection(self) -> Optional[SelectionEvent]:
        return self._selection

    def open(self, data: bytes, filename: str = "document.pdf") -> int:
        """
        Load a PDF from bytes, replacing any open document.

        Args:
            data: Raw PDF bytes
            filename: Display name

        Returns:
            Number of pages

        Raises:
            RenderingUnavailableError: If the bytes are not a readable PDF
        """
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as e:
            raise RenderingUnavailableError(f"Error loading PDF. Please try another file. ({e})")
        if doc.page_count == 0:
            doc.close()
            raise RenderingUnavailableError("Error loading PDF. Please try another file. (no pages)")

        self.close()
        self._doc = doc
        self.filename = filename
        logger.info(f"Opened {filename} ({doc.page_count} pages)")
        return doc.page_count

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
        self._doc = None
        self._selection = None
        self.filename = None

    def _require_document(self) -> fitz.Document:
        if self._doc is None:
            raise RenderingUnavailableError("No document is open in the viewer")
        return self._doc

    def _require_page(self, page_number: int) -> fitz.Page:
        doc = self._require_document()
        if not 1 <= page_number <= doc.page_count:
            raise ValueError(f"Page {page_number} out of range (1-{doc.page_count})")
        return doc.load_page(page_number - 1)

    def page_size(self, page_number: int) -> Tuple[float, float]:
        """Page (width, height) in display pixels."""
        rect = self._require_page(page_number).rect
        scale = self.target_dpi / 72.0
        return rect.width * scale, rect.height * scale

    def render_page(self, page_number: int) -> str:
        """Render a page to a base64 PNG for display."""
        self._require_page(page_number)
        return render_page_to_base64(
            self._doc,
            page_number,
            target_dpi=self.target_dpi,
            max_size=self.max_image_size
        )

    def select_region(self, page_number: int, bbox: Dict) -> SelectionEvent:
        """
        Select the text under a rectangle drawn on a rendered page.

        The selection counts as inside the viewer only when it lands on an
        existing page and overlaps that page's area; anything else produces
        an empty out-of-viewer event.

        Args:
            page_number: 1-indexed page the rectangle was drawn on
            bbox: Dict with x1, y1, x2, y2 in display pixels

        Returns:
            The selection event, also kept as the current selection

        Raises:
            RenderingUnavailableError: If no document is open
        """
        doc = self._require_document()
        if not 1 <= page_number <= doc.page_count:
            self._selection = SelectionEvent(text="", within_viewer=False, page_number=page_number)
            return self._selection

        page = doc.load_page(page_number - 1)
        bounds = {'x1': page.rect.x0, 'y1': page.rect.y0, 'x2': page.rect.x1, 'y2': page.rect.y1}
        region = intersect_bbox(pixels_to_points(order_bbox(bbox), self.target_dpi), bounds)
        if region is None:
            self._selection = SelectionEvent(text="", within_viewer=False, page_number=page_number)
            return self._selection

        clip = fitz.Rect(region['x1'], region['y1'], region['x2'], region['y2'])
        text = normalize_selection_text(page.get_text("text", clip=clip))
        self._selection = SelectionEvent(text=text, within_viewer=True, page_number=page_number)
        return self._selection

    def clear_selection(self) -> None:
        """Drop the current selection so its highlight goes away."""
        self._selection = None

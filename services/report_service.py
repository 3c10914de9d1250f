"""
Report Service - Renders the note outline as a paginated PDF.

reportlab's platypus engine handles pagination; each note becomes one
NoteRowFlowable that draws its own background, accent margin, text and
tree connectors from its RowDescriptor alone. Because no row depends on
its neighbours' draw state, a page may break between any two rows.
"""
from io import BytesIO
from typing import List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import Flowable, SimpleDocTemplate

from core.constants import (
    REPORT_LAYOUT,
    SEPARATOR_COLOR,
    TEXT_COLOR,
    TREE_LINE_COLOR,
    TREE_LINE_WIDTH
)
from core.exceptions import RenderingUnavailableError
from core.models import Note, RowDescriptor
from notes.projector import project
from utils.log_utils import get_logger

from .report_layout import layout_row, text_offset

logger = get_logger('services.report')

ACCENT_LINE_WIDTH = 2


class NoteRowFlowable(Flowable):
    """One report row; splits across pages between text lines."""

    def __init__(
        self,
        row: RowDescriptor,
        draw_separator: bool,
        font_name: str,
        bold_font_name: str,
        font_size: float,
        lines: Optional[List[str]] = None,
        continued: bool = False
    ):
        super().__init__()
        self.row = row
        self.draw_separator = draw_separator
        self.font_name = bold_font_name if row.indent == 0 else font_name
        self.font_size = font_size
        self.leading = font_size * 1.2
        self.continued = continued
        self._lines = lines
        self.content_height = 0
        self.width = 0
        self.height = 0

    def _wrap_lines(self, avail_width: float) -> List[str]:
        if self._lines is None:
            max_width = avail_width - text_offset(self.row.indent) - REPORT_LAYOUT['cell_padding']
            self._lines = simpleSplit(self.row.text, self.font_name, self.font_size, max_width) or ['']
        return self._lines

    def _separator_space(self) -> float:
        return 2 * REPORT_LAYOUT['separator_gap'] if self.draw_separator else 0

    def wrap(self, availWidth, availHeight):
        lines = self._wrap_lines(availWidth)
        self.width = availWidth
        self.content_height = 2 * REPORT_LAYOUT['cell_padding'] + len(lines) * self.leading
        self.height = self.content_height + self._separator_space()
        return self.width, self.height

    def split(self, availWidth, availHeight):
        lines = self._wrap_lines(availWidth)
        fit = int((availHeight - 2 * REPORT_LAYOUT['cell_padding']) // self.leading)
        if fit < 1 or fit >= len(lines):
            return []

        head = NoteRowFlowable(
            self.row, False, self.font_name, self.font_name, self.font_size,
            lines=lines[:fit], continued=self.continued
        )
        tail = NoteRowFlowable(
            self.row, self.draw_separator, self.font_name, self.font_name, self.font_size,
            lines=lines[fit:], continued=True
        )
        return [head, tail]

    def _line(self, line):
        x1, y1, x2, y2 = line
        self.canv.line(x1, self.height - y1, x2, self.height - y2)

    def draw(self):
        canv = self.canv
        drawing = layout_row(
            self.row,
            0,
            0,
            self.width,
            self.content_height,
            draw_separator=self.draw_separator,
            continued=self.continued
        )

        # Status background and accent margin
        x, y, w, h = drawing.background
        canv.setFillColor(colors.HexColor(drawing.fill_color))
        canv.rect(x, self.height - y - h, w, h, fill=1, stroke=0)
        canv.setStrokeColor(colors.HexColor(drawing.accent_color))
        canv.setLineWidth(ACCENT_LINE_WIDTH)
        self._line(drawing.accent_line)

        # Text
        canv.setFillColorRGB(*TEXT_COLOR)
        canv.setFont(self.font_name, self.font_size)
        baseline = REPORT_LAYOUT['cell_padding'] + self.font_size * 0.85
        for line in self._lines:
            canv.drawString(drawing.text_x, self.height - baseline, line)
            baseline += self.leading

        # Tree connectors
        canv.setStrokeColorRGB(*TREE_LINE_COLOR)
        canv.setLineWidth(TREE_LINE_WIDTH)
        for trunk in drawing.trunks:
            self._line(trunk)
        if drawing.parent_connector:
            self._line(drawing.parent_connector)
        if drawing.tick:
            self._line(drawing.tick)

        if drawing.separator:
            canv.setStrokeColorRGB(*SEPARATOR_COLOR)
            canv.setLineWidth(TREE_LINE_WIDTH)
            self._line(drawing.separator)


class ReportService:
    """Service for exporting notes to a PDF report."""

    def __init__(
        self,
        font_name: str = "Times-Roman",
        bold_font_name: str = "Times-Bold",
        font_path: Optional[str] = None,
        bold_font_path: Optional[str] = None,
        font_size: float = 12,
        title: str = "My Notes"
    ):
        """
        Initialize report service.

        Args:
            font_name: Body font; a built-in PDF font unless font_path is given
            bold_font_name: Font for root notes
            font_path: Optional TTF file registered under font_name
            bold_font_path: Optional TTF file registered under bold_font_name
            font_size: Text size in points
            title: PDF document title
        """
        self.font_name = font_name
        self.bold_font_name = bold_font_name
        self.font_path = font_path
        self.bold_font_path = bold_font_path
        self.font_size = font_size
        self.title = title
        self._fonts_ready = False

    @classmethod
    def from_settings(cls, settings) -> 'ReportService':
        return cls(**settings.get_report_config())

    def _ensure_fonts(self) -> None:
        if self._fonts_ready:
            return
        for name, path in ((self.font_name, self.font_path), (self.bold_font_name, self.bold_font_path)):
            try:
                if path:
                    pdfmetrics.registerFont(TTFont(name, path))
                pdfmetrics.getFont(name)
            except (OSError, TTFError, KeyError, ValueError) as e:
                raise RenderingUnavailableError(f"Report font {name!r} is not available: {e}")
        self._fonts_ready = True

    def build_story(self, forest: Sequence[Note]) -> List[NoteRowFlowable]:
        """Project the forest into row flowables, separator after all but the last."""
        rows = project(forest)
        return [
            NoteRowFlowable(
                row,
                draw_separator=index < len(rows) - 1,
                font_name=self.font_name,
                bold_font_name=self.bold_font_name,
                font_size=self.font_size
            )
            for index, row in enumerate(rows)
        ]

    def render(self, forest: Sequence[Note]) -> bytes:
        """
        Render a forest snapshot to PDF bytes.

        Args:
            forest: Forest snapshot; read once before layout starts

        Returns:
            PDF document bytes

        Raises:
            ValueError: If the forest is empty
            RenderingUnavailableError: If the configured fonts cannot be loaded
        """
        forest = tuple(forest)
        if not forest:
            raise ValueError("No notes to export")
        self._ensure_fonts()

        story = self.build_story(forest)
        buf = BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            leftMargin=REPORT_LAYOUT['margin'],
            rightMargin=REPORT_LAYOUT['margin'],
            topMargin=REPORT_LAYOUT['top_margin'],
            bottomMargin=REPORT_LAYOUT['top_margin'],
            title=self.title
        )
        doc.build(story)
        logger.info(f"Rendered report with {len(story)} rows")
        return buf.getvalue()

    def export(self, forest: Sequence[Note], output_path: str) -> str:
        """Render a forest and write the PDF to output_path."""
        data = self.render(forest)
        with open(output_path, 'wb') as f:
            f.write(data)
        return output_path

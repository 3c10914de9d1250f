"""
Image utilities for the document viewer.

Handles page rendering and image conversion.
"""
import base64
from io import BytesIO

import fitz  # PyMuPDF
from PIL import Image


def render_page_to_image(doc: fitz.Document, page_num: int, target_dpi: int = 150) -> Image.Image:
    """
    Render a page of an open PDF document to a PIL image.

    Args:
        doc: Open PyMuPDF document
        page_num: 1-indexed page number
        target_dpi: Target DPI for rendering

    Returns:
        RGB image of the page
    """
    page = doc.load_page(page_num - 1)  # 0-indexed

    mat = fitz.Matrix(target_dpi / 72, target_dpi / 72)
    pix = page.get_pixmap(matrix=mat, alpha=False)

    return Image.open(BytesIO(pix.tobytes("png")))


def render_page_to_base64(
    doc: fitz.Document,
    page_num: int,
    target_dpi: int = 150,
    max_size: int = 2048
) -> str:
    """
    Render a page to a base64-encoded PNG, downscaled to max_size.

    Args:
        doc: Open PyMuPDF document
        page_num: 1-indexed page number
        target_dpi: Target DPI for rendering
        max_size: Maximum dimension (width or height) before resizing

    Returns:
        Base64-encoded PNG string
    """
    img = render_page_to_image(doc, page_num, target_dpi)

    if max(img.size) > max_size:
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

    return image_to_base64(img)


def image_to_base64(img: Image.Image) -> str:
    """Encode a PIL image as base64 PNG."""
    buf = BytesIO()
    img.save(buf, format='PNG')
    return base64.b64encode(buf.getvalue()).decode()


def decode_base64_image(b64_string: str) -> Image.Image:
    """
    Decode base64 string to PIL Image.

    Args:
        b64_string: Base64-encoded image string

    Returns:
        PIL Image object
    """
    img_data = base64.b64decode(b64_string)
    return Image.open(BytesIO(img_data))

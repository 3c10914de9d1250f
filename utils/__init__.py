"""Utilities package - Helper functions for images, boxes, text and logging."""

from .image_utils import (
    render_page_to_image,
    render_page_to_base64,
    image_to_base64,
    decode_base64_image
)

from .bbox_utils import (
    order_bbox,
    pixels_to_points,
    points_to_pixels,
    intersect_bbox
)

from .text_utils import (
    join_hyphenated_lines,
    collapse_whitespace,
    normalize_selection_text
)

from .log_utils import setup_logging, get_logger

__all__ = [
    # Image utils
    'render_page_to_image',
    'render_page_to_base64',
    'image_to_base64',
    'decode_base64_image',

    # BBox utils
    'order_bbox',
    'pixels_to_points',
    'points_to_pixels',
    'intersect_bbox',

    # Text utils
    'join_hyphenated_lines',
    'collapse_whitespace',
    'normalize_selection_text',

    # Logging
    'setup_logging',
    'get_logger'
]

"""
Bounding box utilities for viewer selections.

Selections arrive in display pixels of a rendered page image; PyMuPDF works
in PDF points (72 per inch). Boxes are plain dicts with x1, y1, x2, y2.
"""
from typing import Dict, Optional


def order_bbox(bbox: Dict) -> Dict:
    """
    Put corners in top-left / bottom-right order.

    A drag selection can start from any corner.
    """
    return {
        'x1': min(bbox['x1'], bbox['x2']),
        'y1': min(bbox['y1'], bbox['y2']),
        'x2': max(bbox['x1'], bbox['x2']),
        'y2': max(bbox['y1'], bbox['y2'])
    }


def pixels_to_points(bbox: Dict, dpi: int) -> Dict:
    """
    Convert a pixel box from a page rendered at `dpi` to PDF points.

    Args:
        bbox: Dict with x1, y1, x2, y2 in pixels
        dpi: Resolution the page image was rendered at

    Returns:
        Dict with coordinates in points
    """
    scale = 72.0 / dpi
    return {key: bbox[key] * scale for key in ('x1', 'y1', 'x2', 'y2')}


def points_to_pixels(bbox: Dict, dpi: int) -> Dict:
    """Convert a box in PDF points to pixels at `dpi`."""
    scale = dpi / 72.0
    return {key: int(round(bbox[key] * scale)) for key in ('x1', 'y1', 'x2', 'y2')}


def intersect_bbox(bbox: Dict, bounds: Dict) -> Optional[Dict]:
    """
    Clip a box to bounds.

    Returns:
        The overlapping box, or None when the boxes do not overlap
    """
    x1 = max(bbox['x1'], bounds['x1'])
    y1 = max(bbox['y1'], bounds['y1'])
    x2 = min(bbox['x2'], bounds['x2'])
    y2 = min(bbox['y2'], bounds['y2'])
    if x2 <= x1 or y2 <= y1:
        return None
    return {'x1': x1, 'y1': y1, 'x2': x2, 'y2': y2}

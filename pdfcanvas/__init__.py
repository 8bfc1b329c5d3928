"""
pdfcanvas: build PDF documents in memory from drawing & text commands.

    from pdfcanvas import Document

    doc = Document()
    doc.add_page()
    doc.set_fill_color("#FF0000")
    doc.add_circle(100, 300, 20, stroke=False, fill=True)
    doc.add_text("Hello world", 30, (10, 20, 550, 800), alignment="lt")
    data = doc.render()
"""

from .colors import ColorCache
from .config import Settings, get_settings
from .document import Document, ObjectHandle, PDFObject
from .drawing import KAPPA, ClipPath
from .encoding import decode_utf8, encode_utf8
from .errors import (
    DuplicateNameError,
    EncodingError,
    FontNotFoundError,
    InvalidColorError,
    InvalidImageError,
    InvalidMatrixError,
    InvalidStreamDataError,
    NoCurrentPageError,
    NotFoundError,
    PDFCanvasException,
    UnsupportedValueError,
)
from .fonts import STANDARD_METRICS, FontMetricsTable, GlyphMetrics, measure_text
from .matrix import Box, Matrix, Point

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "Box",
    "ClipPath",
    "ColorCache",
    "Document",
    "DuplicateNameError",
    "EncodingError",
    "FontMetricsTable",
    "FontNotFoundError",
    "GlyphMetrics",
    "InvalidColorError",
    "InvalidImageError",
    "InvalidMatrixError",
    "InvalidStreamDataError",
    "KAPPA",
    "Matrix",
    "NoCurrentPageError",
    "NotFoundError",
    "ObjectHandle",
    "PDFCanvasException",
    "PDFObject",
    "Point",
    "STANDARD_METRICS",
    "Settings",
    "UnsupportedValueError",
    "decode_utf8",
    "encode_utf8",
    "get_settings",
    "measure_text",
]

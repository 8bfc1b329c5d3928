"""
Exceptions raised by pdfcanvas.

Every failure is local and synchronous: nothing is retried and a failed call
never leaves a half-written dictionary entry behind.
"""


class PDFCanvasException(Exception):
    pass


class DuplicateNameError(PDFCanvasException):
    "A logical object name is already registered in the document"

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate object name {name}")
        self.name = name


class NotFoundError(PDFCanvasException, LookupError):
    pass


class FontNotFoundError(NotFoundError):
    def __init__(self, font_name: str) -> None:
        super().__init__(
            f"Cannot find font {font_name}, maybe you should add it first with add_font()."
            " By default only helvetica is available"
        )
        self.font_name = font_name


class NoCurrentPageError(PDFCanvasException):
    def __init__(self) -> None:
        super().__init__("No current page: call add_page() before drawing")


class InvalidStreamDataError(PDFCanvasException, TypeError):
    pass


class InvalidMatrixError(PDFCanvasException, ValueError):
    pass


class EncodingError(PDFCanvasException, ValueError):
    pass


class UnsupportedValueError(PDFCanvasException, TypeError):
    "A dictionary value has no PDF representation"


class InvalidColorError(PDFCanvasException, ValueError):
    pass


class InvalidImageError(PDFCanvasException, ValueError):
    pass

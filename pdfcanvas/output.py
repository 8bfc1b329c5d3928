"""
This module contains the serialization logic that produces the final bytes
of a Document: header, numbered objects, cross-reference table & trailer.

Serialization is a single pass over the objects, in insertion order:
byte offsets are only known while writing, so they are recorded there.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

from .encoding import encode_utf8
from .errors import PDFCanvasException
from .syntax import create_dictionary_string

if TYPE_CHECKING:
    from .document import Document, PDFObject


LOGGER = logging.getLogger(__name__)

FIRST_PAGE_NAME = "page_1"


class ContentWithoutID(ABC):
    @abstractmethod
    def serialize(self) -> str:
        raise NotImplementedError


class PDFHeader(ContentWithoutID):
    def __init__(self, pdf_version: str) -> None:
        self.pdf_version = pdf_version

    def serialize(self) -> str:
        return f"%PDF-{self.pdf_version}\n"


class PDFXrefAndTrailer(ContentWithoutID):
    "Cross-reference table & file trailer"

    def __init__(self, output_builder: "OutputProducer") -> None:
        self.output_builder = output_builder
        self.count = len(output_builder.objects) + 1
        # Must be set before the call to serialize():
        self.catalog_obj: Optional["PDFObject"] = None

    def serialize(self) -> str:
        if self.catalog_obj is None:
            raise PDFCanvasException("Invalid state for XREF production.")
        builder = self.output_builder
        startxref = len(builder.buffer)
        out: list[str] = []
        out.append("xref\n")
        out.append(f"0 {self.count}\n")
        out.append("0000000000 65535 f\n")
        for pdf_obj in builder.objects:
            out.append(f"{builder.offsets[pdf_obj.number]:010d} {pdf_obj.generation:05d} n\n")
        out.append("trailer\n")
        out.append(
            create_dictionary_string(
                {"Size": self.count, "Root": self.catalog_obj.ref}
            )
        )
        out.append(f"\nstartxref\n{startxref}\n%%EOF")
        return "".join(out)


class OutputProducer:
    "Generates the final bytes representing the PDF document, based on a Document instance."

    def __init__(self, document: "Document") -> None:
        self.document = document
        self.objects = document.objects
        # offsets of the PDF objects in self.buffer, used to build the xref table:
        self.offsets: dict[int, int] = {}
        self.sections_size_per_trace_label: dict[str, int] = defaultdict(int)
        self.buffer = bytearray()

    def bufferize(self) -> bytes:
        """
        This method alters the target Document: it sets the catalog /OpenAction,
        the /Length of every stream and the offset of every object.
        """
        document = self.document
        catalog_obj = document.catalog
        first_page = document.lookup_object(FIRST_PAGE_NAME)
        if first_page is not None:
            catalog_obj.dictionary["OpenAction"] = [
                document.get_object(first_page).ref,
                "FitH",
                None,
            ]
        for pdf_obj in self.objects:
            pdf_obj.offset = None

        self._out(PDFHeader(document.settings.pdf_version).serialize())
        for pdf_obj in self.objects:
            offset = len(self.buffer)
            self.offsets[pdf_obj.number] = offset
            pdf_obj.offset = offset
            with self._trace_size(_trace_label(pdf_obj)):
                self._out(pdf_obj.serialize())

        xref = PDFXrefAndTrailer(self)
        xref.catalog_obj = catalog_obj
        self._out(xref.serialize())
        LOGGER.debug(
            "Rendered %d objects, %d bytes", len(self.objects), len(self.buffer)
        )
        if document.settings.log_sizes:
            self._log_final_sections_sizes()
        return bytes(self.buffer)

    def _out(self, data: bytes | str) -> None:
        "Append data to the buffer"
        if isinstance(data, str):
            data = encode_utf8(data)
        self.buffer += data

    @contextmanager
    def _trace_size(self, label: str) -> Iterator[None]:
        prev_size = len(self.buffer)
        yield
        self.sections_size_per_trace_label[label] += len(self.buffer) - prev_size

    def _log_final_sections_sizes(self) -> None:
        LOGGER.info("Final size summary of the biggest document sections:")
        for label, section_size in sorted(
            self.sections_size_per_trace_label.items(),
            key=lambda item: item[1],
            reverse=True,
        ):
            LOGGER.info("- %s: %s", label, _sizeof_fmt(section_size))


def _trace_label(pdf_obj: "PDFObject") -> str:
    obj_type = pdf_obj.dictionary.get("Type")
    if obj_type == "XObject":
        obj_type = pdf_obj.dictionary.get("Subtype", obj_type)
    if obj_type:
        return str(obj_type).lower()
    return "content" if pdf_obj.stream else "other"


def _sizeof_fmt(num: float, suffix: str = "B") -> str:
    # Recipe from: https://stackoverflow.com/a/1094933/636849
    for unit in ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi"):
        if abs(num) < 1024:
            return f"{num:3.1f}{unit}{suffix}"
        num /= 1024
    return f"{num:.1f}Yi{suffix}"

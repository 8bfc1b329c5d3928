"""
The document object model: an arena of numbered PDF objects,
plus the page & resource registries built on top of it.

Objects are numbered in insertion order, starting at 1, and rendered in
that same order by pdfcanvas.output.OutputProducer.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Sequence, Union

from .colors import ColorCache
from .config import FALLBACK_PAGE_SIZE, Settings, get_settings
from .drawing import DrawingMixin
from .encoding import encode_utf8
from .errors import (
    DuplicateNameError,
    FontNotFoundError,
    InvalidStreamDataError,
    NoCurrentPageError,
    NotFoundError,
)
from .fonts import FontMetricsTable
from .images import BITS_PER_COMPONENT, RasterImage
from .output import OutputProducer
from .syntax import PDFDict, Ref, create_dictionary_string
from .text import TextMixin

LOGGER = logging.getLogger(__name__)

PageSize = Sequence[float]


class ObjectHandle(NamedTuple):
    "Opaque reference to an object of a Document: its object number"

    number: int


@dataclass(eq=False)
class PDFObject:
    # Debug label, never written in the output:
    name: str
    number: int
    generation: int = 0
    dictionary: dict[str, Any] = field(default_factory=dict)
    # Chunks joined at render time, where /Length is computed:
    stream: Optional[list[bytes]] = None
    # Position of the object in the output buffer, set by render():
    offset: Optional[int] = None
    links: dict[str, ObjectHandle] = field(default_factory=dict)
    # Auxiliary data, not serialized:
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def handle(self) -> ObjectHandle:
        return ObjectHandle(self.number)

    @property
    def ref(self) -> Ref:
        return Ref(self.number, self.generation)

    @property
    def stream_length(self) -> int:
        return sum(len(chunk) for chunk in self.stream) if self.stream else 0

    def serialize(self) -> bytes:
        stream_length = self.stream_length
        if stream_length:
            self.dictionary["Length"] = stream_length
        header = (
            f"{self.number} {self.generation} obj\n"
            f"{create_dictionary_string(self.dictionary)}\n"
        )
        parts = [encode_utf8(header)]
        if stream_length:
            assert self.stream is not None
            parts.append(b"stream\n")
            parts.extend(self.stream)
            parts.append(b"endstream\n")
        parts.append(b"endobj\n")
        return b"".join(parts)


def _to_chunk(data: Union[str, bytes, bytearray, memoryview]) -> bytes:
    if isinstance(data, str):
        return encode_utf8(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidStreamDataError(
        f"Invalid stream data: must be str or bytes, got {type(data).__name__}"
    )


class Document(DrawingMixin, TextMixin):
    """
    Builds a PDF document in memory.

    Pages, fonts and images are registered first, then drawing & text
    operations are appended to the content stream of the current page.
    render() produces the final bytes; it can be called again after
    further changes, all offsets are then computed from scratch.

    A Document is not thread-safe: use one instance per thread.
    """

    def __init__(
        self,
        default_size: Optional[PageSize] = None,
        settings: Optional[Settings] = None,
        metrics: Optional[FontMetricsTable] = None,
        color_cache: Optional[ColorCache] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.default_size = default_size or self.settings.default_page_size
        super().__init__(metrics=metrics, color_cache=color_cache)
        self._objects: list[PDFObject] = []
        self._names: dict[str, ObjectHandle] = {}
        self._page_count = 0
        self._font_count = 0
        self._image_count = 0
        self._current_page: Optional[ObjectHandle] = None
        self._current_content: Optional[ObjectHandle] = None

        pages = self.add_object("Pages", {"Type": "Pages", "Kids": [], "Count": 0})
        resources = self.add_object(
            "Resources",
            {
                "ProcSet": ["PDF", "Text", "ImageB", "ImageC", "ImageI"],
                "XObject": PDFDict(),
                "Font": PDFDict(),
            },
        )
        catalog = self.add_object(
            "Catalog",
            {
                "Type": "Catalog",
                "Pages": self.get_object(pages).ref,
                "PageLayout": self.settings.page_layout,
            },
        )
        self._pages_root = pages
        self._resources = resources
        self._catalog = catalog
        self.add_font("helvetica", "Helvetica")

    # Object registry

    def add_object(
        self,
        name: str,
        dictionary: Optional[dict[str, Any]] = None,
        stream: Optional[Sequence[Union[str, bytes]]] = None,
    ) -> ObjectHandle:
        if name in self._names:
            raise DuplicateNameError(name)
        chunks = [_to_chunk(data) for data in stream or ()]
        obj = PDFObject(
            name=name,
            number=len(self._objects) + 1,
            dictionary=dictionary if dictionary is not None else {},
        )
        if chunks:
            obj.stream = chunks
        handle = obj.handle
        self._objects.append(obj)
        self._names[name] = handle
        LOGGER.debug("Added object %d: %s", obj.number, name)
        return handle

    def append_stream(
        self, handle: ObjectHandle, data: Union[str, bytes, bytearray, memoryview]
    ) -> None:
        "Append a chunk of bytes to the stream of an object, text is UTF-8 encoded"
        obj = self.get_object(handle)
        chunk = _to_chunk(data)
        if obj.stream is None:
            obj.stream = []
        obj.stream.append(chunk)

    def lookup_object(self, name: str) -> Optional[ObjectHandle]:
        return self._names.get(name)

    def get_object(self, handle: ObjectHandle) -> PDFObject:
        number = handle.number if isinstance(handle, ObjectHandle) else handle
        if not 1 <= number <= len(self._objects):
            raise NotFoundError(f"No object #{number} in this document")
        return self._objects[number - 1]

    def _resolve(self, target: Union[ObjectHandle, str], kind: str) -> PDFObject:
        if isinstance(target, str):
            handle = self.lookup_object(target)
            if handle is None:
                raise NotFoundError(f"Cannot find {kind} {target}")
            return self.get_object(handle)
        return self.get_object(target)

    @property
    def objects(self) -> tuple[PDFObject, ...]:
        return tuple(self._objects)

    @property
    def catalog(self) -> PDFObject:
        return self.get_object(self._catalog)

    def __len__(self) -> int:
        return len(self._objects)

    # Pages

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def current_page(self) -> Optional[ObjectHandle]:
        return self._current_page

    def add_page(
        self, size: Optional[PageSize] = None, name: Optional[str] = None
    ) -> ObjectHandle:
        """
        Add a new page, linked to its own content stream, and make it current.

        Args:
            size: media box [x0 y0 x1 y1] in points. Defaults to the document
                default size, then to A4.
            name: logical name of the page, "page_<n>" by default.
        """
        box = size or self.default_size or FALLBACK_PAGE_SIZE
        number = self._page_count + 1
        content_name = f"contents_{number}"
        page_name = name or f"page_{number}"
        # Checked upfront so that a failure does not leave an orphan content object:
        for new_name in (content_name, page_name):
            if new_name in self._names:
                raise DuplicateNameError(new_name)
        if content_name == page_name:
            raise DuplicateNameError(page_name)

        self._page_count = number
        pages = self.get_object(self._pages_root)
        contents = self.add_object(content_name, {"Length": 0})
        page = self.add_object(
            page_name,
            {
                "Type": "Page",
                "Parent": pages.ref,
                "Resources": self.get_object(self._resources).ref,
                "Contents": self.get_object(contents).ref,
                "MediaBox": list(box),
            },
        )
        page_obj = self.get_object(page)
        page_obj.links["content"] = contents
        pages.dictionary["Kids"].append(page_obj.ref)
        pages.dictionary["Count"] = self._page_count
        self.set_current_page(page)
        return page

    def set_current_page(self, page: Union[ObjectHandle, str]) -> None:
        page_obj = self._resolve(page, "page")
        if page_obj.dictionary.get("Type") != "Page":
            raise NotFoundError(f"Object {page_obj.name} is not a page")
        content = page_obj.links.get("content")
        if content is None:
            raise NotFoundError(f"Cannot find content for page {page_obj.name}")
        self.get_object(content)
        self._current_page = page_obj.handle
        self._current_content = content

    def _content_handle(self) -> ObjectHandle:
        if self._current_content is None:
            raise NoCurrentPageError()
        return self._current_content

    def _out(self, data: str) -> None:
        "Append operators to the content stream of the current page"
        self.append_stream(self._content_handle(), data)

    # Resources

    def add_font(self, name: str, base_font: str) -> str:
        """
        Register a standard Type1 font under a logical name.
        Returns its resource handle: F1, F2...
        """
        self._font_count += 1
        font_handle = f"F{self._font_count}"
        font = self.add_object(
            f"font_{name}",
            {"Type": "Font", "Subtype": "Type1", "BaseFont": base_font},
        )
        font_obj = self.get_object(font)
        font_obj.extra.update(handle=font_handle, display_name=name)
        resources = self.get_object(self._resources)
        resources.dictionary["Font"][font_handle] = font_obj.ref
        return font_handle

    def add_image(
        self,
        name: str,
        pixels: bytes,
        width: int,
        height: int,
        pixel_format: str = "RGB",
    ) -> ObjectHandle:
        "Register raw, already decoded, pixels as an image XObject"
        image = RasterImage(bytes(pixels), width, height, pixel_format)
        image_handle = f"I{self._image_count}"
        self._image_count += 1
        handle = self.add_object(
            f"image_{name}",
            {
                "Type": "XObject",
                "Subtype": "Image",
                "Width": image.width,
                "Height": image.height,
                "ColorSpace": image.color_space,
                "BitsPerComponent": BITS_PER_COMPONENT,
            },
        )
        image_obj = self.get_object(handle)
        image_obj.extra.update(handle=image_handle, image=image)
        self.append_stream(handle, image.pixels)
        resources = self.get_object(self._resources)
        resources.dictionary["XObject"][image_handle] = image_obj.ref
        return handle

    def _font_object(self, name: str) -> PDFObject:
        handle = self.lookup_object(f"font_{name}")
        if handle is None:
            raise FontNotFoundError(name)
        return self.get_object(handle)

    def _image_object(self, image: Union[ObjectHandle, str]) -> PDFObject:
        if isinstance(image, str):
            image = self.lookup_object(f"image_{image}") or image
        image_obj = self._resolve(image, "image")
        if "image" not in image_obj.extra:
            raise NotFoundError(f"Object {image_obj.name} is not an image")
        return image_obj

    # Output

    def render(self) -> bytes:
        "Serialize the whole document, computing all byte offsets"
        return OutputProducer(self).bufferize()

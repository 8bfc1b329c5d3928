"""
Glyph metrics of the standard fonts, and text measurement.

Metrics are stored as base64-wrapped blobs of fixed 12-byte big-endian
records: (char code, width, minx, miny, maxx, maxy), as signed 16-bit
integers in thousandths of em. They are produced offline by pdfcanvas.afm
and decoded once, when this module is imported.
"""

import base64
import json
import logging
import struct

# nosemgrep: python.lang.compatibility.python37.python37-compatibility-importlib2 (min Python is 3.10)
from importlib import resources
from typing import Iterable, Iterator, Mapping, NamedTuple, Optional

from .errors import FontNotFoundError
from .matrix import Box
from .util import round_half_up

LOGGER = logging.getLogger(__name__)

RECORD = struct.Struct(">6h")

# metrics name -> (PDF base font, data file)
STANDARD_FONTS = {
    "helvetica": ("Helvetica", "helvetica.json"),
    "courier": ("Courier", "courier.json"),
    "times roman": ("Times-Roman", "times-roman.json"),
}


class GlyphMetrics(NamedTuple):
    "Metrics of a single glyph, in thousandths of em"

    width: int
    minx: int
    miny: int
    maxx: int
    maxy: int


def parse_metrics(blob: bytes) -> dict[int, GlyphMetrics]:
    "Decode a sequence of 12-byte records into a char code -> metrics mapping"
    if len(blob) % RECORD.size:
        raise ValueError(
            f"Font metrics length must be a multiple of {RECORD.size} bytes, got {len(blob)}"
        )
    return {
        char_code: GlyphMetrics(*values)
        for char_code, *values in RECORD.iter_unpack(blob)
    }


def pack_metrics(metrics: Mapping[int, GlyphMetrics]) -> bytes:
    return b"".join(RECORD.pack(code, *glyph) for code, glyph in metrics.items())


class FontMetrics:
    def __init__(
        self, name: str, base_font: str, glyphs: Mapping[int, GlyphMetrics]
    ) -> None:
        self.name = name
        self.base_font = base_font
        self.glyphs = dict(glyphs)

    def __repr__(self) -> str:
        return f"FontMetrics({self.name!r}, glyphs={len(self.glyphs)})"

    def measure(self, text: str, size: float) -> Box:
        """
        Bounding box of a text drawn at the given size, origin at (0, 0).

        Characters without metrics are skipped. The first measured glyph seeds
        the box; the following ones push maxx to the current advance plus
        their own maxx, and widen miny / maxy.
        """
        minx = miny = maxx = maxy = 0
        advance = 0
        seeded = False
        for char in text:
            glyph = self.glyphs.get(ord(char))
            if glyph is None:
                continue
            if not seeded:
                minx, miny, maxx, maxy = glyph.minx, glyph.miny, glyph.maxx, glyph.maxy
                seeded = True
            else:
                maxx = advance + glyph.maxx
                miny = min(miny, glyph.miny)
                maxy = max(maxy, glyph.maxy)
            advance += glyph.width
        return Box(
            round_half_up(minx * size / 1000),
            round_half_up(miny * size / 1000),
            round_half_up(maxx * size / 1000),
            round_half_up(maxy * size / 1000),
        )


class FontMetricsTable:
    """
    Read-only registry of font metrics, looked up either by metrics name
    ("times roman") or by PDF base font name ("Times-Roman").
    """

    def __init__(self, fonts: Iterable[FontMetrics] = ()) -> None:
        self._fonts: dict[str, FontMetrics] = {}
        self._by_base_font: dict[str, FontMetrics] = {}
        for font in fonts:
            self._fonts[font.name] = font
            self._by_base_font[font.base_font] = font

    @classmethod
    def load_standard(cls) -> "FontMetricsTable":
        fonts = []
        for name, (base_font, filename) in STANDARD_FONTS.items():
            glyphs = parse_metrics(load_blob(filename))
            LOGGER.debug("Loaded %d glyph metrics for %s", len(glyphs), name)
            fonts.append(FontMetrics(name, base_font, glyphs))
        return cls(fonts)

    def __contains__(self, name: object) -> bool:
        return name in self._fonts or name in self._by_base_font

    def __iter__(self) -> Iterator[str]:
        return iter(self._fonts)

    def __len__(self) -> int:
        return len(self._fonts)

    def find(self, name: str) -> Optional[FontMetrics]:
        return self._fonts.get(name) or self._by_base_font.get(name)

    def get(self, name: str) -> FontMetrics:
        font = self.find(name)
        if font is None:
            raise FontNotFoundError(name)
        return font

    def measure_text(self, font_name: str, text: str, size: float) -> Box:
        return self.get(font_name).measure(text, size)


def load_blob(filename: str) -> bytes:
    "Read one of the bundled metrics files, a JSON object holding base64 data"
    pkg = "pdfcanvas.data.std_fonts"
    content = json.loads((resources.files(pkg) / filename).read_text(encoding="utf-8"))
    return base64.b64decode(content["data"])


STANDARD_METRICS = FontMetricsTable.load_standard()


def measure_text(font_name: str, text: str, size: float) -> Box:
    return STANDARD_METRICS.measure_text(font_name, text, size)

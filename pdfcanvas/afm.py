"""
Offline conversion of Adobe Font Metrics (AFM) files into the binary records
bundled in pdfcanvas/data/std_fonts, loaded by pdfcanvas.fonts.

Usage:

    pdfcanvas-afm2json fonts/afm/Helvetica.afm pdfcanvas/data/std_fonts/helvetica.json
"""

import argparse
import base64
import json
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from fontTools import afmLib

from .fonts import RECORD, GlyphMetrics, pack_metrics

LOGGER = logging.getLogger(__name__)


def read_afm(path: Union[str, Path]) -> dict[int, GlyphMetrics]:
    "Metrics of every encoded glyph of an AFM file, by char code"
    afm = afmLib.AFM(str(path))
    metrics: dict[int, GlyphMetrics] = {}
    for glyph_name in afm.chars():
        char_code, width, (minx, miny, maxx, maxy) = afm[glyph_name]
        if char_code < 0:  # unencoded glyph
            continue
        metrics[char_code] = GlyphMetrics(width, minx, miny, maxx, maxy)
    return dict(sorted(metrics.items()))


def afm_to_records(path: Union[str, Path]) -> bytes:
    return pack_metrics(read_afm(path))


def write_metrics_json(afm_path: Union[str, Path], out_path: Union[str, Path]) -> int:
    "Convert an AFM file into a {'data': <base64 records>} JSON file, returns the glyph count"
    records = afm_to_records(afm_path)
    Path(out_path).write_text(
        json.dumps({"data": base64.b64encode(records).decode("ascii")}),
        encoding="utf-8",
    )
    return len(records) // RECORD.size


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Convert an AFM file into pdfcanvas binary font metrics"
    )
    parser.add_argument("afm_file", type=Path)
    parser.add_argument("output", type=Path)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    count = write_metrics_json(args.afm_file, args.output)
    LOGGER.info("Converted %d glyphs from %s into %s", count, args.afm_file, args.output)


if __name__ == "__main__":
    main()

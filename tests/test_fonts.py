import base64
import json
from pathlib import Path

import pytest

from pdfcanvas.afm import afm_to_records, main, read_afm, write_metrics_json
from pdfcanvas.errors import FontNotFoundError
from pdfcanvas.fonts import (
    RECORD,
    STANDARD_METRICS,
    FontMetrics,
    FontMetricsTable,
    GlyphMetrics,
    load_blob,
    measure_text,
    pack_metrics,
    parse_metrics,
)
from pdfcanvas.matrix import Box

AFM_DIR = Path(__file__).resolve().parents[1] / "fonts" / "afm"


# --------------------------------------------------------------------------- #
# Binary records
# --------------------------------------------------------------------------- #

class TestParseMetrics:
    def test_big_endian_signed_records(self):
        blob = bytes.fromhex("0041029b000e0000028e02ce") + bytes.fromhex("005f022c0000ff83022cffb5")
        metrics = parse_metrics(blob)
        assert metrics[0x41] == GlyphMetrics(667, 14, 0, 654, 718)
        assert metrics[0x5F] == GlyphMetrics(556, 0, -125, 556, -75)

    def test_truncated_blob(self):
        with pytest.raises(ValueError, match="multiple of 12"):
            parse_metrics(b"\x00" * 13)

    def test_pack_is_inverse(self):
        metrics = {65: GlyphMetrics(667, 14, 0, 654, 718), 32: GlyphMetrics(278, 0, 0, 0, 0)}
        assert parse_metrics(pack_metrics(metrics)) == metrics


# --------------------------------------------------------------------------- #
# Standard fonts
# --------------------------------------------------------------------------- #

class TestStandardMetrics:
    def test_standard_fonts_are_loaded(self):
        assert set(STANDARD_METRICS) == {"helvetica", "courier", "times roman"}
        for name in STANDARD_METRICS:
            assert len(STANDARD_METRICS.get(name).glyphs) == 95

    def test_lookup_by_base_font(self):
        assert STANDARD_METRICS.get("Times-Roman").name == "times roman"
        assert "Courier" in STANDARD_METRICS
        assert STANDARD_METRICS.find("Symbol") is None

    def test_unknown_font(self):
        with pytest.raises(FontNotFoundError):
            STANDARD_METRICS.measure_text("comic sans", "hi", 12)

    def test_courier_is_monospaced(self):
        courier = STANDARD_METRICS.get("courier")
        assert {g.width for g in courier.glyphs.values()} == {600}


class TestMeasureText:
    def test_hello_world_regression(self):
        assert measure_text("helvetica", "hello world", 20) == Box(1.3, -0.3, 94.44, 14.36)

    def test_result_as_fields(self):
        box = STANDARD_METRICS.measure_text("helvetica", "hello world", 20)
        assert (box.minx, box.miny, box.maxx, box.maxy) == (1.3, -0.3, 94.44, 14.36)

    def test_single_glyph(self):
        # Helvetica "h": B 65 0 491 718
        assert measure_text("helvetica", "h", 1000) == Box(65, 0, 491, 718)

    def test_unmatched_codes_are_skipped(self):
        assert measure_text("helvetica", "中h中", 20) == measure_text("helvetica", "h", 20)

    def test_first_matched_glyph_seeds_the_box(self):
        # minx comes from the first glyph only
        assert measure_text("helvetica", "hA", 1000).minx == 65
        assert measure_text("helvetica", "Ah", 1000).minx == 14

    def test_maxx_follows_advance(self):
        # "ab": advance of a (556) + maxx of b (517)
        assert measure_text("helvetica", "ab", 1000).maxx == 556 + 517

    def test_empty_text(self):
        assert measure_text("helvetica", "", 12) == Box(0, 0, 0, 0)

    def test_rounding_to_2_decimals(self):
        box = measure_text("times roman", "x", 7)
        # Times "x": B 17 0 479 450
        assert box == Box(0.12, 0, 3.35, 3.15)

    def test_custom_table(self):
        table = FontMetricsTable([FontMetrics("mono", "Mono", {65: GlyphMetrics(500, 0, 0, 500, 700)})])
        assert table.measure_text("mono", "AA", 10) == Box(0, 0, 10, 7)
        assert table.measure_text("Mono", "A", 10) == Box(0, 0, 5, 7)


# --------------------------------------------------------------------------- #
# AFM conversion
# --------------------------------------------------------------------------- #

MINI_AFM = """StartFontMetrics 4.1
FontName Mini
StartCharMetrics 3
C 65 ; WX 667 ; N A ; B 14 0 654 718 ;
C 95 ; WX 556 ; N underscore ; B 0 -125 556 -75 ;
C -1 ; WX 500 ; N unencoded ; B 0 0 500 500 ;
EndCharMetrics
EndFontMetrics
"""


class TestAfmConversion:
    def test_read_afm_skips_unencoded_glyphs(self, tmp_path):
        path = tmp_path / "Mini.afm"
        path.write_text(MINI_AFM, encoding="ascii")
        assert read_afm(path) == {
            65: GlyphMetrics(667, 14, 0, 654, 718),
            95: GlyphMetrics(556, 0, -125, 556, -75),
        }
        assert len(afm_to_records(path)) == 2 * RECORD.size

    def test_write_metrics_json(self, tmp_path):
        path = tmp_path / "Mini.afm"
        path.write_text(MINI_AFM, encoding="ascii")
        out = tmp_path / "mini.json"
        assert write_metrics_json(path, out) == 2
        blob = base64.b64decode(json.loads(out.read_text())["data"])
        assert parse_metrics(blob)[95].miny == -125

    def test_cli(self, tmp_path):
        path = tmp_path / "Mini.afm"
        path.write_text(MINI_AFM, encoding="ascii")
        out = tmp_path / "mini.json"
        main([str(path), str(out)])
        assert out.exists()

    @pytest.mark.parametrize(
        "afm_name,data_file",
        [
            ("Helvetica.afm", "helvetica.json"),
            ("Courier.afm", "courier.json"),
            ("Times-Roman.afm", "times-roman.json"),
        ],
    )
    def test_bundled_data_matches_afm_sources(self, afm_name, data_file):
        assert read_afm(AFM_DIR / afm_name) == parse_metrics(load_blob(data_file))

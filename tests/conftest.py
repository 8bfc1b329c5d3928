import re

import pytest

from pdfcanvas import Document, Settings


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def doc(settings):
    return Document(settings=settings)


@pytest.fixture
def page_doc(doc):
    doc.add_page()
    return doc


def content(doc, page_number=1):
    "Bytes appended so far to the content stream of a page"
    contents = doc.get_object(doc.lookup_object(f"contents_{page_number}"))
    return b"".join(contents.stream or [])


OBJ_HEADER_RE = re.compile(rb"^(\d+) (\d+) obj$", re.MULTILINE)


def parse_xref(data):
    "Returns the xref start offset, the declared entry count and the in-use offsets"
    tail = data[data.rindex(b"startxref\n") :]
    startxref = int(tail.split(b"\n")[1])
    lines = data[startxref:].split(b"\n")
    assert lines[0] == b"xref"
    first, count = (int(v) for v in lines[1].split())
    assert first == 0
    entries = lines[2 : 2 + count]
    assert entries[0] == b"0000000000 65535 f"
    offsets = []
    for entry in entries[1:]:
        offset, generation, kind = entry.split(b" ")
        assert len(offset) == 10 and len(generation) == 5 and kind == b"n"
        offsets.append(int(offset))
    return startxref, count, offsets

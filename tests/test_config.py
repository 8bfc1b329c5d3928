import pytest
from pydantic import ValidationError

from pdfcanvas import Document
from pdfcanvas.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.pdf_version == "1.3"
    assert settings.page_layout == "OneColumn"
    assert settings.default_page_size is None
    assert settings.log_sizes is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PDFCANVAS_PDF_VERSION", "1.4")
    monkeypatch.setenv("PDFCANVAS_DEFAULT_PAGE_SIZE", "[0, 0, 612, 792]")
    monkeypatch.setenv("PDFCANVAS_LOG_SIZES", "true")
    settings = Settings(_env_file=None)
    assert settings.pdf_version == "1.4"
    assert settings.default_page_size == (0, 0, 612, 792)
    assert settings.log_sizes is True


def test_document_uses_cached_settings(monkeypatch):
    monkeypatch.setenv("PDFCANVAS_DEFAULT_PAGE_SIZE", "[0, 0, 100, 50]")
    assert get_settings() is get_settings()
    doc = Document()
    page = doc.get_object(doc.add_page())
    assert page.dictionary["MediaBox"] == [0, 0, 100, 50]


@pytest.mark.parametrize("box", ["[0, 0, 0, 10]", "[0, 10, 10, 5]", "[0, 0, 10]"])
def test_invalid_page_size(monkeypatch, box):
    monkeypatch.setenv("PDFCANVAS_DEFAULT_PAGE_SIZE", box)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("version", ["1", "abc", "1.x", ""])
def test_invalid_pdf_version(version):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, pdf_version=version)

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ISO A4 in points
FALLBACK_PAGE_SIZE = (0, 0, 595.28, 841.89)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PDFCANVAS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Output
    pdf_version: str = "1.3"
    page_layout: str = "OneColumn"

    # Pages: [x0, y0, x1, y1], FALLBACK_PAGE_SIZE is used when unset
    default_page_size: Optional[tuple[float, float, float, float]] = None

    # Log the byte size of each object kind when rendering
    log_sizes: bool = False

    @field_validator("default_page_size")
    @classmethod
    def check_page_size(
        cls, value: Optional[tuple[float, float, float, float]]
    ) -> Optional[tuple[float, float, float, float]]:
        if value is not None and (value[2] <= value[0] or value[3] <= value[1]):
            raise ValueError(f"Empty page box: {value}")
        return value

    @field_validator("pdf_version")
    @classmethod
    def check_pdf_version(cls, value: str) -> str:
        major, _, minor = value.partition(".")
        if not (major.isdigit() and minor.isdigit()):
            raise ValueError(f"Invalid PDF version: {value}")
        return value


@lru_cache()
def get_settings() -> Settings:
    return Settings()

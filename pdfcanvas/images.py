"""
Raw raster images, already decoded by an external codec.

No compression filter is ever applied: pixel bytes are written as-is.
"""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from .errors import InvalidImageError

PixelFormat: TypeAlias = Literal["L", "RGB", "CMYK"]

# pixel format -> (color space, components per pixel)
PIXEL_FORMATS: dict[str, tuple[str, int]] = {
    "L": ("DeviceGray", 1),
    "RGB": ("DeviceRGB", 3),
    "CMYK": ("DeviceCMYK", 4),
}

BITS_PER_COMPONENT = 8


@dataclass(frozen=True)
class RasterImage:
    "Information about a raster image used in the PDF document"

    pixels: bytes
    width: int
    height: int
    pixel_format: str = "RGB"

    def __post_init__(self) -> None:
        if self.pixel_format not in PIXEL_FORMATS:
            raise InvalidImageError(
                f"Unsupported pixel format {self.pixel_format!r}, expected one of {', '.join(PIXEL_FORMATS)}"
            )
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(
                f"Invalid image size {self.width}x{self.height}"
            )
        expected = self.width * self.height * self.components
        if len(self.pixels) != expected:
            raise InvalidImageError(
                f"Expected {expected} bytes of {self.pixel_format} pixels"
                f" for a {self.width}x{self.height} image, got {len(self.pixels)}"
            )

    def __str__(self) -> str:
        return f"RasterImage({self.width}x{self.height}, {self.pixel_format})"

    @property
    def color_space(self) -> str:
        return PIXEL_FORMATS[self.pixel_format][0]

    @property
    def components(self) -> int:
        return PIXEL_FORMATS[self.pixel_format][1]

"""Loading of uncompressed 32-bit Targa images into top-down RGBA pixel data."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import Union

import numpy as np
import pygame

_HEADER = struct.Struct("<12sHHBB")
HEADER_SIZE = _HEADER.size
BYTES_PER_PIXEL = 4


class TargaError(ValueError):
    """Raised when Targa data cannot be read or is not a 32-bit image."""


@dataclass(frozen=True)
class TargaImage:
    """An image as rows of RGBA bytes, with the top row first."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise TargaError(
                f"pixel data holds {len(self.data)} bytes, expected {expected}"
            )

    @property
    def row_pitch(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * BYTES_PER_PIXEL

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA value at column ``x`` of row ``y`` (row 0 is the top)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) lies outside the image")
        start = y * self.row_pitch + x * BYTES_PER_PIXEL
        r, g, b, a = self.data[start : start + BYTES_PER_PIXEL]
        return (r, g, b, a)

    def to_array(self) -> np.ndarray:
        """Return the pixels as a ``(height, width, 4)`` array of bytes."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, BYTES_PER_PIXEL
        )

    def to_surface(self) -> pygame.Surface:
        """Return the image as a pygame surface with per-pixel alpha."""
        return pygame.image.frombuffer(self.data, (self.width, self.height), "RGBA").copy()


def parse_targa(data: bytes) -> TargaImage:
    """Decode an uncompressed 32-bit Targa image held in ``data``.

    Targa rows are stored bottom-up in BGRA order; the result is top-down RGBA.
    """
    if len(data) < HEADER_SIZE:
        raise TargaError("file is too short to hold a Targa header")
    _, width, height, bpp, _ = _HEADER.unpack_from(data)
    if bpp != 32:
        raise TargaError(f"only 32-bit Targa images are supported, not {bpp}-bit")

    size = width * height * BYTES_PER_PIXEL
    if len(data) - HEADER_SIZE < size:
        raise TargaError("file ends before all of the image data")

    raw = np.frombuffer(data, dtype=np.uint8, count=size, offset=HEADER_SIZE)
    pixels = raw.reshape(height, width, BYTES_PER_PIXEL)[::-1, :, [2, 1, 0, 3]]
    return TargaImage(width=width, height=height, data=pixels.tobytes())


def load_targa(path: Union[str, os.PathLike]) -> TargaImage:
    """Read and decode the Targa file at ``path``."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise TargaError(f"cannot read {os.fspath(path)!r}: {exc}") from exc
    return parse_targa(data)
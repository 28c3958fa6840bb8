"""Format-agnostic decoder contract exposed to host applications."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, TypeAlias

import numpy as np

if TYPE_CHECKING:
    import io

    from numpy.typing import NDArray

    WritableBuffer: TypeAlias = bytearray | memoryview | NDArray[np.uint8]


class ImageFormat(StrEnum):
    JPEG = "jpeg"


class ColorType(StrEnum):
    """Pixel layouts a decoder may hand to the host (8 bits per channel)."""

    L8 = "L8"
    RGB8 = "Rgb8"

    @property
    def channel_count(self) -> int:
        return _CHANNEL_COUNTS[self]

    @property
    def bytes_per_pixel(self) -> int:
        return self.channel_count


_CHANNEL_COUNTS: dict[ColorType, int] = {
    ColorType.L8: 1,
    ColorType.RGB8: 3,
}


class ImageDecoder(Protocol):
    """Protocol every format decoder satisfies.

    Decoders are single-use: ``into_reader`` and ``read_image`` consume the
    decoder, and only one of them may be called.
    """

    def dimensions(self) -> tuple[int, int]:
        """Return ``(width, height)`` in pixels."""
        ...

    def color_type(self) -> ColorType:
        """Return the layout of the samples the decoder will produce."""
        ...

    def into_reader(self) -> io.RawIOBase:
        """Decode and return a sequential reader over the samples."""
        ...

    def read_image(self, buf: WritableBuffer) -> None:
        """Decode into ``buf``, which must hold exactly ``total_bytes()`` bytes."""
        ...

    def total_bytes(self) -> int:
        """Number of bytes the decoded image occupies."""
        width, height = self.dimensions()
        return width * height * self.color_type().bytes_per_pixel


def decode_to_array(decoder: ImageDecoder) -> NDArray[np.uint8]:
    """Decode into a new HxW (L8) or HxWx3 (Rgb8) uint8 numpy array."""
    width, height = decoder.dimensions()
    channels = decoder.color_type().channel_count
    shape: tuple[int, ...] = (height, width) if channels == 1 else (height, width, channels)
    out = np.empty(shape, dtype=np.uint8)
    decoder.read_image(out)
    return out

"""Contract required of the JPEG bitstream decoder.

The bitstream decoder parses the compressed stream and hands back raw
interleaved samples in the format it declared while probing. It reports
failures through the ``BitstreamError`` hierarchy below, which the facade
translates into the host taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol


class PixelFormat(StrEnum):
    L8 = "L8"
    RGB24 = "RGB24"
    CMYK32 = "CMYK32"

    @property
    def pixel_bytes(self) -> int:
        return _PIXEL_BYTES[self]


_PIXEL_BYTES: dict[PixelFormat, int] = {
    PixelFormat.L8: 1,
    PixelFormat.RGB24: 3,
    PixelFormat.CMYK32: 4,
}


@dataclass(frozen=True)
class ImageInfo:
    """Header metadata reported by the bitstream decoder."""

    width: int
    height: int
    pixel_format: PixelFormat
    progressive: bool = False


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class BitstreamError(Exception):
    """Base class for failures reported by a bitstream decoder."""


class FormatError(BitstreamError):
    """The stream is not valid JPEG."""


class UnsupportedFeatureError(BitstreamError):
    """The stream uses a JPEG feature the decoder does not implement."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"unsupported feature: {feature}")
        self.feature = feature


class BitstreamIoError(BitstreamError):
    """Reading the source stream failed."""

    def __init__(self, error: OSError) -> None:
        super().__init__(str(error))
        self.error = error


class InternalError(BitstreamError):
    """The decoder reached an inconsistent state."""


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class ByteSource(Protocol):
    """Anything readable: files, ``io.BytesIO``, socket files."""

    def read(self, size: int = -1, /) -> bytes: ...


class BitstreamDecoder(Protocol):
    """Protocol for the JPEG bitstream decoding collaborator."""

    def read_info(self) -> None:
        """Parse the stream header. Raises ``BitstreamError``."""
        ...

    def info(self) -> ImageInfo | None:
        """Return header metadata, or None before ``read_info`` succeeded."""
        ...

    def decode(self) -> bytes:
        """Decode the full image into interleaved samples. Raises ``BitstreamError``."""
        ...

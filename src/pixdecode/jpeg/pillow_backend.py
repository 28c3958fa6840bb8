"""Bitstream decoder backed by Pillow's libjpeg bindings.

Handles source draining, input limits, header probing, and mapping of
Pillow's failure modes onto the ``BitstreamError`` hierarchy.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

from PIL import Image

from pixdecode.jpeg.bitstream import (
    BitstreamIoError,
    FormatError,
    ImageInfo,
    InternalError,
    PixelFormat,
    UnsupportedFeatureError,
)

if TYPE_CHECKING:
    from pixdecode.config import Settings
    from pixdecode.jpeg.bitstream import ByteSource

logger = logging.getLogger(__name__)

_MODE_TO_PIXEL_FORMAT: dict[str, PixelFormat] = {
    "L": PixelFormat.L8,
    "RGB": PixelFormat.RGB24,
    "CMYK": PixelFormat.CMYK32,
}


class PillowBitstreamDecoder:
    """Decodes a JPEG stream with Pillow."""

    def __init__(
        self,
        source: ByteSource,
        *,
        max_image_pixels: int,
        max_file_size: int,
        read_chunk_size: int = 65_536,
    ) -> None:
        self._source = source
        self._max_image_pixels = max_image_pixels
        self._max_file_size = max_file_size
        self._read_chunk_size = read_chunk_size

        self._image: Image.Image | None = None
        self._info: ImageInfo | None = None

    @classmethod
    def from_settings(cls, source: ByteSource, settings: Settings) -> PillowBitstreamDecoder:
        return cls(
            source,
            max_image_pixels=settings.max_image_pixels,
            max_file_size=settings.max_file_size,
            read_chunk_size=settings.read_chunk_size,
        )

    # -- Public API ---------------------------------------------------------

    def read_info(self) -> None:
        """Drain the source and parse the JPEG header."""
        if self._info is not None:
            return

        data = self._read_source()
        try:
            image = Image.open(io.BytesIO(data), formats=["JPEG"])
        except Image.DecompressionBombError as exc:
            raise UnsupportedFeatureError(f"ImageSize({exc})") from exc
        except OSError as exc:
            raise FormatError(f"invalid JPEG header: {exc}") from exc

        try:
            info = self._probe(image)
        except Exception:
            image.close()
            raise

        self._image = image
        self._info = info
        logger.debug(
            "Probed JPEG header (%dx%d, mode=%s, %d bytes)",
            info.width,
            info.height,
            image.mode,
            len(data),
        )

    def info(self) -> ImageInfo | None:
        return self._info

    def decode(self) -> bytes:
        """Decode all scans and return interleaved samples."""
        if self._info is None:
            self.read_info()
        image = self._image
        if image is None:
            raise InternalError("image data has already been decoded")

        self._image = None
        try:
            try:
                image.load()
            except (OSError, SyntaxError) as exc:
                raise FormatError(f"corrupt JPEG data: {exc}") from exc
            except ValueError as exc:
                raise InternalError(str(exc)) from exc
            return image.tobytes()
        finally:
            image.close()

    # -- Internal -----------------------------------------------------------

    def _read_source(self) -> bytes:
        chunks: list[bytes] = []
        total = 0
        while True:
            try:
                chunk = self._source.read(self._read_chunk_size)
            except OSError as exc:
                raise BitstreamIoError(exc) from exc
            except ValueError as exc:
                # Closed file objects raise ValueError instead of OSError.
                raise BitstreamIoError(OSError(str(exc))) from exc
            if not chunk:
                break
            total += len(chunk)
            if total > self._max_file_size:
                raise UnsupportedFeatureError(f"FileSize(>{self._max_file_size} bytes)")
            chunks.append(chunk)
        return b"".join(chunks)

    def _probe(self, image: Image.Image) -> ImageInfo:
        width, height = image.size
        if width == 0 or height == 0:
            raise FormatError(f"image has zero dimension ({width}x{height})")
        if width * height > self._max_image_pixels:
            raise UnsupportedFeatureError(f"ImageSize({width}x{height} exceeds {self._max_image_pixels} pixels)")

        pixel_format = _MODE_TO_PIXEL_FORMAT.get(image.mode)
        if pixel_format is None:
            raise UnsupportedFeatureError(f"ColorMode({image.mode})")

        return ImageInfo(
            width=width,
            height=height,
            pixel_format=pixel_format,
            progressive=bool(image.info.get("progressive", False)),
        )

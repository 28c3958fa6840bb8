"""JPEG decoder facade implementing the host ``ImageDecoder`` protocol.

Wraps a bitstream decoder, hides CMYK behind RGB in every piece of
metadata the host can observe, and converts CMYK samples at decode time.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from pixdecode.config import get_settings
from pixdecode.errors import (
    DecodingError,
    ImageError,
    IoError,
    UnsupportedError,
    UnsupportedErrorKind,
)
from pixdecode.image import ColorType, ImageDecoder, ImageFormat
from pixdecode.jpeg.bitstream import (
    BitstreamError,
    BitstreamIoError,
    ImageInfo,
    InternalError,
    PixelFormat,
    UnsupportedFeatureError,
)
from pixdecode.jpeg.color import cmyk_to_rgb
from pixdecode.jpeg.pillow_backend import PillowBitstreamDecoder
from pixdecode.jpeg.reader import JpegReader

if TYPE_CHECKING:
    from pixdecode.config import Settings
    from pixdecode.image import WritableBuffer
    from pixdecode.jpeg.bitstream import BitstreamDecoder, ByteSource

logger = logging.getLogger(__name__)


def normalize_metadata(info: ImageInfo) -> ImageInfo:
    """Report CMYK images as RGB, since samples are converted before delivery."""
    if info.pixel_format is PixelFormat.CMYK32:
        return dataclasses.replace(info, pixel_format=PixelFormat.RGB24)
    return info


def color_type_from_jpeg(pixel_format: PixelFormat) -> ColorType:
    if pixel_format is PixelFormat.L8:
        return ColorType.L8
    if pixel_format is PixelFormat.RGB24:
        return ColorType.RGB8
    raise AssertionError(f"{pixel_format} must be normalized before it reaches the host")


def image_error_from_jpeg(err: BitstreamError) -> ImageError:
    """Translate a bitstream failure into the host error taxonomy."""
    if isinstance(err, UnsupportedFeatureError):
        return UnsupportedError(ImageFormat.JPEG, UnsupportedErrorKind.GENERIC_FEATURE, err.feature)
    if isinstance(err, BitstreamIoError):
        return IoError(err.error, image_format=ImageFormat.JPEG)
    # FormatError, InternalError
    return DecodingError(ImageFormat.JPEG, err)


class JpegDecoder(ImageDecoder):
    """Single-use JPEG decoder.

    Construction probes the header. Exactly one of ``into_reader`` or
    ``read_image`` may be called afterwards.
    """

    def __init__(self, bitstream: BitstreamDecoder) -> None:
        try:
            bitstream.read_info()
        except BitstreamError as exc:
            raise image_error_from_jpeg(exc) from exc

        info = bitstream.info()
        if info is None:
            raise AssertionError("bitstream decoder reported no metadata after read_info")

        self._bitstream: BitstreamDecoder | None = bitstream
        self._metadata = normalize_metadata(info)
        if info.pixel_format is not self._metadata.pixel_format:
            logger.debug("Reporting %s JPEG as %s", info.pixel_format, self._metadata.pixel_format)

    @classmethod
    def from_reader(cls, source: ByteSource, settings: Settings | None = None) -> JpegDecoder:
        """Create a Pillow-backed decoder reading from ``source``."""
        if settings is None:
            settings = get_settings()
        return cls(PillowBitstreamDecoder.from_settings(source, settings))

    @property
    def metadata(self) -> ImageInfo:
        """Normalized header metadata."""
        return self._metadata

    # -- ImageDecoder -------------------------------------------------------

    def dimensions(self) -> tuple[int, int]:
        return (self._metadata.width, self._metadata.height)

    def color_type(self) -> ColorType:
        return color_type_from_jpeg(self._metadata.pixel_format)

    def into_reader(self) -> JpegReader:
        return JpegReader(self._decode())

    def read_image(self, buf: WritableBuffer) -> None:
        view = memoryview(buf).cast("B")
        expected = self.total_bytes()
        if view.nbytes != expected:
            raise AssertionError(f"output buffer holds {view.nbytes} bytes, expected {expected}")

        view[:] = self._decode()

    # -- Internal -----------------------------------------------------------

    def _take_bitstream(self) -> BitstreamDecoder:
        bitstream = self._bitstream
        if bitstream is None:
            raise AssertionError("JpegDecoder has already been consumed by a decode call")
        self._bitstream = None
        return bitstream

    def _decode(self) -> bytes:
        bitstream = self._take_bitstream()
        try:
            data = bitstream.decode()
        except BitstreamError as exc:
            raise image_error_from_jpeg(exc) from exc

        # The bitstream decoder's own info still carries the pre-normalization format.
        info = bitstream.info()
        if info is not None and info.pixel_format is PixelFormat.CMYK32:
            logger.debug("Converting %d CMYK bytes to RGB", len(data))
            data = cmyk_to_rgb(data)

        expected = self.total_bytes()
        if len(data) != expected:
            raise image_error_from_jpeg(InternalError(f"decoded {len(data)} bytes, expected {expected}"))
        return data

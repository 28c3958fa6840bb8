"""Unified error taxonomy shared by every image decoder."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pixdecode.image import ImageFormat


class ImageError(Exception):
    """Base class for reportable decoding failures.

    ``image_format`` names the decoder that failed so multi-format hosts
    can report which codec raised the error.
    """

    def __init__(self, message: str, *, image_format: ImageFormat | None = None) -> None:
        super().__init__(message)
        self.image_format = image_format


class DecodingError(ImageError):
    """The encoded data was malformed or internally inconsistent."""

    def __init__(self, image_format: ImageFormat, cause: BaseException | str) -> None:
        super().__init__(f"{image_format.value} decoding error: {cause}", image_format=image_format)
        self.cause = cause


class UnsupportedErrorKind(StrEnum):
    GENERIC_FEATURE = "generic_feature"


class UnsupportedError(ImageError):
    """A recognized feature the decoder does not implement."""

    def __init__(self, image_format: ImageFormat, kind: UnsupportedErrorKind, feature: str) -> None:
        super().__init__(
            f"{image_format.value} does not support {kind.value.replace('_', ' ')}: {feature}",
            image_format=image_format,
        )
        self.kind = kind
        self.feature = feature


class IoError(ImageError):
    """An I/O failure of the underlying stream.

    The original ``OSError`` is kept unchanged on ``error``.
    """

    def __init__(self, error: OSError, *, image_format: ImageFormat | None = None) -> None:
        super().__init__(str(error), image_format=image_format)
        self.error = error

"""Sequential reader over a fully decoded sample buffer."""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pixdecode.image import WritableBuffer

logger = logging.getLogger(__name__)


class JpegReader(io.RawIOBase):
    """Reads decoded samples front to back.

    A read that starts at the beginning and asks for the whole buffer hands
    over the buffer object itself and the reader keeps no reference to it.
    Every other read copies a slice and advances the cursor.
    """

    def __init__(self, buffer: bytes) -> None:
        super().__init__()
        self._buffer = buffer
        self._position = 0

    def readable(self) -> bool:
        return True

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of bytes still available."""
        return max(0, len(self._buffer) - self._position)

    def read(self, size: int | None = -1, /) -> bytes:
        self._check_open()
        if size is None or size < 0:
            return self.readall()
        if self._position == 0 and size >= len(self._buffer):
            return self._take()

        chunk = self._buffer[self._position : self._position + size]
        self._position += len(chunk)
        return chunk

    def readall(self) -> bytes:
        self._check_open()
        if self._position == 0:
            return self._take()

        chunk = self._buffer[self._position :]
        self._position += len(chunk)
        return chunk

    def readinto(self, buffer: WritableBuffer, /) -> int:
        self._check_open()
        view = memoryview(buffer).cast("B")
        count = min(view.nbytes, self.remaining)
        view[:count] = self._buffer[self._position : self._position + count]
        self._position += count
        return count

    def close(self) -> None:
        self._buffer = b""
        self._position = 0
        super().close()

    # -- Internal -----------------------------------------------------------

    def _take(self) -> bytes:
        buffer = self._buffer
        self._buffer = b""
        self._position = len(buffer)
        logger.debug("Handed over %d decoded bytes without copying", len(buffer))
        return buffer

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed reader")

"""CMYK to RGB sample conversion."""

from __future__ import annotations

import numpy as np


def cmyk_to_rgb(data: bytes | bytearray | memoryview) -> bytes:
    """Convert interleaved 8-bit CMYK samples to interleaved 8-bit RGB.

    Each channel is ``(255 - k) * (255 - ink) // 255``, computed in integers.
    Bytes after the last complete 4-byte group are ignored, so the result is
    always ``3 * (len(data) // 4)`` bytes long.
    """
    view = memoryview(data).cast("B")
    count = view.nbytes // 4
    if count == 0:
        return b""

    samples = np.frombuffer(view, dtype=np.uint8, count=4 * count).reshape(count, 4)
    inverted = 255 - samples.astype(np.uint16)
    # 255 * 255 still fits in uint16.
    rgb = inverted[:, :3] * inverted[:, 3:] // 255
    return rgb.astype(np.uint8).tobytes()

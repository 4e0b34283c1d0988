"""Writing a finished RGB buffer to an image file with Pillow.

The file format follows the path's extension (``.png``, ``.bmp``, ...).
Output is all-or-nothing: the image is written to a hidden sibling file
first and moved over the destination only once encoding succeeded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from PIL import Image

from ..errors import EncodingError, PreconditionViolation

logger = logging.getLogger(__name__)


def image_format_for(path: Path) -> str:
    """Return the Pillow format name registered for ``path``'s extension.

    Only formats Pillow can write are accepted; read-only formats such as
    PSD are rejected like unknown extensions.
    """
    extension = path.suffix.lower()
    image_format = Image.registered_extensions().get(extension)
    if image_format is None or image_format not in Image.SAVE:
        raise EncodingError(f"Unsupported image extension '{extension}' for {path}")
    return image_format


def write_image(pixels: Union[bytes, bytearray], width: int, height: int, path: Union[str, Path]) -> Path:
    """Encode a packed RGB8 buffer and write it to ``path``.

    Raises:
        PreconditionViolation: If the buffer size does not match ``width * height * 3``.
        EncodingError: If the format is unknown or writing fails; the
            underlying exception is available as ``cause``.
    """
    if len(pixels) != width * height * 3:
        raise PreconditionViolation(
            f"buffer holds {len(pixels)} bytes, expected {width * height * 3} for {width}x{height}"
        )
    path = Path(path)
    image_format = image_format_for(path)
    partial = path.with_name(f".{path.name}.partial")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.frombytes("RGB", (width, height), bytes(pixels))
        image.save(partial, format=image_format)
        os.replace(partial, path)
    except (OSError, ValueError, KeyError) as exc:
        if partial.exists():
            partial.unlink()
        raise EncodingError(f"Image write error for {path}", exc) from exc

    logger.info("Wrote %dx%d %s chart to %s", width, height, image_format, path)
    return path

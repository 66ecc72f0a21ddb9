"""Plain-text PPM (P3) serialization."""

from typing import TextIO

import numpy as np

from ..errors import OutputFormatError


PPM_MAGIC = "P3"
PPM_MAX_VALUE = 255
PIXEL_SEPARATOR = "   "


def format_ppm(image: np.ndarray) -> str:
    """Format an 8-bit RGB image as P3 text.

    Layout: magic line, "width height", max value, then one line per row
    with "%3d %3d %3d" pixels separated by three spaces, top row first.

    Args:
        image: uint8 array with shape (height, width, 3)

    Returns:
        str: The complete PPM document, ending in a newline
    """
    _check_image(image)
    height, width, _ = image.shape

    lines = [PPM_MAGIC, f"{width} {height}", str(PPM_MAX_VALUE)]
    for row in image:
        lines.append(
            PIXEL_SEPARATOR.join(
                f"{int(r):3d} {int(g):3d} {int(b):3d}" for r, g, b in row
            )
        )

    return "\n".join(lines) + "\n"


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write an 8-bit RGB image to a text stream in P3 format."""
    stream.write(format_ppm(image))


def _check_image(image: np.ndarray) -> None:
    if image.dtype != np.uint8:
        raise OutputFormatError(f"expected uint8 pixels, got {image.dtype}")

    if len(image.shape) != 3 or image.shape[2] != 3:
        raise OutputFormatError(f"expected shape (height, width, 3), got {image.shape}")

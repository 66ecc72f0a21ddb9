"""PNG output with render parameters embedded as text chunks."""

from typing import Dict, Optional

import numpy as np
from PIL import Image, PngImagePlugin

from ..errors import OutputFormatError


def save_png(
    image_array: np.ndarray, metadata: Dict[str, object], output_path: str
) -> None:
    """Save an 8-bit PNG image with embedded metadata.

    Args:
        image_array: 8-bit RGB image array with shape (height, width, 3)
        metadata: Render parameters; values are stored as strings
        output_path: Path where to save the PNG file
    """
    if image_array.dtype != np.uint8:
        raise OutputFormatError("Image array must be uint8 for 8-bit PNG output")

    if len(image_array.shape) != 3 or image_array.shape[2] != 3:
        raise OutputFormatError("Image array must have shape (height, width, 3)")

    png_info = PngImagePlugin.PngInfo()
    for key, value in metadata.items():
        png_info.add_text(key, str(value))

    image = Image.fromarray(image_array)
    image.save(output_path, "PNG", pnginfo=png_info)


def extract_metadata(image_path: str) -> Optional[Dict[str, str]]:
    """Extract metadata from a PNG file.

    Args:
        image_path: Path to PNG file

    Returns:
        Dictionary of metadata key-value pairs, or None if no metadata found
    """
    metadata = {}
    try:
        with Image.open(image_path) as image:
            if hasattr(image, "text"):
                for key, value in image.text.items():
                    metadata[key] = value
    except FileNotFoundError:
        return None

    return metadata if metadata else None

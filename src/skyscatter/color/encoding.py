"""Conversion of tone-mapped colors to integer channel values."""

import numpy as np

from .tonemapping import expose


def to_8bit(normalized: np.ndarray) -> np.ndarray:
    """Convert normalized values to 8-bit integer range.

    Rounds half up, so 0.5/255 maps to 1.

    Args:
        normalized: Values in [0, 1] range

    Returns:
        np.ndarray: Values scaled to 8-bit range [0, 255]
    """
    return np.clip(np.asarray(normalized) * 255.0 + 0.5, 0, 255).astype(np.uint8)


def radiance_to_8bit(radiance: np.ndarray) -> np.ndarray:
    """Tone-map linear radiance and scale it to 8-bit pixel values.

    Args:
        radiance: Linear radiance with shape (..., 3)

    Returns:
        np.ndarray: uint8 pixel values with shape (..., 3)
    """
    return to_8bit(expose(radiance))

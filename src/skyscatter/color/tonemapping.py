"""Exposure tone mapping for converting unbounded radiance to displayable range."""

import numpy as np

from ..models.vectors import Color3


def expose(radiance: Color3 | np.ndarray) -> Color3 | np.ndarray:
    """Apply the exposure curve 1 - exp(-c) to each channel.

    Maps non-negative radiance into [0, 1): zero stays zero, and the output
    rises monotonically towards 1 as radiance grows.

    Args:
        radiance: Color3, or array of linear radiance with shape (..., 3)

    Returns:
        Tone-mapped values of the same kind as the input
    """
    if isinstance(radiance, Color3):
        return Color3.from_array(_expose_array(radiance.as_array()))

    return _expose_array(np.asarray(radiance, dtype=float))


def _expose_array(radiance: np.ndarray) -> np.ndarray:
    return -np.expm1(-radiance)

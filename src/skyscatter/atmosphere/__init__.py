from .presets import EARTH, PRESETS, get_preset

__all__ = [
    "EARTH",
    "PRESETS",
    "get_preset",
]

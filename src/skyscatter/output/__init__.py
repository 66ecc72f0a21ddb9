from .png import extract_metadata, save_png
from .ppm import format_ppm, write_ppm

__all__ = [
    "format_ppm",
    "write_ppm",
    "save_png",
    "extract_metadata",
]

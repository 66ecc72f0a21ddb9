from .engine import Renderer, map_range, render_sky

__all__ = [
    "Renderer",
    "map_range",
    "render_sky",
]

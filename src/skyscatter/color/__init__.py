from .encoding import radiance_to_8bit, to_8bit
from .tonemapping import expose

__all__ = [
    "expose",
    "to_8bit",
    "radiance_to_8bit",
]

from .vectors import Color3, Direction3, Point3
from .atmosphere import AtmosphereParams, IntegrationSettings

__all__ = [
    "Point3",
    "Direction3",
    "Color3",
    "AtmosphereParams",
    "IntegrationSettings",
]

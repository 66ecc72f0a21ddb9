from .intersection import Hit, NoHit, SphereHits, intersect_sphere, intersect_sphere_batch

__all__ = [
    "Hit",
    "NoHit",
    "SphereHits",
    "intersect_sphere",
    "intersect_sphere_batch",
]

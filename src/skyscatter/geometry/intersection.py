"""Ray/sphere intersection for spheres centred at the coordinate origin."""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from ..models.vectors import Direction3, Point3, dot


@dataclass(frozen=True)
class Hit:
    """Signed distances along the ray to both intersections, near <= far.

    Either distance may be negative when the intersection lies behind the
    ray origin.
    """

    near: float
    far: float


@dataclass(frozen=True)
class NoHit:
    """The ray's line does not meet the sphere."""


class SphereHits(NamedTuple):
    near: np.ndarray
    far: np.ndarray
    hit: np.ndarray


def intersect_sphere_batch(
    origins: np.ndarray, directions: np.ndarray, radius: float
) -> SphereHits:
    """Intersect many rays with a sphere of the given radius.

    Solves a*t^2 + b*t + c = 0 with a = d.d, b = 2 d.o, c = o.o - r^2.
    Directions need not be normalized.

    Args:
        origins: Ray origins with shape (..., 3)
        directions: Ray directions with shape (..., 3)
        radius: Sphere radius

    Returns:
        SphereHits with near/far distances and a boolean hit mask. Near and
        far are NaN where hit is False. A NaN discriminant counts as a hit so
        degenerate rays propagate NaN to the caller.
    """
    a = dot(directions, directions)
    b = 2.0 * dot(directions, origins)
    c = dot(origins, origins) - radius * radius
    discriminant = b * b - 4.0 * a * c

    hit = ~(discriminant < 0.0)
    sqrt_d = np.sqrt(np.where(hit, discriminant, np.nan))

    with np.errstate(divide="ignore", invalid="ignore"):
        near = (-b - sqrt_d) / (2.0 * a)
        far = (-b + sqrt_d) / (2.0 * a)

    return SphereHits(near=near, far=far, hit=hit)


def intersect_sphere(
    origin: Point3, direction: Direction3, radius: float
) -> Hit | NoHit:
    """Intersect a single ray with a sphere centred at the origin.

    Args:
        origin: Ray origin
        direction: Ray direction (normalized or not)
        radius: Sphere radius

    Returns:
        Hit with near/far distances, or NoHit if the discriminant is negative
    """
    result = intersect_sphere_batch(origin.as_array(), direction.as_array(), radius)

    if not result.hit:
        return NoHit()

    return Hit(near=float(result.near), far=float(result.far))

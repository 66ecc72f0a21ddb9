"""Vector primitives and the point, direction and color triple types.

The module-level functions work on numpy arrays whose last axis holds the
three components, so the same code handles one triple or a batch of them.
"""

from dataclasses import dataclass
from typing import Iterator

import numpy as np


def dot(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Inner product over the last axis."""
    return np.sum(np.asarray(a, dtype=float) * np.asarray(b, dtype=float), axis=-1)


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.asarray(a, dtype=float) + np.asarray(b, dtype=float)


def scale(a: np.ndarray, s: float | np.ndarray) -> np.ndarray:
    """Scale triples by a scalar or by one scalar per triple.

    Args:
        a: Triples with shape (..., 3)
        s: Scalar, or array broadcastable against a's leading axes

    Returns:
        np.ndarray: Scaled triples with shape (..., 3)
    """
    factor = np.asarray(s, dtype=float)
    return np.asarray(a, dtype=float) * factor[..., np.newaxis]


def length(a: np.ndarray) -> np.ndarray:
    """Euclidean norm over the last axis."""
    return np.sqrt(dot(a, a))


def normalize(a: np.ndarray) -> np.ndarray:
    """Scale triples to unit length.

    A zero-length input yields NaN components instead of raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return scale(a, 1.0 / length(a))


def minimum(a: float | np.ndarray, b: float | np.ndarray) -> float | np.ndarray:
    return np.minimum(a, b)


@dataclass(frozen=True)
class _Triple:
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @classmethod
    def from_array(cls, values):
        x, y, z = (float(v) for v in values)
        return cls(x, y, z)

    def _check_kind(self, other: "_Triple") -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )

    def __add__(self, other):
        self._check_kind(other)
        return type(self)(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return type(self)(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other):
        return self.__mul__(other)

    def dot(self, other) -> float:
        self._check_kind(other)
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length(self) -> float:
        return float(length(self.as_array()))

    def normalize(self):
        return type(self).from_array(normalize(self.as_array()))


@dataclass(frozen=True)
class Point3(_Triple):
    """A position in planet-centred coordinates, in meters."""

    def offset(self, direction: "Direction3", distance: float) -> "Point3":
        """Move along a direction by a distance measured in direction units."""
        if not isinstance(direction, Direction3):
            raise TypeError(
                f"points are offset by a Direction3, not {type(direction).__name__}"
            )
        return Point3(
            self.x + direction.x * distance,
            self.y + direction.y * distance,
            self.z + direction.z * distance,
        )

    def to_direction(self) -> "Direction3":
        """Direction from the planet centre towards this point."""
        return Direction3(self.x, self.y, self.z)


@dataclass(frozen=True)
class Direction3(_Triple):
    """A direction vector; need not be unit length."""


@dataclass(frozen=True)
class Color3(_Triple):
    """A per-channel (R, G, B) triple for radiance or coefficients."""

    def __mul__(self, other):
        if isinstance(other, Color3):
            return Color3(self.x * other.x, self.y * other.y, self.z * other.z)
        return super().__mul__(other)

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

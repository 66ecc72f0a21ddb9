"""Tests for ray/sphere intersection."""

import math

import numpy as np
import pytest

from skyscatter.geometry import (
    Hit,
    NoHit,
    intersect_sphere,
    intersect_sphere_batch,
)
from skyscatter.models.vectors import Direction3, Point3


class TestIntersectSphere:
    def test_ray_from_outside_hits_both_sides(self):
        result = intersect_sphere(Point3(0.0, 0.0, 10.0), Direction3(0.0, 0.0, -1.0), 2.0)

        assert isinstance(result, Hit)
        assert result.near == pytest.approx(8.0)
        assert result.far == pytest.approx(12.0)

    def test_ray_from_inside_has_negative_near(self):
        """The intersection behind the origin is reported as a negative distance."""
        result = intersect_sphere(Point3(0.0, 0.0, 0.0), Direction3(1.0, 0.0, 0.0), 5.0)

        assert isinstance(result, Hit)
        assert result.near == pytest.approx(-5.0)
        assert result.far == pytest.approx(5.0)

    def test_sphere_behind_ray_is_still_a_hit(self):
        result = intersect_sphere(Point3(0.0, 0.0, 10.0), Direction3(0.0, 0.0, 1.0), 2.0)

        assert isinstance(result, Hit)
        assert result.near < result.far < 0.0

    def test_miss(self):
        result = intersect_sphere(Point3(0.0, 10.0, 0.0), Direction3(1.0, 0.0, 0.0), 2.0)

        assert isinstance(result, NoHit)

    def test_tangent_ray_touches_once(self):
        result = intersect_sphere(Point3(-5.0, 2.0, 0.0), Direction3(1.0, 0.0, 0.0), 2.0)

        assert isinstance(result, Hit)
        assert result.near == pytest.approx(result.far)
        assert result.near == pytest.approx(5.0)

    def test_unnormalized_direction_scales_distances(self):
        """Distances are in units of the direction vector's length."""
        result = intersect_sphere(Point3(0.0, 0.0, 10.0), Direction3(0.0, 0.0, -2.0), 2.0)

        assert isinstance(result, Hit)
        assert result.near == pytest.approx(4.0)
        assert result.far == pytest.approx(6.0)

    def test_planet_scale(self):
        """Looking straight up from 1 km altitude reaches the shell 99 km away."""
        result = intersect_sphere(
            Point3(0.0, 6372e3, 0.0), Direction3(0.0, 1.0, 0.0), 6471e3
        )

        assert isinstance(result, Hit)
        assert result.far == pytest.approx(99e3)
        assert result.near == pytest.approx(-(6372e3 + 6471e3))


class TestIntersectSphereBatch:
    def test_mixed_hits_and_misses(self):
        origins = np.array([[0.0, 0.0, 10.0], [0.0, 10.0, 0.0]])
        directions = np.array([[0.0, 0.0, -1.0], [1.0, 0.0, 0.0]])

        result = intersect_sphere_batch(origins, directions, 2.0)

        np.testing.assert_array_equal(result.hit, [True, False])
        assert result.near[0] == pytest.approx(8.0)
        assert result.far[0] == pytest.approx(12.0)
        assert math.isnan(result.near[1])
        assert math.isnan(result.far[1])

    def test_single_direction_broadcasts_over_origins(self):
        origins = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        direction = np.array([0.0, 0.0, 1.0])

        result = intersect_sphere_batch(origins, direction, 3.0)

        np.testing.assert_allclose(result.far, [3.0, 2.0])
        np.testing.assert_allclose(result.near, [-3.0, -4.0])

    def test_nan_direction_propagates(self):
        result = intersect_sphere_batch(
            np.array([0.0, 0.0, 0.0]), np.array([np.nan, np.nan, np.nan]), 1.0
        )

        assert result.hit
        assert math.isnan(result.near)

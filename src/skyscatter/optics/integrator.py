"""Single-scattering sky radiance integrator.

Integrates Rayleigh and Mie in-scattering along a view ray with a fixed-step
Riemann sum. At every primary sample a secondary ray towards the sun is
integrated the same way to get the optical depth of the light path.
"""

import math

import numpy as np

from ..atmosphere.presets import EARTH
from ..geometry.intersection import NoHit, intersect_sphere, intersect_sphere_batch
from ..models.atmosphere import AtmosphereParams, IntegrationSettings
from ..models.vectors import (
    Color3,
    Direction3,
    Point3,
    add,
    dot,
    length,
    minimum,
    normalize,
    scale,
)


DEFAULT_SETTINGS = IntegrationSettings()


def compute_sky_radiance(
    origin: Point3,
    direction: Direction3,
    sun_direction: Direction3,
    params: AtmosphereParams = EARTH,
    settings: IntegrationSettings = DEFAULT_SETTINGS,
) -> Color3:
    """Compute the radiance reaching origin from the given view direction.

    Args:
        origin: Observer position in planet-centred coordinates (m)
        direction: View direction (normalized internally)
        sun_direction: Direction towards the sun (normalized internally)
        params: Atmosphere geometry and optical properties
        settings: Primary and secondary sample counts

    Returns:
        Color3 with unbounded non-negative radiance per channel. Exactly zero
        when the view ray misses the atmosphere.
    """
    _require(origin, Point3, "origin")
    _require(direction, Direction3, "direction")
    _require(sun_direction, Direction3, "sun_direction")

    if isinstance(
        intersect_sphere(origin, direction, params.atmosphere_radius), NoHit
    ):
        return Color3(0.0, 0.0, 0.0)

    radiance = compute_sky_radiance_batch(
        origin.as_array(),
        direction.as_array(),
        sun_direction.as_array(),
        params,
        settings,
    )
    return Color3.from_array(radiance)


def compute_sky_radiance_batch(
    origins: np.ndarray,
    directions: np.ndarray,
    sun_direction: np.ndarray,
    params: AtmosphereParams = EARTH,
    settings: IntegrationSettings = DEFAULT_SETTINGS,
) -> np.ndarray:
    """Vectorized form of compute_sky_radiance.

    Args:
        origins: Ray origins with shape (..., 3), broadcast against directions
        directions: View directions with shape (..., 3)
        sun_direction: Single direction towards the sun, shape (3,)
        params: Atmosphere geometry and optical properties
        settings: Primary and secondary sample counts

    Returns:
        np.ndarray: Radiance with shape (..., 3)
    """
    origins, directions = np.broadcast_arrays(
        np.asarray(origins, dtype=float), np.asarray(directions, dtype=float)
    )
    batch_shape = origins.shape[:-1]
    origins = origins.reshape(-1, 3)
    directions = normalize(directions.reshape(-1, 3))
    sun = normalize(sun_direction)

    k_rayleigh = params.rayleigh_coefficient.as_array()
    k_mie = params.mie_coefficient

    atmosphere = intersect_sphere_batch(origins, directions, params.atmosphere_radius)
    ground = intersect_sphere_batch(origins, directions, params.planet_radius)

    # Stop at the ground if the ray line meets the planet, else at the path cap.
    far = np.where(
        ground.hit,
        minimum(atmosphere.far, ground.near),
        minimum(atmosphere.far, settings.max_path_length),
    )

    # Samples start at the origin even when the near distance is negative.
    step_size = np.where(
        atmosphere.hit, (far - atmosphere.near) / settings.primary_steps, 0.0
    )

    mu = dot(directions, sun)
    phase_rayleigh = rayleigh_phase(mu)
    phase_mie = mie_phase(mu, params.mie_asymmetry)

    depth_rayleigh = np.zeros_like(step_size)
    depth_mie = np.zeros_like(step_size)
    total_rayleigh = np.zeros(step_size.shape + (3,))
    total_mie = np.zeros(step_size.shape + (3,))

    for i in range(settings.primary_steps):
        positions = add(origins, scale(directions, (i + 0.5) * step_size))
        heights = length(positions) - params.planet_radius

        step_rayleigh = np.exp(-heights / params.rayleigh_scale_height) * step_size
        step_mie = np.exp(-heights / params.mie_scale_height) * step_size

        depth_rayleigh += step_rayleigh
        depth_mie += step_mie

        # Samples outside the shell get no sun-path depth rather than a
        # negative one.
        light = intersect_sphere_batch(positions, sun, params.atmosphere_radius)
        light_distance = np.where(light.hit, np.maximum(light.far, 0.0), 0.0)
        light_rayleigh, light_mie = optical_depth(
            positions, sun, light_distance, params, settings.secondary_steps
        )

        attenuation = np.exp(
            -(
                k_mie * (depth_mie + light_mie)[..., np.newaxis]
                + k_rayleigh * (depth_rayleigh + light_rayleigh)[..., np.newaxis]
            )
        )

        total_rayleigh += attenuation * step_rayleigh[..., np.newaxis]
        total_mie += attenuation * step_mie[..., np.newaxis]

    radiance = params.sun_intensity * (
        phase_rayleigh[..., np.newaxis] * k_rayleigh * total_rayleigh
        + (phase_mie * k_mie)[..., np.newaxis] * total_mie
    )

    radiance = np.where(atmosphere.hit[..., np.newaxis], radiance, 0.0)
    return radiance.reshape(batch_shape + (3,))


def optical_depth(
    origins: np.ndarray,
    direction: np.ndarray,
    distances: np.ndarray,
    params: AtmosphereParams,
    steps: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Rayleigh and Mie optical depth along rays of the given lengths.

    Midpoint Riemann sum of exp(-height / scale_height) over `steps` equal
    steps. The result is a density-weighted path length in meters; multiply
    by a scattering coefficient to get a dimensionless optical depth.

    Args:
        origins: Ray origins with shape (..., 3)
        direction: Unit direction(s), broadcastable against origins
        distances: Length of each ray, shape (...)
        params: Atmosphere geometry and scale heights
        steps: Number of equal steps

    Returns:
        Tuple of (rayleigh_depth, mie_depth) arrays with shape (...)
    """
    step_size = np.asarray(distances, dtype=float) / steps

    depth_rayleigh = np.zeros_like(step_size)
    depth_mie = np.zeros_like(step_size)

    for j in range(steps):
        positions = add(origins, scale(direction, (j + 0.5) * step_size))
        heights = length(positions) - params.planet_radius

        depth_rayleigh += np.exp(-heights / params.rayleigh_scale_height) * step_size
        depth_mie += np.exp(-heights / params.mie_scale_height) * step_size

    return depth_rayleigh, depth_mie


def rayleigh_phase(mu: float | np.ndarray) -> float | np.ndarray:
    """Rayleigh phase function: P(mu) = 3/(16 pi) * (1 + mu^2)."""
    return 3.0 / (16.0 * math.pi) * (1.0 + mu * mu)


def mie_phase(mu: float | np.ndarray, g: float) -> float | np.ndarray:
    """Cornette-Shanks form of the Henyey-Greenstein phase function.

    P(mu) = 3/(8 pi) * (1 - g^2)(1 + mu^2) / ((1 + g^2 - 2 mu g)^1.5 (2 + g^2))
    """
    gg = g * g
    return (
        3.0
        / (8.0 * math.pi)
        * ((1.0 - gg) * (mu * mu + 1.0))
        / (np.power(1.0 + gg - 2.0 * mu * g, 1.5) * (2.0 + gg))
    )


def _require(value: object, kind: type, name: str) -> None:
    if not isinstance(value, kind):
        raise TypeError(f"{name} must be a {kind.__name__}, got {type(value).__name__}")

from .integrator import (
    DEFAULT_SETTINGS,
    compute_sky_radiance,
    compute_sky_radiance_batch,
    mie_phase,
    optical_depth,
    rayleigh_phase,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "compute_sky_radiance",
    "compute_sky_radiance_batch",
    "mie_phase",
    "optical_depth",
    "rayleigh_phase",
]

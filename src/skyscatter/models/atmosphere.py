import math
from dataclasses import dataclass

from ..errors import IntegrationSettingsError, InvalidAtmosphereError
from .vectors import Color3


@dataclass(frozen=True)
class AtmosphereParams:
    """Geometry and optical properties of a two-layer exponential atmosphere.

    Distances are in meters, scattering coefficients in 1/m.

    Attributes:
        sun_intensity: Scalar intensity of the light source
        planet_radius: Radius of the planet surface
        atmosphere_radius: Radius of the outer edge of the atmosphere
        rayleigh_coefficient: Per-channel Rayleigh scattering coefficient at sea level
        mie_coefficient: Wavelength-independent Mie scattering coefficient at sea level
        rayleigh_scale_height: Altitude over which Rayleigh density falls by a factor of e
        mie_scale_height: Altitude over which Mie density falls by a factor of e
        mie_asymmetry: Henyey-Greenstein g, preferred Mie scattering direction
    """

    sun_intensity: float
    planet_radius: float
    atmosphere_radius: float
    rayleigh_coefficient: Color3
    mie_coefficient: float
    rayleigh_scale_height: float
    mie_scale_height: float
    mie_asymmetry: float

    def __post_init__(self):
        if not isinstance(self.rayleigh_coefficient, Color3):
            object.__setattr__(
                self,
                "rayleigh_coefficient",
                Color3.from_array(self.rayleigh_coefficient),
            )

        for name in ("planet_radius", "rayleigh_scale_height", "mie_scale_height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidAtmosphereError(name, f"must be positive, got {value}")

        if not self.atmosphere_radius > self.planet_radius:
            raise InvalidAtmosphereError(
                "atmosphere_radius",
                f"{self.atmosphere_radius} must exceed planet_radius {self.planet_radius}",
            )

        if self.sun_intensity < 0:
            raise InvalidAtmosphereError(
                "sun_intensity", f"must not be negative, got {self.sun_intensity}"
            )

        if self.mie_coefficient < 0 or min(self.rayleigh_coefficient) < 0:
            raise InvalidAtmosphereError(
                "scattering coefficients", "must not be negative"
            )

        if not -1.0 < self.mie_asymmetry < 1.0:
            raise InvalidAtmosphereError(
                "mie_asymmetry", f"must lie in (-1, 1), got {self.mie_asymmetry}"
            )


@dataclass(frozen=True)
class IntegrationSettings:
    """Fixed sample counts for the nested Riemann sums.

    The defaults (16 primary, 8 secondary, 100 km path cap) reproduce the
    reference output. max_path_length caps the view ray in meters when it
    does not meet the planet.
    """

    primary_steps: int = 16
    secondary_steps: int = 8
    max_path_length: float = 1e5

    def __post_init__(self):
        for name in ("primary_steps", "secondary_steps"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise IntegrationSettingsError(name, value)

        if isinstance(self.max_path_length, bool) or not (
            isinstance(self.max_path_length, (int, float))
            and self.max_path_length > 0
        ):
            raise IntegrationSettingsError(
                "max_path_length", self.max_path_length, "a positive distance in meters"
            )

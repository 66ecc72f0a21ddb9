from ..errors import PresetNotFoundError
from ..models.atmosphere import AtmosphereParams
from ..models.vectors import Color3


EARTH = AtmosphereParams(
    sun_intensity=22.0,
    planet_radius=6371e3,
    atmosphere_radius=6471e3,
    rayleigh_coefficient=Color3(5.5e-6, 13.0e-6, 22.4e-6),
    mie_coefficient=21e-6,
    rayleigh_scale_height=8e3,
    mie_scale_height=1.2e3,
    mie_asymmetry=0.758,
)


PRESETS: dict[str, AtmosphereParams] = {
    "earth": EARTH,
}


def get_preset(name: str) -> AtmosphereParams:
    """Look up a named atmosphere preset.

    Args:
        name: Preset name (case-insensitive)

    Returns:
        AtmosphereParams for the preset

    Raises:
        PresetNotFoundError: If name is not recognized
    """
    preset = PRESETS.get(name.lower())

    if preset is None:
        raise PresetNotFoundError(name, list(PRESETS.keys()))

    return preset

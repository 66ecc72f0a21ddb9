"""CPU software renderer for sky images."""

from concurrent.futures import ProcessPoolExecutor
from functools import partial

import numpy as np

from ..atmosphere.presets import EARTH
from ..color.encoding import radiance_to_8bit
from ..errors import ImageSizeError
from ..models.atmosphere import AtmosphereParams, IntegrationSettings
from ..models.vectors import Direction3, Point3
from ..optics.integrator import DEFAULT_SETTINGS, compute_sky_radiance_batch


DEFAULT_ORIGIN = Point3(0.0, 6372e3, 0.0)
DEFAULT_SUN_DIRECTION = Direction3(0.0, 1.0, -1.0)


def map_range(
    value: float | np.ndarray,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
) -> float | np.ndarray:
    """Linearly map value from [in_min, in_max] to [out_min, out_max]."""
    return (value - in_min) * (out_max - out_min) / (in_max - in_min) + out_min


class Renderer:
    """CPU sky renderer with a flat angular viewport looking along -z."""

    def __init__(
        self,
        width: int = 640,
        height: int = 480,
        x_limit: float = 3.0,
        y_limit: float = 2.0,
        workers: int = 1,
    ):
        """Initialize renderer.

        Args:
            width: Image width in pixels
            height: Image height in pixels
            x_limit: Horizontal viewport extent; directions span [-x_limit, x_limit]
            y_limit: Vertical viewport extent; directions span [y_limit, -y_limit]
            workers: Number of processes rows are distributed over (1 = in-process)
        """
        if width < 1 or height < 1:
            raise ImageSizeError(width, height)
        if workers < 1:
            raise ValueError("Workers must be at least 1")

        self.width = width
        self.height = height
        self.x_limit = x_limit
        self.y_limit = y_limit
        self.workers = workers

        self._precompute_direction_vectors()

    def _precompute_direction_vectors(self):
        """Precompute viewing directions for all pixels (vectorized).

        Directions are left unnormalized; the integrator normalizes them.
        """
        x_coords = np.arange(self.width, dtype=float)
        y_coords = np.arange(self.height, dtype=float)

        X, Y = np.meshgrid(x_coords, y_coords)

        dir_x = map_range(X, 0, self.width, -self.x_limit, self.x_limit)
        dir_y = map_range(Y, 0, self.height, self.y_limit, -self.y_limit)
        dir_z = -np.ones_like(dir_x)

        self.direction_map = np.stack([dir_x, dir_y, dir_z], axis=2)

    def render(
        self,
        origin: Point3 = DEFAULT_ORIGIN,
        sun_direction: Direction3 = DEFAULT_SUN_DIRECTION,
        params: AtmosphereParams = EARTH,
        settings: IntegrationSettings = DEFAULT_SETTINGS,
    ) -> np.ndarray:
        """Render the sky seen from origin.

        Rows are independent and are evaluated by a process pool when
        workers > 1; results are collected in row order.

        Args:
            origin: Observer position in planet-centred coordinates (m)
            sun_direction: Direction towards the sun
            params: Atmosphere parameters
            settings: Integration sample counts

        Returns:
            8-bit RGB image array with shape (height, width, 3)
        """
        render_row = partial(
            _render_row,
            origin=origin.as_array(),
            sun_direction=sun_direction.as_array(),
            params=params,
            settings=settings,
        )
        rows = list(self.direction_map)

        if self.workers == 1:
            image_rows = list(map(render_row, rows))
        else:
            with ProcessPoolExecutor(max_workers=self.workers) as executor:
                image_rows = list(executor.map(render_row, rows))

        return np.stack(image_rows, axis=0)


def _render_row(
    directions: np.ndarray,
    origin: np.ndarray,
    sun_direction: np.ndarray,
    params: AtmosphereParams,
    settings: IntegrationSettings,
) -> np.ndarray:
    """Render one row of pixels to uint8 RGB."""
    radiance = compute_sky_radiance_batch(
        origin, directions, sun_direction, params, settings
    )
    return radiance_to_8bit(radiance)


def render_sky(
    origin: Point3 = DEFAULT_ORIGIN,
    sun_direction: Direction3 = DEFAULT_SUN_DIRECTION,
    params: AtmosphereParams = EARTH,
    settings: IntegrationSettings = DEFAULT_SETTINGS,
    width: int = 640,
    height: int = 480,
    x_limit: float = 3.0,
    y_limit: float = 2.0,
    workers: int = 1,
) -> np.ndarray:
    """Render a sky image for the given observer and sun.

    Args:
        origin: Observer position in planet-centred coordinates (m)
        sun_direction: Direction towards the sun
        params: Atmosphere parameters
        settings: Integration sample counts
        width: Image width in pixels
        height: Image height in pixels
        x_limit: Horizontal viewport extent
        y_limit: Vertical viewport extent
        workers: Number of worker processes

    Returns:
        8-bit RGB image array with shape (height, width, 3)
    """
    renderer = Renderer(width, height, x_limit, y_limit, workers)
    return renderer.render(origin, sun_direction, params, settings)

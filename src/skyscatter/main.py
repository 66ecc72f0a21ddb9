import argparse
import sys
import threading
import time
from itertools import cycle
from pathlib import Path

from . import __version__
from .atmosphere.presets import PRESETS, get_preset
from .errors import handle_error
from .models import AtmosphereParams, Direction3, IntegrationSettings, Point3
from .output.png import save_png
from .output.ppm import write_ppm
from .renderer.engine import Renderer


class Spinner:
    """Simple terminal spinner for long-running operations."""

    def __init__(self, message: str, stream=None):
        self.message = message
        self.stream = stream if stream is not None else sys.stderr
        self._stop_event = threading.Event()
        self._spinner_thread = None
        self._chars = cycle(["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"])

    def _spin(self):
        while not self._stop_event.is_set():
            char = next(self._chars)
            self.stream.write(f"\r{self.message} {char} ")
            self.stream.flush()
            time.sleep(0.1)

    def start(self):
        self._stop_event.clear()
        self._spinner_thread = threading.Thread(target=self._spin, daemon=True)
        self._spinner_thread.start()

    def stop(self):
        if self._spinner_thread:
            self._stop_event.set()
            self._spinner_thread.join()
            self.stream.write("\r" + " " * (len(self.message) + 3) + "\r")
            self.stream.flush()


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the sky color of a planetary atmosphere to a PPM or PNG image."
    )
    parser.add_argument(
        "--width", type=int, default=640, help="Image width in pixels (default: 640)"
    )
    parser.add_argument(
        "--height", type=int, default=480, help="Image height in pixels (default: 480)"
    )
    parser.add_argument(
        "--x-limit",
        type=float,
        default=3.0,
        help="Horizontal viewport extent, directions span ±x-limit (default: 3.0)",
    )
    parser.add_argument(
        "--y-limit",
        type=float,
        default=2.0,
        help="Vertical viewport extent, directions span ±y-limit (default: 2.0)",
    )
    parser.add_argument(
        "--sun-height",
        type=float,
        default=1.0,
        help="Sun direction is (0, sun-height, -1); smaller values lower the sun (default: 1.0)",
    )
    parser.add_argument(
        "--altitude",
        type=float,
        default=1000.0,
        help="Observer altitude above the planet surface in meters (default: 1000)",
    )
    parser.add_argument(
        "--preset",
        type=str,
        default="earth",
        help=f"Atmosphere preset ({', '.join(sorted(PRESETS))}; default: earth)",
    )
    parser.add_argument(
        "--primary-steps",
        type=int,
        default=16,
        help="Samples along the view ray (default: 16)",
    )
    parser.add_argument(
        "--secondary-steps",
        type=int,
        default=8,
        help="Samples along each ray towards the sun (default: 8)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for rendering rows in parallel (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="-",
        help="Output path; '.png' writes PNG, anything else PPM, '-' writes PPM to stdout",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print render parameters to stderr",
    )
    parser.add_argument(
        "--version", action="version", version=f"skyscatter {__version__}"
    )
    return parser.parse_args(argv)


def build_metadata(
    params: AtmosphereParams,
    settings: IntegrationSettings,
    origin: Point3,
    sun_direction: Direction3,
    preset_name: str,
) -> dict[str, str]:
    """Collect render parameters for embedding into image files.

    Args:
        params: Atmosphere parameters
        settings: Integration sample counts
        origin: Observer position
        sun_direction: Direction towards the sun
        preset_name: Name of the atmosphere preset

    Returns:
        Dictionary with string values
    """
    return {
        "renderer_id": f"skyscatter-{__version__}",
        "preset": preset_name.lower(),
        "origin": f"{origin.x} {origin.y} {origin.z}",
        "sun_direction": f"{sun_direction.x} {sun_direction.y} {sun_direction.z}",
        "sun_intensity": str(params.sun_intensity),
        "planet_radius": str(params.planet_radius),
        "atmosphere_radius": str(params.atmosphere_radius),
        "primary_steps": str(settings.primary_steps),
        "secondary_steps": str(settings.secondary_steps),
        "max_path_length": str(settings.max_path_length),
    }


def print_verbose_info(params, settings, origin, sun_direction, renderer):
    """Print render state to stderr.

    Args:
        params: Atmosphere parameters
        settings: Integration sample counts
        origin: Observer position
        sun_direction: Direction towards the sun
        renderer: Configured renderer
    """
    err = sys.stderr
    print("=== VERBOSE: Render State ===", file=err)
    print(file=err)

    print("Atmosphere:", file=err)
    print(f"  Sun intensity: {params.sun_intensity}", file=err)
    print(f"  Planet radius: {params.planet_radius:.0f} m", file=err)
    print(f"  Atmosphere radius: {params.atmosphere_radius:.0f} m", file=err)
    k = params.rayleigh_coefficient
    print(f"  Rayleigh coefficient: ({k.r:.3e}, {k.g:.3e}, {k.b:.3e}) 1/m", file=err)
    print(f"  Mie coefficient: {params.mie_coefficient:.3e} 1/m", file=err)
    print(f"  Rayleigh scale height: {params.rayleigh_scale_height:.0f} m", file=err)
    print(f"  Mie scale height: {params.mie_scale_height:.0f} m", file=err)
    print(f"  Mie asymmetry g: {params.mie_asymmetry}", file=err)
    print(file=err)

    print("View:", file=err)
    print(f"  Origin: ({origin.x:.1f}, {origin.y:.1f}, {origin.z:.1f})", file=err)
    print(
        f"  Sun direction: ({sun_direction.x:.4f}, {sun_direction.y:.4f}, {sun_direction.z:.4f})",
        file=err,
    )
    print(f"  Image: {renderer.width}x{renderer.height}", file=err)
    print(f"  Viewport: ±{renderer.x_limit} x ±{renderer.y_limit}", file=err)
    print(
        f"  Steps: {settings.primary_steps} primary, {settings.secondary_steps} secondary",
        file=err,
    )
    print(f"  Path cap: {settings.max_path_length:.0f} m", file=err)
    print(f"  Workers: {renderer.workers}", file=err)
    print("=== END VERBOSE ===", file=err)
    print(file=err)


def render_to_output(
    output_path: str = "-",
    width: int = 640,
    height: int = 480,
    x_limit: float = 3.0,
    y_limit: float = 2.0,
    sun_height: float = 1.0,
    altitude_m: float = 1000.0,
    preset_name: str = "earth",
    primary_steps: int = 16,
    secondary_steps: int = 8,
    workers: int = 1,
    verbose: bool = False,
) -> int:
    """Render a sky image and write it as PPM or PNG.

    Args:
        output_path: Destination file, or '-' for PPM on stdout
        width: Image width in pixels
        height: Image height in pixels
        x_limit: Horizontal viewport extent
        y_limit: Vertical viewport extent
        sun_height: Y component of the sun direction (0, sun_height, -1)
        altitude_m: Observer altitude above the planet surface
        preset_name: Atmosphere preset name
        primary_steps: Samples along the view ray
        secondary_steps: Samples along each sun ray
        workers: Worker processes
        verbose: If True, print render state to stderr

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        params = get_preset(preset_name)
        settings = IntegrationSettings(
            primary_steps=primary_steps, secondary_steps=secondary_steps
        )
        origin = Point3(0.0, params.planet_radius + altitude_m, 0.0)
        sun_direction = Direction3(0.0, sun_height, -1.0)

        renderer = Renderer(width, height, x_limit, y_limit, workers)

        if verbose:
            print_verbose_info(params, settings, origin, sun_direction, renderer)

        to_stdout = output_path == "-"

        spinner = None
        if not to_stdout:
            print(f"Rendering {width}x{height} sky ({preset_name})", file=sys.stderr)
            spinner = Spinner("Rendering sky")
            spinner.start()

        try:
            image_array = renderer.render(origin, sun_direction, params, settings)
        finally:
            if spinner is not None:
                spinner.stop()

        if to_stdout:
            write_ppm(image_array, sys.stdout)
            sys.stdout.flush()
            return 0

        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        if output_file.suffix.lower() == ".png":
            metadata = build_metadata(
                params, settings, origin, sun_direction, preset_name
            )
            save_png(image_array, metadata, str(output_file))
        else:
            with open(output_file, "w") as stream:
                write_ppm(image_array, stream)

        print(f"Image saved to: {output_file}", file=sys.stderr)
        return 0

    except Exception as e:
        return handle_error(e, "rendering sky image")


def main(argv=None):
    """CLI entry point."""
    args = parse_args(argv)

    exit_code = render_to_output(
        output_path=args.output,
        width=args.width,
        height=args.height,
        x_limit=args.x_limit,
        y_limit=args.y_limit,
        sun_height=args.sun_height,
        altitude_m=args.altitude,
        preset_name=args.preset,
        primary_steps=args.primary_steps,
        secondary_steps=args.secondary_steps,
        workers=args.workers,
        verbose=args.verbose,
    )

    sys.exit(exit_code)


if __name__ == "__main__":
    main()

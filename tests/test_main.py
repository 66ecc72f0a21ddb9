import tempfile
from pathlib import Path
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from skyscatter import __version__
from skyscatter.atmosphere import EARTH
from skyscatter.main import (
    build_metadata,
    main,
    parse_args,
    render_to_output,
)
from skyscatter.models import Direction3, IntegrationSettings, Point3
from skyscatter.output import extract_metadata


def test_parse_args_defaults():
    """Test parse_args with default arguments."""
    with patch("sys.argv", ["skyscatter"]):
        args = parse_args()

        assert args.width == 640
        assert args.height == 480
        assert args.x_limit == 3.0
        assert args.y_limit == 2.0
        assert args.sun_height == 1.0
        assert args.altitude == 1000.0
        assert args.preset == "earth"
        assert args.primary_steps == 16
        assert args.secondary_steps == 8
        assert args.workers == 1
        assert args.output == "-"
        assert args.verbose is False


def test_parse_args_with_all_options():
    """Test parse_args with all options specified."""
    with patch(
        "sys.argv",
        [
            "skyscatter",
            "--width",
            "32",
            "--height",
            "24",
            "--x-limit",
            "1.5",
            "--y-limit",
            "1.0",
            "--sun-height",
            "0.05",
            "--altitude",
            "250",
            "--preset",
            "Earth",
            "--primary-steps",
            "32",
            "--secondary-steps",
            "4",
            "--workers",
            "3",
            "--output",
            "sky.png",
            "-v",
        ],
    ):
        args = parse_args()

        assert args.width == 32
        assert args.height == 24
        assert args.x_limit == 1.5
        assert args.y_limit == 1.0
        assert args.sun_height == 0.05
        assert args.altitude == 250.0
        assert args.preset == "Earth"
        assert args.primary_steps == 32
        assert args.secondary_steps == 4
        assert args.workers == 3
        assert args.output == "sky.png"
        assert args.verbose is True


def test_parse_args_invalid_width():
    """Test parse_args rejects non-integer width."""
    with patch("sys.argv", ["skyscatter", "--width", "wide"]):
        with pytest.raises(SystemExit):
            parse_args()


def test_build_metadata():
    """Test build_metadata records the render parameters as strings."""
    metadata = build_metadata(
        EARTH,
        IntegrationSettings(),
        Point3(0.0, 6372e3, 0.0),
        Direction3(0.0, 1.0, -1.0),
        "Earth",
    )

    assert metadata["renderer_id"] == f"skyscatter-{__version__}"
    assert metadata["preset"] == "earth"
    assert metadata["primary_steps"] == "16"
    assert metadata["secondary_steps"] == "8"
    assert metadata["max_path_length"] == "100000.0"
    assert metadata["origin"] == "0.0 6372000.0 0.0"
    assert all(isinstance(value, str) for value in metadata.values())


def test_render_to_stdout_writes_ppm(capsys):
    """Test the default output is a PPM document on stdout."""
    result = render_to_output(width=4, height=3)

    assert result == 0
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0] == "P3"
    assert lines[1] == "4 3"
    assert lines[2] == "255"
    assert len(lines) == 3 + 3
    assert len(lines[3].split()) == 4 * 3


def test_render_to_ppm_file():
    """Test rendering to a .ppm path writes a plain PPM file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output = Path(tmpdir) / "nested" / "sky.ppm"

        result = render_to_output(output_path=str(output), width=4, height=3)

        assert result == 0
        assert output.exists()
        assert output.read_text().startswith("P3\n4 3\n255\n")


def test_render_to_png_file():
    """Test rendering to a .png path embeds render metadata."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output = Path(tmpdir) / "sky.png"

        result = render_to_output(
            output_path=str(output), width=5, height=4, primary_steps=8
        )

        assert result == 0
        with Image.open(output) as image:
            assert image.size == (5, 4)

        metadata = extract_metadata(str(output))
        assert metadata is not None
        assert metadata["preset"] == "earth"
        assert metadata["primary_steps"] == "8"


def test_png_and_ppm_carry_same_pixels():
    """Test the PNG pixels match the PPM values for the same render."""
    with tempfile.TemporaryDirectory() as tmpdir:
        png_path = Path(tmpdir) / "sky.png"
        ppm_path = Path(tmpdir) / "sky.ppm"

        assert render_to_output(output_path=str(png_path), width=4, height=2) == 0
        assert render_to_output(output_path=str(ppm_path), width=4, height=2) == 0

        tokens = ppm_path.read_text().split()
        ppm_pixels = np.array([int(t) for t in tokens[4:]], dtype=np.uint8)
        with Image.open(png_path) as image:
            png_pixels = np.asarray(image).reshape(-1)

        np.testing.assert_array_equal(ppm_pixels, png_pixels)


def test_render_unknown_preset(capsys):
    """Test an unknown preset returns exit code 1 with suggestions."""
    result = render_to_output(preset_name="jupiter", width=2, height=2)

    assert result == 1
    captured = capsys.readouterr()
    assert "Unknown atmosphere preset" in captured.err
    assert "earth" in captured.err


def test_render_invalid_size(capsys):
    """Test an empty image size returns exit code 1."""
    result = render_to_output(width=0, height=2)

    assert result == 1
    captured = capsys.readouterr()
    assert "Invalid image size" in captured.err


def test_render_invalid_steps(capsys):
    """Test zero sample counts return exit code 1."""
    result = render_to_output(width=2, height=2, primary_steps=0)

    assert result == 1
    captured = capsys.readouterr()
    assert "primary_steps" in captured.err


def test_render_verbose(capsys):
    """Test verbose output goes to stderr and leaves stdout as pure PPM."""
    result = render_to_output(width=2, height=2, verbose=True)

    assert result == 0
    captured = capsys.readouterr()
    assert "=== VERBOSE: Render State ===" in captured.err
    assert "Planet radius: 6371000 m" in captured.err
    assert "Steps: 16 primary, 8 secondary" in captured.err
    assert "Path cap: 100000 m" in captured.err
    assert captured.out.startswith("P3\n")


@patch("skyscatter.main.render_to_output")
def test_main_exit_code(mock_render):
    """Test main forwards parsed options and exits with the render status."""
    mock_render.return_value = 0

    with pytest.raises(SystemExit) as exc_info:
        main(["--width", "8", "--height", "6", "--sun-height", "0.1"])

    assert exc_info.value.code == 0
    kwargs = mock_render.call_args.kwargs
    assert kwargs["width"] == 8
    assert kwargs["height"] == 6
    assert kwargs["sun_height"] == 0.1
    assert kwargs["output_path"] == "-"


def test_main_failure_exit_code():
    """Test main exits with 1 when rendering fails."""
    with pytest.raises(SystemExit) as exc_info:
        main(["--preset", "jupiter", "--width", "2", "--height", "2"])

    assert exc_info.value.code == 1

"""Error handling utilities for sky rendering."""

import sys
from typing import Optional


class SkyScatterError(Exception):
    """Base exception for skyscatter-specific errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class InvalidAtmosphereError(SkyScatterError):
    """Raised when atmosphere parameters describe an impossible atmosphere."""

    def __init__(self, field_name: str, reason: str):
        message = f"Invalid atmosphere parameter '{field_name}': {reason}"
        suggestions = [
            "Distances are in meters and coefficients in 1/m",
            "The atmosphere radius must be larger than the planet radius",
            "Start from the EARTH preset and adjust one value at a time",
        ]
        super().__init__(message, suggestions)


class IntegrationSettingsError(SkyScatterError):
    """Raised when sample counts for the scattering integral are unusable."""

    def __init__(
        self, field_name: str, value: object, expected: str = "a positive integer"
    ):
        message = f"{field_name} must be {expected}, got {value!r}"
        suggestions = [
            "The reference output uses 16 primary and 8 secondary steps",
            "The reference caps view rays that miss the planet at 100 km",
        ]
        super().__init__(message, suggestions)


class PresetNotFoundError(SkyScatterError):
    """Raised when an atmosphere preset name is not recognized."""

    def __init__(self, preset_name: str, available_presets: list[str]):
        message = f"Unknown atmosphere preset: '{preset_name}'"
        suggestions = [
            f"Available presets: {', '.join(sorted(available_presets))}",
            "Check spelling (preset names are case-insensitive)",
        ]
        super().__init__(message, suggestions)


class ImageSizeError(SkyScatterError):
    """Raised when the requested image dimensions are unusable."""

    def __init__(self, width: int, height: int):
        message = f"Invalid image size {width}x{height}"
        suggestions = [
            "Width and height must both be at least 1 pixel",
            "Example: --width 640 --height 480",
        ]
        super().__init__(message, suggestions)


class OutputFormatError(SkyScatterError):
    """Raised when an image buffer cannot be serialized."""

    def __init__(self, reason: str):
        message = f"Cannot write image: {reason}"
        suggestions = [
            "Image buffers must be uint8 arrays with shape (height, width, 3)",
        ]
        super().__init__(message, suggestions)


def print_error(error: Exception) -> None:
    """Print error to stderr with formatted output.

    Args:
        error: Exception to print
    """
    print(f"Error: {error}", file=sys.stderr)

    if isinstance(error, SkyScatterError):
        if error.suggestions:
            print(file=sys.stderr)


def handle_error(error: Exception, context: Optional[str] = None) -> int:
    """Handle an error with optional context and return exit code.

    Args:
        error: Exception that occurred
        context: Optional description of what was being attempted

    Returns:
        Exit code (1 for error)
    """
    if context:
        print(f"Error while {context}:", file=sys.stderr)

    print_error(error)

    import traceback

    if not isinstance(error, SkyScatterError):
        traceback.print_exc()

    return 1

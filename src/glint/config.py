"""Configuration defaults read from environment variables.

Module-level constants give the defaults used by the example CLI and by
:class:`RenderSettings`. Every value can be overridden through a ``GLINT_*``
environment variable; the variables are read once, at import time.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from glint.core.integrator import DEFAULT_DEPTH

# Logging settings
LOG_LEVEL = os.getenv("GLINT_LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("GLINT_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

# Render settings
MAX_DEPTH = int(os.getenv("GLINT_MAX_DEPTH", str(DEFAULT_DEPTH)))
WIDTH = int(os.getenv("GLINT_WIDTH", "400"))
HEIGHT = int(os.getenv("GLINT_HEIGHT", "200"))
OUTPUT = Path(os.getenv("GLINT_OUTPUT", "output/showcase.png"))

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RenderSettings:
    """Settings for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Recursion budget for reflection and refraction.
        output: Output image path (.ppm or any Pillow format).
        log_level: Logging level name.
    """

    width: int = WIDTH
    height: int = HEIGHT
    max_depth: int = MAX_DEPTH
    output: Path = OUTPUT
    log_level: str = LOG_LEVEL

    def __post_init__(self) -> None:
        self.output = Path(self.output)
        self.log_level = self.log_level.upper()
        self.validate()

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ValueError: If a size is not positive, the depth is negative or
                the log level is unknown.
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_env(cls) -> "RenderSettings":
        """Build settings from the current ``GLINT_*`` environment variables."""
        return cls(
            width=int(os.getenv("GLINT_WIDTH", str(WIDTH))),
            height=int(os.getenv("GLINT_HEIGHT", str(HEIGHT))),
            max_depth=int(os.getenv("GLINT_MAX_DEPTH", str(MAX_DEPTH))),
            output=Path(os.getenv("GLINT_OUTPUT", str(OUTPUT))),
            log_level=os.getenv("GLINT_LOG_LEVEL", LOG_LEVEL),
        )


__all__ = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "MAX_DEPTH",
    "WIDTH",
    "HEIGHT",
    "OUTPUT",
    "RenderSettings",
]

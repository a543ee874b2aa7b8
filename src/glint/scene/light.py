"""Point light sources.

Lights have a position and an intensity but no extent, so every shadow cast
by them is hard-edged.
"""

from dataclasses import dataclass

import numpy as np

from glint.core.transform import Color, Tuple4


@dataclass
class PointLight:
    """A point light.

    Attributes:
        position: World-space position (point).
        intensity: RGB intensity; values above 1 are allowed.
    """

    position: Tuple4
    intensity: Color

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=np.float64)
        self.intensity = np.asarray(self.intensity, dtype=np.float64)
        if self.position.shape != (4,):
            raise ValueError(f"Light position must be a point, got shape {self.position.shape}")

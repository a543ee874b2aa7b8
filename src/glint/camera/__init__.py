"""Camera module for primary ray generation.

Components:
    camera: Pinhole camera with a view transform

The camera maps integer pixel coordinates to world-space rays through the
pixel centers. Column 0 is on the left and row 0 at the top of the image.
"""

from .camera import Camera

__all__ = ["Camera"]

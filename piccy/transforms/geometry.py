"""
Geometry Transforms - Crop, resize, rotate and flip
"""

import logging
from numbers import Integral, Real
from typing import Optional

import numpy as np
from PIL import Image

from .base import BaseTransform
from ..core.config import EngineConfig
from ..core.errors import BoundsError, InputError
from ..core.types import DecodedImage, FlipMode

logger = logging.getLogger(__name__)


def _whole(name: str, value) -> int:
    """Accept whole numbers only; 10.0 is fine, 10.7 is not"""
    if isinstance(value, Integral) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, Real) and not isinstance(value, bool) and float(value).is_integer():
        return int(value)
    raise InputError(f"{name} must be a whole number of pixels, got {value!r}")


class CropTransform(BaseTransform):
    """Extracts a sub-rectangle verbatim"""

    name = "crop"
    description = "Cut out a rectangle without resampling"

    def __init__(
        self,
        left: int = 0,
        top: int = 0,
        width: int = 100,
        height: int = 100,
        config: Optional[EngineConfig] = None
    ):
        super().__init__(config)
        self.left = _whole("left", left)
        self.top = _whole("top", top)
        self.width = _whole("width", width)
        self.height = _whole("height", height)

    def check_bounds(self, image_width: int, image_height: int) -> None:
        """Raise BoundsError unless the region lies inside the image"""
        region = (self.left, self.top, self.width, self.height)
        inside = (
            self.left >= 0 and self.top >= 0
            and self.width > 0 and self.height > 0
            and self.left + self.width <= image_width
            and self.top + self.height <= image_height
        )
        if not inside:
            logger.info("Crop region %s outside %dx%d image", region, image_width, image_height)
            raise BoundsError(
                f"Crop region (left={self.left}, top={self.top}, width={self.width}, "
                f"height={self.height}) exceeds image bounds {image_width}x{image_height}",
                region=region,
                size=(image_width, image_height),
            )

    def apply(self, image: DecodedImage) -> DecodedImage:
        self.check_bounds(image.width, image.height)
        region = image.pixels[self.top:self.top + self.height, self.left:self.left + self.width]
        return self._create_image(region.copy())


class ResizeTransform(BaseTransform):
    """Resamples to exact dimensions with a Lanczos filter"""

    name = "resize"
    description = "Scale to an exact width and height"

    def __init__(self, width: int, height: int, config: Optional[EngineConfig] = None):
        super().__init__(config)
        self.width = _whole("width", width)
        self.height = _whole("height", height)
        if self.width <= 0 or self.height <= 0:
            raise InputError(f"Resize dimensions must be positive, got {width}x{height}")

    def apply(self, image: DecodedImage) -> DecodedImage:
        resized = image.to_pil().resize((self.width, self.height), Image.Resampling.LANCZOS)
        return DecodedImage.from_pil(resized)


class RotateTransform(BaseTransform):
    """
    Rotates about the image centre with bilinear interpolation.

    Positive angles turn clockwise on screen. The canvas keeps the source
    size, so corners are clipped at angles that are not multiples of 90
    degrees; uncovered pixels are fully transparent.
    """

    name = "rotate"
    description = "Rotate by an arbitrary angle"

    def __init__(self, angle: float, config: Optional[EngineConfig] = None):
        super().__init__(config)
        self.angle = float(angle)

    def apply(self, image: DecodedImage) -> DecodedImage:
        # Pillow turns counter-clockwise for positive angles
        rotated = image.to_pil().rotate(
            -self.angle,
            resample=Image.Resampling.BILINEAR,
            expand=False,
            fillcolor=(0, 0, 0, 0),
        )
        return DecodedImage.from_pil(rotated)


class FlipTransform(BaseTransform):
    """Mirrors the image exactly"""

    name = "flip"
    description = "Mirror horizontally or vertically"

    def __init__(self, mode: FlipMode = FlipMode.HORIZONTAL, config: Optional[EngineConfig] = None):
        super().__init__(config)
        self.mode = FlipMode.parse(mode)

    def apply(self, image: DecodedImage) -> DecodedImage:
        if self.mode is FlipMode.HORIZONTAL:
            flipped = image.pixels[:, ::-1]
        else:
            flipped = image.pixels[::-1, :]
        return self._create_image(flipped.copy())

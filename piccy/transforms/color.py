"""
Color Transforms - Grayscale, invert and tint mask
All of them leave the alpha channel untouched
"""

from typing import Optional, Tuple, Union

import numpy as np

from .base import BaseTransform
from ..core.config import EngineConfig
from ..core.types import DecodedImage
from ..core.utils import ColorUtils, PixelMath


class GrayscaleTransform(BaseTransform):
    """Standard luma conversion"""

    name = "grayscale"
    description = "Convert to shades of gray"

    def apply(self, image: DecodedImage) -> DecodedImage:
        gray = image.to_pil().convert('LA').convert('RGBA')
        return DecodedImage.from_pil(gray)


class InvertTransform(BaseTransform):
    """Complements R, G and B"""

    name = "invert"
    description = "Invert colours"

    def apply(self, image: DecodedImage) -> DecodedImage:
        result = image.pixels.copy()
        result[:, :, :3] = 255 - result[:, :, :3]
        return self._create_image(result)


class ColorMaskTransform(BaseTransform):
    """
    Blends a flat tint into every pixel at half strength.

    Each channel becomes ``tint * a * 0.5 + src * (1 - a * 0.5)`` where ``a``
    is the pixel's alpha in 0..1, so fully transparent pixels keep their
    colour and opaque pixels move halfway to the tint.
    """

    name = "color_mask"
    description = "Tint with a colour at 50% intensity"

    STRENGTH = 0.5

    def __init__(
        self,
        color: Union[str, Tuple[int, int, int]],
        config: Optional[EngineConfig] = None
    ):
        super().__init__(config)
        self.color = ColorUtils.parse_rgb(color)

    def apply(self, image: DecodedImage) -> DecodedImage:
        tint = np.array(self.color, dtype=np.float32)
        rgb = image.pixels[:, :, :3].astype(np.float32)
        src_alpha = image.pixels[:, :, 3:4].astype(np.float32) / np.float32(255.0)
        weight = src_alpha * np.float32(self.STRENGTH)

        result = image.pixels.copy()
        result[:, :, :3] = PixelMath.to_u8(tint * weight + rgb * (np.float32(1.0) - weight))
        return self._create_image(result)

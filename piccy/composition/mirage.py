"""
Mirage - Hides one image inside the alpha channel of another

On a light background the composite shows the visible image; on a dark
background the hidden image shows through instead.
"""

import logging
from typing import Optional

import numpy as np
from PIL import Image

from ..core.config import EngineConfig, get_config
from ..core.exporter import ImageExporter
from ..core.image import ImageValue
from ..core.parallel import map_ordered
from ..core.parser import ImageParser
from ..core.types import DecodedImage
from ..core.utils import ColorUtils, PixelMath

logger = logging.getLogger(__name__)


class MirageComposer:
    """Builds the gray, alpha-modulated mirage composite"""

    # Light factors applied to each source's luminance
    VISIBLE_LIGHT = 1.0
    HIDDEN_LIGHT = 0.5

    # Catmull-Rom class filter
    FILTER = Image.Resampling.BICUBIC

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()

    def compose_pixels(self, visible: np.ndarray, hidden: np.ndarray) -> np.ndarray:
        """
        Combine two equally sized RGBA arrays.

        For visible luminance ``wc`` and half-strength hidden luminance
        ``bc``: alpha is ``clamp(255 - wc + bc)`` and the gray level is
        ``bc / alpha * 255``, capped at 255.
        """
        wc = ColorUtils.get_luminance(visible, self.VISIBLE_LIGHT)
        bc = ColorUtils.get_luminance(hidden, self.HIDDEN_LIGHT)

        alpha = np.clip(np.float32(255.0) - wc + bc, 0.0, 255.0).astype(np.float32)
        with np.errstate(divide='ignore', invalid='ignore'):
            gray = np.where(alpha > 0, np.minimum(bc / alpha * np.float32(255.0), 255.0), 0.0)

        gray_u8 = PixelMath.to_u8(gray.astype(np.float32))
        out = np.empty((*alpha.shape, 4), dtype=np.uint8)
        out[:, :, 0] = gray_u8
        out[:, :, 1] = gray_u8
        out[:, :, 2] = gray_u8
        out[:, :, 3] = PixelMath.to_u8(alpha)
        return out

    def compose(self, visible: ImageValue, hidden: ImageValue) -> ImageValue:
        """Resize both inputs to their common minimum size and compose"""
        decoded = map_ordered(
            lambda img: ImageParser.decode_static(img.data),
            [visible, hidden],
            self.config.max_workers,
        )
        width = min(img.width for img in decoded)
        height = min(img.height for img in decoded)

        resized = [
            np.array(img.to_pil().resize((width, height), self.FILTER), dtype=np.uint8)
            for img in decoded
        ]
        pixels = self.compose_pixels(resized[0], resized[1])

        logger.debug("Composed %dx%d mirage", width, height)
        data = ImageExporter.encode_static(
            DecodedImage.from_array(pixels), self.config.output_format, self.config
        )
        return ImageValue(data)

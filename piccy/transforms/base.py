"""
Base Transform - Abstract base class for single-image pixel operations
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..core.config import EngineConfig, get_config
from ..core.exporter import ImageExporter
from ..core.image import ImageValue
from ..core.parser import ImageParser
from ..core.types import DecodedImage

logger = logging.getLogger(__name__)


class BaseTransform(ABC):
    """
    A pure operation on one RGBA pixel grid.

    Subclasses implement ``apply``; ``run`` wraps it with a single decode of
    the source and an encode of the result to the intermediate format.
    """

    # Transform metadata
    name: str = "base"
    description: str = "Base transform"

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()

    @abstractmethod
    def apply(self, image: DecodedImage) -> DecodedImage:
        """Transform decoded pixels and return a new image."""
        pass

    def run(self, image: ImageValue) -> ImageValue:
        """Decode, apply and re-encode"""
        decoded = ImageParser.decode_static(image.data)
        result = self.apply(decoded)
        logger.debug("%s: %dx%d -> %dx%d", self.name,
                     decoded.width, decoded.height, result.width, result.height)
        data = ImageExporter.encode_static(result, self.config.output_format, self.config)
        return ImageValue(data)

    def __call__(self, image: ImageValue) -> ImageValue:
        return self.run(image)

    def _create_image(self, pixels) -> DecodedImage:
        """Helper to wrap a result array"""
        return DecodedImage.from_array(pixels)

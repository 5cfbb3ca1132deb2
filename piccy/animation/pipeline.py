"""
Animation Pipeline - Per-frame operations on GIF / WebP animations
"""

import logging
import math
from numbers import Real
from typing import List, Optional

from ..core.config import EngineConfig, get_config
from ..core.errors import AnimationError, InputError
from ..core.exporter import ImageExporter
from ..core.image import ImageValue
from ..core.parser import ImageParser
from ..core.types import Frame, OutputFormat, SourceFormat, as_delay

logger = logging.getLogger(__name__)


class AnimationPipeline:
    """Splits, reverses and retimes multi-frame images"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()

    def load_frames(self, image: ImageValue) -> List[Frame]:
        """
        Decode the frames of an animation.

        Raises:
            AnimationError: the source is a static format or has one frame
        """
        fmt = ImageParser.sniff_format(image.data)
        if fmt is SourceFormat.OTHER:
            logger.info("Rejected animation operation on a static image")
            raise AnimationError("not an animation")

        frames = ImageParser.decode_animated(image.data)
        if len(frames) <= 1:
            logger.info("Rejected animation operation on a %d-frame %s", len(frames), fmt.value)
            raise AnimationError("not an animation")
        return frames

    def split(self, image: ImageValue) -> List[ImageValue]:
        """One PNG per frame, in playback order"""
        frames = self.load_frames(image)
        return [
            ImageValue(ImageExporter.encode_static(frame.image, OutputFormat.PNG, self.config))
            for frame in frames
        ]

    def reverse(self, image: ImageValue) -> ImageValue:
        """Play the animation backwards, keeping each frame's own delay"""
        frames = self.load_frames(image)
        return ImageValue(ImageExporter.encode_animation(frames[::-1], self.config))

    def retime(self, image: ImageValue, delay_ms) -> ImageValue:
        """
        Give every frame the same delay.

        Args:
            image: Source animation
            delay_ms: New per-frame delay in milliseconds (int, float or Fraction)
        """
        if not isinstance(delay_ms, Real) or not math.isfinite(delay_ms) or delay_ms < 0:
            raise InputError(f"Frame delay must be a non-negative number of milliseconds, got {delay_ms!r}")

        delay = as_delay(delay_ms)
        frames = [frame.with_delay(delay) for frame in self.load_frames(image)]
        logger.debug("Retimed %d frames to %s ms", len(frames), delay)
        return ImageValue(ImageExporter.encode_animation(frames, self.config))

"""
Inspector - Dimension and animation metadata for an image value
"""

import logging

from .image import ImageValue
from .parser import ImageParser
from .types import AnimationInfo, ImageInfo

logger = logging.getLogger(__name__)


def inspect(image: ImageValue) -> ImageInfo:
    """
    Report width, height and animation metadata.

    GIF and WebP sources are decoded frame by frame; their
    ``average_duration`` is the mean frame delay in seconds, or 0.0 for a
    single frame. Every other format decodes once and reports one frame with
    no duration.
    """
    fmt = ImageParser.sniff_format(image.data)

    if fmt.is_animation_capable:
        frames = ImageParser.decode_animated(image.data)
        animation = AnimationInfo.from_frames(frames)
        width, height = frames[0].image.size if frames else ImageParser.read_dimensions(image.data)
        info = ImageInfo(
            width=width,
            height=height,
            is_multi_frame=animation.is_animation,
            frame_count=animation.frame_count,
            average_duration=animation.frame_delay,
        )
    else:
        decoded = ImageParser.decode_static(image.data)
        info = ImageInfo(
            width=decoded.width,
            height=decoded.height,
            is_multi_frame=False,
            frame_count=1,
            average_duration=None,
        )

    logger.debug("Inspected %s image: %s", fmt.value, info)
    return info

"""
piccy - Image transforms, GIF tools and mirage composites
"""

import logging
import os
from typing import List, Sequence, Tuple, Union

from .core import (
    PiccyError, DecodeError, EncodeError, BoundsError,
    AnimationError, InputError, ImageIOError,
    FlipMode, MergeMode, OutputFormat, ImageInfo,
    EngineConfig, load_config, get_config, set_config,
    ImageValue, as_image_value, inspect,
)
from .transforms import (
    CropTransform, ResizeTransform, RotateTransform, FlipTransform,
    GrayscaleTransform, InvertTransform, ColorMaskTransform,
    TRANSFORMS, get_transform,
)
from .animation import AnimationPipeline
from .composition import ImageMerger, MirageComposer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    # Values and types
    'ImageValue', 'ImageInfo', 'FlipMode', 'MergeMode', 'OutputFormat',
    'EngineConfig', 'load_config', 'get_config', 'set_config',
    # Errors
    'PiccyError', 'DecodeError', 'EncodeError', 'BoundsError',
    'AnimationError', 'InputError', 'ImageIOError',
    # Registry
    'TRANSFORMS', 'get_transform',
    # Operations
    'load', 'load_base64', 'info', 'encode',
    'crop', 'resize', 'rotate', 'flip', 'grayscale', 'invert', 'color_mask',
    'mirage', 'split', 'reverse', 'retime', 'merge', 'merge_gif',
]

ImageLike = Union[ImageValue, bytes, bytearray, memoryview]


# ============================================================================
# Loading / inspection / encoding
# ============================================================================

def load(source: Union[bytes, bytearray, memoryview, str, os.PathLike]) -> ImageValue:
    """
    Load an image from raw bytes or a file path.

    Args:
        source: Encoded image bytes, or a path to an image file

    Returns:
        ImageValue holding the encoded bytes (format is sniffed lazily)
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return ImageValue.from_bytes(source)
    return ImageValue.from_path(source)


def load_base64(text: Union[str, bytes]) -> ImageValue:
    """Load an image from standard base64 text"""
    return ImageValue.from_base64(text)


def info(image: ImageLike) -> ImageInfo:
    """Width, height and animation metadata"""
    return inspect(as_image_value(image))


def encode(image: ImageLike, format: Union[OutputFormat, str] = OutputFormat.PNG) -> bytes:
    """Re-encode an image in another format"""
    return as_image_value(image).to_bytes(format)


# ============================================================================
# Single-image transforms
# ============================================================================

def crop(image: ImageLike, left: int = 0, top: int = 0,
         width: int = 100, height: int = 100) -> ImageValue:
    """Cut out a rectangle; raises BoundsError if it leaves the image"""
    return CropTransform(left, top, width, height).run(as_image_value(image))


def resize(image: ImageLike, width: int, height: int) -> ImageValue:
    """Scale to exact dimensions (Lanczos)"""
    return ResizeTransform(width, height).run(as_image_value(image))


def rotate(image: ImageLike, angle: float) -> ImageValue:
    """Rotate clockwise by ``angle`` degrees on the original canvas"""
    return RotateTransform(angle).run(as_image_value(image))


def flip(image: ImageLike, mode: Union[FlipMode, str] = FlipMode.HORIZONTAL) -> ImageValue:
    return FlipTransform(mode).run(as_image_value(image))


def grayscale(image: ImageLike) -> ImageValue:
    return GrayscaleTransform().run(as_image_value(image))


def invert(image: ImageLike) -> ImageValue:
    return InvertTransform().run(as_image_value(image))


def color_mask(image: ImageLike, color: Union[str, Tuple[int, int, int]]) -> ImageValue:
    """Tint with ``color`` at half strength, weighted by alpha"""
    return ColorMaskTransform(color).run(as_image_value(image))


# ============================================================================
# Animations
# ============================================================================

def split(image: ImageLike) -> List[ImageValue]:
    """One PNG per animation frame"""
    return AnimationPipeline().split(as_image_value(image))


def reverse(image: ImageLike) -> ImageValue:
    """Reverse the frame order of an animation"""
    return AnimationPipeline().reverse(as_image_value(image))


def retime(image: ImageLike, delay_ms) -> ImageValue:
    """Set every frame's delay to ``delay_ms`` milliseconds"""
    return AnimationPipeline().retime(as_image_value(image), delay_ms)


# ============================================================================
# Composition
# ============================================================================

def merge(images: Sequence[ImageLike],
          mode: Union[MergeMode, str] = MergeMode.HORIZONTAL) -> ImageValue:
    """Concatenate images side by side or stacked"""
    return ImageMerger().merge([as_image_value(img) for img in images], mode)


def merge_gif(images: Sequence[ImageLike], delay_ms=None) -> ImageValue:
    """Build a looping GIF with one frame per image"""
    return ImageMerger().merge_gif([as_image_value(img) for img in images], delay_ms)


def mirage(visible: ImageLike, hidden: ImageLike) -> ImageValue:
    """Hide ``hidden`` in a composite that shows ``visible`` on light backgrounds"""
    return MirageComposer().compose(as_image_value(visible), as_image_value(hidden))

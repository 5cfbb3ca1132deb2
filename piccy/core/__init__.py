"""
piccy - Core codec, value types and configuration
"""

from .errors import (
    PiccyError, DecodeError, EncodeError, BoundsError,
    AnimationError, InputError, ImageIOError,
)
from .types import (
    FlipMode, MergeMode, OutputFormat, SourceFormat,
    DecodedImage, Frame, AnimationInfo, ImageInfo,
)
from .config import EngineConfig, load_config, save_config, get_config, set_config
from .parser import ImageParser
from .exporter import ImageExporter
from .image import ImageValue, as_image_value
from .inspector import inspect
from .parallel import map_ordered
from .utils import ColorUtils, PixelMath

__all__ = [
    # Errors
    'PiccyError', 'DecodeError', 'EncodeError', 'BoundsError',
    'AnimationError', 'InputError', 'ImageIOError',
    # Types
    'FlipMode', 'MergeMode', 'OutputFormat', 'SourceFormat',
    'DecodedImage', 'Frame', 'AnimationInfo', 'ImageInfo',
    # Config
    'EngineConfig', 'load_config', 'save_config', 'get_config', 'set_config',
    # Codec
    'ImageParser', 'ImageExporter',
    # Values
    'ImageValue', 'as_image_value',
    'inspect',
    'map_ordered',
    'ColorUtils', 'PixelMath',
]

"""
Transforms - Single-image pixel operations
"""

from .base import BaseTransform
from .geometry import CropTransform, ResizeTransform, RotateTransform, FlipTransform
from .color import GrayscaleTransform, InvertTransform, ColorMaskTransform
from ..core.errors import InputError

# Transform registry for lookup by name
TRANSFORMS = {
    'crop': CropTransform,
    'resize': ResizeTransform,
    'scale': ResizeTransform,  # Alias
    'rotate': RotateTransform,
    'flip': FlipTransform,
    'mirror': FlipTransform,  # Alias
    'grayscale': GrayscaleTransform,
    'greyscale': GrayscaleTransform,  # Alias
    'gray': GrayscaleTransform,  # Alias
    'invert': InvertTransform,
    'negative': InvertTransform,  # Alias
    'color_mask': ColorMaskTransform,
    'tint': ColorMaskTransform,  # Alias
}


def get_transform(name: str) -> type:
    """Get transform class by name"""
    name = name.lower()
    if name not in TRANSFORMS:
        raise InputError(f"Unknown transform: {name}. Available: {sorted(set(TRANSFORMS))}")
    return TRANSFORMS[name]


__all__ = [
    'BaseTransform',
    'CropTransform',
    'ResizeTransform',
    'RotateTransform',
    'FlipTransform',
    'GrayscaleTransform',
    'InvertTransform',
    'ColorMaskTransform',
    'TRANSFORMS',
    'get_transform',
]

"""
Utility functions for color parsing and per-pixel math
"""

import re
from typing import Tuple, Union

import numpy as np

from .errors import InputError

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

RGB = Tuple[int, int, int]


class ColorUtils:
    """Color parsing and analysis utilities"""

    _HEX_RE = re.compile(r'^#?([0-9a-fA-F]{6})$')
    _FUNC_RE = re.compile(r'^rgb\((.*)\)$', re.IGNORECASE)

    @classmethod
    def parse_rgb(cls, value: Union[str, RGB]) -> RGB:
        """
        Parse a tint colour.

        Accepts an (r, g, b) tuple, "#rrggbb", "rgb(r, g, b)" or "r,g,b".
        """
        if isinstance(value, str):
            text = value.strip()
            hex_match = cls._HEX_RE.match(text)
            if hex_match:
                digits = hex_match.group(1)
                return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

            func_match = cls._FUNC_RE.match(text)
            if func_match:
                text = func_match.group(1)

            parts = text.split(',')
            if len(parts) != 3:
                raise InputError("RGB string must have three components")
            try:
                value = tuple(int(p.strip()) for p in parts)
            except ValueError as e:
                raise InputError(f"Invalid RGB component in {text!r}") from e

        if len(value) != 3:
            raise InputError("RGB colour must have three components")
        r, g, b = (int(c) for c in value)
        for c in (r, g, b):
            if not 0 <= c <= 255:
                raise InputError(f"RGB component out of range 0-255: {c}")
        return (r, g, b)

    @staticmethod
    def get_luminance(pixels: np.ndarray, light_factor: float = 1.0) -> np.ndarray:
        """Weighted RGB luminance (0-255 scale) of every pixel, scaled by light_factor"""
        rgb = pixels[:, :, :3].astype(np.float32)
        wr, wg, wb = LUMA_WEIGHTS
        return (wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]) * np.float32(light_factor)


class PixelMath:
    """Rounding and clamping helpers for float pixel math"""

    @staticmethod
    def round_half_up(values: np.ndarray) -> np.ndarray:
        """Round non-negative values half away from zero (numpy rounds half to even)"""
        return np.floor(values + np.float32(0.5))

    @classmethod
    def to_u8(cls, values: np.ndarray) -> np.ndarray:
        """Round and clamp float pixel values into uint8"""
        return np.clip(cls.round_half_up(values), 0, 255).astype(np.uint8)

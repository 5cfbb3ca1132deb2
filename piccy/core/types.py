"""
Core Types - Pixel buffers, frames, metadata and mode enums
"""

from dataclasses import dataclass, asdict
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Optional, Sequence

import numpy as np
from PIL import Image

from .errors import InputError


class _ParsableEnum(Enum):
    """Enum that can be built from its value or member name, case-insensitively"""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if key in (member.value, member.name.lower()):
                    return member
        available = [m.value for m in cls]
        raise InputError(f"Unknown {cls.__name__}: {value!r}. Available: {available}")


class FlipMode(_ParsableEnum):
    """Axis to mirror about"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class MergeMode(_ParsableEnum):
    """Direction in which merged images are laid out"""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class OutputFormat(_ParsableEnum):
    """Formats the exporter can write"""
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    GIF = "gif"

    @property
    def pil_name(self) -> str:
        return self.name

    @property
    def has_alpha(self) -> bool:
        return self is not OutputFormat.JPEG


class SourceFormat(Enum):
    """Container kind resolved once by sniffing"""
    GIF = "gif"
    WEBP = "webp"
    OTHER = "other"

    @property
    def is_animation_capable(self) -> bool:
        return self is not SourceFormat.OTHER


@dataclass
class DecodedImage:
    """A dense RGBA8 pixel grid"""
    width: int
    height: int
    pixels: np.ndarray  # (height, width, 4) uint8

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> 'DecodedImage':
        """Create from an HxWx3 or HxWx4 array"""
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InputError("Pixels must be HxWx3 or HxWx4 array")

        if pixels.shape[2] == 3:
            alpha = np.full((*pixels.shape[:2], 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        return cls(
            width=pixels.shape[1],
            height=pixels.shape[0],
            pixels=np.ascontiguousarray(pixels, dtype=np.uint8),
        )

    @classmethod
    def from_pil(cls, img: Image.Image) -> 'DecodedImage':
        if img.mode != 'RGBA':
            img = img.convert('RGBA')
        return cls(width=img.width, height=img.height, pixels=np.array(img, dtype=np.uint8))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels.astype(np.uint8), 'RGBA')

    @property
    def size(self) -> tuple:
        return (self.width, self.height)

    @property
    def has_transparency(self) -> bool:
        return bool(np.any(self.pixels[:, :, 3] < 255))

    def copy(self) -> 'DecodedImage':
        return DecodedImage(self.width, self.height, self.pixels.copy())


def as_delay(value) -> Fraction:
    """Coerce a millisecond delay to an exact Fraction"""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, float):
        return Fraction(repr(value))
    return Fraction(value)


@dataclass
class Frame:
    """One animation frame: pixels, placement offset and display delay.

    The delay is kept as an exact Fraction of milliseconds.
    """
    image: DecodedImage
    left: int = 0
    top: int = 0
    delay: Fraction = Fraction(0)

    def __post_init__(self):
        self.delay = as_delay(self.delay)

    @property
    def delay_ms(self) -> int:
        """Delay rounded to whole milliseconds"""
        return int(self.delay + Fraction(1, 2))

    @property
    def delay_seconds(self) -> float:
        return float(self.delay / 1000)

    def with_delay(self, delay) -> 'Frame':
        return Frame(image=self.image, left=self.left, top=self.top, delay=as_delay(delay))


@dataclass
class AnimationInfo:
    """Frame count and average per-frame delay of a decoded sequence"""
    frame_count: int
    frame_delay: Optional[float]  # seconds

    @property
    def is_animation(self) -> bool:
        return self.frame_count > 1

    @classmethod
    def from_frames(cls, frames: Sequence[Frame]) -> 'AnimationInfo':
        frame_count = len(frames)
        if frame_count > 1:
            total = sum((f.delay for f in frames), Fraction(0))
            delay = float(total / 1000 / frame_count)
        else:
            delay = 0.0
        return cls(frame_count=frame_count, frame_delay=delay)


@dataclass
class ImageInfo:
    """Inspection result for an image value"""
    width: int
    height: int
    is_multi_frame: bool
    frame_count: Optional[int] = None
    average_duration: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

"""
Errors - Exception taxonomy for every piccy operation
"""

from pathlib import Path
from typing import Optional


class PiccyError(Exception):
    """Base class for all engine errors"""


class DecodeError(PiccyError, ValueError):
    """Encoded bytes are unrecognised or structurally invalid"""


class EncodeError(PiccyError):
    """The encoder rejected a pixel buffer / format combination"""


class BoundsError(PiccyError, ValueError):
    """A region request falls outside the source image"""

    def __init__(self, message: str, region: tuple = (), size: tuple = ()):
        super().__init__(message)
        self.region = region
        self.size = size


class AnimationError(PiccyError):
    """An animation-only operation was given a single-frame source"""


class InputError(PiccyError, ValueError):
    """Invalid arguments: empty image lists, bad parameters, unknown names"""


class ImageIOError(PiccyError, OSError):
    """Reading or writing an image file failed"""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path

"""
Image Value - Immutable encoded image bytes passed between operations
"""

import base64
import binascii
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import EngineConfig
from .errors import DecodeError, ImageIOError
from .exporter import ImageExporter
from .parser import ImageParser
from .types import OutputFormat, SourceFormat

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class ImageValue:
    """
    Encoded image bytes of sniffed-on-demand format.

    The payload is an immutable ``bytes`` object, so copies of an
    ImageValue share one buffer. Operations never mutate a value; they
    return a new one.
    """
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, 'data', bytes(self.data))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> 'ImageValue':
        return cls(bytes(data))

    @classmethod
    def from_path(cls, path: PathLike) -> 'ImageValue':
        """Read an image file from disk"""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ImageIOError(f"Could not read image file {path}: {e}", path) from e
        logger.debug("Loaded %d bytes from %s", len(data), path)
        return cls(data)

    @classmethod
    def from_base64(cls, text: Union[str, bytes]) -> 'ImageValue':
        """Decode standard base64 text"""
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 image data: {e}") from e
        return cls(data)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def into_bytes(self) -> bytes:
        """The raw payload as stored"""
        return self.data

    @property
    def source_format(self) -> SourceFormat:
        return ImageParser.sniff_format(self.data)

    def to_bytes(
        self,
        format: Union[OutputFormat, str] = OutputFormat.PNG,
        config: Optional[EngineConfig] = None
    ) -> bytes:
        """Decode and re-encode the first frame in the requested format"""
        decoded = ImageParser.decode_static(self.data)
        return ImageExporter.encode_static(decoded, OutputFormat.parse(format), config)

    def to_base64(self, format: Union[OutputFormat, str] = OutputFormat.PNG) -> str:
        return base64.b64encode(self.to_bytes(format)).decode('ascii')

    def save(self, path: PathLike, format: Union[OutputFormat, str] = OutputFormat.PNG) -> Path:
        """Encode and write to a file"""
        path = Path(path)
        payload = self.to_bytes(format)
        try:
            path.write_bytes(payload)
        except OSError as e:
            raise ImageIOError(f"Could not write image file {path}: {e}", path) from e
        logger.debug("Wrote %d bytes to %s", len(payload), path)
        return path

    def __repr__(self) -> str:
        return f"ImageValue({len(self.data)} bytes)"


def as_image_value(image: Union[ImageValue, bytes, bytearray, memoryview]) -> ImageValue:
    """Accept raw bytes wherever an ImageValue is expected"""
    if isinstance(image, ImageValue):
        return image
    if isinstance(image, (bytes, bytearray, memoryview)):
        return ImageValue.from_bytes(image)
    raise TypeError(f"Expected ImageValue or bytes, got {type(image).__name__}")

"""
Image Parser - Sniffs and decodes encoded image bytes
Supports: PNG, JPEG, GIF and WebP (static and animated)
"""

import logging
from contextlib import contextmanager
from io import BytesIO
from typing import Iterator, List, Tuple

from PIL import Image, ImageSequence, UnidentifiedImageError

from .errors import DecodeError
from .types import DecodedImage, Frame, SourceFormat, as_delay

logger = logging.getLogger(__name__)

# Exceptions Pillow raises for broken or truncated payloads
_DECODE_FAILURES = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
)


class ImageParser:
    """Decodes raw bytes into RGBA pixel buffers"""

    PIL_FORMATS = {
        'GIF': SourceFormat.GIF,
        'WEBP': SourceFormat.WEBP,
    }

    @classmethod
    @contextmanager
    def _open(cls, data: bytes) -> Iterator[Image.Image]:
        if not data:
            raise DecodeError("Empty image data")
        try:
            img = Image.open(BytesIO(data))
        except _DECODE_FAILURES as e:
            raise DecodeError(f"Unrecognized image data: {e}") from e
        try:
            yield img
        finally:
            img.close()

    @classmethod
    def sniff_format(cls, data: bytes) -> SourceFormat:
        """Resolve the container kind from the byte content"""
        with cls._open(data) as img:
            fmt = cls.PIL_FORMATS.get(img.format, SourceFormat.OTHER)
            logger.debug("Sniffed %s image (%s)", img.format, fmt.value)
            return fmt

    @classmethod
    def read_dimensions(cls, data: bytes) -> Tuple[int, int]:
        """Read (width, height) from the header without decoding pixels"""
        with cls._open(data) as img:
            return img.size

    @classmethod
    def decode_static(cls, data: bytes) -> DecodedImage:
        """Decode the first (or only) image plane to RGBA"""
        with cls._open(data) as img:
            try:
                img.load()
                decoded = DecodedImage.from_pil(img)
            except _DECODE_FAILURES as e:
                raise DecodeError(f"Invalid {img.format} data: {e}") from e

        logger.debug("Decoded static image %dx%d", decoded.width, decoded.height)
        return decoded

    @classmethod
    def decode_animated(cls, data: bytes) -> List[Frame]:
        """
        Decode every frame of an animation container.

        Frames come back composited to the full canvas, so each offset is
        (0, 0). Single-frame inputs give a one-element list.
        """
        frames = []
        with cls._open(data) as img:
            try:
                for page in ImageSequence.Iterator(img):
                    # WebP only fills in the duration once the frame is loaded
                    pixels = DecodedImage.from_pil(page)
                    delay = page.info.get('duration', 0) or 0
                    frames.append(Frame(image=pixels, left=0, top=0, delay=as_delay(delay)))
            except _DECODE_FAILURES as e:
                raise DecodeError(f"Invalid {img.format} animation: {e}") from e

        logger.debug("Decoded %d animation frame(s)", len(frames))
        return frames

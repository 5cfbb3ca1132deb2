"""
Image Exporter - Encodes pixel buffers and frame sequences to bytes
"""

import logging
from io import BytesIO
from typing import List, Optional

from PIL import GifImagePlugin, Image

from .config import EngineConfig, get_config
from .errors import EncodeError
from .types import DecodedImage, Frame, OutputFormat

logger = logging.getLogger(__name__)

# Palette slot reserved for transparent pixels in GIF output
TRANSPARENT_INDEX = 255
PALETTE_SIZE = 256

# NETSCAPE2.0 application extension, loop count 0 (forever)
LOOP_FOREVER = b"!\xff\x0bNETSCAPE2.0\x03\x01\x00\x00\x00"
GIF_TRAILER = b";"

_ENCODE_FAILURES = (OSError, ValueError, KeyError, SystemError, SyntaxError, EOFError)


class ImageExporter:
    """Encodes decoded images to PNG, JPEG, WebP or GIF"""

    @classmethod
    def _to_palette(cls, img: Image.Image, threshold: int) -> Image.Image:
        """Quantize RGBA to a 255-colour palette with a transparent index"""
        # Extract alpha channel to create proper transparency mask
        alpha = img.getchannel('A')
        mask = Image.eval(alpha, lambda a: 255 if a < threshold else 0)
        img_p = img.convert('RGB').convert('P', palette=Image.Palette.ADAPTIVE, colors=255)

        # Full 256-entry table so the transparent index is always addressable
        palette = (img_p.getpalette() or [])[:TRANSPARENT_INDEX * 3]
        img_p.putpalette(palette + [0] * (PALETTE_SIZE * 3 - len(palette)))

        img_p.paste(TRANSPARENT_INDEX, mask=mask)
        return img_p

    @classmethod
    def encode_static(
        cls,
        image: DecodedImage,
        format: OutputFormat = OutputFormat.PNG,
        config: Optional[EngineConfig] = None
    ) -> bytes:
        """Encode a single image"""
        config = config or get_config()
        format = OutputFormat.parse(format)
        img = image.to_pil()
        params = {}

        if format is OutputFormat.JPEG:
            # No alpha channel in JPEG
            img = img.convert('RGB')
        elif format is OutputFormat.WEBP:
            params['lossless'] = config.webp_lossless
        elif format is OutputFormat.GIF:
            img = cls._to_palette(img, config.gif_transparency_threshold)
            params['transparency'] = TRANSPARENT_INDEX

        buffer = BytesIO()
        try:
            img.save(buffer, format.pil_name, **params)
        except _ENCODE_FAILURES as e:
            raise EncodeError(
                f"Could not encode {image.width}x{image.height} image as {format.value}: {e}"
            ) from e

        logger.debug("Encoded %dx%d image as %s (%d bytes)",
                     image.width, image.height, format.value, buffer.tell())
        return buffer.getvalue()

    @classmethod
    def _write_gif(cls, images: List[Image.Image], frames: List[Frame]) -> bytes:
        """
        Assemble the GIF stream block by block.

        Every frame is written whole with its own colour table, so frames
        that repeat the previous one stay separate frames.
        """
        buffer = BytesIO()
        header, _ = GifImagePlugin.getheader(images[0], info={'transparency': TRANSPARENT_INDEX})
        for block in header:
            buffer.write(block)
        buffer.write(LOOP_FOREVER)

        for img, frame in zip(images, frames):
            blocks = GifImagePlugin.getdata(
                img,
                offset=(0, 0),
                duration=frame.delay_ms,
                transparency=TRANSPARENT_INDEX,
                disposal=2,
                include_color_table=True,
            )
            for block in blocks:
                buffer.write(block)

        buffer.write(GIF_TRAILER)
        return buffer.getvalue()

    @classmethod
    def encode_animation(
        cls,
        frames: List[Frame],
        config: Optional[EngineConfig] = None
    ) -> bytes:
        """
        Encode frames as an infinitely looping GIF.

        Frame order is kept exactly as given; every frame keeps its own delay,
        including frames identical to their predecessor.
        """
        if not frames:
            raise EncodeError("No frames to encode")

        config = config or get_config()
        size = frames[0].image.size
        if any(frame.image.size != size for frame in frames):
            raise EncodeError(f"All frames must share the canvas size {size[0]}x{size[1]}")

        images = [
            cls._to_palette(frame.image.to_pil(), config.gif_transparency_threshold)
            for frame in frames
        ]

        try:
            data = cls._write_gif(images, frames)
            with Image.open(BytesIO(data)) as written:
                written_count = getattr(written, 'n_frames', 1)
        except _ENCODE_FAILURES as e:
            raise EncodeError(f"Could not encode {len(frames)}-frame GIF: {e}") from e

        if written_count != len(frames):
            raise EncodeError(f"GIF holds {written_count} frame(s), expected {len(frames)}")

        logger.debug("Encoded %d-frame GIF (%d bytes)", len(frames), len(data))
        return data

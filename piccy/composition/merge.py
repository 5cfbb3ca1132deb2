"""
Merge - Spatial (side by side / stacked) and temporal (GIF) composition
"""

import logging
import math
from numbers import Real
from typing import List, Optional, Sequence

from PIL import Image

from ..core.config import EngineConfig, get_config
from ..core.errors import InputError
from ..core.exporter import ImageExporter
from ..core.image import ImageValue
from ..core.parallel import map_ordered
from ..core.parser import ImageParser
from ..core.types import DecodedImage, Frame, MergeMode, as_delay

logger = logging.getLogger(__name__)


class ImageMerger:
    """Combines several images into one static image or one animation"""

    # Moderate-quality filter for layout scaling, high quality for GIF frames
    LAYOUT_FILTER = Image.Resampling.BILINEAR
    FRAME_FILTER = Image.Resampling.LANCZOS

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()

    def _decode_all(self, images: Sequence[ImageValue]) -> List[DecodedImage]:
        return map_ordered(
            lambda img: ImageParser.decode_static(img.data),
            images,
            self.config.max_workers,
        )

    def _resize_all(self, decoded: List[DecodedImage], sizes: List[tuple]) -> List[Image.Image]:
        return map_ordered(
            lambda job: job[0].to_pil().resize(job[1], self.LAYOUT_FILTER),
            list(zip(decoded, sizes)),
            self.config.max_workers,
        )

    def merge(
        self,
        images: Sequence[ImageValue],
        mode: MergeMode = MergeMode.HORIZONTAL
    ) -> ImageValue:
        """
        Lay images out in a row or a column.

        Horizontal: every image is scaled to the smallest height, keeping its
        aspect ratio, and placed left to right.
        Vertical: every image is stretched to the largest width, keeping its
        own height, and stacked top to bottom.
        """
        if not images:
            raise InputError("At least one image is required to merge")
        mode = MergeMode.parse(mode)

        decoded = self._decode_all(images)

        if mode is MergeMode.HORIZONTAL:
            min_height = min(img.height for img in decoded)
            sizes = [
                (max(1, int(img.width * (min_height / img.height))), min_height)
                for img in decoded
            ]
            canvas_size = (sum(w for w, _ in sizes), min_height)
        else:
            max_width = max(img.width for img in decoded)
            sizes = [(max_width, img.height) for img in decoded]
            canvas_size = (max_width, sum(h for _, h in sizes))

        resized = self._resize_all(decoded, sizes)

        canvas = Image.new('RGBA', canvas_size, (0, 0, 0, 0))
        offset = 0
        for part in resized:
            if mode is MergeMode.HORIZONTAL:
                canvas.alpha_composite(part, dest=(offset, 0))
                offset += part.width
            else:
                canvas.alpha_composite(part, dest=(0, offset))
                offset += part.height

        logger.debug("Merged %d image(s) %s into %dx%d",
                     len(decoded), mode.value, canvas_size[0], canvas_size[1])
        data = ImageExporter.encode_static(
            DecodedImage.from_pil(canvas), self.config.output_format, self.config
        )
        return ImageValue(data)

    def merge_gif(
        self,
        images: Sequence[ImageValue],
        delay_ms=None
    ) -> ImageValue:
        """
        Build a looping GIF with one frame per input image.

        Every image is resized to the first image's dimensions. Frames share
        one delay: ``delay_ms`` or the configured default.
        """
        if not images:
            raise InputError("At least one image is required to build a GIF")

        if delay_ms is None:
            delay_ms = self.config.default_gif_delay_ms
        elif not isinstance(delay_ms, Real) or not math.isfinite(delay_ms) or delay_ms < 0:
            raise InputError(f"Frame delay must be a non-negative number of milliseconds, got {delay_ms!r}")
        delay = as_delay(delay_ms)

        width, height = ImageParser.read_dimensions(images[0].data)

        def prepare(image: ImageValue) -> Frame:
            decoded = ImageParser.decode_static(image.data)
            resized = decoded.to_pil().resize((width, height), self.FRAME_FILTER)
            return Frame(image=DecodedImage.from_pil(resized), left=0, top=0, delay=delay)

        frames = map_ordered(prepare, images, self.config.max_workers)
        logger.debug("Built %d GIF frame(s) at %dx%d, %s ms each", len(frames), width, height, delay)
        return ImageValue(ImageExporter.encode_animation(frames, self.config))

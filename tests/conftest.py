"""Shared fixtures: in-memory PNG / JPEG / GIF / WebP payloads."""

from io import BytesIO
from typing import List, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from piccy.core.config import CONFIG_ENV_VAR, EngineConfig, set_config
from piccy.core.exporter import ImageExporter
from piccy.core.types import DecodedImage, Frame


def encode_pil(img: Image.Image, fmt: str, **params) -> bytes:
    buffer = BytesIO()
    img.save(buffer, fmt, **params)
    return buffer.getvalue()


def solid_rgba(width: int, height: int, color: Tuple[int, int, int, int]) -> np.ndarray:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def random_rgba(width: int, height: int, seed: int = 0, opaque: bool = True) -> np.ndarray:
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    if opaque:
        pixels[:, :, 3] = 255
    return pixels


def png_bytes(pixels: np.ndarray) -> bytes:
    return encode_pil(Image.fromarray(pixels, 'RGBA'), 'PNG')


def decode_rgba(data: bytes) -> np.ndarray:
    with Image.open(BytesIO(data)) as img:
        return np.array(img.convert('RGBA'))


def gif_bytes(colors: Sequence[Tuple[int, int, int]], durations: Sequence[int],
              size: Tuple[int, int] = (16, 12)) -> bytes:
    frames = [Image.new('RGB', size, color) for color in colors]
    return encode_pil(
        frames[0], 'GIF',
        save_all=True, append_images=frames[1:], duration=list(durations), loop=0,
    )


def read_gif_frames(data: bytes) -> Tuple[List[np.ndarray], List[int]]:
    """Decode every frame with Pillow directly, independent of the parser."""
    pixels, durations = [], []
    with Image.open(BytesIO(data)) as img:
        for index in range(getattr(img, 'n_frames', 1)):
            img.seek(index)
            pixels.append(np.array(img.convert('RGBA')))
            durations.append(img.info.get('duration', 0))
    return pixels, durations


FRAME_COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
FRAME_DURATIONS = [100, 200, 300]


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test against built-in defaults, never a user config."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    set_config(EngineConfig())
    yield
    set_config(None)


@pytest.fixture
def square_png() -> bytes:
    """100x100 opaque image with distinct pixel values."""
    return png_bytes(random_rgba(100, 100, seed=1))


@pytest.fixture
def translucent_png() -> bytes:
    """40x30 image with random alpha."""
    return png_bytes(random_rgba(40, 30, seed=2, opaque=False))


@pytest.fixture
def jpeg_bytes() -> bytes:
    img = Image.new('RGB', (64, 48), (120, 80, 40))
    return encode_pil(img, 'JPEG')


@pytest.fixture
def animated_gif() -> bytes:
    return gif_bytes(FRAME_COLORS, FRAME_DURATIONS)


@pytest.fixture
def static_gif() -> bytes:
    return encode_pil(Image.new('RGB', (10, 10), (10, 20, 30)), 'GIF')


@pytest.fixture
def animated_webp() -> bytes:
    frames = [Image.new('RGBA', (16, 12), color + (255,)) for color in FRAME_COLORS]
    try:
        return encode_pil(
            frames[0], 'WEBP',
            save_all=True, append_images=frames[1:], duration=FRAME_DURATIONS,
            loop=0, lossless=True,
        )
    except (OSError, KeyError, ValueError):
        pytest.skip("Pillow was built without animated WebP support")


HELD_COLORS = [(255, 0, 0), (255, 0, 0), (0, 255, 0), (0, 0, 255)]
HELD_DURATIONS = [100, 100, 200, 300]


@pytest.fixture
def held_gif() -> bytes:
    """Four-frame GIF whose first frame is shown twice in a row."""
    frames = [
        Frame(DecodedImage.from_array(solid_rgba(16, 12, color + (255,))), delay=duration)
        for color, duration in zip(HELD_COLORS, HELD_DURATIONS)
    ]
    return ImageExporter.encode_animation(frames)

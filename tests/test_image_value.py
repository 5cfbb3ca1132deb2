"""Tests for ImageValue loading, encoding and file I/O."""

import base64
import dataclasses

import numpy as np
import pytest

import piccy
from piccy import DecodeError, ImageIOError, ImageValue
from piccy.core.image import as_image_value
from piccy.core.types import SourceFormat

from conftest import decode_rgba, random_rgba


class TestLoading:
    """Constructing values from bytes, files and base64."""

    def test_from_bytes_keeps_payload(self, square_png: bytes) -> None:
        value = ImageValue.from_bytes(bytearray(square_png))
        assert value.into_bytes() == square_png
        assert isinstance(value.data, bytes)

    def test_load_from_path(self, tmp_path, square_png: bytes) -> None:
        path = tmp_path / "square.png"
        path.write_bytes(square_png)
        assert piccy.load(path).into_bytes() == square_png
        assert piccy.load(str(path)).into_bytes() == square_png

    def test_load_missing_file(self, tmp_path) -> None:
        missing = tmp_path / "nope.png"
        with pytest.raises(ImageIOError) as excinfo:
            piccy.load(missing)
        assert excinfo.value.path == missing

    def test_io_error_is_os_error(self, tmp_path) -> None:
        with pytest.raises(OSError):
            ImageValue.from_path(tmp_path / "missing.gif")

    def test_base64_round_trip(self, square_png: bytes) -> None:
        text = base64.b64encode(square_png).decode('ascii')
        assert piccy.load_base64(text).into_bytes() == square_png

    def test_invalid_base64(self) -> None:
        with pytest.raises(DecodeError):
            piccy.load_base64("not base64 at all!")

    def test_bytes_are_not_validated_eagerly(self) -> None:
        value = piccy.load(b"garbage")
        with pytest.raises(DecodeError):
            value.source_format


class TestValueSemantics:
    """Values are immutable and shareable."""

    def test_frozen(self, square_png: bytes) -> None:
        value = ImageValue(square_png)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.data = b""

    def test_equal_payloads_compare_equal(self, square_png: bytes) -> None:
        assert ImageValue(square_png) == ImageValue(bytes(square_png))

    def test_as_image_value(self, square_png: bytes) -> None:
        value = ImageValue(square_png)
        assert as_image_value(value) is value
        assert as_image_value(square_png) == value

    def test_as_image_value_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            as_image_value("square.png")

    def test_repr_shows_size(self) -> None:
        assert repr(ImageValue(b"abc")) == "ImageValue(3 bytes)"


class TestOutput:
    """Re-encoding and saving."""

    def test_source_format(self, animated_gif: bytes, square_png: bytes) -> None:
        assert ImageValue(animated_gif).source_format is SourceFormat.GIF
        assert ImageValue(square_png).source_format is SourceFormat.OTHER

    def test_to_bytes_png_preserves_pixels(self, translucent_png: bytes) -> None:
        data = ImageValue(translucent_png).to_bytes('png')
        np.testing.assert_array_equal(decode_rgba(data), random_rgba(40, 30, seed=2, opaque=False))

    def test_encode_jpeg(self, square_png: bytes) -> None:
        data = piccy.encode(square_png, "jpeg")
        assert data[:2] == b"\xff\xd8"

    def test_encode_unknown_format(self, square_png: bytes) -> None:
        with pytest.raises(piccy.InputError):
            piccy.encode(square_png, "bmp")

    def test_to_base64(self, square_png: bytes) -> None:
        text = ImageValue(square_png).to_base64()
        assert decode_rgba(base64.b64decode(text)).shape == (100, 100, 4)

    def test_save(self, tmp_path, square_png: bytes) -> None:
        path = ImageValue(square_png).save(tmp_path / "out.webp", "webp")
        assert path.exists()
        assert ImageValue.from_path(path).source_format is SourceFormat.WEBP

    def test_save_into_missing_directory(self, tmp_path, square_png: bytes) -> None:
        with pytest.raises(ImageIOError):
            ImageValue(square_png).save(tmp_path / "missing" / "out.png")

import cv2
import numpy as np
import pytest

from mark_counter.core.errors import UnsupportedFileType
from mark_counter.core.marking.image_io import (
    decode_image,
    guess_mime_type,
    load_image_file,
)


def _write(path, image):
    assert cv2.imwrite(str(path), image)
    return path


def test_load_png_as_rgb(tmp_path):
    bgr = np.zeros((4, 6, 3), dtype=np.uint8)
    bgr[..., 0] = 255  # blue in OpenCV channel order
    image = load_image_file(_write(tmp_path / "blue.png", bgr))
    assert image.shape == (4, 6, 3)
    assert tuple(image[0, 0]) == (0, 0, 255)


@pytest.mark.parametrize("name", ["photo.jpg", "photo.jpeg", "PHOTO.JPG"])
def test_load_jpeg(tmp_path, name):
    image = load_image_file(_write(tmp_path / name, np.zeros((8, 8, 3), np.uint8)))
    assert image.shape == (8, 8, 3)


@pytest.mark.parametrize("name", ["scan.pdf", "image.bmp", "notes.txt", "noext"])
def test_unsupported_file_type(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"data")
    with pytest.raises(UnsupportedFileType) as excinfo:
        load_image_file(path)
    assert excinfo.value.path == path


def test_unsupported_file_type_is_value_error():
    with pytest.raises(ValueError):
        decode_image(b"", "image/gif")


def test_decode_garbage(tmp_path):
    with pytest.raises(ValueError, match="Could not decode"):
        decode_image(b"not an image", "image/png")


def test_guess_mime_type():
    assert guess_mime_type("a.png") == "image/png"
    assert guess_mime_type("a.jpg") == "image/jpeg"


def test_corrupt_png_is_plain_value_error(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\ntruncated")
    with pytest.raises(ValueError, match="Could not decode") as excinfo:
        load_image_file(path)
    assert not isinstance(excinfo.value, UnsupportedFileType)

"""
Image input.

Only PNG and JPEG files are accepted. Decoding goes through OpenCV and
returns an RGB ``uint8`` array.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from ..errors import UnsupportedFileType

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ("image/png", "image/jpeg", "image/jpg")


def guess_mime_type(path: Union[str, Path]) -> Optional[str]:
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type


def check_supported(mime_type: Optional[str], path=None):
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedFileType(mime_type, path)


def decode_image(data: bytes, mime_type: Optional[str]) -> np.ndarray:
    """
    Decode PNG/JPEG bytes.

    Args:
        data: Encoded image
        mime_type: Declared type of ``data``

    Returns:
        RGB image (H, W, 3)
    """
    check_supported(mime_type)
    buffer = np.frombuffer(data, np.uint8)
    image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    if image is None:
        raise ValueError(f"Could not decode {mime_type} data")
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)


def load_image_file(path: Union[str, Path]) -> np.ndarray:
    """Read an image file, rejecting anything that is not PNG or JPEG."""
    path = Path(path)
    mime_type = guess_mime_type(path)
    check_supported(mime_type, path)
    image = decode_image(path.read_bytes(), mime_type)
    logger.info(f"Loaded {path.name} ({image.shape[1]}x{image.shape[0]})")
    return image

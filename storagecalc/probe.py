"""
Module: probe
Purpose: Read format and dimensions from image file headers.
"""

import os
from typing import Dict, Tuple

from PIL import Image

from .exceptions import OversizedImageError, ProbeError, UnsupportedFormatError
from .models.imagerecord import ImageFormat
from .utils import enforce_pixel_limit, log_error, log_warning

PILLOW_FORMATS: Dict[str, ImageFormat] = {
    "JPEG": ImageFormat.BASELINE,
    "MPO": ImageFormat.BASELINE,  # multi-picture JPEG from cameras
    "JPEG2000": ImageFormat.JP2,
    "BMP": ImageFormat.BMP,
    "DIB": ImageFormat.BMP,
}


def probe_image(path: str) -> Tuple[ImageFormat, int, int]:
    """
    Identify an image file without decoding its pixels.

    Args:
        path: Path to the image file.

    Returns:
        Tuple of (format, width, height).

    Raises:
        UnsupportedFormatError: If the file is not JPEG, JPEG 2000 or BMP.
        OversizedImageError: If the pixel count exceeds the safety limit.
        ProbeError: If the file cannot be opened or identified.
    """
    normalized = os.path.abspath(path)
    try:
        enforce_pixel_limit()
        with Image.open(normalized) as img:
            pillow_format = img.format or ""
            width, height = img.size
    except Image.DecompressionBombError as exc:
        log_warning(f"Skipped '{path}' (decompression bomb detected: {exc}).")
        raise OversizedImageError(f"Decompression bomb attack detected for {path}") from exc
    except Exception as exc:
        log_error(f"Failed to identify image {path}: {exc}")
        raise ProbeError(f"Failed to identify image {path}") from exc

    fmt = PILLOW_FORMATS.get(pillow_format.upper())
    if fmt is None:
        log_warning(f"Unsupported image format '{pillow_format}' for {path}")
        raise UnsupportedFormatError(f"Unsupported image format '{pillow_format}' for {path}")
    return fmt, width, height

"""
Module: sizing
Purpose: Per-format size formulas and the image pyramid surcharge.
"""

import math
from typing import Callable, Dict, NamedTuple

from .exceptions import DimensionError
from .models.imagerecord import ImageFormat

BASELINE_SCALE = 0.2
JP2_SCALE = 0.4
JP2_AREA_OFFSET = 16
# Pyramid levels stop once either halved dimension is at or below this value
MIN_PYRAMID_DIMENSION = 128
# Largest dimension accepted (unsigned 64-bit); keeps every formula within float range
MAX_DIMENSION = 2**64 - 1


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() is banker's rounding; the size model is defined
    with the conventional rounding used by C's round().
    """
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def bmp_size(width: int, height: int) -> int:
    return width * height


def baseline_size(width: int, height: int) -> int:
    return round_half_up(width * height * BASELINE_SCALE)


def jp2_size(width: int, height: int) -> int:
    area = width * height
    return round_half_up((area * JP2_SCALE) / math.log(math.log(area + JP2_AREA_OFFSET)))


class SizeModel(NamedTuple):
    base_size: Callable[[int, int], int]
    has_pyramid: bool


FORMAT_MODELS: Dict[ImageFormat, SizeModel] = {
    ImageFormat.BASELINE: SizeModel(baseline_size, True),
    ImageFormat.JP2: SizeModel(jp2_size, False),  # progressive resolution lives in the codec
    ImageFormat.BMP: SizeModel(bmp_size, True),
}


def _validate_dimensions(width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise DimensionError(f"Dimensions must be non-negative, got {width}x{height}")
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise DimensionError(f"Dimensions must not exceed {MAX_DIMENSION}")


def base_size(fmt: ImageFormat, width: int, height: int) -> int:
    """
    Compute the encoded size of a single image without pyramid levels.

    Args:
        fmt: Image format variant.
        width: Width in pixels.
        height: Height in pixels.

    Returns:
        Size in bytes.

    Raises:
        DimensionError: If either dimension is negative or above MAX_DIMENSION.
    """
    _validate_dimensions(width, height)
    return FORMAT_MODELS[fmt].base_size(width, height)


def pyramid_surcharge(fmt: ImageFormat, width: int, height: int) -> int:
    """
    Compute the storage cost of embedded half-resolution copies.

    Each level halves both dimensions (integer halving) and is counted
    while both halves exceed MIN_PYRAMID_DIMENSION. Formats without a
    pyramid always return 0.

    Raises:
        DimensionError: If either dimension is negative or above MAX_DIMENSION.
    """
    _validate_dimensions(width, height)
    model = FORMAT_MODELS[fmt]
    if not model.has_pyramid:
        return 0
    surcharge = 0.0
    level_width, level_height = width // 2, height // 2
    while level_width > MIN_PYRAMID_DIMENSION and level_height > MIN_PYRAMID_DIMENSION:
        surcharge += model.base_size(level_width, level_height)
        level_width, level_height = level_width // 2, level_height // 2
    return round_half_up(surcharge)


def estimate_size(fmt: ImageFormat, width: int, height: int) -> int:
    """Base size plus pyramid surcharge where the format carries one."""
    return base_size(fmt, width, height) + pyramid_surcharge(fmt, width, height)

"""
Module: commands
Purpose: Parse input lines into typed session commands.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Union

from .exceptions import MalformedCommandError, UnknownCommandError
from .models.imagerecord import ImageFormat
from .sizing import MAX_DIMENSION
from .utils import log_warning

GROUP_KEYWORD = "g"
EXIT_KEYWORD = "q"
FORMAT_KEYWORDS = {
    "jpg": ImageFormat.BASELINE,
    "j": ImageFormat.BASELINE,
    "jp2": ImageFormat.JP2,
    "jpeg2000": ImageFormat.JP2,
    "bmp": ImageFormat.BMP,
}
_GROUP_SEPARATORS = re.compile(r"[\s,]+")
# ASCII digits only, no underscores
_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


@dataclass
class CreateImage:
    format: ImageFormat
    width: int
    height: int


@dataclass
class GroupImages:
    indices: List[int] = field(default_factory=list)


@dataclass
class Quit:
    pass


Command = Union[CreateImage, GroupImages, Quit]


def _parse_int(token: str) -> int | None:
    if not _INTEGER_TOKEN.fullmatch(token):
        return None
    try:
        return int(token)
    except ValueError:
        # beyond the interpreter's int string-conversion digit limit
        return None


def _parse_dimension(token: str, name: str) -> int:
    value = _parse_int(token)
    if value is None:
        raise MalformedCommandError(f"{name} must be an integer, got '{token}'")
    if value < 0:
        raise MalformedCommandError(f"{name} must be non-negative, got {value}")
    if value > MAX_DIMENSION:
        raise MalformedCommandError(f"{name} must not exceed {MAX_DIMENSION}")
    return value


def _parse_group(rest: str) -> GroupImages:
    indices: List[int] = []
    tokens = [token for token in _GROUP_SEPARATORS.split(rest) if token]
    for position, token in enumerate(tokens):
        value = _parse_int(token)
        if value is None:
            ignored = " ".join(tokens[position:])
            log_warning(f"Group request stopped at non-integer token; ignored '{ignored}'")
            break
        indices.append(value)
    return GroupImages(indices)


def parse_command(line: str) -> Command | None:
    """
    Parse one input line. Matching is case-insensitive.

    Args:
        line: Raw input line.

    Returns:
        Parsed command, or None for a blank line.

    Raises:
        UnknownCommandError: When the first token is not a known keyword.
        MalformedCommandError: When width or height is missing, non-numeric or negative.
    """
    normalized = line.strip().lower()
    if not normalized:
        return None
    keyword, *remainder = normalized.split(maxsplit=1)
    rest = remainder[0] if remainder else ""
    if keyword == EXIT_KEYWORD:
        return Quit()
    if keyword == GROUP_KEYWORD:
        return _parse_group(rest)
    fmt = FORMAT_KEYWORDS.get(keyword)
    if fmt is None:
        raise UnknownCommandError(f"Unknown command '{keyword}'")
    args = rest.split()
    if len(args) < 2:
        raise MalformedCommandError(f"'{keyword}' expects a width and a height")
    width = _parse_dimension(args[0], "Width")
    height = _parse_dimension(args[1], "Height")
    return CreateImage(fmt, width, height)

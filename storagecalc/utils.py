"""
Module: utils
Purpose: Logging shortcuts and the pixel-limit setting used when probing image files.
"""

import os

from PIL import Image

DEFAULT_PIXEL_LIMIT = 50_000_000
MAX_OVERRIDE_LIMIT = 90_000_000
PIXEL_LIMIT_ENV = "STORAGECALC_MAX_PIXELS"
_pixel_limit = DEFAULT_PIXEL_LIMIT


def _check_limit(value: int) -> int:
    if not DEFAULT_PIXEL_LIMIT <= value <= MAX_OVERRIDE_LIMIT:
        raise ValueError(
            f"Pixel limit {value:,} is outside {DEFAULT_PIXEL_LIMIT:,}..{MAX_OVERRIDE_LIMIT:,}."
        )
    return value


def _limit_from_env() -> int | None:
    raw = os.getenv(PIXEL_LIMIT_ENV)
    if not raw:
        return None
    try:
        return _check_limit(int(raw))
    except ValueError:
        log_warning(
            f"Ignoring invalid {PIXEL_LIMIT_ENV} value '{raw}'; "
            f"probing keeps the default of {DEFAULT_PIXEL_LIMIT:,} pixels."
        )
        return None


def configure_pixel_limit(cli_override: int | None = None) -> tuple[int, str]:
    """
    Choose the largest image, in pixels, that probing will open.

    A --max-pixels value wins over STORAGECALC_MAX_PIXELS, which wins
    over the default. Returns (limit, source) where source is "cli",
    "env" or "default".

    Raises:
        ValueError: If the CLI override is outside the allowed range.
    """
    global _pixel_limit
    if cli_override is not None:
        limit, source = _check_limit(cli_override), "cli"
    else:
        env_limit = _limit_from_env()
        if env_limit is None:
            limit, source = DEFAULT_PIXEL_LIMIT, "default"
        else:
            limit, source = env_limit, "env"
    _pixel_limit = limit
    Image.MAX_IMAGE_PIXELS = limit
    return limit, source


def enforce_pixel_limit() -> None:
    """Put the configured limit back on Pillow before opening a file."""
    Image.MAX_IMAGE_PIXELS = _pixel_limit


def log_error(message: str):
    """Append an [ERROR] line to the session log."""
    from . import reporting  # Local import to avoid circular dependency rules

    reporting.write_log([f"[ERROR] {message}"])


def log_warning(message: str):
    """
    Append a [WARNING] line to the session log.

    Used for input the session skipped rather than failed on.
    """
    from . import reporting  # Local import to avoid circular dependency rules

    reporting.write_log([f"[WARNING] {message}"])


def log_info(message: str):
    from . import reporting  # Local import to avoid circular dependency rules

    reporting.write_log([f"[INFO] {message}"])


# Apply initial pixel limit (default or env) on import.
configure_pixel_limit(None)

"""
Module: cli_formatter
Purpose: Stdout rendering for the calculator: usage header, result labels and diagnostics.
"""

from __future__ import annotations

import os
import sys
import textwrap
from dataclasses import dataclass
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"
FRAME_WIDTH = 80
# 256-color palette codes per message level
LEVEL_COLORS = {"info": 74, "accent": 141, "warn": 221, "error": 160}
BANNER_LINES = (
    "Storage calculator",
    'Enter one line for each image/group on the format "[type] [width] [height]"',
    'or "G i, i, ...". Exit with "Q". Input is not case-sensitive',
)


@dataclass
class FormatterConfig:
    """
    How stdout is rendered for the current terminal.
    """

    use_color: bool = True
    unicode_enabled: bool = True
    show_banner: bool = True
    plain_mode: bool = False


class CLIFormatter:
    """
    Single writer for everything the calculator prints on stdout.
    With colors off every line is exactly the plain protocol text.
    """

    def __init__(
        self,
        config: FormatterConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.config = config or FormatterConfig()
        self.stream = stream or sys.stdout

    def print_banner(self) -> None:
        """Print the usage header and a separating empty line."""
        if not self.config.show_banner:
            return
        title, *usage = BANNER_LINES
        self.line(self.label(title))
        for text in usage:
            self.line(text)
        self.blank()

    def line(self, text: str = "") -> None:
        self.stream.write(text + "\n")

    def blank(self) -> None:
        self.line()

    def label(self, text: str, level: str = "info") -> str:
        """Return text highlighted for the given level, or unchanged without colors."""
        if not self.config.use_color or not text:
            return text
        return f"{BOLD}\033[38;5;{LEVEL_COLORS[level]}m{text}{RESET}"

    def warning(self, text: str) -> None:
        self.line(self.label(text, "warn"))

    def failure_summary(
        self,
        *,
        reason: str,
        log_hint: str | None = None,
        remediation: list[str] | None = None,
    ) -> None:
        """
        Print the boxed STOP/BLOCKED notice shown before a non-zero exit.
        """
        if remediation:
            required = remediation[0]
        elif log_hint:
            required = f"Review {log_hint} for details."
        else:
            required = "Review the error and rerun when ready."
        body = [f"Reason: {reason}"]
        if log_hint:
            body.append(f"Log file: {log_hint}")
        body.append(f"Required: {required}")

        boxed = self.config.unicode_enabled and not self.config.plain_mode
        dash, side = ("─", "│") if boxed else ("-", "|")
        top_left, top_right, bottom_left, bottom_right = "┌┐└┘" if boxed else "++++"
        heading = f"{dash} STOP/BLOCKED "
        inner = FRAME_WIDTH - 4

        self.blank()
        self.line(self.label(f"{top_left}{heading}{dash * (FRAME_WIDTH - 2 - len(heading))}{top_right}", "error"))
        for entry in body:
            for chunk in textwrap.wrap(entry, width=inner) or [""]:
                self.line(f"{side} {chunk.ljust(inner)} {side}")
        self.line(f"{bottom_left}{dash * (FRAME_WIDTH - 2)}{bottom_right}")


def detect_terminal_capabilities(
    *,
    color_preference: str | None = None,
    plain_mode: bool = False,
    no_banner: bool = False,
    stdout_isatty: bool | None = None,
) -> FormatterConfig:
    """
    Build the formatter configuration from CLI flags and the environment.

    --plain or STORAGECALC_PLAIN turns off colors and box drawing;
    --no-banner or STORAGECALC_NO_BANNER hides the usage header.
    Colors default to on only for an interactive, non-dumb terminal
    without NO_COLOR; --color always/never overrides that.
    """
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    show_banner = not (no_banner or os.environ.get("STORAGECALC_NO_BANNER"))

    if plain_mode or os.environ.get("STORAGECALC_PLAIN"):
        return FormatterConfig(
            use_color=False,
            unicode_enabled=False,
            show_banner=show_banner,
            plain_mode=True,
        )

    dumb_terminal = os.environ.get("TERM", "").lower() == "dumb"
    if color_preference == "always":
        use_color = True
    elif color_preference == "never":
        use_color = False
    else:
        use_color = stdout_isatty and not dumb_terminal and not os.environ.get("NO_COLOR")

    return FormatterConfig(
        use_color=use_color,
        unicode_enabled=not dumb_terminal and _stdout_accepts_box_drawing(),
        show_banner=show_banner,
    )


def _stdout_accepts_box_drawing() -> bool:
    encoding = getattr(sys.stdout, "encoding", None)
    if not encoding:
        return False
    try:
        "┌".encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return False
    return True

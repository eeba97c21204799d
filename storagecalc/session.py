"""
Module: session
Purpose: Dispatch parsed commands and keep the running storage total.
"""

from enum import Enum
from typing import Iterable, List

from .catalog import Catalog
from .cli_formatter import CLIFormatter
from .commands import Command, CreateImage, GroupImages, Quit, parse_command
from .compression import GroupRequest, compress_stack
from .exceptions import CommandError, StorageCalcError
from .models.imagerecord import ImageFormat, ImageRecord
from .models.stackresult import GroupResult
from .utils import log_info, log_warning

INVALID_INPUT = "[invalid input]"


class SessionState(Enum):
    IDLE = "idle"
    TERMINATED = "terminated"


class Session:
    """
    Owns the catalog and the running total for one interactive run.

    The running total is the sum of sizes of ungrouped records plus the
    compressed size of every group formed so far.
    """

    def __init__(self, formatter: CLIFormatter | None = None, catalog: Catalog | None = None):
        self.formatter = formatter or CLIFormatter()
        self.catalog = catalog or Catalog()
        self.total = 0
        self.state = SessionState.IDLE
        self.groups: List[GroupResult] = []
        self._request = GroupRequest()

    def add_image(self, fmt: ImageFormat, width: int, height: int) -> ImageRecord:
        record = self.catalog.create(fmt, width, height)
        self.total += record.size
        label = self.formatter.label(f"[{fmt.label}]")
        self.formatter.line(f"{label} size: {record.size}  index: {record.index}")
        self.formatter.blank()
        return record

    def group(self, indices: Iterable[int]) -> GroupResult:
        self.formatter.line(self.formatter.label("[grouping images]", "accent"))
        self._request.extend(indices)
        result = compress_stack(self.catalog, self._request)
        for record in result.matched:
            self.formatter.line(f"[{record.index}]  size: {record.size}")
        self.formatter.blank()
        self.formatter.line(f"previous size of images: {result.previous_size}")
        self.formatter.line(f"total compressed size: {result.compressed_size}")
        self.formatter.blank()
        self.total += result.delta
        self.groups.append(result)
        return result

    def handle(self, command: Command) -> SessionState:
        """
        Apply one parsed command.

        Raises:
            StorageCalcError: If the session has already terminated.
        """
        if self.state is SessionState.TERMINATED:
            raise StorageCalcError("Session has already terminated")
        if isinstance(command, CreateImage):
            self.add_image(command.format, command.width, command.height)
        elif isinstance(command, GroupImages):
            self.group(command.indices)
        elif isinstance(command, Quit):
            self.state = SessionState.TERMINATED
        return self.state

    def feed(self, line: str) -> SessionState:
        """
        Parse and apply one input line. Malformed lines print a
        diagnostic and leave the catalog and total untouched.
        """
        try:
            command = parse_command(line)
        except CommandError as exc:
            log_warning(f"Rejected input '{line.strip()}': {exc}")
            self.formatter.warning(INVALID_INPUT)
            return self.state
        if command is None:
            return self.state
        return self.handle(command)

    def run(self, lines: Iterable[str]) -> int:
        """
        Consume lines until the exit command or end of input,
        then print and return the final total.
        """
        for line in lines:
            if self.feed(line) is SessionState.TERMINATED:
                break
        self.state = SessionState.TERMINATED
        self.formatter.blank()
        self.formatter.line(f"Total size: {self.total} bytes")
        log_info(f"Session finished: {len(self.catalog)} image(s), {len(self.groups)} group(s), total={self.total}")
        return self.total

"""
Module: reporting
Purpose: Logging and session report utilities.
"""

import json
import os
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Sequence

from .models.imagerecord import ImageRecord
from .models.stackresult import GroupResult


ARTIFACTS_DIR = "artifacts"
LOG_FILE_NAME = os.path.join(ARTIFACTS_DIR, "storagecalc.log")


def ensure_log_initialized() -> str:
    """Ensure the storagecalc log file exists and return its absolute path."""
    path = os.path.abspath(LOG_FILE_NAME)
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    with open(path, "a", encoding="utf-8"):
        pass
    return path


def write_log(entries: List[str], outfile: str = LOG_FILE_NAME):
    """
    Append entries to logfile.
    """
    directory = os.path.dirname(os.path.abspath(outfile)) or "."
    os.makedirs(directory, exist_ok=True)
    timestamp = datetime.now(timezone.utc).isoformat()
    with open(outfile, "a", encoding="utf-8") as handle:
        for entry in entries:
            normalized = entry if entry.startswith("[") else f"[INFO] {entry}"
            handle.write(f"[{timestamp}] {normalized}\n")


class EnhancedJSONEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        if is_dataclass(o):
            return asdict(o)
        if isinstance(o, Enum):
            return o.name
        return super().default(o)


def _group_entry(group: GroupResult) -> dict[str, Any]:
    return {
        "indices": [record.index for record in group.matched],
        "previous_size": group.previous_size,
        "compressed_size": group.compressed_size,
        "delta": group.delta,
    }


def write_json_report(
    records: Sequence[ImageRecord],
    groups: Sequence[GroupResult],
    total: int,
    outfile: str,
):
    """
    Write the session summary (records, groups, running total) as JSON.

    Args:
        records: All records created during the session.
        groups: Every grouping pass, in order.
        total: Final running total in bytes.
        outfile: Destination path.

    Raises:
        OSError: If the report cannot be written.
    """
    directory = os.path.dirname(os.path.abspath(outfile)) or "."
    os.makedirs(directory, exist_ok=True)
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "images": list(records),
        "groups": [_group_entry(group) for group in groups],
        "total": total,
    }
    with open(outfile, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, cls=EnhancedJSONEncoder, indent=2)

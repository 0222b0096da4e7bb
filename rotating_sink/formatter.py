"""Record formatters: turn one record into the bytes appended to the live file."""

import json
from typing import Any, Callable


def format_text(record: Any) -> bytes:
    """Newline-terminated UTF-8 line. Bytes pass through (newline added if missing)."""
    if isinstance(record, bytes):
        return record if record.endswith(b"\n") else record + b"\n"
    line = str(record)
    if not line.endswith("\n"):
        line += "\n"
    return line.encode("utf-8")


def format_json(record: Any) -> bytes:
    """NDJSON: one JSON object per line, compatible with jq."""
    return (json.dumps(record, ensure_ascii=False, default=str) + "\n").encode("utf-8")


def get_formatter(name: str = "text") -> Callable[[Any], bytes]:
    if name == "json":
        return format_json
    if name == "text":
        return format_text
    raise ValueError(f"Unsupported record format: {name}")

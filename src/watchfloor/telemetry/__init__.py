"""Telemetry helpers (JSON lines board records)."""

from .board_logger import BoardTelemetryLogger, board_record
from .jsonl import append_jsonl, read_jsonl

__all__ = ["BoardTelemetryLogger", "board_record", "append_jsonl", "read_jsonl"]

# Copyright 2026 icecake0141
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.

"""
JSONL trace of the read/decode loop.

Each buffer extension (with the time spent waiting and whether it timed out)
and each resolved unit is written as one JSON object per line. Useful for
tuning the read timeout on slow links where escape sequences arrive split.
"""

import json
import os
import sys
import termios
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from rawline.decoder import Event


class DecodeTraceLogger:
    """Writes decode loop events to a JSONL file."""

    def __init__(self, log_file_path: str = "rawline_trace.jsonl"):
        """
        Initialize trace logger.

        Args:
            log_file_path: Path to the JSONL file to write
        """
        self.log_file_path = log_file_path
        self.session_start = time.monotonic()
        self.event_count = 0
        self.timeout_count = 0
        self.log_file: Optional[TextIO] = None

    def start_session(self) -> None:
        """Open the trace file and write the session header."""
        try:
            # pylint: disable=consider-using-with
            self.log_file = open(self.log_file_path, "w", encoding="utf-8")
        except OSError as e:
            print(f"Warning: Could not open trace file: {e}", file=sys.stderr)
            self.log_file = None
            return
        self._write_session_header()

    def _write_session_header(self) -> None:
        header: Dict[str, Any] = {
            "event_type": "SESSION_START",
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "platform": sys.platform,
            "terminal_type": os.environ.get("TERM", "unknown"),
            "ssh_session": "SSH_CONNECTION" in os.environ or "SSH_CLIENT" in os.environ,
        }
        if sys.stdin.isatty():
            try:
                attrs = termios.tcgetattr(sys.stdin.fileno())
                header["terminal_state"] = {"iflag": attrs[0], "lflag": attrs[3]}
            except termios.error:
                header["terminal_state"] = "unavailable"
        else:
            header["terminal_state"] = "not_a_tty"
        self._write_event(header)

    def log_extension(self, unit: Optional[str], blocking: bool, duration: float) -> None:
        """
        Record one attempt to extend the pending buffer.

        Args:
            unit: Character read, or None if the budget elapsed
            blocking: True for a plain read, False for a budgeted one
            duration: Seconds spent waiting
        """
        if unit is None:
            self.timeout_count += 1
        self._write_event(
            {
                "event_type": "EXTEND",
                "elapsed_seconds": time.monotonic() - self.session_start,
                "unit_hex": unit.encode("utf-8", "surrogatepass").hex() if unit is not None else None,
                "timed_out": unit is None,
                "blocking": blocking,
                "wait_ms": round(duration * 1000, 2),
            }
        )

    def log_resolution(self, consumed: str, event: Optional[Event], more: bool) -> None:
        """
        Record a resolved decode.

        Args:
            consumed: Units removed from the buffer
            event: Event dispatched, None for a skipped unit
            more: Whether the decoder was allowed to ask for more input
        """
        self._write_event(
            {
                "event_type": "RESOLVE",
                "elapsed_seconds": time.monotonic() - self.session_start,
                "consumed_hex": consumed.encode("utf-8", "surrogatepass").hex(),
                "event": type(event).__name__ if event is not None else None,
                "fields": list(event) if event is not None else None,
                "more_allowed": more,
            }
        )

    def _write_event(self, event: Dict[str, Any]) -> None:
        if self.log_file:
            self.event_count += 1
            self.log_file.write(json.dumps(event) + "\n")
            self.log_file.flush()

    def close(self) -> None:
        """Write the session footer and close the file."""
        if self.log_file:
            self._write_event(
                {
                    "event_type": "SESSION_END",
                    "timestamp_utc": datetime.now(timezone.utc).isoformat(),
                    "total_events": self.event_count,
                    "timeouts": self.timeout_count,
                }
            )
            self.log_file.close()
            self.log_file = None


# Global trace logger instance (None when tracing is disabled)
# pylint: disable=invalid-name
_trace_logger: Optional[DecodeTraceLogger] = None


def init_trace_logger(log_file_path: str = "rawline_trace.jsonl") -> None:
    """Start tracing to ``log_file_path``."""
    # pylint: disable=global-statement
    global _trace_logger
    _trace_logger = DecodeTraceLogger(log_file_path)
    _trace_logger.start_session()


def get_trace_logger() -> Optional[DecodeTraceLogger]:
    return _trace_logger


def shutdown_trace_logger() -> None:
    """Stop tracing and close the trace file."""
    # pylint: disable=global-statement
    global _trace_logger
    if _trace_logger:
        _trace_logger.close()
        _trace_logger = None

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
# Review for correctness and security.

"""
Command-line interface for rawline.

Reads lines from the terminal in raw mode and prints what was entered.
Mostly useful for checking how a terminal encodes its keys and for tuning
the escape timeout on slow links.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from rawline.config import load_config
from rawline.debug_logger import init_trace_logger, shutdown_trace_logger
from rawline.decoder import Event
from rawline.editor import LineEditor
from rawline.errors import EndOfInput, Interrupted, IOFailure, ModeControlFailure
from rawline.keys import describe_key
from rawline.reader import LineReader
from rawline.source import FileDescriptorSource
from rawline.terminal import TerminalMode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def _configure_logging(log_level: str, log_file: Optional[str]) -> None:
    """Configure logging handlers for CLI execution."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.insert(0, logging.FileHandler(os.path.expanduser(log_file), encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


# Hardcoded defaults for config-overridable fields.
# Applied after config merging for any field still set to None.
_HARDCODED_DEFAULTS: Dict[str, Any] = {
    "read_timeout": 0.07,
    "history_size": 100,
    "encoding": "utf-8",
    "log_level": "WARNING",
}


def _apply_config_to_args(args: argparse.Namespace, config: Dict[str, Any]) -> None:
    """
    Overlay config file values onto a parsed argument namespace.

    Only fields that are still ``None`` (i.e. not explicitly set on the CLI)
    are updated.
    """
    for key, value in config.items():
        if hasattr(args, key) and getattr(args, key) is None:
            setattr(args, key, value)


def handle_options(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse and validate command-line arguments."""
    parser = argparse.ArgumentParser(
        description="rawline - read lines from a raw-mode terminal, decoding key sequences",
    )
    parser.add_argument(
        "-t",
        "--read-timeout",
        type=float,
        default=None,
        help="Seconds to wait for the rest of an escape sequence (default: 0.07)",
    )
    parser.add_argument(
        "-H",
        "--history-size",
        type=int,
        default=None,
        help="Number of accepted lines kept for up/down recall (default: 100)",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=0,
        help="Number of lines to read (default: 0 for unlimited)",
    )
    parser.add_argument(
        "-e",
        "--show-events",
        action="store_true",
        help="Print every decoded event as it is dispatched",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Input encoding of the terminal (default: utf-8)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path for persistent logging",
    )
    parser.add_argument(
        "--trace-file",
        type=str,
        default=None,
        help="Write a JSONL trace of buffer reads and decodes to this file",
    )
    parser.add_argument(
        "--no-config",
        action="store_true",
        default=False,
        help="Skip loading ~/.rawline.conf config file",
    )

    args = parser.parse_args(argv)

    if not args.no_config:
        try:
            config = load_config()
            _apply_config_to_args(args, config)
        except ValueError as exc:
            parser.error(str(exc))

    for field, default in _HARDCODED_DEFAULTS.items():
        if getattr(args, field, None) is None:
            setattr(args, field, default)

    if args.read_timeout < 0:
        parser.error("--read-timeout must be non-negative.")
    if args.history_size < 0:
        parser.error("--history-size must be non-negative.")
    if args.count < 0:
        parser.error("--count must be non-negative.")
    return args


def format_event(event: Event) -> str:
    """One-line description of a decoded event for --show-events."""
    name = describe_key(event)
    fields = ", ".join(repr(value) for value in event)
    text = f"{type(event).__name__}({fields})"
    return f"{text} [{name}]" if name else text


def run(args: argparse.Namespace, fd: Optional[int] = None) -> int:
    """
    Read lines until end of input, interruption or ``args.count`` lines.

    Returns:
        Process exit code.
    """
    if fd is None:
        fd = sys.stdin.fileno()

    def show_event(event: Event) -> None:
        # Raw mode disables output post-processing, so emit CR LF explicitly
        sys.stdout.write(format_event(event) + "\r\n")
        sys.stdout.flush()

    reader = LineReader(
        FileDescriptorSource(fd, encoding=args.encoding),
        handler=LineEditor(history_size=args.history_size),
        terminal=TerminalMode(fd),
        read_timeout=args.read_timeout,
        on_event=show_event if args.show_events else None,
    )

    count = 0
    try:
        for line in reader.lines():
            print(repr(line), flush=True)
            count += 1
            if args.count and count >= args.count:
                break
    except Interrupted:
        print("^C", file=sys.stderr)
        return EXIT_INTERRUPTED
    except EndOfInput as exc:
        logger.error("Input ended inside an escape sequence after %r", exc.partial_line)
        return EXIT_FAILURE
    except (IOFailure, ModeControlFailure) as exc:
        logger.error("Error: %s", exc)
        return EXIT_FAILURE
    logger.info("Read %d line(s)", count)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> None:
    """Main entrypoint for the CLI - parses arguments and runs the reader."""
    args = handle_options(argv)
    _configure_logging(args.log_level, args.log_file)
    if args.trace_file:
        init_trace_logger(os.path.expanduser(args.trace_file))
    try:
        code = run(args)
    finally:
        shutdown_trace_logger()
    sys.exit(code)

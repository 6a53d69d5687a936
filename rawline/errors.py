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
Error types raised while reading a line from the terminal.
"""


class RawLineError(Exception):
    """Base class for all rawline errors."""


class EndOfInput(RawLineError, EOFError):
    """
    The character source was closed.

    Attributes:
        partial_line: Text committed to the line before the stream ended.
        sequence_pending: True when a multi-unit sequence was left incomplete.
    """

    def __init__(self, message: str = "end of input", partial_line: str = "", sequence_pending: bool = False) -> None:
        super().__init__(message)
        self.partial_line = partial_line
        self.sequence_pending = sequence_pending


class Interrupted(RawLineError):
    """The user pressed Ctrl+C while a line was being read."""


class IOFailure(RawLineError, OSError):
    """The underlying character source failed."""


class ModeControlFailure(RawLineError):
    """The terminal could not be switched into or out of raw mode."""


class DecoderStateError(RawLineError, RuntimeError):
    """The decoder asked for more input after being told none would come."""

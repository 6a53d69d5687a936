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
rawline - read lines from a raw-mode terminal, decoding escape sequences.
"""

import logging

from rawline.editor import LineEditor
from rawline.errors import DecoderStateError, EndOfInput, Interrupted, IOFailure, ModeControlFailure, RawLineError
from rawline.line_state import LineHandler, LineState
from rawline.reader import LineReader
from rawline.source import TIMEOUT, CharacterSource, FileDescriptorSource, ScriptedSource
from rawline.terminal import TerminalMode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "TIMEOUT",
    "CharacterSource",
    "DecoderStateError",
    "EndOfInput",
    "FileDescriptorSource",
    "IOFailure",
    "Interrupted",
    "LineEditor",
    "LineHandler",
    "LineReader",
    "LineState",
    "ModeControlFailure",
    "RawLineError",
    "ScriptedSource",
    "TerminalMode",
]

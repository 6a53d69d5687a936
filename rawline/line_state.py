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
Line state and the base reaction handler.

LineHandler has one hook per decoded event kind. The base class only
implements the line discipline every reader needs (Enter, Ctrl+D on an
empty line, Ctrl+C). Everything else is a no-op meant to be overridden by
a concrete editor, see rawline.editor.LineEditor.
"""

import logging
from typing import List, Optional

import readchar.key

from rawline.decoder import Codepoint, Control, ControlSequence, Event, SingleShift, TwoByte

logger = logging.getLogger(__name__)

ENTER = readchar.key.CR
END_OF_TRANSMISSION = readchar.key.CTRL_D
INTERRUPT = readchar.key.CTRL_C
BACKSPACE = readchar.key.CTRL_H
DELETE = "\x7f"


class LineState:
    """
    Per-read line state.

    Attributes:
        interrupted: Ctrl+C was seen; the reader aborts before the next unit.
        completed: The line is finished (Enter, or Ctrl+D on an empty line).
        end_of_input: The line was finished by Ctrl+D on an empty line.
        units: Committed text units, joined to form the result.
        cursor: Insertion point into ``units`` for editors that track one.
    """

    def __init__(self) -> None:
        self.interrupted = False
        self.completed = False
        self.end_of_input = False
        self.units: List[str] = []
        self.cursor = 0

    @property
    def text(self) -> str:
        return "".join(self.units)

    def result(self) -> Optional[str]:
        """The value a finished read returns: the text, or None at end of input."""
        return None if self.end_of_input else self.text

    def __repr__(self) -> str:
        return (
            f"LineState(text={self.text!r}, cursor={self.cursor}, completed={self.completed}, "
            f"end_of_input={self.end_of_input}, interrupted={self.interrupted})"
        )


class LineHandler:
    """Base reaction handler; subclass and override hooks for richer editing."""

    def on_start(self, state: LineState) -> None:
        """Called once at the start of every read, before any input."""

    def on_csi(self, state: LineState, parameters: str, function: str) -> None:
        pass

    def on_shift(self, state: LineState, set_number: int, char: str) -> None:
        pass

    def on_two_byte(self, state: LineState, char: str) -> None:
        pass

    def on_control(self, state: LineState, char: str) -> None:
        if char == ENTER:
            state.completed = True
        elif char == END_OF_TRANSMISSION:
            # Only an empty line ends input; otherwise Ctrl+D is ignored
            if not state.units:
                state.completed = True
                state.end_of_input = True
        elif char == INTERRUPT:
            logger.debug("Interrupt key received with %d units on the line", len(state.units))
            state.interrupted = True
        elif char in (BACKSPACE, DELETE):
            pass

    def on_codepoint(self, state: LineState, codepoint: int) -> None:
        pass

    def dispatch(self, state: LineState, event: Event) -> None:
        """Route a decoded event to its hook."""
        if isinstance(event, ControlSequence):
            self.on_csi(state, event.parameters, event.function)
        elif isinstance(event, SingleShift):
            self.on_shift(state, event.set_number, event.char)
        elif isinstance(event, TwoByte):
            self.on_two_byte(state, event.char)
        elif isinstance(event, Control):
            self.on_control(state, event.char)
        elif isinstance(event, Codepoint):
            self.on_codepoint(state, event.codepoint)
        else:
            raise TypeError(f"Unknown event type: {type(event).__name__}")

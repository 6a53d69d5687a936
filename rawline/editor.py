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
A line editor built on the LineHandler hooks.

Supports insertion at the cursor, Backspace and Delete, cursor motion
(arrows, Home/End, Ctrl+A/Ctrl+E), Ctrl+U/Ctrl+K kills and up/down history
recall. It only edits the line state; drawing the line is up to the caller.
"""

import logging
from typing import List, Optional

import readchar.key

from rawline.decoder import SingleShift
from rawline.keys import describe_csi, describe_key
from rawline.line_state import BACKSPACE, DELETE, ENTER, LineHandler, LineState

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 100


class LineEditor(LineHandler):
    """
    Editing line handler with history.

    Args:
        history_size: Maximum number of accepted lines kept for recall.
    """

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE) -> None:
        if history_size < 0:
            raise ValueError("history_size must be non-negative")
        self.history_size = history_size
        self.history: List[str] = []
        self._history_index = -1
        self._draft: List[str] = []

    def on_start(self, state: LineState) -> None:
        self._history_index = -1
        self._draft = []

    # -- Hooks ---------------------------------------------------------------

    def on_codepoint(self, state: LineState, codepoint: int) -> None:
        state.units.insert(state.cursor, chr(codepoint))
        state.cursor += 1

    def on_control(self, state: LineState, char: str) -> None:
        if char in (BACKSPACE, DELETE):
            self.erase_backward(state)
        elif char == readchar.key.CTRL_A:
            state.cursor = 0
        elif char == readchar.key.CTRL_E:
            state.cursor = len(state.units)
        elif char == readchar.key.CTRL_B:
            self.move(state, -1)
        elif char == readchar.key.CTRL_F:
            self.move(state, 1)
        elif char == readchar.key.CTRL_U:
            del state.units[: state.cursor]
            state.cursor = 0
        elif char == readchar.key.CTRL_K:
            del state.units[state.cursor :]
        else:
            super().on_control(state, char)
            if char == ENTER and state.completed:
                self.add_to_history(state.text)

    def on_csi(self, state: LineState, parameters: str, function: str) -> None:
        self.handle_key(state, describe_csi(parameters, function))

    def on_shift(self, state: LineState, set_number: int, char: str) -> None:
        self.handle_key(state, describe_key(SingleShift(set_number, char)))

    # -- Editing operations --------------------------------------------------

    def handle_key(self, state: LineState, name: Optional[str]) -> None:
        """Apply a named editing key; unknown names are ignored."""
        if name == "arrow_left":
            self.move(state, -1)
        elif name == "arrow_right":
            self.move(state, 1)
        elif name == "home":
            state.cursor = 0
        elif name == "end":
            state.cursor = len(state.units)
        elif name == "delete":
            if state.cursor < len(state.units):
                del state.units[state.cursor]
        elif name == "arrow_up":
            self.recall(state, 1)
        elif name == "arrow_down":
            self.recall(state, -1)
        else:
            logger.debug("Ignoring key %s", name)

    def move(self, state: LineState, offset: int) -> None:
        state.cursor = max(0, min(len(state.units), state.cursor + offset))

    def erase_backward(self, state: LineState) -> None:
        if state.cursor > 0:
            del state.units[state.cursor - 1]
            state.cursor -= 1

    def set_text(self, state: LineState, text: str) -> None:
        state.units = list(text)
        state.cursor = len(state.units)

    # -- History -------------------------------------------------------------

    def add_to_history(self, text: str) -> None:
        """Remember an accepted line, skipping blanks and consecutive duplicates."""
        if not text.strip() or self.history_size == 0:
            return
        if self.history and self.history[0] == text:
            return
        self.history.insert(0, text)
        del self.history[self.history_size :]

    def recall(self, state: LineState, direction: int) -> None:
        """
        Step through history.

        Args:
            state: Line being edited
            direction: 1 for older entries (up), -1 for newer (down)
        """
        new_index = self._history_index + direction
        if new_index < -1 or new_index >= len(self.history):
            return
        if self._history_index == -1:
            self._draft = list(state.units)
        self._history_index = new_index
        if new_index == -1:
            self.set_text(state, "".join(self._draft))
        else:
            self.set_text(state, self.history[new_index])

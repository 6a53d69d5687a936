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
Raw-mode control for the terminal a line is read from.
"""

import contextlib
import logging
import sys
import termios
import tty
from typing import Any, Generator, List, Optional

from rawline.errors import ModeControlFailure

logger = logging.getLogger(__name__)


class TerminalMode:
    """
    Switches a terminal file descriptor into raw mode and back.

    ``enter()`` and ``restore()`` are idempotent. A descriptor that is not a
    terminal (a pipe, a test double) is left untouched.
    """

    def __init__(self, fd: Optional[int] = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved: Optional[List[Any]] = None
        self.active = False

    def enter(self) -> None:
        """
        Disable echo and line buffering.

        Raises:
            ModeControlFailure: If the terminal attributes cannot be changed.
        """
        if self.active:
            return
        try:
            saved = termios.tcgetattr(self.fd)
        except termios.error:
            logger.debug("fd %d is not a terminal; raw mode skipped", self.fd)
            return
        try:
            tty.setraw(self.fd)
        except termios.error as exc:
            raise ModeControlFailure(f"Cannot enter raw mode on fd {self.fd}: {exc}") from exc
        self._saved = saved
        self.active = True
        logger.debug("Entered raw mode on fd %d", self.fd)

    def restore(self) -> None:
        """
        Restore the attributes saved by ``enter()``.

        Raises:
            ModeControlFailure: If the terminal attributes cannot be restored.
        """
        if not self.active:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
        except termios.error as exc:
            raise ModeControlFailure(f"Cannot restore terminal mode on fd {self.fd}: {exc}") from exc
        self.active = False
        self._saved = None
        logger.debug("Restored terminal mode on fd %d", self.fd)

    @contextlib.contextmanager
    def raw(self) -> Generator[None, None, None]:
        """Context manager holding raw mode for the duration of the block.

        Normal mode is restored on every exit path, including a signal
        interrupting the caller.

        Example::

            with TerminalMode().raw():
                line = reader.read_line()
        """
        self.enter()
        try:
            yield
        finally:
            self.restore()

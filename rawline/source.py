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
Character sources with a bounded-wait read primitive.

A source delivers one character at a time. Besides the plain blocking
``read()``, every source offers ``read_with_budget(timeout)`` which gives up
after ``timeout`` seconds and returns None. That timeout is what separates
a bare Escape key press from the first byte of an escape sequence.

End of stream is always reported by raising EndOfInput, never by returning
None, so callers can tell a closed stream from a quiet one.
"""

import codecs
import logging
import os
import select
import time
from collections import deque
from typing import Deque, Iterable, Optional, Union

from rawline.errors import EndOfInput, IOFailure

logger = logging.getLogger(__name__)

# Escape-key disambiguation window. Remote sessions (SSH, VMs) may need more.
DEFAULT_READ_TIMEOUT = 0.07
POLL_INTERVAL_SECONDS = 0.001


class _Timeout:
    """Marker for a scripted pause that outlasts any read budget."""

    def __repr__(self) -> str:
        return "TIMEOUT"


TIMEOUT = _Timeout()


class CharacterSource:
    """
    Base class for character sources.

    Subclasses implement ``read()`` and ``ready()``. The default
    ``read_with_budget()`` polls ``ready()`` until the budget runs out.
    """

    def read(self) -> str:
        """Block until one character is available and return it."""
        raise NotImplementedError

    def ready(self) -> bool:
        """Return True if ``read()`` would not block."""
        raise NotImplementedError

    def read_with_budget(self, timeout: float) -> Optional[str]:
        """
        Read one character, waiting at most ``timeout`` seconds.

        Readiness is checked at least once even for a zero budget.

        Args:
            timeout: Maximum wait in seconds.

        Returns:
            The character, or None if the budget elapsed first.

        Raises:
            EndOfInput: If the source is closed.
        """
        deadline = time.monotonic() + timeout
        while True:
            if self.ready():
                return self.read()
            if timeout <= 0 or time.monotonic() >= deadline:
                return None
            time.sleep(POLL_INTERVAL_SECONDS)


class FileDescriptorSource(CharacterSource):
    """
    Character source over a raw file descriptor, typically stdin in raw mode.

    Bytes are read one at a time and decoded incrementally. Undecodable bytes
    come out as lone low surrogates (``surrogateescape``), which the decoder
    skips.
    """

    def __init__(self, fd: int, encoding: str = "utf-8") -> None:
        self.fd = fd
        self.encoding = encoding
        self.closed = False
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="surrogateescape")
        self._pending: Deque[str] = deque()

    def _read_byte(self) -> bytes:
        try:
            return os.read(self.fd, 1)
        except OSError as exc:
            raise IOFailure(exc.errno, f"Read from fd {self.fd} failed: {exc.strerror}") from exc

    def _wait_readable(self, timeout: Optional[float]) -> bool:
        try:
            rlist, _, _ = select.select([self.fd], [], [], timeout)
        except (OSError, ValueError) as exc:
            raise IOFailure(f"select() on fd {self.fd} failed: {exc}") from exc
        return bool(rlist)

    def _fill(self) -> None:
        """Feed one byte to the decoder. A partial character stays inside it."""
        byte = self._read_byte()
        if byte:
            self._pending.extend(self._decoder.decode(byte))
            return
        # Flush a truncated multi-byte character before reporting EOF
        self._pending.extend(self._decoder.decode(b"", final=True))
        self.closed = True

    def read(self) -> str:
        while not self._pending:
            if self.closed:
                raise EndOfInput()
            self._fill()
        return self._pending.popleft()

    def ready(self) -> bool:
        while not self._pending and not self.closed and self._wait_readable(0):
            self._fill()
        return bool(self._pending) or self.closed

    def read_with_budget(self, timeout: float) -> Optional[str]:
        deadline = time.monotonic() + max(0.0, timeout)
        while not self._pending and not self.closed:
            if not self._wait_readable(max(0.0, deadline - time.monotonic())):
                return None
            self._fill()
        return self.read()


ScriptItem = Union[str, _Timeout]


class ScriptedSource(CharacterSource):
    """
    Source that replays a fixed script, for tests and demos.

    The script is a sequence of strings and ``TIMEOUT`` markers. Strings are
    delivered one character at a time. A ``TIMEOUT`` marker makes the next
    budgeted read time out; plain blocking reads wait through it. When the
    script runs out the source reports end of input.
    """

    def __init__(self, script: Iterable[ScriptItem] = ()) -> None:
        self._items: Deque[ScriptItem] = deque()
        self.feed(*script)
        self.timeouts = 0

    def feed(self, *items: ScriptItem) -> None:
        for item in items:
            if item is TIMEOUT:
                self._items.append(item)
            else:
                self._items.extend(item)

    def read(self) -> str:
        while self._items and self._items[0] is TIMEOUT:
            self._items.popleft()
        if not self._items:
            raise EndOfInput()
        return self._items.popleft()

    def ready(self) -> bool:
        # A closed stream is "ready": reading it reports end of input at once
        return not self._items or self._items[0] is not TIMEOUT

    def read_with_budget(self, timeout: float) -> Optional[str]:
        if self._items and self._items[0] is TIMEOUT:
            self._items.popleft()
            self.timeouts += 1
            return None
        return self.read()

    def remaining(self) -> int:
        """Number of characters still scripted."""
        return sum(1 for item in self._items if item is not TIMEOUT)

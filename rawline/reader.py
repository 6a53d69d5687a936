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
Line reader: the read/decode/dispatch loop.

One call to ``LineReader.read_line()`` runs a small state machine over a
fresh ReadContext:

- IDLE: the buffer is empty, so block for the next character.
- RESOLVING: ask the decoder about the head of the buffer. A resolved unit
  is removed and dispatched to the handler; an inconclusive answer moves to
  AWAITING_MORE.
- AWAITING_MORE: try to read one more character within the read timeout.
  If none arrives the buffer is marked exhausted, and the decoder must then
  commit to an answer. This is how a lone Escape key press is told apart
  from the start of an escape sequence.

Ctrl+C only sets a flag on the line state; the loop checks it before
decoding the next unit.
"""

import enum
import logging
import time
from typing import Callable, Iterator, Optional

from rawline.buffer import PendingBuffer
from rawline.debug_logger import get_trace_logger
from rawline.decoder import Event, decode, is_high_surrogate
from rawline.errors import DecoderStateError, EndOfInput, Interrupted
from rawline.line_state import LineHandler, LineState
from rawline.source import DEFAULT_READ_TIMEOUT, CharacterSource
from rawline.terminal import TerminalMode

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    IDLE = "idle"
    AWAITING_MORE = "awaiting_more"
    RESOLVING = "resolving"


class ReadContext:
    """Everything one ``read_line()`` call owns."""

    def __init__(self) -> None:
        self.buffer = PendingBuffer()
        self.line = LineState()
        self.phase = Phase.IDLE


class LineReader:
    """
    Reads lines from a character source, decoding terminal key sequences.

    Args:
        source: Character source to read from.
        handler: Reaction handler for decoded events. Defaults to the base
            LineHandler, which only handles Enter, Ctrl+D and Ctrl+C.
        terminal: Raw-mode controller bracketing each read, or None to leave
            the terminal alone.
        read_timeout: Seconds to wait for the rest of an ambiguous sequence.
            None waits indefinitely.
        on_event: Optional callback invoked with every dispatched event.
    """

    def __init__(
        self,
        source: CharacterSource,
        handler: Optional[LineHandler] = None,
        terminal: Optional[TerminalMode] = None,
        read_timeout: Optional[float] = DEFAULT_READ_TIMEOUT,
        on_event: Optional[Callable[[Event], None]] = None,
    ) -> None:
        if read_timeout is not None and read_timeout < 0:
            raise ValueError("read_timeout must be non-negative or None")
        self.source = source
        self.handler = handler if handler is not None else LineHandler()
        self.terminal = terminal
        self.read_timeout = read_timeout
        self.on_event = on_event
        self.context: Optional[ReadContext] = None

    def read_line(self) -> Optional[str]:
        """
        Read one line.

        Returns:
            The line text, or None if the user pressed Ctrl+D on an empty line.

        Raises:
            EndOfInput: If the source closed before the line was finished.
            Interrupted: If the user pressed Ctrl+C.
            IOFailure: If the source failed.
            ModeControlFailure: If raw mode could not be entered or left.
        """
        if self.terminal is None:
            return self._read_line()
        with self.terminal.raw():
            return self._read_line()

    def lines(self) -> Iterator[str]:
        """
        Yield lines until end of input.

        Stops on Ctrl+D on an empty line, or when the source closes while
        no sequence is pending; a partially typed line is yielded first.
        """
        while True:
            try:
                line = self.read_line()
            except EndOfInput as exc:
                if exc.sequence_pending:
                    raise
                if exc.partial_line:
                    yield exc.partial_line
                return
            if line is None:
                return
            yield line

    def _read_line(self) -> Optional[str]:
        context = ReadContext()
        self.context = context
        self.handler.on_start(context.line)
        line = context.line
        while not line.completed:
            if line.interrupted:
                line.interrupted = False
                raise Interrupted("Line input interrupted")
            self._process_unit(context)
        return line.result()

    def _process_unit(self, context: ReadContext) -> None:
        """Run the state machine until one unit has been resolved."""
        buffer = context.buffer
        context.phase = Phase.RESOLVING if len(buffer) else Phase.IDLE
        while True:
            if context.phase is Phase.IDLE:
                buffer.append(self._extend(context, blocking=True))
                context.phase = Phase.RESOLVING
            elif context.phase is Phase.AWAITING_MORE:
                try:
                    unit = self._extend(context, blocking=self.read_timeout is None)
                except EndOfInput:
                    if not is_high_surrogate(buffer.text[0]):
                        raise
                    # Drop the unpaired surrogate; end of input surfaces on the next plain read
                    logger.debug("Input closed after unpaired surrogate %r", buffer.text)
                    unit = None
                if unit is None:
                    logger.debug("Read timeout with %r pending", buffer.text)
                    buffer.mark_exhausted()
                else:
                    buffer.append(unit)
                context.phase = Phase.RESOLVING
            else:
                more = not buffer.exhausted
                decoded = decode(buffer.text, more)
                if decoded is None:
                    if not more:
                        raise DecoderStateError(f"Decoder requested more input for {buffer.text!r} after timeout")
                    context.phase = Phase.AWAITING_MORE
                    continue
                consumed = buffer.consume(decoded.consumed)
                trace = get_trace_logger()
                if trace:
                    trace.log_resolution(consumed, decoded.event, more)
                if decoded.event is None:
                    logger.debug("Skipped unpaired unit %r", consumed)
                else:
                    self.handler.dispatch(context.line, decoded.event)
                    if self.on_event is not None:
                        self.on_event(decoded.event)
                context.phase = Phase.IDLE
                return

    def _extend(self, context: ReadContext, blocking: bool) -> Optional[str]:
        """Read one character; None means the read timeout elapsed."""
        started = time.monotonic()
        try:
            if blocking:
                unit: Optional[str] = self.source.read()
            else:
                unit = self.source.read_with_budget(self.read_timeout)
        except EndOfInput as exc:
            pending = len(context.buffer) > 0
            raise EndOfInput(
                "Input closed in the middle of a sequence" if pending else "Input closed",
                partial_line=context.line.text,
                sequence_pending=pending,
            ) from exc
        trace = get_trace_logger()
        if trace:
            trace.log_extension(unit, blocking, time.monotonic() - started)
        return unit

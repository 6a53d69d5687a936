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
Decoder for terminal input sequences.

Recognises, in priority order:

- ESC-introduced forms: CSI (``ESC [`` params intermediates final),
  SS2/SS3 (``ESC N x`` / ``ESC O x``) and any other two-unit ``ESC x``
  (C1 equivalents and Meta-modified keys)
- C0 control characters and DEL
- Unicode codepoints, joining UTF-16 surrogate pairs

String sequences (DCS, OSC, ...) are not recognised; their introducers come
out as two-unit events and the payload as ordinary characters.

``decode()`` is pure. It looks at the head of the buffer and returns either
None ("inconclusive, more input may change the answer") or a Decoded result
with the number of units consumed and the event to dispatch.
"""

from typing import NamedTuple, Optional, Union

ESC = "\x1b"
DEL = "\x7f"
CSI_INTRODUCER = "["
SS2_INTRODUCER = "N"
SS3_INTRODUCER = "O"

_SHIFT_SETS = {SS2_INTRODUCER: 2, SS3_INTRODUCER: 3}


class ControlSequence(NamedTuple):
    """CSI sequence: ``ESC [`` + parameters + function (intermediates + final)."""

    parameters: str
    function: str

    @property
    def sequence(self) -> str:
        return ESC + CSI_INTRODUCER + self.parameters + self.function


class SingleShift(NamedTuple):
    """SS2 or SS3 sequence carrying one character from the shifted set."""

    set_number: int
    char: str

    @property
    def sequence(self) -> str:
        introducer = SS2_INTRODUCER if self.set_number == 2 else SS3_INTRODUCER
        return ESC + introducer + self.char


class TwoByte(NamedTuple):
    """Any other ``ESC x`` pair."""

    char: str

    @property
    def sequence(self) -> str:
        return ESC + self.char


class Control(NamedTuple):
    """A single C0 control character or DEL."""

    char: str

    @property
    def sequence(self) -> str:
        return self.char


class Codepoint(NamedTuple):
    """A complete Unicode codepoint."""

    codepoint: int

    @property
    def sequence(self) -> str:
        return chr(self.codepoint)


Event = Union[ControlSequence, SingleShift, TwoByte, Control, Codepoint]


class Decoded(NamedTuple):
    """A resolved decode: units consumed and the event, None for skipped units."""

    consumed: int
    event: Optional[Event]


def is_parameter(char: str) -> bool:
    return 0x30 <= ord(char) <= 0x3F


def is_intermediate(char: str) -> bool:
    return 0x20 <= ord(char) <= 0x2F


def is_final(char: str) -> bool:
    return 0x40 <= ord(char) <= 0x7E


def is_high_surrogate(char: str) -> bool:
    return 0xD800 <= ord(char) <= 0xDBFF


def is_low_surrogate(char: str) -> bool:
    return 0xDC00 <= ord(char) <= 0xDFFF


def join_surrogates(high: str, low: str) -> int:
    """Combine a UTF-16 surrogate pair into one codepoint."""
    return 0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00)


def _decode_csi(units: str, more: bool) -> Optional[Decoded]:
    index = 2
    while index < len(units) and is_parameter(units[index]):
        index += 1
    intermediate_start = index
    while index < len(units) and is_intermediate(units[index]):
        index += 1
    if index >= len(units) and more:
        return None
    if index < len(units) and is_final(units[index]):
        event = ControlSequence(units[2:intermediate_start], units[intermediate_start : index + 1])
        return Decoded(index + 1, event)
    # No final byte and nothing more coming: treat as a plain ESC [ pair
    return Decoded(2, TwoByte(units[1]))


def _decode_escape(units: str, more: bool) -> Optional[Decoded]:
    if len(units) == 1:
        # Bare ESC with more input possible: key press or sequence start
        return None
    introducer = units[1]
    if introducer == CSI_INTRODUCER:
        return _decode_csi(units, more)
    if introducer in _SHIFT_SETS:
        if len(units) == 2 and more:
            return None
        if len(units) > 2:
            return Decoded(3, SingleShift(_SHIFT_SETS[introducer], units[2]))
    return Decoded(2, TwoByte(introducer))


def decode(units: str, more: bool) -> Optional[Decoded]:
    """
    Decode one unit of input from the head of ``units``.

    Args:
        units: Non-empty buffer of pending characters.
        more: True if the caller can still supply more characters.

    Returns:
        Decoded(consumed, event) with 1 <= consumed <= len(units), or None if
        the answer depends on input not yet available. None is only returned
        when ``more`` is True.

    Raises:
        ValueError: If ``units`` is empty.
    """
    if not units:
        raise ValueError("Cannot decode an empty buffer")

    first = units[0]
    if first == ESC and (len(units) > 1 or more):
        return _decode_escape(units, more)

    if ord(first) < 0x20 or first == DEL:
        return Decoded(1, Control(first))

    if is_high_surrogate(first):
        if len(units) == 1 and more:
            return None
        if len(units) > 1 and is_low_surrogate(units[1]):
            return Decoded(2, Codepoint(join_surrogates(first, units[1])))
        return Decoded(1, None)

    if is_low_surrogate(first):
        return Decoded(1, None)

    return Decoded(1, Codepoint(ord(first)))

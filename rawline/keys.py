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
Key names for decoded events.

Maps CSI and SS3 events to names such as ``arrow_up``, ``home`` or ``f5``,
including xterm-style modifier parameters (``ESC [ 1 ; 5 A`` is
``ctrl+arrow_up``). Plain sequences are looked up in the readchar key table;
parameterised ones are parsed from the final byte or the ``~`` key number.
"""

from typing import Dict, Optional

import readchar.key

from rawline.decoder import Control, ControlSequence, Event, SingleShift, TwoByte

KEY_SEQUENCES: Dict[str, str] = {
    readchar.key.UP: "arrow_up",
    readchar.key.DOWN: "arrow_down",
    readchar.key.RIGHT: "arrow_right",
    readchar.key.LEFT: "arrow_left",
    readchar.key.HOME: "home",
    readchar.key.END: "end",
    readchar.key.INSERT: "insert",
    readchar.key.SUPR: "delete",
    readchar.key.PAGE_UP: "page_up",
    readchar.key.PAGE_DOWN: "page_down",
}

# Final byte of CSI/SS3 cursor-key forms
FINAL_KEYS: Dict[str, str] = {
    "A": "arrow_up",
    "B": "arrow_down",
    "C": "arrow_right",
    "D": "arrow_left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

# Key number of CSI <n> ~ forms (VT220)
TILDE_KEYS: Dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "page_up",
    6: "page_down",
    7: "home",
    8: "end",
    11: "f1",
    12: "f2",
    13: "f3",
    14: "f4",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}

CONTROL_NAMES: Dict[str, str] = {
    readchar.key.CR: "enter",
    readchar.key.LF: "line_feed",
    readchar.key.TAB: "tab",
    readchar.key.ESC: "escape",
    readchar.key.CTRL_H: "backspace",
    "\x7f": "backspace",
    "\x00": "ctrl+space",
}

_MODIFIER_BITS = ((1, "shift"), (2, "alt"), (4, "ctrl"))


def modifier_prefix(value: int) -> str:
    """
    Render an xterm modifier parameter as a ``ctrl+shift+`` style prefix.

    xterm sends 1 + a bitmask (shift=1, alt=2, ctrl=4, meta=8).
    """
    bits = value - 1
    names = [name for bit, name in _MODIFIER_BITS if bits & bit]
    if bits & 8:
        names.append("meta")
    return "".join(f"{name}+" for name in sorted(names, key=["ctrl", "alt", "meta", "shift"].index))


def _parse_int(text: str) -> Optional[int]:
    return int(text) if text.isdigit() else None


def describe_csi(parameters: str, function: str) -> Optional[str]:
    """Name a CSI key sequence, or None if it is not a known key."""
    known = KEY_SEQUENCES.get("\x1b[" + parameters + function)
    if known:
        return known

    fields = parameters.split(";") if parameters else []
    modifiers = _parse_int(fields[1]) if len(fields) > 1 else None
    prefix = modifier_prefix(modifiers) if modifiers else ""

    if function == "~":
        number = _parse_int(fields[0]) if fields else None
        name = TILDE_KEYS.get(number) if number is not None else None
    elif len(function) == 1 and function in FINAL_KEYS:
        name = FINAL_KEYS[function]
    else:
        name = None
    return prefix + name if name else None


def describe_key(event: Event) -> Optional[str]:
    """
    Name the key that produced ``event``.

    Args:
        event: A decoded event

    Returns:
        Key name such as ``arrow_left``, ``ctrl+arrow_left``, ``f5``,
        ``alt+x`` or ``ctrl+c``; None for plain characters and unknown
        sequences.
    """
    if isinstance(event, ControlSequence):
        return describe_csi(event.parameters, event.function)
    if isinstance(event, SingleShift):
        if event.set_number == 3:
            return FINAL_KEYS.get(event.char)
        return None
    if isinstance(event, TwoByte):
        return f"alt+{event.char}"
    if isinstance(event, Control):
        return control_name(event.char)
    return None


def control_name(char: str) -> str:
    """Name a C0 control character or DEL."""
    if char in CONTROL_NAMES:
        return CONTROL_NAMES[char]
    return f"ctrl+{chr(ord(char) + 0x40).lower()}"

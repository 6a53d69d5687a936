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
Pending input buffer for the dispatch loop.
"""


class PendingBuffer:
    """
    Characters read from the source but not yet consumed by the decoder.

    Characters are only appended at the tail and removed from the head.
    ``exhausted`` is True exactly when the last attempt to extend the buffer
    timed out.
    """

    def __init__(self) -> None:
        self._units = ""
        self.exhausted = False

    @property
    def text(self) -> str:
        return self._units

    def append(self, unit: str) -> None:
        """Append a unit read from the source and clear the exhausted flag."""
        self._units += unit
        self.exhausted = False

    def mark_exhausted(self) -> None:
        self.exhausted = True

    def consume(self, count: int) -> str:
        """
        Remove count units from the head of the buffer.

        Args:
            count: Number of units the decoder consumed.

        Returns:
            The removed units.

        Raises:
            ValueError: If count is not between 1 and the buffer length.
        """
        if not 1 <= count <= len(self._units):
            raise ValueError(f"Cannot consume {count} units from a buffer of {len(self._units)}")
        consumed = self._units[:count]
        self._units = self._units[count:]
        return consumed

    def __len__(self) -> int:
        return len(self._units)

    def __repr__(self) -> str:
        return f"PendingBuffer({self._units!r}, exhausted={self.exhausted})"

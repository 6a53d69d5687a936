#!/usr/bin/env python3
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
Unit tests for rawline.source - character sources and budgeted reads.

Covers the polling read_with_budget() of the base class, the scripted
source used throughout the tests, and FileDescriptorSource over pipes.
"""

import errno
import os
import sys
import time
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from rawline.errors import EndOfInput, IOFailure  # noqa: E402
from rawline.source import (  # noqa: E402
    DEFAULT_READ_TIMEOUT,
    TIMEOUT,
    CharacterSource,
    FileDescriptorSource,
    ScriptedSource,
)


class NeverReadySource(CharacterSource):
    """Source that never has input; counts readiness checks."""

    def __init__(self) -> None:
        self.checks = 0

    def read(self) -> str:
        raise AssertionError("read() must not be called")

    def ready(self) -> bool:
        self.checks += 1
        return False


class ReadyAfterSource(CharacterSource):
    """Source that becomes ready after a number of readiness checks."""

    def __init__(self, checks_until_ready: int) -> None:
        self.remaining_checks = checks_until_ready

    def read(self) -> str:
        return "z"

    def ready(self) -> bool:
        self.remaining_checks -= 1
        return self.remaining_checks < 0


class TestCharacterSource(unittest.TestCase):
    """Polling behaviour of the default read_with_budget()."""

    def test_default_timeout(self):
        self.assertAlmostEqual(DEFAULT_READ_TIMEOUT, 0.07)

    def test_abstract_methods(self):
        source = CharacterSource()
        with self.assertRaises(NotImplementedError):
            source.read()
        with self.assertRaises(NotImplementedError):
            source.ready()

    def test_budget_elapses(self):
        source = NeverReadySource()
        started = time.monotonic()
        self.assertIsNone(source.read_with_budget(0.02))
        self.assertGreaterEqual(time.monotonic() - started, 0.02)
        self.assertGreater(source.checks, 1)

    def test_zero_budget_checks_once(self):
        source = NeverReadySource()
        self.assertIsNone(source.read_with_budget(0))
        self.assertEqual(source.checks, 1)

    def test_returns_when_ready(self):
        source = ReadyAfterSource(3)
        self.assertEqual(source.read_with_budget(1.0), "z")


class TestScriptedSource(unittest.TestCase):
    """The scripted test double."""

    def test_reads_characters_in_order(self):
        source = ScriptedSource(["ab", "c"])
        self.assertEqual([source.read(), source.read(), source.read()], ["a", "b", "c"])

    def test_exhausted_script_is_end_of_input(self):
        source = ScriptedSource(["a"])
        source.read()
        with self.assertRaises(EndOfInput):
            source.read()
        with self.assertRaises(EndOfInput):
            source.read_with_budget(0.01)

    def test_timeout_marker_times_out_budgeted_read(self):
        source = ScriptedSource(["a", TIMEOUT, "b"])
        self.assertEqual(source.read_with_budget(0.01), "a")
        self.assertFalse(source.ready())
        self.assertIsNone(source.read_with_budget(0.01))
        self.assertEqual(source.timeouts, 1)
        self.assertEqual(source.read_with_budget(0.01), "b")

    def test_blocking_read_waits_through_timeout(self):
        source = ScriptedSource([TIMEOUT, TIMEOUT, "x"])
        self.assertEqual(source.read(), "x")
        self.assertEqual(source.timeouts, 0)

    def test_feed_and_remaining(self):
        source = ScriptedSource()
        source.feed("ab", TIMEOUT, "c")
        self.assertEqual(source.remaining(), 3)
        self.assertTrue(source.ready())

    def test_closed_source_is_ready(self):
        self.assertTrue(ScriptedSource().ready())


class TestFileDescriptorSource(unittest.TestCase):
    """FileDescriptorSource over an os.pipe()."""

    def setUp(self):
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self):
        for fd in (self.read_fd, self.write_fd):
            try:
                os.close(fd)
            except OSError:
                pass

    def _close_writer(self):
        os.close(self.write_fd)
        self.write_fd = -1

    def test_reads_ascii(self):
        os.write(self.write_fd, b"hi")
        source = FileDescriptorSource(self.read_fd)
        self.assertEqual(source.read(), "h")
        self.assertEqual(source.read(), "i")

    def test_decodes_multibyte_utf8(self):
        os.write(self.write_fd, "é€😀".encode("utf-8"))
        source = FileDescriptorSource(self.read_fd)
        self.assertEqual([source.read(), source.read(), source.read()], ["é", "€", "\U0001F600"])

    def test_invalid_byte_becomes_low_surrogate(self):
        os.write(self.write_fd, b"\xff")
        source = FileDescriptorSource(self.read_fd)
        self.assertEqual(source.read(), "\udcff")

    def test_alternate_encoding(self):
        os.write(self.write_fd, b"\xe9")
        source = FileDescriptorSource(self.read_fd, encoding="latin-1")
        self.assertEqual(source.read(), "é")

    def test_end_of_input(self):
        self._close_writer()
        source = FileDescriptorSource(self.read_fd)
        with self.assertRaises(EndOfInput):
            source.read()

    def test_truncated_character_flushed_at_end(self):
        os.write(self.write_fd, b"\xe2\x82")
        self._close_writer()
        source = FileDescriptorSource(self.read_fd)
        self.assertEqual(source.read(), "\udce2")
        self.assertEqual(source.read(), "\udc82")
        with self.assertRaises(EndOfInput):
            source.read()

    def test_budgeted_read_times_out(self):
        source = FileDescriptorSource(self.read_fd)
        started = time.monotonic()
        self.assertIsNone(source.read_with_budget(0.02))
        self.assertGreaterEqual(time.monotonic() - started, 0.015)
        self.assertFalse(source.ready())

    def test_budgeted_read_returns_available_character(self):
        os.write(self.write_fd, b"[")
        source = FileDescriptorSource(self.read_fd)
        self.assertTrue(source.ready())
        self.assertEqual(source.read_with_budget(0.5), "[")

    def test_budgeted_read_bounded_by_partial_character(self):
        os.write(self.write_fd, b"\xe2")
        source = FileDescriptorSource(self.read_fd)
        started = time.monotonic()
        self.assertIsNone(source.read_with_budget(0.05))
        self.assertLess(time.monotonic() - started, 0.5)
        os.write(self.write_fd, b"\x82\xac")
        self.assertEqual(source.read_with_budget(0.5), "€")

    def test_partial_character_is_not_ready(self):
        os.write(self.write_fd, b"\xe2\x82")
        source = FileDescriptorSource(self.read_fd)
        self.assertFalse(source.ready())
        os.write(self.write_fd, b"\xac")
        self.assertTrue(source.ready())
        self.assertEqual(source.read(), "€")

    def test_closed_pipe_is_ready(self):
        self._close_writer()
        source = FileDescriptorSource(self.read_fd)
        self.assertTrue(source.ready())
        with self.assertRaises(EndOfInput):
            source.read()

    def test_budgeted_read_reports_end_of_input(self):
        self._close_writer()
        source = FileDescriptorSource(self.read_fd)
        with self.assertRaises(EndOfInput):
            source.read_with_budget(0.5)

    def test_os_error_becomes_io_failure(self):
        source = FileDescriptorSource(self.read_fd)
        with patch("rawline.source.os.read", side_effect=OSError(errno.EIO, "I/O error")):
            with self.assertRaises(IOFailure) as ctx:
                source.read()
        self.assertEqual(ctx.exception.errno, errno.EIO)

    def test_select_error_becomes_io_failure(self):
        source = FileDescriptorSource(self.read_fd)
        with patch("rawline.source.select.select", side_effect=OSError(errno.EBADF, "bad fd")):
            with self.assertRaises(IOFailure):
                source.ready()


if __name__ == "__main__":
    unittest.main()

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
Unit tests for rawline.decoder - the terminal input grammar.

Covers CSI, SS2/SS3 and two-unit ESC forms, C0 controls, surrogate pairs,
and the inconclusive answers that trigger a timed read.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from rawline.decoder import (  # noqa: E402
    Codepoint,
    Control,
    ControlSequence,
    Decoded,
    SingleShift,
    TwoByte,
    decode,
    join_surrogates,
)


class TestEscapeForms(unittest.TestCase):
    """ESC-introduced sequences."""

    def test_lone_escape_is_inconclusive_when_more_may_come(self):
        self.assertIsNone(decode("\x1b", True))

    def test_lone_escape_without_more_is_control(self):
        self.assertEqual(decode("\x1b", False), Decoded(1, Control("\x1b")))

    def test_csi_with_parameters(self):
        """ESC [ 1 ; 2 m splits into parameters and final."""
        self.assertEqual(decode("\x1b[1;2m", False), Decoded(5, ControlSequence("1;2", "m")))

    def test_csi_arrow_key(self):
        self.assertEqual(decode("\x1b[A", True), Decoded(3, ControlSequence("", "A")))

    def test_csi_with_intermediate(self):
        """Intermediate bytes are reported together with the final byte."""
        self.assertEqual(decode("\x1b[2 q", False), Decoded(5, ControlSequence("2", " q")))

    def test_csi_function_key(self):
        self.assertEqual(decode("\x1b[15~", False), Decoded(5, ControlSequence("15", "~")))

    def test_csi_leaves_trailing_input(self):
        decoded = decode("\x1b[Cabc", True)
        self.assertEqual(decoded, Decoded(3, ControlSequence("", "C")))

    def test_csi_prefixes_are_inconclusive(self):
        sequence = "\x1b[1;5A"
        for end in range(1, len(sequence)):
            with self.subTest(prefix=sequence[:end]):
                self.assertIsNone(decode(sequence[:end], True))

    def test_csi_one_shot_and_incremental_agree(self):
        """Growing the buffer one unit at a time reaches the same answer as one shot."""
        for sequence in ("\x1b[1;2m", "\x1b[A", "\x1b[200~", "\x1b[?25h", "\x1b[2 q"):
            with self.subTest(sequence=sequence):
                one_shot = decode(sequence, False)
                buffer = ""
                incremental = None
                for unit in sequence:
                    buffer += unit
                    incremental = decode(buffer, True)
                    if incremental is not None:
                        break
                self.assertEqual(buffer, sequence)
                self.assertEqual(incremental, one_shot)

    def test_unterminated_csi_falls_back_to_two_byte(self):
        self.assertEqual(decode("\x1b[12", False), Decoded(2, TwoByte("[")))

    def test_csi_with_invalid_final_falls_back_to_two_byte(self):
        self.assertEqual(decode("\x1b[1\x01", True), Decoded(2, TwoByte("[")))
        self.assertEqual(decode("\x1b[\x7f", True), Decoded(2, TwoByte("[")))

    def test_ss3(self):
        self.assertEqual(decode("\x1bOP", True), Decoded(3, SingleShift(3, "P")))

    def test_ss2(self):
        self.assertEqual(decode("\x1bNx", False), Decoded(3, SingleShift(2, "x")))

    def test_ss3_needs_third_unit(self):
        self.assertIsNone(decode("\x1bO", True))

    def test_ss3_without_more_is_two_byte(self):
        self.assertEqual(decode("\x1bO", False), Decoded(2, TwoByte("O")))

    def test_meta_key_is_two_byte(self):
        self.assertEqual(decode("\x1bx", True), Decoded(2, TwoByte("x")))

    def test_escape_escape(self):
        self.assertEqual(decode("\x1b\x1b", True), Decoded(2, TwoByte("\x1b")))


class TestControlCharacters(unittest.TestCase):
    """C0 controls and DEL."""

    def test_c0_controls(self):
        for char in ("\r", "\n", "\x03", "\x04", "\x08", "\x00", "\x1f"):
            with self.subTest(char=char):
                self.assertEqual(decode(char, True), Decoded(1, Control(char)))

    def test_delete(self):
        self.assertEqual(decode("\x7f", True), Decoded(1, Control("\x7f")))


class TestCodepoints(unittest.TestCase):
    """Plain characters and surrogate handling."""

    def test_ascii(self):
        self.assertEqual(decode("a", True), Decoded(1, Codepoint(ord("a"))))

    def test_bmp_character(self):
        self.assertEqual(decode("é", False), Decoded(1, Codepoint(0xE9)))

    def test_astral_character_from_python_string(self):
        self.assertEqual(decode("\U0001F600", False), Decoded(1, Codepoint(0x1F600)))

    def test_surrogate_pair(self):
        self.assertEqual(decode("\ud83d\ude00", True), Decoded(2, Codepoint(0x1F600)))

    def test_high_surrogate_waits_for_low(self):
        self.assertIsNone(decode("\ud83d", True))

    def test_lone_high_surrogate_is_skipped(self):
        self.assertEqual(decode("\ud83d", False), Decoded(1, None))

    def test_high_surrogate_followed_by_other_is_skipped(self):
        self.assertEqual(decode("\ud83dA", True), Decoded(1, None))

    def test_lone_low_surrogate_is_skipped(self):
        self.assertEqual(decode("\udc80", True), Decoded(1, None))

    def test_join_surrogates(self):
        self.assertEqual(join_surrogates("\ud800", "\udc00"), 0x10000)
        self.assertEqual(join_surrogates("\udbff", "\udfff"), 0x10FFFF)


class TestDecodeContract(unittest.TestCase):
    """General guarantees of decode()."""

    def test_empty_buffer_rejected(self):
        with self.assertRaises(ValueError):
            decode("", True)

    def test_never_inconclusive_without_more(self):
        samples = ["\x1b", "\x1b[", "\x1b[1;", "\x1bO", "\x1bN", "\ud83d", "a", "\x1b[ ", "\x1b[1 "]
        for sample in samples:
            with self.subTest(sample=sample):
                decoded = decode(sample, False)
                self.assertIsNotNone(decoded)
                self.assertGreaterEqual(decoded.consumed, 1)
                self.assertLessEqual(decoded.consumed, len(sample))

    def test_event_sequence_round_trip(self):
        for sequence in ("\x1b[1;2m", "\x1bOA", "\x1bNx", "\x1bq", "\r", "z"):
            with self.subTest(sequence=sequence):
                self.assertEqual(decode(sequence, False).event.sequence, sequence)


if __name__ == "__main__":
    unittest.main()

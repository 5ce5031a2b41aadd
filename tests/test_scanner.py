#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tests for the G-code word scanner.
"""

import pytest

from virtual_plotter.gcode.scanner import (
    MoveClass,
    feed_word,
    find_word,
    g_words,
    move_class,
    read_number,
)


@pytest.mark.parametrize("text, expected", [
    ("10", 10.0),
    ("-3", -3.0),
    ("+4.5", 4.5),
    (".5", 0.5),
    ("-.25", -0.25),
    ("5.", 5.0),
    ("1.2.3", 1.2),
    ("007", 7.0),
])
def test_read_number(text, expected):
    """Test the number grammar."""
    value, _ = read_number(text, 0)
    assert value == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "+", "-", ".", "-.", "abc", "+.x"])
def test_read_number_rejects_non_numbers(text):
    """Test that text without digits is not a number."""
    assert read_number(text, 0) is None


def test_read_number_end_index():
    """Test that the trailing point is not consumed."""
    assert read_number("X5.Y2", 1) == (5.0, 2)


def test_unsigned_number_rejects_sign():
    """Test that unsigned words do not accept a sign."""
    assert read_number("-5", 0, signed=False) is None
    assert read_number("5", 0, signed=False) == (5.0, 1)


def test_find_word_first_occurrence():
    """Test that the first numeric occurrence of a letter wins."""
    assert find_word("G1 X10 X20", "X") == 10.0


def test_find_word_skips_bare_letter():
    """Test that a letter without a number is skipped."""
    assert find_word("XA X-7.5", "X") == -7.5


def test_find_word_missing():
    """Test that an absent word yields None."""
    assert find_word("G1 Y5", "X") is None
    assert find_word("", "X") is None


def test_find_word_is_case_sensitive():
    """Test that lower case letters are not words."""
    assert find_word("g1 x10", "X") is None


def test_feed_word():
    """Test explicit feed rate extraction."""
    assert feed_word("G1 X10 F1500") == 1500.0
    assert feed_word("G1 X10 F250.5") == 250.5
    assert feed_word("G1 X10") is None
    # Feed rates are unsigned
    assert feed_word("G1 X10 F-5") is None


def test_g_words():
    """Test collecting G codes."""
    assert g_words("G21 G90 G0 X1") == [21.0, 90.0, 0.0]


@pytest.mark.parametrize("line, expected", [
    ("G0 X10", MoveClass.RAPID),
    ("G00 X10", MoveClass.RAPID),
    ("G1 X10", MoveClass.DRAW),
    ("G01 X10", MoveClass.DRAW),
    ("G0 G1 X10", MoveClass.RAPID),
    ("G10 L2", MoveClass.UNSPECIFIED),
    ("M3 S1000", MoveClass.UNSPECIFIED),
    ("X10 Y10", MoveClass.UNSPECIFIED),
])
def test_move_class(line, expected):
    """Test move classification from G words."""
    assert move_class(line) is expected


def test_leading_zero_g_codes():
    """Test that G01 draws and G00 is rapid despite the leading zero."""
    assert move_class("G01 X1 Y1") is MoveClass.DRAW
    assert move_class("G00 X1 Y1") is MoveClass.RAPID
    assert move_class("G01") is not MoveClass.RAPID

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Word scanner for G-code lines.

A word is a letter immediately followed by a number. Numbers use the
grammar: optional sign, digits, optional '.' followed by digits, with at
least one digit present. A trailing '.' with no digits after it is not part
of the number ("X5." reads as 5).
"""

from enum import Enum
from typing import Iterator, List, Optional, Tuple


class MoveClass(Enum):
    """Move class inferred from the G words on a line."""
    RAPID = "rapid"
    DRAW = "draw"
    UNSPECIFIED = "unspecified"


def _scan_digits(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isdigit() and text[pos].isascii():
        pos += 1
    return pos


def read_number(
    text: str,
    start: int,
    signed: bool = True
) -> Optional[Tuple[float, int]]:
    """Read a number beginning at ``start``.

    Args:
        text: Line being scanned
        start: Index of the first character of the number
        signed: Whether a leading '+' or '-' is accepted

    Returns:
        Tuple of (value, end index), or None if no number starts there
    """
    pos = start
    if signed and pos < len(text) and text[pos] in '+-':
        pos += 1

    int_end = _scan_digits(text, pos)
    end = int_end

    if int_end < len(text) and text[int_end] == '.':
        frac_end = _scan_digits(text, int_end + 1)
        if frac_end > int_end + 1:
            end = frac_end

    # Need at least one digit on either side of the point
    if end == pos:
        return None

    return float(text[start:end]), end


def iter_words(
    text: str,
    letter: str,
    signed: bool = True
) -> Iterator[float]:
    """Yield the value of every ``letter`` word in the line, left to right."""
    pos = text.find(letter)
    while pos != -1:
        result = read_number(text, pos + 1, signed)
        if result is not None:
            value, end = result
            yield value
            pos = text.find(letter, end)
        else:
            pos = text.find(letter, pos + 1)


def find_word(text: str, letter: str, signed: bool = True) -> Optional[float]:
    """Return the value of the first ``letter`` word, or None."""
    return next(iter_words(text, letter, signed), None)


def g_words(text: str) -> List[float]:
    """Return all G word values on the line."""
    return list(iter_words(text, 'G', signed=False))


def feed_word(text: str) -> Optional[float]:
    """Return the explicit feed rate (F word) in mm/min, if any."""
    return find_word(text, 'F', signed=False)


def move_class(text: str) -> MoveClass:
    """Classify a line as rapid, draw or unspecified.

    A G0 anywhere on the line wins over a G1.
    """
    codes = g_words(text)
    if 0 in codes:
        return MoveClass.RAPID
    if 1 in codes:
        return MoveClass.DRAW
    return MoveClass.UNSPECIFIED

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
G-code program parser.

Turns raw G-code text into an ordered list of move commands plus the
bounding box of every commanded X/Y coordinate. The parser accepts any
text: lines it cannot make sense of become commands without coordinates.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from virtual_plotter.gcode.scanner import find_word

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = (';', '(')


@dataclass(frozen=True)
class MoveCommand:
    """One significant line of a program."""
    raw: str
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.x is not None or self.y is not None or self.z is not None

    def to_dict(self) -> Dict[str, Any]:
        return {'command': self.raw, 'x': self.x, 'y': self.y, 'z': self.z}


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned extent of the program's X/Y coordinates in mm."""
    min_x: float = 0.0
    max_x: float = 0.0
    min_y: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> Dict[str, float]:
        return {
            'minX': self.min_x,
            'maxX': self.max_x,
            'minY': self.min_y,
            'maxY': self.max_y,
        }


@dataclass(frozen=True)
class Program:
    """A parsed plot job. Command order is execution order."""
    commands: Tuple[MoveCommand, ...] = ()
    bounds: Bounds = field(default_factory=Bounds)
    filename: Optional[str] = None

    @property
    def total_lines(self) -> int:
        return len(self.commands)

    @property
    def lines(self) -> List[str]:
        return [command.raw for command in self.commands]

    def __len__(self) -> int:
        return len(self.commands)


class _AxisRange:
    """Running min/max for one axis."""

    def __init__(self):
        self.low = None
        self.high = None

    def update(self, value: float) -> None:
        if self.low is None:
            self.low = self.high = value
            return
        self.low = min(self.low, value)
        self.high = max(self.high, value)

    def result(self) -> Tuple[float, float]:
        if self.low is None:
            return 0.0, 0.0
        return self.low, self.high


def is_significant(line: str) -> bool:
    """Return True for lines that carry an instruction."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(COMMENT_PREFIXES)


def parse_line(line: str) -> MoveCommand:
    """Extract the X, Y and Z targets from a single line."""
    raw = line.strip()
    return MoveCommand(
        raw=raw,
        x=find_word(raw, 'X'),
        y=find_word(raw, 'Y'),
        z=find_word(raw, 'Z'),
    )


def parse(text: str, filename: Optional[str] = None) -> Program:
    """Parse G-code text into a Program.

    Args:
        text: Raw program text
        filename: Optional name the program was loaded from

    Returns:
        Program with commands in source order and X/Y bounds
    """
    commands = []
    x_range = _AxisRange()
    y_range = _AxisRange()

    for line in text.split('\n'):
        if not is_significant(line):
            continue

        command = parse_line(line)
        if command.x is not None:
            x_range.update(command.x)
        if command.y is not None:
            y_range.update(command.y)
        commands.append(command)

    min_x, max_x = x_range.result()
    min_y, max_y = y_range.result()
    program = Program(
        commands=tuple(commands),
        bounds=Bounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y),
        filename=filename,
    )

    logger.debug(
        f"Parsed {program.total_lines} commands, bounds {program.bounds.to_dict()}"
    )
    return program

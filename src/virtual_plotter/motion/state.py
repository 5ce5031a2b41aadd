#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Controller state for the virtual plotter.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from virtual_plotter.gcode.parser import MoveCommand, Program

AXES = ('X', 'Y', 'Z')


@dataclass
class Position:
    """Tool position in mm."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def copy(self) -> 'Position':
        return Position(self.x, self.y, self.z)

    def get(self, axis: str) -> float:
        return getattr(self, axis.lower())

    def moved(self, axis: str, delta: float) -> 'Position':
        """Return a copy with ``delta`` added to one axis."""
        result = self.copy()
        setattr(result, axis.lower(), self.get(axis) + delta)
        return result

    def resolve(self, command: MoveCommand) -> 'Position':
        """Return the command's target; absent axes keep this position."""
        return Position(
            x=self.x if command.x is None else command.x,
            y=self.y if command.y is None else command.y,
            z=self.z if command.z is None else command.z,
        )

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


@dataclass
class MotionState:
    """Live controller state.

    Only PlotterSimulator mutates this, always while holding its lock.
    """
    position: Position = field(default_factory=Position)
    connected: bool = False
    port: str = ''
    running: bool = False
    cursor: int = 0
    program: Optional[Program] = None

    @property
    def total_lines(self) -> int:
        return self.program.total_lines if self.program else 0

    @property
    def filename(self) -> Optional[str]:
        return self.program.filename if self.program else None

    def reset_connection(self, port: str) -> None:
        self.connected = True
        self.port = port
        self.position = Position()

    def reset_disconnected(self) -> None:
        self.connected = False
        self.port = ''
        self.running = False

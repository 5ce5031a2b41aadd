#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Virtual pen plotter: a G-code parser and a timed motion simulator.
"""

__version__ = "1.0.0"

from virtual_plotter.errors import (
    AlreadyRunningError,
    InvalidPortError,
    NoProgramError,
    NotConnectedError,
    PlotterError,
)
from virtual_plotter.gcode import Bounds, MoveCommand, Program, parse
from virtual_plotter.motion import PlotterSimulator, ThreadingScheduler, VirtualClock

__all__ = [
    'AlreadyRunningError',
    'Bounds',
    'InvalidPortError',
    'MoveCommand',
    'NoProgramError',
    'NotConnectedError',
    'PlotterError',
    'PlotterSimulator',
    'Program',
    'ThreadingScheduler',
    'VirtualClock',
    'parse',
]

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
G-code parsing for the virtual plotter.
"""

from .parser import Bounds, MoveCommand, Program, parse
from .scanner import MoveClass, feed_word, move_class

__all__ = [
    'Bounds',
    'MoveClass',
    'MoveCommand',
    'Program',
    'feed_word',
    'move_class',
    'parse',
]

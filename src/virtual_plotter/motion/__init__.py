#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Simulated motion for the virtual plotter.
"""

from .events import (
    ConnectionStatus,
    EventBus,
    GcodeLoaded,
    PlotComplete,
    PlotProgress,
    PlotStopped,
    PlotterEvent,
    PositionUpdate,
)
from .scheduler import Scheduler, ThreadingScheduler, VirtualClock
from .simulator import MoveAck, PlotterSimulator
from .state import MotionState, Position

__all__ = [
    'ConnectionStatus',
    'EventBus',
    'GcodeLoaded',
    'MotionState',
    'MoveAck',
    'PlotComplete',
    'PlotProgress',
    'PlotStopped',
    'PlotterEvent',
    'PlotterSimulator',
    'Position',
    'PositionUpdate',
    'Scheduler',
    'ThreadingScheduler',
    'VirtualClock',
]

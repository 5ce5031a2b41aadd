#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Notifications emitted by the virtual plotter.

Each event has a wire ``name`` and a ``payload()`` in the camelCase shape
that front ends consume.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple

from virtual_plotter.gcode.parser import Bounds, MoveCommand

logger = logging.getLogger(__name__)


class PlotterEvent:
    """Base class for all notifications."""
    name: ClassVar[str] = ''

    def payload(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True)
class ConnectionStatus(PlotterEvent):
    name: ClassVar[str] = 'connection_status'
    connected: bool
    port: str

    def payload(self) -> Dict[str, Any]:
        return {'connected': self.connected, 'port': self.port}


@dataclass(frozen=True)
class GcodeLoaded(PlotterEvent):
    name: ClassVar[str] = 'gcode_loaded'
    filename: Optional[str]
    bounds: Bounds
    commands: Tuple[MoveCommand, ...] = field(default=(), repr=False)

    @property
    def total_lines(self) -> int:
        return len(self.commands)

    def payload(self) -> Dict[str, Any]:
        return {
            'filename': self.filename,
            'bounds': self.bounds.to_dict(),
            'totalLines': self.total_lines,
            'commands': [command.to_dict() for command in self.commands],
        }


@dataclass(frozen=True)
class PlotProgress(PlotterEvent):
    name: ClassVar[str] = 'plot_progress'
    percentage: int
    current_line: int
    total_lines: int
    command: str

    def payload(self) -> Dict[str, Any]:
        return {
            'percentage': self.percentage,
            'currentLine': self.current_line,
            'totalLines': self.total_lines,
            'command': self.command,
        }


@dataclass(frozen=True)
class PositionUpdate(PlotterEvent):
    name: ClassVar[str] = 'position_update'
    x: float
    y: float
    z: float

    @classmethod
    def of(cls, position) -> 'PositionUpdate':
        return cls(x=position.x, y=position.y, z=position.z)

    def payload(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'z': self.z}


@dataclass(frozen=True)
class PlotComplete(PlotterEvent):
    name: ClassVar[str] = 'plot_complete'
    message: str = 'Plot completed successfully'

    def payload(self) -> Dict[str, Any]:
        return {'message': self.message}


@dataclass(frozen=True)
class PlotStopped(PlotterEvent):
    name: ClassVar[str] = 'plot_stopped'
    message: str = 'Plot stopped by user'

    def payload(self) -> Dict[str, Any]:
        return {'message': self.message}


Observer = Callable[[PlotterEvent], None]


class EventBus:
    """Fans events out to every subscribed observer, in subscription order."""

    def __init__(self):
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def __len__(self) -> int:
        return len(self._observers)

    def emit(self, event: PlotterEvent) -> None:
        # Copy so observers may unsubscribe themselves while handling
        for observer in list(self._observers):
            self.deliver(observer, event)

    @staticmethod
    def deliver(observer: Observer, event: PlotterEvent) -> None:
        try:
            observer(event)
        except Exception:
            logger.exception(f"Observer {observer!r} failed on {event.name}")

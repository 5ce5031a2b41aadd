#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Virtual plotter motion simulator.

Holds the controller state and advances it through a loaded program one
command per scheduled step, notifying observers after every change.
"""

import logging
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, List, Optional

from virtual_plotter import __version__
from virtual_plotter.config import Config, config as default_config
from virtual_plotter.errors import (
    AlreadyRunningError,
    InvalidPortError,
    NoProgramError,
    NotConnectedError,
)
from virtual_plotter.gcode.parser import Program
from virtual_plotter.motion.events import (
    ConnectionStatus,
    EventBus,
    GcodeLoaded,
    Observer,
    PlotComplete,
    PlotProgress,
    PlotStopped,
    PlotterEvent,
    PositionUpdate,
)
from virtual_plotter.motion.scheduler import ScheduledCall, Scheduler
from virtual_plotter.motion.state import AXES, MotionState, Position
from virtual_plotter.motion.timing import (
    distance_between,
    home_duration_ms,
    jog_duration_ms,
    resolve_feed_rate,
    round_half_up,
    step_duration_ms,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveAck:
    """Immediate acknowledgement of a jog or home request."""
    duration_ms: float
    expected_position: Position


class PlotterSimulator:
    """Simulated pen plotter driven by a scheduler.

    Every state transition and the notifications it produces run under one
    reentrant lock, so observers may call back into the simulator.
    """

    def __init__(self, scheduler: Scheduler, config: Optional[Config] = None):
        """Initialize the simulator.

        Args:
            scheduler: Scheduler used for every simulated delay
            config: Speeds, timing limits and known ports
        """
        self.scheduler = scheduler
        self.config = config or default_config
        self.state = MotionState()
        self.events = EventBus()

        self._lock = threading.RLock()
        self._plot_call: Optional[ScheduledCall] = None
        self._run_id = 0
        self._started_at = time.monotonic()

        logger.info("Virtual plotter initialized")

    # Observers

    def subscribe(self, observer: Observer, replay: bool = True) -> None:
        """Register an observer.

        Args:
            observer: Callable receiving every PlotterEvent
            replay: Send the current connection status and position to the
                new observer only
        """
        with self._lock:
            self.events.subscribe(observer)
            if replay:
                EventBus.deliver(observer, self._connection_event())
                EventBus.deliver(observer, PositionUpdate.of(self.state.position))

    def unsubscribe(self, observer: Observer) -> None:
        with self._lock:
            self.events.unsubscribe(observer)

    def _emit(self, event: PlotterEvent) -> None:
        self.events.emit(event)

    def _connection_event(self) -> ConnectionStatus:
        return ConnectionStatus(
            connected=self.state.connected,
            port=self.state.port
        )

    # Queries

    def available_ports(self) -> List[str]:
        return list(self.config.ports)

    @property
    def position(self) -> Position:
        with self._lock:
            return self.state.position.copy()

    @property
    def is_plotting(self) -> bool:
        with self._lock:
            return self.state.running

    def get_status(self) -> Dict[str, Any]:
        """Snapshot of the controller state."""
        with self._lock:
            state = self.state
            return {
                'status': 'healthy',
                'connected': state.connected,
                'port': state.port,
                'position': state.position.to_dict(),
                'isPlotting': state.running,
                'currentLine': state.cursor,
                'totalLines': state.total_lines,
                'currentFile': state.filename,
                'uptime': time.monotonic() - self._started_at,
                'version': __version__,
            }

    # Connection

    def connect(self, port: str) -> None:
        """Open a virtual device session on a known port.

        Raises:
            InvalidPortError: If the port is not a known virtual port
        """
        with self._lock:
            if port not in self.config.ports:
                raise InvalidPortError(port)

            self.state.reset_connection(port)
            self._emit(self._connection_event())
            logger.info(f"Connected to virtual plotter: {port}")

    def disconnect(self) -> None:
        """Close the session and halt any plot in progress."""
        with self._lock:
            self._cancel_plot_loop()
            self.state.reset_disconnected()
            self._emit(self._connection_event())
            logger.info("Disconnected from plotter")

    # Program

    def load_program(self, program: Program) -> None:
        """Make ``program`` the active program.

        A plot already in progress is stopped first.
        """
        with self._lock:
            if self.state.running:
                logger.info("New program loaded while plotting, stopping plot")
                self.stop_plot()

            self.state.program = program
            self.state.cursor = 0
            self._emit(GcodeLoaded(
                filename=program.filename,
                bounds=program.bounds,
                commands=program.commands,
            ))
            logger.info(
                f"Loaded program {program.filename or '<unnamed>'}: "
                f"{program.total_lines} commands, "
                f"bounds {program.bounds.to_dict()}"
            )

    # Plotting

    def start_plot(self) -> None:
        """Start plotting the active program from its first command.

        Returns once the first step has been taken; later steps run on the
        scheduler.

        Raises:
            NotConnectedError: If no session is open
            NoProgramError: If no program with commands is loaded
            AlreadyRunningError: If a plot is already in progress
        """
        with self._lock:
            state = self.state
            if not state.connected:
                raise NotConnectedError()
            if state.program is None or not state.program.commands:
                raise NoProgramError()
            if state.running:
                raise AlreadyRunningError()

            self._cancel_plot_loop()
            state.running = True
            state.cursor = 0
            logger.info(
                f"Starting plot: {state.filename or '<unnamed>'} "
                f"({state.total_lines} lines)"
            )
            self._step(self._run_id)

    def stop_plot(self) -> None:
        """Halt the plot loop. Pending jog and home moves still complete."""
        with self._lock:
            self._cancel_plot_loop()
            self.state.running = False
            self._emit(PlotStopped())
            logger.info("Plot stopped")

    def _cancel_plot_loop(self) -> None:
        # Bumping the run id also voids a step whose timer already fired
        self._run_id += 1
        if self._plot_call is not None:
            self._plot_call.cancel()
            self._plot_call = None

    def _step(self, run_id: int) -> None:
        """Execute the command under the cursor and schedule the next step."""
        with self._lock:
            if run_id != self._run_id:
                return
            self._plot_call = None

            state = self.state
            program = state.program
            if not state.running or state.cursor >= state.total_lines:
                state.running = False
                self._emit(PlotComplete())
                logger.info("Plot completed")
                return

            command = program.commands[state.cursor]
            target = state.position.resolve(command)
            distance = distance_between(state.position, target)
            feed_rate = resolve_feed_rate(command.raw, self.config.speeds)
            duration = step_duration_ms(distance, feed_rate, self.config.timing)

            total = state.total_lines
            line_number = state.cursor + 1
            state.position = target
            state.cursor = line_number

            self._emit(PlotProgress(
                percentage=round_half_up(line_number / total * 100),
                current_line=line_number,
                total_lines=total,
                command=command.raw,
            ))
            self._emit(PositionUpdate.of(target))
            logger.debug(
                f"Line {line_number}/{total}: {command.raw} -> {target} "
                f"({distance:.3f}mm at {feed_rate}mm/min, {duration:.0f}ms)"
            )

            # An observer may have stopped the plot during this step
            if run_id != self._run_id or not state.running:
                return
            self._plot_call = self.scheduler.call_later(
                duration, partial(self._step, run_id)
            )

    # Manual motion

    def jog(self, axis: str, distance: float) -> MoveAck:
        """Move one axis by a signed distance.

        The delta is applied when the simulated move completes, to whatever
        the position is at that moment.

        Args:
            axis: 'X', 'Y' or 'Z'
            distance: Signed distance in mm

        Raises:
            NotConnectedError: If no session is open
            ValueError: If the axis is unknown
        """
        axis = axis.upper()

        with self._lock:
            if not self.state.connected:
                raise NotConnectedError()
            if axis not in AXES:
                raise ValueError(f"Unknown axis: {axis}")

            duration = jog_duration_ms(
                distance, self.config.speeds, self.config.timing
            )
            expected = self.state.position.moved(axis, distance)
            self.scheduler.call_later(
                duration, partial(self._finish_jog, axis, distance)
            )
            logger.info(
                f"Jog {axis} {distance:+}mm at {self.config.speeds.jog}mm/min "
                f"({duration:.0f}ms)"
            )
            return MoveAck(duration_ms=duration, expected_position=expected)

    def jog_direction(self, direction: str, distance: float) -> MoveAck:
        """Jog using a direction label such as 'X+' or 'Z-'.

        Args:
            direction: Axis letter followed by '+' or '-'
            distance: Unsigned distance in mm
        """
        if len(direction) != 2 or direction[1] not in '+-':
            raise ValueError(f"Unknown jog direction: {direction}")
        sign = 1 if direction[1] == '+' else -1
        return self.jog(direction[0], sign * abs(distance))

    def _finish_jog(self, axis: str, distance: float) -> None:
        with self._lock:
            self.state.position = self.state.position.moved(axis, distance)
            self._emit(PositionUpdate.of(self.state.position))
            logger.debug(f"Jog {axis} {distance:+}mm settled at {self.state.position}")

    def home(self) -> MoveAck:
        """Return to the origin.

        Raises:
            NotConnectedError: If no session is open
        """
        with self._lock:
            if not self.state.connected:
                raise NotConnectedError()

            duration = home_duration_ms(
                self.state.position, self.config.speeds, self.config.timing
            )
            self.scheduler.call_later(duration, self._finish_home)
            logger.info(
                f"Homing in progress ({duration:.0f}ms at "
                f"{self.config.speeds.homing}mm/min)"
            )
            return MoveAck(duration_ms=duration, expected_position=Position())

    def _finish_home(self) -> None:
        with self._lock:
            self.state.position = Position()
            self._emit(PositionUpdate.of(self.state.position))
            logger.info("Homing complete")

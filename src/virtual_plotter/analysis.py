#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plot estimation.

Replays a program's moves from the origin using the same timing rules as the
simulator and returns one row per command, so run time and travel can be
reported before a plot starts.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from virtual_plotter.config import Config, config as default_config
from virtual_plotter.gcode.parser import Program
from virtual_plotter.gcode.scanner import MoveClass, move_class
from virtual_plotter.motion.timing import MS_PER_MINUTE, resolve_feed_rate

logger = logging.getLogger(__name__)

COLUMNS = [
    'line', 'command', 'move_class', 'x', 'y', 'z',
    'distance_mm', 'feed_rate', 'duration_ms', 'elapsed_ms',
]


@dataclass(frozen=True)
class PlotEstimate:
    """Totals for a program run."""
    total_lines: int
    total_distance_mm: float
    draw_distance_mm: float
    rapid_distance_mm: float
    total_duration_ms: float

    @property
    def total_duration_s(self) -> float:
        return self.total_duration_ms / 1000.0


def estimate_plot(program: Program, config: Optional[Config] = None) -> pd.DataFrame:
    """Build the per-command timing table for a program.

    Args:
        program: Parsed program
        config: Speeds and timing limits (defaults to the global config)

    Returns:
        DataFrame with one row per command; x/y/z hold the resolved target
    """
    config = config or default_config
    speeds = config.speeds
    limits = config.timing
    commands = program.commands

    frame = pd.DataFrame({
        'line': np.arange(1, len(commands) + 1, dtype=int),
        'command': [c.raw for c in commands],
        'move_class': [move_class(c.raw).value for c in commands],
        'x': pd.Series([c.x for c in commands], dtype='float64'),
        'y': pd.Series([c.y for c in commands], dtype='float64'),
        'z': pd.Series([c.z for c in commands], dtype='float64'),
    })

    # Absent axes hold the previous target; the tool starts at the origin
    targets = frame[['x', 'y', 'z']].ffill().fillna(0.0)
    frame[['x', 'y', 'z']] = targets

    points = np.vstack([np.zeros((1, 3)), targets.to_numpy(dtype=float)])
    # Overflowing coordinates are inf; inf - inf leaves a NaN distance
    with np.errstate(invalid='ignore'):
        distance = np.linalg.norm(np.diff(points, axis=0), axis=1)

    feed = np.array(
        [resolve_feed_rate(c.raw, speeds) for c in commands],
        dtype=float
    )
    with np.errstate(divide='ignore', invalid='ignore'):
        travel = np.where(feed > 0, distance / feed * MS_PER_MINUTE, np.inf)
    near_zero = np.isnan(distance) | (
        np.nan_to_num(distance, nan=0.0) <= limits.snap_distance_mm
    )
    duration = np.where(
        near_zero,
        limits.min_step_ms,
        np.clip(travel, limits.min_step_ms, limits.max_step_ms),
    )

    frame['distance_mm'] = distance
    frame['feed_rate'] = feed
    frame['duration_ms'] = duration
    frame['elapsed_ms'] = np.cumsum(duration)

    logger.debug(f"Estimated {len(frame)} moves, {duration.sum():.0f}ms total")
    return frame[COLUMNS]


def summarize(frame: pd.DataFrame) -> PlotEstimate:
    """Reduce an estimate table to run totals."""
    rapid = frame['move_class'] == MoveClass.RAPID.value
    return PlotEstimate(
        total_lines=int(len(frame)),
        total_distance_mm=float(frame['distance_mm'].sum()),
        draw_distance_mm=float(frame.loc[~rapid, 'distance_mm'].sum()),
        rapid_distance_mm=float(frame.loc[rapid, 'distance_mm'].sum()),
        total_duration_ms=float(frame['duration_ms'].sum()),
    )

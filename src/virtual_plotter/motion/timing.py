#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Constant-velocity timing for simulated moves.

Time = (distance in mm) / (feed rate in mm/min) * 60000 ms/min, clamped per
move class.
"""

import math

from virtual_plotter.config import MovementSpeeds, TimingLimits
from virtual_plotter.gcode.scanner import MoveClass, feed_word, move_class
from virtual_plotter.motion.state import Position

MS_PER_MINUTE = 60000.0


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp to [lower, upper]; NaN maps to lower."""
    if math.isnan(value):
        return lower
    return min(max(value, lower), upper)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))


def distance_between(start: Position, end: Position) -> float:
    dx = end.x - start.x
    dy = end.y - start.y
    dz = end.z - start.z
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def travel_ms(distance_mm: float, feed_rate: float) -> float:
    """Unclamped travel time; a stalled feed never arrives."""
    if feed_rate <= 0:
        return math.inf
    return distance_mm / feed_rate * MS_PER_MINUTE


def default_feed_rate(kind: MoveClass, speeds: MovementSpeeds) -> float:
    if kind is MoveClass.RAPID:
        return speeds.rapid_positioning
    return speeds.drawing


def resolve_feed_rate(line: str, speeds: MovementSpeeds) -> float:
    """Feed rate for a program line in mm/min.

    An explicit F word is used verbatim, otherwise the move class decides.
    """
    explicit = feed_word(line)
    if explicit is not None:
        return explicit
    return default_feed_rate(move_class(line), speeds)


def step_duration_ms(
    distance_mm: float,
    feed_rate: float,
    limits: TimingLimits
) -> float:
    """Duration of one plot step.

    Near-zero moves (including lines without coordinates) take the floor,
    as does a NaN distance from overflowing coordinates.
    """
    if math.isnan(distance_mm) or distance_mm <= limits.snap_distance_mm:
        return limits.min_step_ms
    return clamp(
        travel_ms(distance_mm, feed_rate),
        limits.min_step_ms,
        limits.max_step_ms
    )


def jog_duration_ms(
    distance_mm: float,
    speeds: MovementSpeeds,
    limits: TimingLimits
) -> float:
    return clamp(
        travel_ms(abs(distance_mm), speeds.jog),
        limits.min_jog_ms,
        limits.max_jog_ms
    )


def home_duration_ms(
    position: Position,
    speeds: MovementSpeeds,
    limits: TimingLimits
) -> float:
    distance = distance_between(position, Position())
    return clamp(
        travel_ms(distance, speeds.homing),
        limits.min_home_ms,
        limits.max_home_ms
    )

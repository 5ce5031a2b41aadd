#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration management for the virtual plotter.
Provides movement speeds, timing limits and the set of known ports.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_PORTS = ['/dev/ttyUSB0', '/dev/ttyACM0', 'COM3']


@dataclass
class MovementSpeeds:
    """Feed rates in mm/min for each move class.

    Kept well below nominal hardware limits so simulated playback stays
    observable.
    """
    rapid_positioning: float = 300.0
    drawing: float = 1000.0
    jog: float = 500.0
    homing: float = 200.0


@dataclass
class TimingLimits:
    """Clamp ranges in milliseconds for simulated move durations."""
    snap_distance_mm: float = 0.1
    min_step_ms: float = 100.0
    max_step_ms: float = 2000.0
    min_jog_ms: float = 100.0
    max_jog_ms: float = 3000.0
    min_home_ms: float = 500.0
    max_home_ms: float = 5000.0


class Config:
    """Configuration manager for the virtual plotter."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Optional path to JSON configuration file
        """
        self.speeds = MovementSpeeds()
        self.timing = TimingLimits()
        self.ports: List[str] = list(DEFAULT_PORTS)

        env_ports = os.getenv('VIRTUAL_PLOTTER_PORTS')
        if env_ports:
            self.ports = [p.strip() for p in env_ports.split(',') if p.strip()]

        if config_path is None:
            env_path = os.getenv('VIRTUAL_PLOTTER_CONFIG')
            if env_path:
                config_path = Path(env_path)

        if config_path and config_path.exists():
            self.load_config(config_path)

        self._validate_config()

    def load_config(self, config_path: Path) -> None:
        """Load configuration from JSON file.

        Args:
            config_path: Path to JSON configuration file
        """
        try:
            with open(config_path) as f:
                config = json.load(f)

            if 'speeds' in config:
                self.speeds = MovementSpeeds(**config['speeds'])
            if 'timing' in config:
                self.timing = TimingLimits(**config['timing'])
            if 'ports' in config:
                self.ports = list(config['ports'])

            logger.info(f"Loaded configuration from {config_path}")
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        self._validate_config()

    def save_config(self, config_path: Path) -> None:
        """Save current configuration to JSON file.

        Args:
            config_path: Path to save configuration file
        """
        config = {
            'speeds': asdict(self.speeds),
            'timing': asdict(self.timing),
            'ports': self.ports,
        }

        try:
            with open(config_path, 'w') as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_path}")
        except Exception as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def _validate_config(self) -> None:
        """Validate configuration values."""
        for name, value in asdict(self.speeds).items():
            if value <= 0:
                raise ValueError(f"Speed {name} must be positive")

        timing = self.timing
        if timing.snap_distance_mm < 0:
            raise ValueError("Snap distance must not be negative")

        # Each clamp range must be non-empty
        ranges = {
            'step': (timing.min_step_ms, timing.max_step_ms),
            'jog': (timing.min_jog_ms, timing.max_jog_ms),
            'home': (timing.min_home_ms, timing.max_home_ms),
        }
        for name, (lower, upper) in ranges.items():
            if lower < 0 or upper < lower:
                raise ValueError(
                    f"Invalid {name} duration range: {lower}..{upper} ms"
                )

        if not self.ports:
            raise ValueError("At least one port must be configured")

        logger.debug("Configuration validation successful")


# Create global configuration instance
config = Config()

# Export commonly used values
RAPID_SPEED = config.speeds.rapid_positioning
DRAWING_SPEED = config.speeds.drawing
JOG_SPEED = config.speeds.jog
HOMING_SPEED = config.speeds.homing
KNOWN_PORTS = config.ports

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line runner for the virtual plotter.

Reads a G-code file and either prints a timing estimate or plays the plot
back in real time, logging every notification.
"""

import argparse
import logging
import sys
import threading
from pathlib import Path

from virtual_plotter.analysis import estimate_plot, summarize
from virtual_plotter.config import Config
from virtual_plotter.errors import PlotterError
from virtual_plotter.gcode import parse
from virtual_plotter.motion import (
    PlotComplete,
    PlotStopped,
    PlotterSimulator,
    ThreadingScheduler,
)

logger = logging.getLogger("virtual_plotter")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="virtual_plotter",
        description="Simulate a pen plotter running a G-code file"
    )
    parser.add_argument("gcode_file", type=Path, help="G-code file to plot")
    parser.add_argument("--port", help="Virtual port to connect to")
    parser.add_argument("--config", type=Path, help="JSON configuration file")
    parser.add_argument(
        "--estimate", action="store_true",
        help="Print the timing estimate and exit"
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser


def print_estimate(program, config) -> None:
    """Print plot statistics."""
    estimate = summarize(estimate_plot(program, config))
    bounds = program.bounds

    print("\n" + "=" * 50)
    print("PLOT ESTIMATE")
    print("=" * 50)
    print(f"File: {program.filename}")
    print(f"Commands: {estimate.total_lines}")
    print(f"X: {bounds.min_x:.3f} to {bounds.max_x:.3f} mm")
    print(f"Y: {bounds.min_y:.3f} to {bounds.max_y:.3f} mm")
    print(f"Total distance: {estimate.total_distance_mm:.2f} mm")
    print(f"Drawing distance: {estimate.draw_distance_mm:.2f} mm")
    print(f"Rapid distance: {estimate.rapid_distance_mm:.2f} mm")
    print(f"Estimated time: {estimate.total_duration_s:.1f} seconds")
    print("=" * 50)


def run_plot(program, config, port: str) -> None:
    """Play the program back in real time until it completes or is stopped."""
    scheduler = ThreadingScheduler()
    plotter = PlotterSimulator(scheduler, config)
    finished = threading.Event()

    def on_event(event):
        logger.info(f"{event.name}: {event.payload()}")
        if isinstance(event, (PlotComplete, PlotStopped)):
            finished.set()

    plotter.subscribe(on_event, replay=False)
    plotter.connect(port)
    plotter.load_program(program)
    plotter.start_plot()

    try:
        finished.wait()
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        plotter.stop_plot()
    finally:
        plotter.disconnect()
        scheduler.cancel_all()


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.config and not args.config.exists():
        logger.error(f"Configuration file not found: {args.config}")
        return 1

    try:
        config = Config(args.config)
        text = args.gcode_file.read_text(encoding="utf-8", errors="replace")
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    program = parse(text, filename=args.gcode_file.name)

    if args.estimate:
        print_estimate(program, config)
        return 0

    try:
        run_plot(program, config, args.port or config.ports[0])
    except PlotterError as e:
        logger.error(f"Plot rejected: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

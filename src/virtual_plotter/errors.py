#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Errors raised by the virtual plotter when an operation's preconditions fail.
"""


class PlotterError(Exception):
    """Base class for rejected plotter operations."""

    default_message = "Plotter operation rejected"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class InvalidPortError(PlotterError):
    """Port is not one of the known virtual ports."""

    default_message = "Invalid port"

    def __init__(self, port: str = None):
        self.port = port
        message = f"Invalid port: {port}" if port is not None else None
        super().__init__(message)


class NotConnectedError(PlotterError):
    default_message = "Plotter not connected"


class NoProgramError(PlotterError):
    default_message = "No file loaded"


class AlreadyRunningError(PlotterError):
    default_message = "Already plotting"

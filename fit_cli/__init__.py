"""Workout statistics and recovery advice from the command line."""

__version__ = "0.1.0"

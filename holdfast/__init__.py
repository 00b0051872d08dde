"""Holdfast — hands-free timer for core-stability workouts."""

__version__ = "0.1.0"

"""Breadboard circuit simulator: batteries, bulbs, potentiometers and wires."""

__version__ = "0.1.0"

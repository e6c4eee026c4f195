"""
Pure Python data models for the breadboard simulator.

This package contains dataclasses that represent circuit elements.
All models use only Python standard library types.
"""

from .circuit import CircuitModel, CircuitSnapshot
from .component import (
    COMPONENT_TYPES,
    DEFAULT_POTENTIOMETER_RESISTANCE,
    ID_PREFIXES,
    POTENTIOMETER_PRESETS,
    TERMINAL_ROLES,
    ComponentData,
    next_preset,
)
from .terminal import TerminalData, TerminalRole
from .wire import WireData

__all__ = [
    "CircuitModel",
    "CircuitSnapshot",
    "ComponentData",
    "COMPONENT_TYPES",
    "DEFAULT_POTENTIOMETER_RESISTANCE",
    "ID_PREFIXES",
    "POTENTIOMETER_PRESETS",
    "TERMINAL_ROLES",
    "next_preset",
    "TerminalData",
    "TerminalRole",
    "WireData",
]

"""
simulation/convergence.py

Classifies DC solver failures and turns them into student-friendly
explanations.
"""

import re
from dataclasses import dataclass
from enum import Enum


class ErrorCategory(Enum):
    """Categories of DC solver failures."""

    SINGULAR_MATRIX = "singular_matrix"
    INVALID_VALUE = "invalid_value"
    NON_FINITE = "non_finite"
    UNKNOWN = "unknown"


# Patterns matched against an error message (case-insensitive)
_ERROR_PATTERNS: list[tuple[re.Pattern, ErrorCategory]] = [
    (re.compile(r"singular", re.IGNORECASE), ErrorCategory.SINGULAR_MATRIX),
    (re.compile(r"resistance|must be positive", re.IGNORECASE), ErrorCategory.INVALID_VALUE),
    (re.compile(r"non-finite|\bnan\b|\binf\b", re.IGNORECASE), ErrorCategory.NON_FINITE),
]


@dataclass
class ErrorDiagnosis:
    """What went wrong, why it usually happens and what a student can try."""

    category: ErrorCategory
    message: str
    causes: list[str]
    suggestions: list[str]


_DIAGNOSES: dict[ErrorCategory, ErrorDiagnosis] = {
    ErrorCategory.SINGULAR_MATRIX: ErrorDiagnosis(
        category=ErrorCategory.SINGULAR_MATRIX,
        message="The circuit equations could not be solved - the matrix is singular.",
        causes=[
            "A solver configured without a leakage conductance (gmin=0) met a part whose ends connect to nothing else",
            "A hand-built netlist puts two ideal voltage sources across the same pair of nets",
        ],
        suggestions=[
            "Use the default solver, which keeps every net referenced to ground",
            "Give every ideal voltage source a series resistance",
        ],
    ),
    ErrorCategory.INVALID_VALUE: ErrorDiagnosis(
        category=ErrorCategory.INVALID_VALUE,
        message="A component has a value the simulator cannot use.",
        causes=[
            "A potentiometer is set to zero or a negative resistance",
        ],
        suggestions=[
            "Turn the potentiometer knob to one of its preset values",
        ],
    ),
    ErrorCategory.NON_FINITE: ErrorDiagnosis(
        category=ErrorCategory.NON_FINITE,
        message="The simulator produced voltages that are not finite numbers.",
        causes=[
            "Component values differ by too many orders of magnitude",
        ],
        suggestions=[
            "Remove parts until the circuit solves, then add them back one by one",
        ],
    ),
    ErrorCategory.UNKNOWN: ErrorDiagnosis(
        category=ErrorCategory.UNKNOWN,
        message="The circuit could not be solved.",
        causes=[],
        suggestions=[
            "Check that every part has both of its terminals wired",
            "Rebuild the circuit from a single battery and bulb",
        ],
    ),
}


def classify_error(message: str) -> ErrorCategory:
    """Classify a failure from its message text, returning the first matching category."""
    if not message:
        return ErrorCategory.UNKNOWN
    for pattern, category in _ERROR_PATTERNS:
        if pattern.search(message):
            return category
    return ErrorCategory.UNKNOWN


def diagnose_error(error) -> ErrorDiagnosis:
    """
    Return a full diagnosis for a failure.

    Accepts an exception carrying a ``category`` attribute (SolverError),
    any other exception, or a plain message string.
    """
    category = getattr(error, "category", None)
    if not isinstance(category, ErrorCategory):
        category = classify_error(str(error))
    return _DIAGNOSES[category]


def format_user_message(diagnosis: ErrorDiagnosis) -> str:
    """Render a diagnosis as the multi-line text shown under the status message."""
    sections = [("Common causes:", diagnosis.causes), ("Suggestions:", diagnosis.suggestions)]
    lines = [diagnosis.message]
    for heading, items in sections:
        if items:
            lines.append("")
            lines.append(heading)
            lines.extend(f"  - {item}" for item in items)
    return "\n".join(lines)

"""
format_utils.py

Reading resistances typed with SI suffixes ("2.5k", "1MEG") and producing
the short labels used in status text and CLI tables.
"""
import re

SI_MULTIPLIERS = {
    'u': 1e-6,
    'µ': 1e-6,
    'm': 1e-3,
    'k': 1e3,
    'K': 1e3,
    'M': 1e6,
}

_NUMBER_WITH_SUFFIX = re.compile(r'^(-?\d+\.?\d*(?:e[-+]?\d+)?)([a-zA-Zµ]*)$')


def parse_value(s) -> float:
    """
    Convert "10k", "18m", "2.5MEG" or "500ohm" to a float; numbers pass through.

    Raises:
        ValueError: when the text is not a number with an optional suffix.
    """
    if not isinstance(s, str):
        return float(s)

    text = s.strip()
    # SPICE spells mega as MEG since a bare M would read as milli there
    if text.upper().endswith('MEG'):
        text = text[:-3] + 'M'

    match = _NUMBER_WITH_SUFFIX.match(text)
    if match is None:
        raise ValueError(f"Invalid number format: {s}")

    number, suffix = match.groups()
    # Unknown leading letters are units ("ohm", "V"), not prefixes
    return float(number) * SI_MULTIPLIERS.get(suffix[:1], 1.0)


def format_resistance(ohms: float) -> str:
    """Compact knob label for a potentiometer: 500 -> "500", 2000 -> "2k", 2500 -> "2.5k"."""
    if ohms >= 1000:
        kilo = ohms / 1000
        if kilo == int(kilo):
            return f"{int(kilo)}k"
        return f"{kilo:g}k"
    if ohms == int(ohms):
        return str(int(ohms))
    return f"{ohms:g}"


def format_milliamps(amps: float) -> str:
    """Format a current in amps as milliamps with two decimals: 0.018 -> "18.00mA"."""
    return f"{amps * 1000:.2f}mA"

"""
GUI/format_utils.py

Provides utility functions for parsing and formatting numbers with SI unit prefixes.
Contains no Qt dependencies; the controller uses it to parse edit values.
"""
import math
import re

# Dictionary of SI prefixes and their multipliers
# Includes common variations like 'u' for 'µ' and 'MEG' for 'M'
SI_PREFIX_MULTIPLIERS = {
    'f': 1e-15,  # Femto
    'p': 1e-12,  # Pico
    'n': 1e-9,   # Nano
    'u': 1e-6,   # Micro
    'µ': 1e-6,   # Micro
    'm': 1e-3,   # Milli
    'k': 1e3,    # Kilo
    'K': 1e3,    # Kilo (common typo)
    'M': 1e6,    # Mega
    'MEG': 1e6,  # Mega (SPICE variant)
    'G': 1e9,    # Giga
    'T': 1e12,   # Tera
}

# For formatting, we iterate to find the best fit
# Using a list of tuples: (multiplier, prefix)
FORMATTING_PREFIXES = sorted(
    [(1e12, 'T'), (1e9, 'G'), (1e6, 'M'), (1e3, 'k'),
     (1, ''), (1e-3, 'm'), (1e-6, 'µ'), (1e-9, 'n'), (1e-12, 'p'), (1e-15, 'f')],
    key=lambda x: x[0], reverse=True
)

_NUMBER_RE = re.compile(r'^([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-zA-ZµΩ]*)$')

# Human-readable units for the editable properties
PROPERTY_UNITS = {
    'resistance': 'Ω',
    'source_voltage': 'V',
    'forward_drop_voltage': 'V',
    'rated_current': 'A',
}


def parse_value(s) -> float:
    """
    Parses a string with an optional SI prefix and unit into a float.
    Examples: "10k" -> 10000.0, "25m" -> 0.025, "9V" -> 9.0, "4.7kΩ" -> 4700.0
    """
    if isinstance(s, bool):
        raise ValueError(f"Invalid number format: {s!r}")
    if isinstance(s, (int, float)):
        return float(s)
    if not isinstance(s, str):
        raise ValueError(f"Invalid number format: {s!r}")

    match = _NUMBER_RE.match(s.strip())
    if not match:
        raise ValueError(f"Invalid number format: {s}")

    num_str, unit_str = match.groups()
    number = float(num_str)

    if not unit_str:
        return number

    # Check for SPICE 'MEG' variant first
    if unit_str.upper().startswith('MEG'):
        return number * SI_PREFIX_MULTIPLIERS['MEG']

    # A lone unit letter (V, A, Ω) carries no prefix
    if len(unit_str) == 1 and unit_str in PROPERTY_UNITS.values():
        return number

    prefix = unit_str[0]
    if prefix in SI_PREFIX_MULTIPLIERS:
        return number * SI_PREFIX_MULTIPLIERS[prefix]

    # If no known prefix is found in the unit string, just return the number
    return number


def format_value(value: float, unit: str = "") -> str:
    """
    Formats a float into a string with the most appropriate SI prefix.
    Examples: 0.015 -> "15.00 m", 15000 -> "15 k"
    """
    if value == 0:
        return f"0 {unit}"

    abs_val = abs(value)

    for mult, prefix in FORMATTING_PREFIXES:
        if abs_val >= mult:
            scaled_val = value / mult
            # Format to 2 decimal places, but avoid trailing ".00" for integers
            if scaled_val == int(scaled_val):
                return f"{int(scaled_val)} {prefix}{unit}"
            else:
                return f"{scaled_val:.2f} {prefix}{unit}"

    # If value is smaller than the smallest prefix, use scientific notation
    return f"{value:.2e} {unit}"


def validate_property_value(value, field: str) -> tuple[bool, str]:
    """
    Validate an edit value for one of the editable electrical properties.

    Every editable property must be a finite, strictly positive number.

    Returns:
        (is_valid, error_message); error_message is empty when valid.
    """
    if isinstance(value, str) and not value.strip():
        return False, "Value cannot be empty."

    try:
        numeric = parse_value(value)
    except (ValueError, TypeError):
        return False, f"Invalid value '{value}'. Use a number with optional suffix (e.g. 100, 4.7k, 9V)."

    if not math.isfinite(numeric):
        return False, f"{field} must be a finite number (got {value})."

    if numeric <= 0:
        return False, f"{field} must be positive (got {value})."

    return True, ""

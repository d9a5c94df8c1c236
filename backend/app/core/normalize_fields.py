"""Field Normalizer — trims untyped input into clean optional strings and booleans.

Invariants:
    - normalize_string never returns "" or a string with surrounding whitespace
    - normalize_string is idempotent: normalize_string(normalize_string(x)) == normalize_string(x)
    - to_boolean is True only for the allow-listed tokens, compared case-insensitively
    - Neither function raises, whatever the input type
"""

from typing import Any

TRUTHY_TOKENS = frozenset({"true", "on", "1", "yes"})


def normalize_string(value: Any) -> str | None:
    """Trimmed value, or None for missing/blank/non-string input."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def to_boolean(value: Any) -> bool:
    """Checkbox-style coercion: "on", "TRUE", "1", "yes" → True, anything else → False."""
    if not isinstance(value, str):
        return False
    return value.lower() in TRUTHY_TOKENS

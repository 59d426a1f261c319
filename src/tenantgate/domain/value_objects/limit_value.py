"""Plan limit values.

A stored limit is an inclusive maximum count, except UNLIMITED (-1).
"""

UNLIMITED = -1


def is_unlimited(value: int) -> bool:
    """True if value is the unlimited sentinel."""
    return value == UNLIMITED


def is_valid_limit_value(value: object) -> bool:
    """Limits are integers >= -1; bools are rejected."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= UNLIMITED


def within_limit(limit: int, current_usage: int, increment: int = 1) -> bool:
    """Check whether adding increment to current_usage stays within limit."""
    if is_unlimited(limit):
        return True
    return current_usage + increment <= limit

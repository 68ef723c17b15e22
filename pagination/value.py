"""
Small helpers to restrict values.
"""


def clamp(value, minimum, maximum):
    """Clamp ``value`` into the closed range ``[minimum, maximum]``."""
    if minimum > maximum:
        raise ValueError(f"Empty range: minimum {minimum} is greater than maximum {maximum}")
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value

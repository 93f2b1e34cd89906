"""Pace arithmetic and formatting.

Pace is expressed in seconds per kilometer and displayed as ``M'SS''``.
"""

PACE_PLACEHOLDER = "0'00''"


def pace_seconds_per_km(distance: float, duration: float) -> float | None:
    """Return the pace for covering `distance` meters in `duration` seconds.

    Returns None when there is no distance to divide by.
    """
    if distance <= 0:
        return None
    return duration / (distance / 1000)


def format_pace(seconds_per_km: float | None) -> str:
    """Format a pace as minutes and zero-padded seconds, e.g. ``5'07''``.

    Both parts are truncated, not rounded. None formats as the placeholder.
    """
    if seconds_per_km is None:
        return PACE_PLACEHOLDER
    minutes = int(seconds_per_km / 60)
    seconds = int(seconds_per_km % 60)
    return f"{minutes}'{seconds:02d}''"


def pace_string(distance: float, duration: float) -> str:
    """Format the pace for `distance` meters in `duration` seconds."""
    return format_pace(pace_seconds_per_km(distance, duration))

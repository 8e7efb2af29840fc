"""Validation utilities."""

import math


def validate_positive(value: float, name: str) -> float:
    """Return value as float, raising ValueError unless it is finite and > 0."""
    value = float(value)
    if math.isnan(value) or math.isinf(value) or value <= 0.0:
        raise ValueError(f"{name} must be a positive number, got {value!r}")
    return value


def validate_duration(duration: float) -> float:
    """Validate a song duration in seconds."""
    return validate_positive(duration, "duration")


def clamp_progress(progress: float, duration: float) -> float:
    """Clamp progress to [0.0, duration]."""
    if progress < 0.0:
        return 0.0
    if progress > duration:
        return duration
    return progress

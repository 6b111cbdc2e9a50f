"""Utility modules."""

from .experience import (
    MIN_EXPERIENCE_GAIN,
    calculate_base_experience,
    calculate_experience_gain,
    calculate_level_multiplier,
)

__all__ = [
    "MIN_EXPERIENCE_GAIN",
    "calculate_base_experience",
    "calculate_experience_gain",
    "calculate_level_multiplier",
]

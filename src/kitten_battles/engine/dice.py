"""Deterministic draw source - replayable pseudo-random numbers from a counter."""

import math
from typing import Protocol


def draw_in_range(low: int, high: int, counter: int) -> int:
    """Draw an integer in [low, high] (inclusive) from a counter value.

    The counter is passed through sin() and the fractional part of the
    scaled result is rescaled into the range. There is no hidden state:
    the same (low, high, counter) always produces the same value.

    Args:
        low: Lower bound (inclusive)
        high: Upper bound (inclusive)
        counter: Running counter, distinct for every logical draw

    Returns:
        Integer in [low, high]
    """
    if low > high:
        raise ValueError(f"Empty draw range [{low}, {high}]")

    x = math.sin(counter) * 10000
    fraction = x - math.floor(x)
    return min(high, math.floor(fraction * (high - low + 1)) + low)


class Dice(Protocol):
    """Anything that can produce the next draw of a battle."""

    counter: int

    def roll(self, low: int, high: int) -> int: ...

    def skip(self) -> None: ...


class SeededDice:
    """Counter-driven dice for a single battle.

    Every roll consumes one counter value, so two logical decisions never
    share a draw. `skip()` advances the counter without drawing.
    """

    def __init__(self, counter: int) -> None:
        self.counter = counter

    def roll(self, low: int, high: int) -> int:
        """Draw in [low, high] and advance the counter."""
        value = draw_in_range(low, high, self.counter)
        self.counter += 1
        return value

    def skip(self) -> None:
        """Consume one counter value without drawing."""
        self.counter += 1

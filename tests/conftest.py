"""Shared fixtures for battle engine tests."""

import pytest

from kitten_battles.engine.types import Ability, AbilityType, Combatant


class ScriptedDice:
    """Dice that return a fixed sequence of values.

    Every roll checks the scripted value against the requested range, so
    a test also verifies which draws the engine takes and in what order.
    """

    def __init__(self, values: list[int], counter: int = 0) -> None:
        self.values = list(values)
        self.counter = counter
        self.rolls: list[tuple[int, int]] = []
        self.skips = 0

    def roll(self, low: int, high: int) -> int:
        assert self.values, f"Unexpected draw in [{low}, {high}]"
        value = self.values.pop(0)
        assert low <= value <= high, f"Scripted {value} outside [{low}, {high}]"
        self.rolls.append((low, high))
        self.counter += 1
        return value

    def skip(self) -> None:
        self.skips += 1
        self.counter += 1


def make_ability(
    id: str = "scratch",
    type: AbilityType = AbilityType.ATTACK,
    power: int = 20,
    accuracy: int = 100,
    cooldown: int = 0,
    name: str | None = None,
) -> Ability:
    """Build an ability with sensible defaults."""
    return Ability(
        id=id,
        name=name or id.replace("_", " ").title(),
        type=type,
        power=power,
        accuracy=accuracy,
        cooldown=cooldown,
    )


def make_combatant(
    id: str = "whiskers",
    level: int = 1,
    strength: int = 10,
    agility: int = 5,
    constitution: int = 5,
    intelligence: int = 5,
    abilities: list[Ability] | None = None,
    name: str | None = None,
) -> Combatant:
    """Build a full-health combatant with sensible defaults."""
    return Combatant.create(
        id=id,
        name=name or id.title(),
        level=level,
        strength=strength,
        agility=agility,
        constitution=constitution,
        intelligence=intelligence,
        abilities=abilities if abilities is not None else [make_ability()],
    )


@pytest.fixture
def scripted_dice():
    """Factory for ScriptedDice."""
    return ScriptedDice


@pytest.fixture
def ability_factory():
    """Factory for abilities."""
    return make_ability


@pytest.fixture
def combatant_factory():
    """Factory for combatants."""
    return make_combatant


@pytest.fixture
def challenger() -> Combatant:
    """Challenger: strength 10, agility 5, one sure-hit attack."""
    return make_combatant(id="challenger", name="Tom")


@pytest.fixture
def opponent() -> Combatant:
    """Opponent: like the challenger but agility 1."""
    return make_combatant(id="opponent", name="Felix", agility=1)

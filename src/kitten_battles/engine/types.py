"""Value types for the battle engine.

Abilities and combatants are frozen: every operation returns a new
snapshot instead of mutating the one it was called on.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable

MIN_ATTRIBUTE = 1
MAX_ATTRIBUTE = 20
MIN_POWER = 1
MAX_POWER = 100
MIN_ACCURACY = 1
MAX_ACCURACY = 100
MAX_COOLDOWN = 10


class InvalidSnapshotError(ValueError):
    """A combatant or ability snapshot violates its invariants."""


class AbilityType(str, Enum):
    """Effect class of an ability."""

    ATTACK = "ATTACK"  # Damages the target
    DEFENSE = "DEFENSE"  # No mechanics yet
    SPECIAL = "SPECIAL"  # Magnitude is computed but not applied
    HEAL = "HEAL"  # Restores the actor's own health
    BUFF = "BUFF"  # No mechanics yet
    DEBUFF = "DEBUFF"  # No mechanics yet


def calculate_max_health(constitution: int, level: int) -> int:
    """Maximum health derived from constitution and level."""
    return 50 + constitution * 10 + level * 5


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise InvalidSnapshotError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class Ability:
    """A usable move with its cooldown state."""

    id: str
    name: str
    type: AbilityType
    power: int
    accuracy: int
    cooldown: int
    current_cooldown: int = 0
    description: str = ""

    # Put on cooldown during the current round; skips that round's tick
    fresh: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidSnapshotError("Ability id is required")
        if not isinstance(self.type, AbilityType):
            object.__setattr__(self, "type", AbilityType(self.type))
        _check_range("power", self.power, MIN_POWER, MAX_POWER)
        _check_range("accuracy", self.accuracy, MIN_ACCURACY, MAX_ACCURACY)
        _check_range("cooldown", self.cooldown, 0, MAX_COOLDOWN)
        _check_range("current_cooldown", self.current_cooldown, 0, self.cooldown)

    def is_available(self) -> bool:
        """Check if the ability can be used this turn."""
        return self.current_cooldown == 0

    def use(self) -> "Ability":
        """Put the ability on its full cooldown."""
        return replace(self, current_cooldown=self.cooldown, fresh=True)

    def tick(self) -> "Ability":
        """Advance the cooldown by one completed round."""
        if self.fresh:
            return replace(self, fresh=False)
        if self.current_cooldown == 0:
            return self
        return replace(self, current_cooldown=self.current_cooldown - 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "power": self.power,
            "accuracy": self.accuracy,
            "cooldown": self.cooldown,
            "current_cooldown": self.current_cooldown,
        }


@dataclass(frozen=True)
class Combatant:
    """Snapshot of one fighter: attributes, health and abilities.

    Use `Combatant.create()` to get a fresh, full-health snapshot with
    derived maximum health.
    """

    id: str
    name: str
    level: int
    strength: int
    agility: int
    constitution: int
    intelligence: int
    max_health: int
    current_health: int
    abilities: tuple[Ability, ...] = ()

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidSnapshotError("Combatant id is required")
        if self.level < 1:
            raise InvalidSnapshotError(f"level must be at least 1, got {self.level}")
        for attribute in ("strength", "agility", "constitution", "intelligence"):
            _check_range(attribute, getattr(self, attribute), MIN_ATTRIBUTE, MAX_ATTRIBUTE)
        if self.max_health < 1:
            raise InvalidSnapshotError(f"max_health must be positive, got {self.max_health}")
        _check_range("current_health", self.current_health, 0, self.max_health)

        abilities = tuple(self.abilities)
        ids = [ability.id for ability in abilities]
        if len(ids) != len(set(ids)):
            raise InvalidSnapshotError(f"Duplicate ability ids for combatant {self.id}")
        object.__setattr__(self, "abilities", abilities)

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        level: int,
        strength: int,
        agility: int,
        constitution: int,
        intelligence: int,
        abilities: Iterable[Ability] = (),
    ) -> "Combatant":
        """Create a full-health combatant with cooldowns cleared."""
        max_health = calculate_max_health(constitution, level)
        return cls(
            id=id,
            name=name,
            level=level,
            strength=strength,
            agility=agility,
            constitution=constitution,
            intelligence=intelligence,
            max_health=max_health,
            current_health=max_health,
            abilities=tuple(abilities),
        ).refreshed()

    def refreshed(self) -> "Combatant":
        """Full health and every cooldown cleared, as at the start of a battle."""
        return replace(
            self,
            current_health=self.max_health,
            abilities=tuple(replace(ability, current_cooldown=0, fresh=False) for ability in self.abilities),
        )

    def is_alive(self) -> bool:
        """Check if the combatant is still standing."""
        return self.current_health > 0

    def is_defeated(self) -> bool:
        """Check if the combatant's health has reached 0."""
        return self.current_health == 0

    def take_damage(self, amount: int) -> "Combatant":
        """Lose health, never below 0."""
        return self._with_health(self.current_health - amount)

    def heal(self, amount: int) -> "Combatant":
        """Restore health, never above max_health."""
        return self._with_health(self.current_health + amount)

    def _with_health(self, health: int) -> "Combatant":
        return replace(self, current_health=min(self.max_health, max(0, health)))

    def get_ability(self, ability_id: str) -> Ability:
        """Look up an ability by id."""
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        raise KeyError(f"Combatant {self.id} has no ability {ability_id}")

    def available_abilities(self) -> list[Ability]:
        """Abilities that are off cooldown, in list order."""
        return [ability for ability in self.abilities if ability.is_available()]

    def use_ability(self, ability_id: str) -> "Combatant":
        """Put one ability on cooldown."""
        return replace(
            self,
            abilities=tuple(ability.use() if ability.id == ability_id else ability for ability in self.abilities),
        )

    def tick_cooldowns(self) -> "Combatant":
        """Advance every ability's cooldown at the end of a round."""
        return replace(self, abilities=tuple(ability.tick() for ability in self.abilities))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "strength": self.strength,
            "agility": self.agility,
            "constitution": self.constitution,
            "intelligence": self.intelligence,
            "max_health": self.max_health,
            "current_health": self.current_health,
            "abilities": [ability.to_dict() for ability in self.abilities],
        }

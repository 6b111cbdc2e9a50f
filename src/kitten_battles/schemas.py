"""Request/response schemas for feeding battles in and reading results out."""

from pydantic import BaseModel, Field

from .engine.battle import Battle
from .engine.logging import ActionKind
from .engine.types import (
    MAX_ACCURACY,
    MAX_ATTRIBUTE,
    MAX_COOLDOWN,
    MAX_POWER,
    MIN_ACCURACY,
    MIN_ATTRIBUTE,
    MIN_POWER,
    Ability,
    AbilityType,
    Combatant,
)

# =============================================================================
# Input
# =============================================================================


class AbilitySchema(BaseModel):
    """Ability as supplied by the caller. Cooldown always starts at 0."""

    id: str = Field(min_length=1, description="Unique ability id")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Flavor text")
    type: AbilityType = Field(description="Effect class: ATTACK, DEFENSE, SPECIAL, HEAL, BUFF, DEBUFF")
    power: int = Field(ge=MIN_POWER, le=MAX_POWER)
    accuracy: int = Field(ge=MIN_ACCURACY, le=MAX_ACCURACY, description="Hit chance in percent")
    cooldown: int = Field(ge=0, le=MAX_COOLDOWN, description="Rounds unusable after use")

    def to_domain(self) -> Ability:
        return Ability(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            power=self.power,
            accuracy=self.accuracy,
            cooldown=self.cooldown,
        )


class CombatantSchema(BaseModel):
    """Combatant as supplied by the caller. Health is derived."""

    id: str = Field(min_length=1)
    name: str
    level: int = Field(default=1, ge=1)
    strength: int = Field(ge=MIN_ATTRIBUTE, le=MAX_ATTRIBUTE)
    agility: int = Field(ge=MIN_ATTRIBUTE, le=MAX_ATTRIBUTE)
    constitution: int = Field(ge=MIN_ATTRIBUTE, le=MAX_ATTRIBUTE)
    intelligence: int = Field(ge=MIN_ATTRIBUTE, le=MAX_ATTRIBUTE)
    abilities: list[AbilitySchema] = Field(default_factory=list)

    def to_domain(self) -> Combatant:
        return Combatant.create(
            id=self.id,
            name=self.name,
            level=self.level,
            strength=self.strength,
            agility=self.agility,
            constitution=self.constitution,
            intelligence=self.intelligence,
            abilities=[ability.to_domain() for ability in self.abilities],
        )


class BattleRequest(BaseModel):
    """A battle to simulate."""

    battle_id: str | None = Field(default=None, description="Generated when omitted")
    seed: int | None = Field(default=None, description="Generated when omitted")
    challenger: CombatantSchema
    opponent: CombatantSchema


# =============================================================================
# Output
# =============================================================================


class LogEntrySchema(BaseModel):
    """One resolved action."""

    round: int
    turn: int
    kind: ActionKind
    actor_id: str
    target_id: str
    ability_id: str
    ability_name: str
    ability_type: AbilityType | None = None
    magnitude: int
    success: bool
    critical: bool
    message: str
    actor_health: int
    opponent_health: int


class BattleResponse(BaseModel):
    """Finished battle as returned to the caller."""

    id: str
    seed: int
    rounds: int
    is_finished: bool
    winner_id: str | None = None
    experience_gain: int
    log: list[LogEntrySchema]

    @classmethod
    def from_battle(cls, battle: Battle) -> "BattleResponse":
        return cls.model_validate(battle.to_dict())

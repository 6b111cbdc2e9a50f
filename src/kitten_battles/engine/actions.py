"""Action resolver - resolves one combatant's turn against the other."""

import logging
from dataclasses import dataclass

from .dice import Dice
from .logging import PASS_ABILITY_NAME, ActionKind, LogEntry
from .types import Ability, AbilityType, Combatant

logger = logging.getLogger(__name__)

MIN_HIT_CHANCE = 10
BASE_CRIT_CHANCE = 5
VARIANCE_MIN = 80
VARIANCE_MAX = 120
DAMAGE_REDUCTION_PER_CONSTITUTION = 3  # percent


def calculate_hit_chance(accuracy: int, defender_agility: int) -> int:
    """Chance in percent that an ability lands, never below 10."""
    return max(accuracy - defender_agility * 2, MIN_HIT_CHANCE)


def calculate_crit_chance(intelligence: int) -> int:
    """Chance in percent that a landed ability is critical."""
    return BASE_CRIT_CHANCE + intelligence // 2


def calculate_base_magnitude(ability: Ability, actor: Combatant) -> int:
    """Magnitude before variance, crit and reduction."""
    match ability.type:
        case AbilityType.ATTACK:
            return ability.power + actor.strength * 2
        case AbilityType.SPECIAL:
            return ability.power + actor.intelligence * 2
        case AbilityType.HEAL:
            return ability.power + actor.intelligence * 3
        case _:
            return 0


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one turn: both updated combatants and the log entry."""

    actor: Combatant
    opponent: Combatant
    entry: LogEntry


class ActionResolver:
    """Resolves a single turn.

    Draws are taken from the dice in a fixed order: ability pick, hit
    check, then crit check and variance (only when the ability lands).
    A pass consumes one counter value in place of the ability pick.
    """

    def resolve(
        self,
        actor: Combatant,
        opponent: Combatant,
        round_number: int,
        turn: int,
        dice: Dice,
    ) -> ActionResult:
        """Resolve the actor's turn against the opponent.

        Args:
            actor: Combatant taking the turn
            opponent: The other combatant
            round_number: Current round (1-based)
            turn: 1 for the initiative winner, 2 for the other
            dice: Draw source for this battle

        Returns:
            ActionResult with updated snapshots and the log entry
        """
        ability = self.select_ability(actor, dice)
        if ability is None:
            logger.debug("Round %d: %s has no available ability and passes", round_number, actor.id)
            entry = LogEntry(
                round_number=round_number,
                turn=turn,
                kind=ActionKind.PASS,
                actor_id=actor.id,
                target_id=opponent.id,
                ability_id="",
                ability_name=PASS_ABILITY_NAME,
                magnitude=0,
                success=True,
                critical=False,
                message=f"{actor.name} passes their turn.",
                actor_health=actor.current_health,
                opponent_health=opponent.current_health,
            )
            return ActionResult(actor=actor, opponent=opponent, entry=entry)

        hit_chance = calculate_hit_chance(ability.accuracy, opponent.agility)
        if dice.roll(1, 100) > hit_chance:
            actor = actor.use_ability(ability.id)
            entry = LogEntry(
                round_number=round_number,
                turn=turn,
                kind=ActionKind.MISS,
                actor_id=actor.id,
                target_id=opponent.id,
                ability_id=ability.id,
                ability_name=ability.name,
                ability_type=ability.type,
                magnitude=0,
                success=False,
                critical=False,
                message=f"{actor.name} misses with {ability.name}!",
                actor_health=actor.current_health,
                opponent_health=opponent.current_health,
            )
            return ActionResult(actor=actor, opponent=opponent, entry=entry)

        critical = dice.roll(1, 100) <= calculate_crit_chance(actor.intelligence)
        magnitude = self.calculate_magnitude(ability, actor, opponent, critical, dice)

        return self._apply(ability, actor, opponent, magnitude, critical, round_number, turn)

    def select_ability(self, actor: Combatant, dice: Dice) -> Ability | None:
        """Pick a uniformly random available ability, or None to pass."""
        available = actor.available_abilities()
        if not available:
            dice.skip()
            return None
        return available[dice.roll(0, len(available) - 1)]

    def calculate_magnitude(
        self,
        ability: Ability,
        actor: Combatant,
        target: Combatant,
        critical: bool,
        dice: Dice,
    ) -> int:
        """Compute the final magnitude of a landed ability.

        The variance draw is consumed for every effect class so the draw
        sequence does not depend on which ability was picked.
        """
        variance = dice.roll(VARIANCE_MIN, VARIANCE_MAX)
        if ability.type not in (AbilityType.ATTACK, AbilityType.SPECIAL, AbilityType.HEAL):
            return 0

        magnitude = calculate_base_magnitude(ability, actor) * variance // 100
        if critical:
            magnitude = magnitude * 3 // 2

        if ability.type == AbilityType.HEAL:
            return magnitude

        if ability.type == AbilityType.ATTACK:
            magnitude = magnitude * (100 - target.constitution * DAMAGE_REDUCTION_PER_CONSTITUTION) // 100

        return max(1, magnitude)

    def _apply(
        self,
        ability: Ability,
        actor: Combatant,
        opponent: Combatant,
        magnitude: int,
        critical: bool,
        round_number: int,
        turn: int,
    ) -> ActionResult:
        """Apply a landed ability's effect and build its log entry."""
        suffix = " (Critical)!" if critical else "!"
        target_id = opponent.id

        match ability.type:
            case AbilityType.ATTACK:
                opponent = opponent.take_damage(magnitude)
                message = f"{actor.name} uses {ability.name} and deals {magnitude} damage{suffix}"
            case AbilityType.HEAL:
                actor = actor.heal(magnitude)
                target_id = actor.id
                message = f"{actor.name} uses {ability.name} and heals for {magnitude}{suffix}"
            case _:
                # SPECIAL, DEFENSE, BUFF, DEBUFF have no mechanics yet
                message = f"{actor.name} uses {ability.name}!"

        actor = actor.use_ability(ability.id)
        logger.debug(
            "Round %d turn %d: %s used %s (%s) magnitude=%d critical=%s",
            round_number,
            turn,
            actor.id,
            ability.id,
            ability.type.value,
            magnitude,
            critical,
        )

        entry = LogEntry(
            round_number=round_number,
            turn=turn,
            kind=ActionKind.HIT,
            actor_id=actor.id,
            target_id=target_id,
            ability_id=ability.id,
            ability_name=ability.name,
            ability_type=ability.type,
            magnitude=magnitude,
            success=True,
            critical=critical,
            message=message,
            actor_health=actor.current_health,
            opponent_health=opponent.current_health,
        )
        return ActionResult(actor=actor, opponent=opponent, entry=entry)

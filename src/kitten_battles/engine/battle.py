"""Battle engine - drives a battle round by round to its outcome."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

from ..errors import BattleFinishedError, SelfBattleError
from ..utils.experience import calculate_experience_gain
from .actions import ActionResolver
from .dice import Dice, SeededDice
from .initiative import InitiativeResolver
from .logging import BattleLog
from .types import Combatant

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 30


class BattlePhase(str, Enum):
    """Lifecycle of a battle."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class BattleOutcome(str, Enum):
    """Result of a finished battle from one combatant's point of view."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


@dataclass(frozen=True)
class Battle:
    """Complete state of one battle.

    Each round produces a new Battle. `counter` is the next unused draw
    counter; it starts at the seed.
    """

    id: str
    seed: int
    counter: int
    challenger: Combatant
    opponent: Combatant
    round_number: int = 0
    phase: BattlePhase = BattlePhase.NOT_STARTED
    log: BattleLog = field(default_factory=BattleLog)
    winner_id: str | None = None
    experience_gain: int = 0

    @classmethod
    def create(cls, id: str, seed: int, challenger: Combatant, opponent: Combatant) -> "Battle":
        """Set up a battle at round 0 with both sides at full health.

        Raises:
            SelfBattleError: If both snapshots are the same combatant
        """
        if challenger.id == opponent.id:
            raise SelfBattleError()
        return cls(
            id=id,
            seed=seed,
            counter=seed,
            challenger=challenger.refreshed(),
            opponent=opponent.refreshed(),
        )

    @property
    def is_finished(self) -> bool:
        return self.phase == BattlePhase.FINISHED

    @property
    def is_draw(self) -> bool:
        return self.is_finished and self.winner_id is None

    @property
    def rounds(self) -> int:
        """Number of rounds played so far."""
        return self.round_number

    @property
    def loser_id(self) -> str | None:
        if self.winner_id is None:
            return None
        return self.opponent.id if self.winner_id == self.challenger.id else self.challenger.id

    def combatant(self, combatant_id: str) -> Combatant:
        """Get a participant's current snapshot by id."""
        if combatant_id == self.challenger.id:
            return self.challenger
        if combatant_id == self.opponent.id:
            return self.opponent
        raise KeyError(f"Combatant {combatant_id} is not in battle {self.id}")

    def outcome_for(self, combatant_id: str) -> BattleOutcome:
        """Win, loss or draw for one participant of a finished battle."""
        self.combatant(combatant_id)
        if not self.is_finished:
            raise ValueError(f"Battle {self.id} is not finished")
        if self.winner_id is None:
            return BattleOutcome.DRAW
        return BattleOutcome.WIN if self.winner_id == combatant_id else BattleOutcome.LOSS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "seed": self.seed,
            "rounds": self.rounds,
            "phase": self.phase.value,
            "is_finished": self.is_finished,
            "winner_id": self.winner_id,
            "experience_gain": self.experience_gain,
            "challenger": self.challenger.to_dict(),
            "opponent": self.opponent.to_dict(),
            "log": self.log.to_dict(),
        }


class BattleEngine:
    """Runs the round state machine: NOT_STARTED -> IN_PROGRESS -> FINISHED.

    `play_round()` is a pure transition from one Battle to the next;
    `simulate()` repeats it until the battle is finished.
    """

    def __init__(
        self,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        initiative_resolver: InitiativeResolver | None = None,
        action_resolver: ActionResolver | None = None,
        dice_factory: Callable[[int], Dice] = SeededDice,
    ) -> None:
        if max_rounds < 1:
            raise ValueError(f"max_rounds must be at least 1, got {max_rounds}")
        self.max_rounds = max_rounds
        self.initiative_resolver = initiative_resolver or InitiativeResolver()
        self.action_resolver = action_resolver or ActionResolver()
        self.dice_factory = dice_factory

    def simulate(self, battle: Battle) -> Battle:
        """Play a battle to completion.

        Args:
            battle: Battle at round 0 (a finished battle is returned as is)

        Returns:
            The finished battle with winner, experience gain and full log
        """
        while not battle.is_finished:
            battle = self.play_round(battle)

        logger.info(
            "Battle %s finished after %d rounds: %s (xp=%d)",
            battle.id,
            battle.rounds,
            f"winner {battle.winner_id}" if battle.winner_id else "draw",
            battle.experience_gain,
        )
        return battle

    def play_round(self, battle: Battle) -> Battle:
        """Play one round and return the resulting battle.

        Round flow:
        1. Advance the round number
        2. Roll initiative
        3. First actor acts; if someone is defeated the round ends here
        4. Second actor acts
        5. Cooldowns tick for both sides
        6. Finish if someone is defeated or the round cap is reached

        Raises:
            BattleFinishedError: If the battle is already finished
        """
        if battle.is_finished:
            raise BattleFinishedError(battle.id)

        round_number = battle.round_number + 1
        dice = self.dice_factory(battle.counter)

        initiative = self.initiative_resolver.resolve(battle.challenger, battle.opponent, dice)
        logger.debug(
            "Battle %s round %d: %s acts first (rolls %d vs %d)",
            battle.id,
            round_number,
            initiative.first.id,
            initiative.challenger_roll,
            initiative.opponent_roll,
        )

        log = battle.log
        first = self.action_resolver.resolve(initiative.first, initiative.second, round_number, 1, dice)
        log = log.append(first.entry)
        states = {first.actor.id: first.actor, first.opponent.id: first.opponent}

        if all(state.is_alive() for state in states.values()):
            second = self.action_resolver.resolve(first.opponent, first.actor, round_number, 2, dice)
            log = log.append(second.entry)
            states = {
                second.actor.id: second.actor.tick_cooldowns(),
                second.opponent.id: second.opponent.tick_cooldowns(),
            }

        battle = replace(
            battle,
            round_number=round_number,
            phase=BattlePhase.IN_PROGRESS,
            counter=dice.counter,
            challenger=states[battle.challenger.id],
            opponent=states[battle.opponent.id],
            log=log,
        )

        defeated = not (battle.challenger.is_alive() and battle.opponent.is_alive())
        if defeated or round_number >= self.max_rounds:
            return self._finish(battle)
        return battle

    def _finish(self, battle: Battle) -> Battle:
        """Decide the winner and experience gain, and close the battle."""
        winner: Combatant | None = None
        loser: Combatant | None = None
        if battle.challenger.is_defeated():
            winner, loser = battle.opponent, battle.challenger
        elif battle.opponent.is_defeated():
            winner, loser = battle.challenger, battle.opponent

        if winner is None or loser is None:
            return replace(battle, phase=BattlePhase.FINISHED, winner_id=None, experience_gain=0)

        return replace(
            battle,
            phase=BattlePhase.FINISHED,
            winner_id=winner.id,
            experience_gain=calculate_experience_gain(winner.level, loser.level),
        )

"""Battle service - validates a battle request and runs it through the engine."""

import logging
import random
import uuid
from typing import Protocol

from ..config import Settings, get_settings
from ..engine.battle import Battle, BattleEngine
from ..engine.types import Combatant
from ..errors import CombatantNotFoundError, NotOwnerError, SelfBattleError

logger = logging.getLogger(__name__)


class CombatantSource(Protocol):
    """Resolves combatant ids to snapshots and answers ownership checks."""

    def find_by_id(self, combatant_id: str) -> Combatant | None: ...

    def is_owner(self, combatant_id: str, owner_id: str) -> bool: ...


class BattleRecorder(Protocol):
    """Receives finished battles (storage, win/loss tallies, experience)."""

    def record(self, battle: Battle) -> None: ...


class BattleService:
    """Service for battle operations."""

    def __init__(
        self,
        source: CombatantSource,
        recorder: BattleRecorder | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.source = source
        self.recorder = recorder
        self.settings = settings or get_settings()
        self.engine = BattleEngine(max_rounds=self.settings.max_rounds)
        self.rng = rng or random.Random()

    def create_battle(
        self,
        challenger_id: str,
        opponent_id: str,
        owner_id: str,
        seed: int | None = None,
        battle_id: str | None = None,
    ) -> Battle:
        """Create and fully simulate a battle.

        Args:
            challenger_id: Combatant starting the battle (must belong to owner_id)
            opponent_id: Combatant being challenged
            owner_id: Caller requesting the battle
            seed: Seed to replay; a new one is generated when omitted
            battle_id: Id for the battle; a uuid4 is generated when omitted

        Returns:
            The finished battle

        Raises:
            CombatantNotFoundError: If either combatant does not exist
            NotOwnerError: If owner_id does not own the challenger
            SelfBattleError: If both ids are the same combatant
        """
        challenger = self.source.find_by_id(challenger_id)
        if challenger is None:
            logger.warning("Battle rejected: challenger %s not found", challenger_id)
            raise CombatantNotFoundError(challenger_id)

        opponent = self.source.find_by_id(opponent_id)
        if opponent is None:
            logger.warning("Battle rejected: opponent %s not found", opponent_id)
            raise CombatantNotFoundError(opponent_id)

        if not self.source.is_owner(challenger_id, owner_id):
            logger.warning("Battle rejected: %s does not own %s", owner_id, challenger_id)
            raise NotOwnerError()

        if challenger_id == opponent_id:
            logger.warning("Battle rejected: %s cannot battle itself", challenger_id)
            raise SelfBattleError()

        if seed is None:
            seed = self.generate_seed()

        battle = Battle.create(
            id=battle_id or str(uuid.uuid4()),
            seed=seed,
            challenger=challenger,
            opponent=opponent,
        )
        logger.info("Battle %s created: %s vs %s (seed=%d)", battle.id, challenger_id, opponent_id, seed)

        battle = self.engine.simulate(battle)

        if self.recorder is not None:
            self.recorder.record(battle)

        return battle

    def replay(self, battle: Battle) -> Battle:
        """Re-run a battle from its seed and starting snapshots."""
        fresh = Battle.create(battle.id, battle.seed, battle.challenger, battle.opponent)
        return self.engine.simulate(fresh)

    def generate_seed(self) -> int:
        """Pick a new seed in [0, seed_upper_bound)."""
        return self.rng.randrange(self.settings.seed_upper_bound)

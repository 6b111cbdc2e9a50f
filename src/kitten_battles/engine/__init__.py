"""Battle engine module - initiative, action resolution and the round loop."""

from .actions import ActionResolver, ActionResult
from .battle import Battle, BattleEngine, BattleOutcome, BattlePhase
from .dice import Dice, SeededDice, draw_in_range
from .initiative import Initiative, InitiativeResolver
from .logging import ActionKind, BattleLog, LogEntry
from .types import Ability, AbilityType, Combatant, InvalidSnapshotError

__all__ = [
    "draw_in_range",
    "Dice",
    "SeededDice",
    "Ability",
    "AbilityType",
    "Combatant",
    "InvalidSnapshotError",
    "Initiative",
    "InitiativeResolver",
    "ActionResolver",
    "ActionResult",
    "Battle",
    "BattleEngine",
    "BattleOutcome",
    "BattlePhase",
    "ActionKind",
    "BattleLog",
    "LogEntry",
]

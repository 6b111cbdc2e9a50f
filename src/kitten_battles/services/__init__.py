"""Service layer around the battle engine."""

from .battles import BattleRecorder, BattleService, CombatantSource

__all__ = [
    "BattleService",
    "BattleRecorder",
    "CombatantSource",
]

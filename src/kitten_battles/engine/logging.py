"""Battle log - the append-only record of every resolved action.

Provides:
- LogEntry: one resolved turn (pass, miss or landed ability)
- BattleLog: the ordered entries of one battle, with query helpers
  and a human-readable transcript for replays
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .types import AbilityType

PASS_ABILITY_NAME = "Pass"


class ActionKind(str, Enum):
    """What happened on a turn."""

    PASS = "pass"  # No ability was available
    MISS = "miss"  # Ability failed its hit check
    HIT = "hit"  # Ability landed


@dataclass(frozen=True)
class LogEntry:
    """A single resolved action."""

    round_number: int
    turn: int  # 1 or 2 within the round
    kind: ActionKind
    actor_id: str
    target_id: str
    ability_id: str
    ability_name: str
    magnitude: int
    success: bool
    critical: bool
    message: str

    # Health of the acting and the other combatant after the action
    actor_health: int
    opponent_health: int

    ability_type: AbilityType | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "round": self.round_number,
            "turn": self.turn,
            "kind": self.kind.value,
            "actor_id": self.actor_id,
            "target_id": self.target_id,
            "ability_id": self.ability_id,
            "ability_name": self.ability_name,
            "ability_type": self.ability_type.value if self.ability_type else None,
            "magnitude": self.magnitude,
            "success": self.success,
            "critical": self.critical,
            "message": self.message,
            "actor_health": self.actor_health,
            "opponent_health": self.opponent_health,
        }


@dataclass(frozen=True)
class BattleLog:
    """Ordered log of a battle. Appending returns a new log."""

    entries: tuple[LogEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self.entries[index]

    def append(self, entry: LogEntry) -> "BattleLog":
        """Return a new log with the entry added at the end."""
        return BattleLog(entries=self.entries + (entry,))

    def to_dict(self) -> list[dict[str, Any]]:
        """Convert to a list of dictionaries for serialization."""
        return [entry.to_dict() for entry in self.entries]

    def entries_for_round(self, round_number: int) -> list[LogEntry]:
        """Get all entries for a specific round."""
        return [e for e in self.entries if e.round_number == round_number]

    def entries_for_actor(self, actor_id: str) -> list[LogEntry]:
        """Get all entries where the given combatant acted."""
        return [e for e in self.entries if e.actor_id == actor_id]

    def entries_by_kind(self, kind: ActionKind) -> list[LogEntry]:
        """Get all entries of a specific kind."""
        return [e for e in self.entries if e.kind == kind]

    def format_readable(self) -> str:
        """Format the log as a round-by-round transcript."""
        lines: list[str] = []
        current_round = 0

        for entry in self.entries:
            if entry.round_number != current_round:
                current_round = entry.round_number
                lines.append(f"--- Round {current_round} ---")

            lines.append(self._format_entry(entry))

        return "\n".join(lines)

    @staticmethod
    def _format_entry(entry: LogEntry) -> str:
        """Format a single log entry."""
        match entry.kind:
            case ActionKind.PASS:
                marker = "·"
            case ActionKind.MISS:
                marker = "✗"
            case _:
                marker = "!" if entry.critical else "→"

        return f"  {entry.turn}. {marker} {entry.message} (HP {entry.actor_health} vs {entry.opponent_health})"

"""Errors raised when a battle cannot be created or advanced."""


class BattleError(Exception):
    """Base class for battle errors."""


class CombatantNotFoundError(BattleError):
    """A combatant id did not resolve to a snapshot."""

    def __init__(self, combatant_id: str) -> None:
        super().__init__(f"Combatant with ID {combatant_id} not found")
        self.combatant_id = combatant_id


class NotOwnerError(BattleError):
    """The caller does not own the challenging combatant."""

    def __init__(self) -> None:
        super().__init__("You can only battle with your own combatants")


class SelfBattleError(BattleError):
    """Both sides of a battle are the same combatant."""

    def __init__(self) -> None:
        super().__init__("A combatant cannot battle against itself")


class BattleFinishedError(BattleError):
    """A round was requested for a battle that is already over."""

    def __init__(self, battle_id: str) -> None:
        super().__init__(f"Battle {battle_id} is already finished")
        self.battle_id = battle_id

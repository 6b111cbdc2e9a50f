"""Initiative resolver - decides who acts first each round."""

from dataclasses import dataclass

from .dice import Dice
from .types import Combatant


@dataclass(frozen=True)
class Initiative:
    """Turn order for one round."""

    first: Combatant
    second: Combatant
    challenger_roll: int
    opponent_roll: int


class InitiativeResolver:
    """Rolls initiative for a round.

    Each side rolls 1-20 and adds its agility. The higher total acts
    first; ties go to the challenger.
    """

    def resolve(self, challenger: Combatant, opponent: Combatant, dice: Dice) -> Initiative:
        """Roll initiative for both combatants.

        Args:
            challenger: The combatant that started the battle
            opponent: The other combatant
            dice: Draw source, advanced by two draws

        Returns:
            Initiative with the first and second actor
        """
        challenger_roll = dice.roll(1, 20) + challenger.agility
        opponent_roll = dice.roll(1, 20) + opponent.agility

        if challenger_roll >= opponent_roll:
            return Initiative(challenger, opponent, challenger_roll, opponent_roll)
        return Initiative(opponent, challenger, challenger_roll, opponent_roll)

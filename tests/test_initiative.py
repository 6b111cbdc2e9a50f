"""Tests for the initiative resolver."""

from kitten_battles.engine.dice import SeededDice
from kitten_battles.engine.initiative import InitiativeResolver


class TestInitiativeResolver:
    """Tests for InitiativeResolver."""

    def test_higher_roll_acts_first(self, combatant_factory, scripted_dice):
        """The higher roll plus agility acts first."""
        challenger = combatant_factory(id="tom", agility=5)
        opponent = combatant_factory(id="felix", agility=5)

        initiative = InitiativeResolver().resolve(challenger, opponent, scripted_dice([3, 12]))

        assert initiative.first.id == "felix"
        assert initiative.second.id == "tom"
        assert initiative.challenger_roll == 8
        assert initiative.opponent_roll == 17

    def test_agility_is_added(self, combatant_factory, scripted_dice):
        """Agility can overturn a lower raw roll."""
        challenger = combatant_factory(id="tom", agility=15)
        opponent = combatant_factory(id="felix", agility=1)

        initiative = InitiativeResolver().resolve(challenger, opponent, scripted_dice([3, 12]))

        assert initiative.first.id == "tom"

    def test_tie_favors_challenger(self, combatant_factory, scripted_dice):
        """Equal totals go to the challenger."""
        challenger = combatant_factory(id="tom", agility=4)
        opponent = combatant_factory(id="felix", agility=6)

        initiative = InitiativeResolver().resolve(challenger, opponent, scripted_dice([12, 10]))

        assert initiative.challenger_roll == initiative.opponent_roll
        assert initiative.first.id == "tom"

    def test_uses_two_distinct_draws(self, combatant_factory, scripted_dice):
        """Each side rolls 1-20 on its own counter."""
        dice = scripted_dice([1, 20])
        InitiativeResolver().resolve(combatant_factory(id="a"), combatant_factory(id="b"), dice)

        assert dice.rolls == [(1, 20), (1, 20)]
        assert dice.counter == 2

    def test_max_agility_gap_always_challenger(self, combatant_factory):
        """Agility 20 against 1 can at best tie, so the challenger always leads."""
        challenger = combatant_factory(id="tom", agility=20)
        opponent = combatant_factory(id="felix", agility=1)
        resolver = InitiativeResolver()
        dice = SeededDice(0)

        for _ in range(500):
            assert resolver.resolve(challenger, opponent, dice).first.id == "tom"

"""Tests for BattleService."""

import random

import pytest

from kitten_battles.config import Settings
from kitten_battles.engine.battle import Battle
from kitten_battles.errors import CombatantNotFoundError, NotOwnerError, SelfBattleError
from kitten_battles.services import BattleService


class FakeSource:
    """In-memory combatants keyed by id, each with an owner."""

    def __init__(self, *entries):
        self.combatants = {combatant.id: (combatant, owner) for combatant, owner in entries}

    def find_by_id(self, combatant_id):
        entry = self.combatants.get(combatant_id)
        return entry[0] if entry else None

    def is_owner(self, combatant_id, owner_id):
        return self.combatants[combatant_id][1] == owner_id


class FakeRecorder:
    def __init__(self):
        self.recorded: list[Battle] = []

    def record(self, battle):
        self.recorded.append(battle)


@pytest.fixture
def source(challenger, opponent):
    return FakeSource((challenger, "alice"), (opponent, "bob"))


@pytest.fixture
def recorder():
    return FakeRecorder()


@pytest.fixture
def service(source, recorder):
    return BattleService(source, recorder=recorder, settings=Settings(), rng=random.Random(1))


class TestCreateBattle:
    """Tests for BattleService.create_battle."""

    def test_runs_and_records(self, service, recorder):
        """A valid request is simulated to the end and recorded once."""
        battle = service.create_battle("challenger", "opponent", "alice", seed=123456, battle_id="b1")

        assert battle.id == "b1"
        assert battle.seed == 123456
        assert battle.is_finished
        assert recorder.recorded == [battle]

    def test_generates_id_and_seed(self, service):
        """Omitted id and seed are generated."""
        battle = service.create_battle("challenger", "opponent", "alice")

        assert battle.id
        assert 0 <= battle.seed < 1_000_000

    def test_same_seed_same_battle(self, service):
        """Battles with the same seed and snapshots are identical."""
        first = service.create_battle("challenger", "opponent", "alice", seed=77, battle_id="b1")
        second = service.create_battle("challenger", "opponent", "alice", seed=77, battle_id="b1")

        assert first == second

    def test_missing_challenger(self, service, recorder):
        """Unknown challenger is rejected before anything runs."""
        with pytest.raises(CombatantNotFoundError) as exc_info:
            service.create_battle("ghost", "opponent", "alice")

        assert exc_info.value.combatant_id == "ghost"
        assert recorder.recorded == []

    def test_missing_opponent(self, service):
        """Unknown opponent is rejected."""
        with pytest.raises(CombatantNotFoundError) as exc_info:
            service.create_battle("challenger", "ghost", "alice")

        assert exc_info.value.combatant_id == "ghost"

    def test_not_owner(self, service):
        """Only the owner can start a battle with a combatant."""
        with pytest.raises(NotOwnerError):
            service.create_battle("challenger", "opponent", "bob")

    def test_self_battle(self, service):
        """A combatant cannot be both sides."""
        with pytest.raises(SelfBattleError):
            service.create_battle("challenger", "challenger", "alice")

    def test_ownership_checked_before_self_battle(self, service):
        """Ownership is validated first."""
        with pytest.raises(NotOwnerError):
            service.create_battle("challenger", "challenger", "bob")

    def test_not_found_checked_before_ownership(self, service):
        """Existence is validated before ownership."""
        with pytest.raises(CombatantNotFoundError):
            service.create_battle("challenger", "ghost", "bob")

    def test_without_recorder(self, source):
        """The recorder is optional."""
        service = BattleService(source, settings=Settings())
        battle = service.create_battle("challenger", "opponent", "alice", seed=1)
        assert battle.is_finished

    def test_round_cap_from_settings(self, combatant_factory):
        """max_rounds in settings caps the battle."""
        source = FakeSource(
            (combatant_factory(id="a", abilities=[]), "alice"),
            (combatant_factory(id="b", abilities=[]), "bob"),
        )
        service = BattleService(source, settings=Settings(max_rounds=4))

        battle = service.create_battle("a", "b", "alice", seed=1)

        assert battle.rounds == 4
        assert battle.is_draw


class TestReplayAndSeeds:
    """Tests for replay and seed generation."""

    def test_replay_matches(self, service):
        """Replaying a finished battle reproduces it exactly."""
        battle = service.create_battle("challenger", "opponent", "alice", seed=2024)

        assert service.replay(battle) == battle

    def test_generate_seed_range(self, source):
        """Generated seeds fall in [0, seed_upper_bound)."""
        service = BattleService(source, settings=Settings(seed_upper_bound=10), rng=random.Random(3))
        seeds = {service.generate_seed() for _ in range(200)}

        assert seeds <= set(range(10))
        assert len(seeds) > 1

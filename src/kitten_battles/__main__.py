"""Entry point for simulating a battle from a JSON request.

Usage:
    python -m kitten_battles battle.json
    python -m kitten_battles battle.json --seed 123456 --json
"""

import argparse
import json
import logging
import random
import sys
import uuid
from pathlib import Path

from pydantic import ValidationError

from kitten_battles.config import get_settings
from kitten_battles.engine import Battle, BattleEngine, InvalidSnapshotError
from kitten_battles.errors import BattleError
from kitten_battles.schemas import BattleRequest, BattleResponse


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="kitten_battles", description="Simulate a deterministic battle.")
    parser.add_argument("request", type=Path, help="JSON file with challenger and opponent")
    parser.add_argument("--seed", type=int, default=None, help="Override the request seed")
    parser.add_argument("--max-rounds", type=int, default=None, help="Override the round cap")
    parser.add_argument("--json", action="store_true", help="Print the battle as JSON instead of a transcript")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one battle and print the result."""
    settings = get_settings()
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        request = BattleRequest.model_validate_json(args.request.read_text(encoding="utf-8"))
    except OSError as e:
        logging.error("Cannot read %s: %s", args.request, e)
        return 2
    except ValidationError as e:
        logging.error("Invalid battle request:\n%s", e)
        return 2

    seed = args.seed if args.seed is not None else request.seed
    if seed is None:
        seed = random.randrange(settings.seed_upper_bound)

    engine = BattleEngine(max_rounds=args.max_rounds or settings.max_rounds)
    try:
        battle = Battle.create(
            id=request.battle_id or str(uuid.uuid4()),
            seed=seed,
            challenger=request.challenger.to_domain(),
            opponent=request.opponent.to_domain(),
        )
    except (BattleError, InvalidSnapshotError) as e:
        logging.error("Cannot start battle: %s", e)
        return 2
    battle = engine.simulate(battle)

    if args.json:
        print(json.dumps(BattleResponse.from_battle(battle).model_dump(mode="json"), indent=2))
        return 0

    print(f"=== Battle {battle.id} (seed {battle.seed}) ===")
    print(battle.log.format_readable())
    if battle.winner_id:
        winner = battle.combatant(battle.winner_id)
        print(f"*** WINNER: {winner.name} after {battle.rounds} rounds (+{battle.experience_gain} XP) ***")
    else:
        print(f"*** DRAW after {battle.rounds} rounds ***")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Experience reward for the winner of a battle."""

MIN_EXPERIENCE_GAIN = 5


def calculate_base_experience(loser_level: int) -> int:
    """Base experience for beating an opponent of the given level.

    Formula: 10 + loser_level * 5
    """
    return 10 + loser_level * 5


def calculate_level_multiplier(winner_level: int, loser_level: int) -> float:
    """Scale experience by the level gap.

    Each level the loser has over the winner adds 10%, each level below
    removes 10%.

    Args:
        winner_level: Winner's level
        loser_level: Loser's level

    Returns:
        Multiplier applied to the base experience
    """
    return 1 + (loser_level - winner_level) * 0.1


def calculate_experience_gain(winner_level: int, loser_level: int) -> int:
    """Calculate experience gained by the winner.

    Computed in tenths so the floor is exact:
    floor(base * (1 + diff * 0.1)) == base * (10 + diff) // 10

    Args:
        winner_level: Winner's level
        loser_level: Loser's level

    Returns:
        Experience gain, at least 5
    """
    base = calculate_base_experience(loser_level)
    scaled = base * (10 + loser_level - winner_level) // 10
    return max(MIN_EXPERIENCE_GAIN, scaled)

"""Elo rating with reward curves for multiplayer games."""

from enum import Enum


DEFAULT_K_FACTOR = 32
DEFAULT_DEVIATION = 400

# Fractional score for each finish position, index 0 being the winner.
REWARD_CURVES: dict[int, tuple[float, ...]] = {
    2: (1.0, 0.0),
    3: (1.0, 0.5, 0.0),
    4: (1.0, 0.5, 0.25, 0.0),
    5: (1.0, 0.5, 0.25, 0.12, 0.0),
    6: (1.0, 0.5, 0.25, 0.12, 0.05, 0.0),
}

MIN_PLAYERS = 2
MAX_PLAYERS = 6


class UnscoreableGameError(Exception):
    """Raised when a game cannot contribute to ratings."""


class UnsupportedGameSizeError(UnscoreableGameError):
    """Raised when no reward curve exists for a game size."""


class TableZapMode(str, Enum):
    """How games ended in a single resolution are scored."""

    # Keep normal rank order
    IGNORE = "ignore"
    # Everyone but the winner loses equally
    COLLAPSE_NON_WINNERS = "collapseNonWinners"


def _build_weights(
    curves: dict[int, tuple[float, ...]],
) -> dict[tuple[int, int], float]:
    """Flatten reward curves into a (players, position) lookup table.

    Args:
        curves: Reward curve per number of players

    Returns:
        Weight per (number of players, finish position)

    Raises:
        ValueError: If a game size is missing or a curve is malformed
    """
    weights: dict[tuple[int, int], float] = {}
    for num_players in range(MIN_PLAYERS, MAX_PLAYERS + 1):
        curve = curves.get(num_players)
        if curve is None:
            raise ValueError(f"Missing reward curve for {num_players} players")
        if len(curve) != num_players:
            raise ValueError(
                f"Reward curve for {num_players} players has {len(curve)} entries"
            )
        if curve[0] != 1.0 or curve[-1] != 0.0:
            raise ValueError(
                f"Reward curve for {num_players} players must run from 1.0 to 0"
            )
        if any(a < b for a, b in zip(curve, curve[1:])):
            raise ValueError(
                f"Reward curve for {num_players} players is not decreasing"
            )
        for position, weight in enumerate(curve):
            weights[(num_players, position)] = weight
    return weights


REWARD_WEIGHTS = _build_weights(REWARD_CURVES)


def supports_game_size(num_players: int) -> bool:
    """Check whether a reward curve exists for the number of players."""
    return (num_players, 0) in REWARD_WEIGHTS


def reward_weight(num_players: int, position: int) -> float:
    """Get the actual score for a finish position.

    Args:
        num_players: Number of players in the game
        position: Finish position, 0 being the winner

    Returns:
        Fractional score between 0 and 1

    Raises:
        UnsupportedGameSizeError: If no weight is defined
    """
    try:
        return REWARD_WEIGHTS[(num_players, position)]
    except KeyError:
        raise UnsupportedGameSizeError(
            f"No reward weight for position {position} of {num_players} players"
        ) from None


def reward_curve(num_players: int) -> list[float]:
    """Get all weights for a game size, winner first."""
    return [reward_weight(num_players, i) for i in range(num_players)]


class EloRank:
    """Simple ELO ranking system."""

    def __init__(
        self,
        k_factor: int = DEFAULT_K_FACTOR,
        deviation: int = DEFAULT_DEVIATION,
    ):
        """Initialize ELO ranking system.

        Args:
            k_factor: K-factor for ELO calculation (default: 32)
            deviation: Logistic scale D (default: 400)
        """
        self.k_factor = k_factor
        self.deviation = deviation

    def get_expected(self, rating: float, opponent: float) -> float:
        """Get expected score for a player against an opponent rating.

        Args:
            rating: Rating of the player
            opponent: Rating of the opponent, or the field average

        Returns:
            Expected score (0-1)
        """
        return 1 / (1 + 10 ** ((opponent - rating) / self.deviation))

    def rating_delta(self, rating: float, opponent: float, actual: float) -> int:
        """Get the rating change for a result.

        Args:
            rating: Current rating of the player
            opponent: Rating of the opponent, or the field average
            actual: Actual score (1 for a win, 0 for a loss, fractions between)

        Returns:
            Rounded rating change
        """
        expected = self.get_expected(rating, opponent)
        return round(self.k_factor * (actual - expected))

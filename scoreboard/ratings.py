"""Rating calculation over a chronological game log."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel

from .elo import (
    MAX_PLAYERS,
    MIN_PLAYERS,
    EloRank,
    TableZapMode,
    UnscoreableGameError,
    UnsupportedGameSizeError,
    reward_curve,
    supports_game_size,
)
from .games import Game


logger = logging.getLogger("scoreboard:ratings")


DEFAULT_RATING = 1500
DRAW_SCORE = 0.5


# Type alias for ratings by player name
Scores = dict[str, int]


class Player(BaseModel):
    """A player and their current rating."""

    name: str
    rating: int


def make_scores(data: dict[str, int] | None = None) -> Scores:
    """Create a fresh scores mapping, optionally seeded with ratings."""
    return dict(data) if data else {}


def check_scoreable(game: Game) -> None:
    """Make sure a game can be scored.

    Raises:
        UnscoreableGameError: For team games and games with too few players
        UnsupportedGameSizeError: For games without a reward curve
    """
    num_players = len(game.rankings)
    if game.two_headed_giant:
        raise UnscoreableGameError(f"game {game.id}: two headed giant game")
    if num_players < MIN_PLAYERS:
        raise UnscoreableGameError(f"game {game.id}: not enough players")
    if len(set(game.rankings)) < MIN_PLAYERS:
        raise UnscoreableGameError(f"game {game.id}: not enough distinct players")
    if not supports_game_size(num_players):
        raise UnsupportedGameSizeError(
            f"game {game.id}: no reward curve for {num_players} players "
            f"(supported {MIN_PLAYERS}-{MAX_PLAYERS})"
        )


def game_weights(
    game: Game,
    zap_mode: TableZapMode = TableZapMode.IGNORE,
) -> list[float]:
    """Get the actual score of every finish position in a game.

    Draws give every player DRAW_SCORE, a tie against the table. Table zaps
    optionally collapse all non-winners onto the last place weight.

    Args:
        game: Game to score
        zap_mode: Handling of table zap games

    Returns:
        Weights in ranking order
    """
    num_players = len(game.rankings)
    curve = reward_curve(num_players)

    if game.draw_game:
        return [DRAW_SCORE] * num_players

    if game.table_zap and zap_mode == TableZapMode.COLLAPSE_NON_WINNERS:
        return [curve[0]] + [curve[-1]] * (num_players - 1)

    return curve


def score_game(
    elo: EloRank,
    scores: Scores,
    game: Game,
    zap_mode: TableZapMode = TableZapMode.IGNORE,
) -> None:
    """Update scores with the result of a game.

    Every player is measured against the average rating of the table,
    and each rating change is applied as soon as it is computed. The
    table's total and average ratings are stored on the game.

    Args:
        elo: ELO ranking system
        scores: Ratings to update in place
        game: Game to score
        zap_mode: Handling of table zap games

    Raises:
        UnscoreableGameError: If the game can't be scored, scores untouched
    """
    check_scoreable(game)
    weights = game_weights(game, zap_mode)

    for player in game.rankings:
        if player not in scores:
            scores[player] = DEFAULT_RATING

    rank_total = sum(scores[player] for player in game.rankings)
    game.rank_total = rank_total
    game.rank_average = rank_total // len(game.rankings)

    for player, weight in zip(game.rankings, weights):
        delta = elo.rating_delta(scores[player], game.rank_average, weight)
        logger.debug(f"Game {game.id}: {player} {scores[player]} {delta:+d}")
        scores[player] += delta

    logger.debug(f"Scored game {game.id} with average {game.rank_average}")


def calculate_scores(
    games: Iterable[Game],
    elo: EloRank | None = None,
    zap_mode: TableZapMode = TableZapMode.IGNORE,
    scores: Scores | None = None,
) -> Scores:
    """Calculate ratings from a chronological list of games.

    Args:
        games: Games in ascending ID order
        elo: ELO ranking system (default K and D when omitted)
        zap_mode: Handling of table zap games
        scores: Ratings to start from, left unmodified

    Returns:
        Ratings by player name
    """
    elo = elo or EloRank()
    new_scores = make_scores(scores)

    for game in games:
        try:
            score_game(elo, new_scores, game, zap_mode)
        except UnscoreableGameError as error:
            logger.warning(f"Failed to score {error}")

    logger.debug(f"Calculated scores: {new_scores}")
    return new_scores


def rank_players(scores: Scores) -> list[Player]:
    """List players by rating, best first, ties broken by name."""
    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [Player(name=name, rating=rating) for name, rating in ordered]

"""Game log parsing for scoreboard."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel


logger = logging.getLogger("scoreboard:games")

TEAM_SEPARATOR = "/"
TRUTHY_FLAGS = {"true", "yes", "y", "x", "1"}
DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%d.%m.%Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

# Column layout of the game log
ID_COLUMN = 0
DATE_COLUMN = 1
ZAP_COLUMN = 2
DRAW_COLUMN = 3
FIRST_PLAYER_COLUMN = 5
MIN_COLUMNS = 4


class Game(BaseModel):
    """A game with players ranked by order of loss.

    The rank fields are filled in when the game is scored. played_at
    stays None when the date is missing or unreadable.
    """

    id: str
    date: str = ""
    played_at: datetime | None = None
    rankings: list[str] = []
    table_zap: bool = False
    draw_game: bool = False
    two_headed_giant: bool = False
    rank_total: int = 0
    rank_average: int = 0


def cell_text(value: Any) -> str:
    """Stringify and trim a sheet cell.

    Examples:
        "  Alice " -> "Alice"
        12.0 -> "12"
        None -> ""
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_flag(value: Any) -> bool:
    """Interpret a checkbox-like cell."""
    return cell_text(value).lower() in TRUTHY_FLAGS


def parse_date(value: str) -> datetime | None:
    """Parse a date cell, returning None when it can't be read."""
    if not value:
        return None
    for date_format in DATE_FORMATS:
        try:
            return datetime.strptime(value, date_format)
        except ValueError:
            continue
    return None


def parse_game(row: list[Any]) -> Game:
    """Build a game from a single log row.

    Args:
        row: Cells of the row, at least MIN_COLUMNS long

    Returns:
        Parsed game, flagged as two headed giant if any slot holds a team
    """
    game = Game(
        id=cell_text(row[ID_COLUMN]),
        date=cell_text(row[DATE_COLUMN]),
        table_zap=parse_flag(row[ZAP_COLUMN]),
        draw_game=parse_flag(row[DRAW_COLUMN]),
    )

    game.played_at = parse_date(game.date)
    if game.played_at is None:
        logger.warning(f"Could not parse date {game.date!r} of game {game.id}")

    for cell in row[FIRST_PLAYER_COLUMN:]:
        name = cell_text(cell)
        if not name:
            continue
        if TEAM_SEPARATOR in name:
            game.two_headed_giant = True
            continue
        game.rankings.append(name)

    return game


def parse_game_data(values: list[list[Any]]) -> list[Game]:
    """Parse raw log rows into games.

    The first row holds the column labels and is skipped. Rows too short
    to describe a game are logged and skipped, and team games are dropped.

    Args:
        values: Rows of cells as returned by the sheet

    Returns:
        Games in sheet order
    """
    games: list[Game] = []
    for idx, row in enumerate(values):
        if idx == 0:
            continue
        if len(row) < MIN_COLUMNS:
            logger.warning(f"Skipping malformed row {row!r} at {idx}")
            continue

        game = parse_game(row)
        if game.two_headed_giant:
            logger.info(f"Skipping two headed giant game {game.id}")
            continue
        games.append(game)

    return games


def game_sort_key(game: Game) -> tuple[int, int, str]:
    """Sort numeric IDs by value, ahead of any other IDs."""
    if game.id.isdigit():
        return (0, int(game.id), game.id)
    return (1, 0, game.id)


def sort_games(games: list[Game]) -> list[Game]:
    """Return games in chronological (ascending ID) order."""
    return sorted(games, key=game_sort_key)

"""Main scoreboard application logic."""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import uvicorn

from .elo import DEFAULT_DEVIATION, DEFAULT_K_FACTOR, EloRank, TableZapMode
from .games import Game, parse_game_data, sort_games
from .ratings import calculate_scores, rank_players
from .sheets import SheetsClient


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(name)s: %(message)s'
)
logger = logging.getLogger("scoreboard:main")


# Constants
VERSION = "0.3.0"
PREFS_PATH = Path(".scoreboard.json")
DEFAULT_RANGE = "Ranked game log!A:K"
DEFAULT_PORT = 8080
PORT_ENV = "SCOREBOARD_PORT"


class NoGameDataError(Exception):
    """Raised when the game log holds no usable games."""


class Prefs:
    """Preferences for scoreboard."""

    def __init__(self, data: dict[str, Any]):
        """Initialize preferences from dictionary."""
        self.key: str | None = data.get("key")
        self.token: str | None = data.get("token")
        self.spreadsheet_id: str = data["spreadsheetId"]
        self.range: str = data.get("range", DEFAULT_RANGE)
        self.k_factor: int = int(data.get("kFactor", DEFAULT_K_FACTOR))
        self.deviation: int = int(data.get("deviation", DEFAULT_DEVIATION))
        self.table_zap: TableZapMode = TableZapMode(data.get("tableZap", TableZapMode.IGNORE))
        self.verbose: bool = bool(data.get("verbose", False))
        self.port: int = int(os.environ.get(PORT_ENV) or data.get("port", DEFAULT_PORT))


def load_prefs(path: Path = PREFS_PATH) -> Prefs:
    """Load preferences from a JSON file."""
    return Prefs(json.loads(path.read_text()))


def create_client(prefs: Prefs) -> SheetsClient:
    """Create a Sheets client from preferences.

    Args:
        prefs: Preferences containing API credentials

    Returns:
        SheetsClient instance
    """
    return SheetsClient(key=prefs.key, token=prefs.token)


def create_elo(prefs: Prefs) -> EloRank:
    """Create the ELO ranking system configured in preferences."""
    return EloRank(k_factor=prefs.k_factor, deviation=prefs.deviation)


async def fetch_game_data(client: SheetsClient, prefs: Prefs) -> list[Game]:
    """Fetch the game log and parse it into chronological games.

    Args:
        client: Sheets client
        prefs: Preferences

    Returns:
        Games sorted by ID

    Raises:
        NoGameDataError: If the sheet holds no usable games
        httpx.HTTPError: If the sheet can't be fetched
    """
    value_range = await client.get_values(prefs.spreadsheet_id, prefs.range)
    if not value_range.values:
        raise NoGameDataError("no game data found")

    games = parse_game_data(value_range.values)
    if not games:
        raise NoGameDataError("no usable games in game log")

    return sort_games(games)


async def build_scoreboard(client: SheetsClient, prefs: Prefs) -> dict[str, Any]:
    """Fetch games and calculate the current standings.

    Ratings are recalculated from the full history on every call.

    Args:
        client: Sheets client
        prefs: Preferences

    Returns:
        Version, scored games, scores, rankings and game count
    """
    games = await fetch_game_data(client, prefs)
    scores = calculate_scores(games, create_elo(prefs), prefs.table_zap)
    rankings = rank_players(scores)

    logger.info(f"Scored {len(games)} games for {len(rankings)} players")
    return {
        "version": VERSION,
        "games": games,
        "scores": scores,
        "rankings": rankings,
        "total": len(games),
    }


async def print_rankings(client: SheetsClient, prefs: Prefs) -> None:
    """Print current rankings as JSON.

    Args:
        client: Sheets client
        prefs: Preferences
    """
    scoreboard = await build_scoreboard(client, prefs)
    rankings = [player.model_dump() for player in scoreboard["rankings"]]
    print(json.dumps(rankings, indent=2))


async def main() -> None:
    """Main entry point."""
    # app imports from this module
    from .app import create_app

    if not PREFS_PATH.exists():
        logger.error(f"Error: {PREFS_PATH} not found")
        sys.exit(1)

    prefs = load_prefs(PREFS_PATH)
    if prefs.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    client = create_client(prefs)

    if "--rankings" in sys.argv:
        await print_rankings(client, prefs)
        return

    app = create_app(prefs, client)
    logger.info(f"Listening on {prefs.port}")
    config = uvicorn.Config(app, host="0.0.0.0", port=prefs.port)
    await uvicorn.Server(config).serve()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()

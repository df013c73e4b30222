"""Web dashboard for scoreboard."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.templating import Jinja2Templates

from .main import VERSION, NoGameDataError, Prefs, build_scoreboard, create_client

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

    from .sheets import SheetsClient


logger = logging.getLogger("scoreboard:app")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
HEADERS = {"X-Powered-By": "stamina_cru"}


def create_templates() -> Jinja2Templates:
    """Create Jinja2 template engine for the dashboard."""
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


async def index(request: Request) -> Response:
    """GET / - render games and rankings."""
    templates: Jinja2Templates = request.app.state.templates
    try:
        data = await build_scoreboard(request.app.state.client, request.app.state.prefs)
    except (httpx.HTTPError, NoGameDataError) as error:
        logger.error(f"Error fetching game data: {error}")
        return templates.TemplateResponse(
            request,
            "index.html",
            {"version": VERSION, "errors": str(error)},
            status_code=500,
            headers=HEADERS,
        )

    return templates.TemplateResponse(request, "index.html", data, headers=HEADERS)


async def rankings(request: Request) -> JSONResponse:
    """GET /rankings - current rankings as JSON."""
    try:
        data = await build_scoreboard(request.app.state.client, request.app.state.prefs)
    except (httpx.HTTPError, NoGameDataError) as error:
        logger.error(f"Error fetching game data: {error}")
        return JSONResponse({"error": str(error)}, status_code=500, headers=HEADERS)

    return JSONResponse(
        {
            "version": data["version"],
            "total": data["total"],
            "rankings": [player.model_dump() for player in data["rankings"]],
        },
        headers=HEADERS,
    )


def create_app(prefs: Prefs, client: SheetsClient | None = None) -> Starlette:
    """Create the dashboard application.

    Args:
        prefs: Preferences
        client: Sheets client, created from preferences when omitted

    Returns:
        Starlette application
    """
    routes = [
        Route("/", index, methods=["GET"]),
        Route("/rankings", rankings, methods=["GET"]),
    ]

    app = Starlette(routes=routes)
    app.state.prefs = prefs
    app.state.client = client or create_client(prefs)
    app.state.templates = create_templates()

    logger.info("Dashboard ready")
    return app

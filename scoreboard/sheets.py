"""Google Sheets API client for scoreboard."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ConfigDict


logger = logging.getLogger("scoreboard:sheets")

ROOT = "https://sheets.googleapis.com"


class ValueRange(BaseModel):
    """Sheets value range representation.

    Only includes fields actually used by the application.
    Unknown fields from the API are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    range: str = ""
    majorDimension: str = "ROWS"
    values: list[list[Any]] = []


def values_url(spreadsheet_id: str, range_: str) -> str:
    """Build the URL of a value range, escaping the A1 notation."""
    return f"{ROOT}/v4/spreadsheets/{spreadsheet_id}/values/{quote(range_, safe='')}"


class SheetsClient:
    """Read-only client for the Google Sheets API."""

    def __init__(self, key: str | None = None, token: str | None = None):
        """Initialize the Sheets client.

        Args:
            key: Google API key
            token: OAuth access token, used instead of the key when set
        """
        self.key = key
        self.token = token

    async def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request."""
        all_params = dict(params or {})
        headers: dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        elif self.key:
            all_params["key"] = self.key

        async with httpx.AsyncClient() as client:
            response = await client.request(
                method=method.upper(),
                url=url,
                params=all_params,
                headers=headers,
            )
            response.raise_for_status()
            return response.json()

    async def get_values(self, spreadsheet_id: str, range_: str) -> ValueRange:
        """Get the rows of a range in a spreadsheet."""
        logger.debug(f"Fetching {range_} from {spreadsheet_id}")
        result = await self._request(
            "get",
            values_url(spreadsheet_id, range_),
            {"majorDimension": "ROWS"},
        )
        return ValueRange.model_validate(result)

"""Transports returning the cell values of a spreadsheet range.

- GoogleSheetsTransport: reads through the Sheets API ``values.get`` endpoint
- LocalFileTransport: reads saved ``values.get`` responses from disk
"""

from __future__ import annotations

import json
import ssl
import urllib.parse
from abc import ABC, abstractmethod
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import Any

import certifi
import httpx

VALUES_API = "https://sheets.googleapis.com/v4/spreadsheets/{spreadsheet_id}/values/{range}"
DEFAULT_TIMEOUT = 60


class TransportError(Exception):
    """Base exception for transport errors."""


class AuthenticationError(TransportError):
    """The access token was refused (401/403)."""


class NotFoundError(TransportError):
    """No spreadsheet with this ID is visible to the caller (404)."""


class APIError(TransportError):
    """Any other error status returned by the Sheets API."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class Transport(ABC):
    """Source of spreadsheet rows.

    The pipeline only depends on this interface, so tests and offline runs
    can swap the Sheets API for files or in-memory fakes.
    """

    @abstractmethod
    async def fetch_rows(self, spreadsheet_id: str, range_: str) -> list[list[str]]:
        """Return the rows of ``range_``, each a list of cell strings.

        Trailing empty cells and rows are omitted, as the Sheets API does.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release any open connection."""
        ...


def rows_from_value_range(value_range: dict[str, Any]) -> list[list[str]]:
    """Extract rows from a ValueRange object, coercing cells to strings."""
    values = value_range.get("values", [])
    if not isinstance(values, list):
        raise TransportError(f"Unexpected values in response: {values!r}")
    return [[str(cell) for cell in row] for row in values]


class GoogleSheetsTransport(Transport):
    """Fetches rows with the Sheets API using a bearer access token."""

    def __init__(
        self,
        access_token: str,
        timeout: int = DEFAULT_TIMEOUT,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            access_token: OAuth2 access token allowed to read the spreadsheet
            timeout: Request timeout in seconds
            http_transport: httpx transport to send requests through, for tests
        """
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        self._client = httpx.AsyncClient(
            timeout=timeout,
            verify=ssl_context,
            transport=http_transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

    async def fetch_rows(self, spreadsheet_id: str, range_: str) -> list[list[str]]:
        url = VALUES_API.format(
            spreadsheet_id=spreadsheet_id,
            range=urllib.parse.quote(range_, safe=""),
        )
        return rows_from_value_range(await self._get(url))

    async def _get(self, url: str) -> dict[str, Any]:
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
            return payload
        except httpx.HTTPStatusError as e:
            raise _status_error(e.response) from e
        except httpx.RequestError as e:
            raise TransportError(f"Network error: {e}") from e
        except ValueError as e:
            raise TransportError(f"Invalid JSON in response: {e}") from e

    async def close(self) -> None:
        await self._client.aclose()


def _status_error(response: httpx.Response) -> TransportError:
    """Map an error response to the matching TransportError."""
    status = response.status_code
    if status == 401:
        return AuthenticationError(
            "Access token rejected. Delete the credentials file to authorize again."
        )
    if status == 403:
        return AuthenticationError(
            "Access denied. Check the spreadsheet is shared with the authorized account."
        )
    if status == 404:
        return NotFoundError("Spreadsheet not found. Check the spreadsheet ID.")
    return APIError(f"API error ({status}): {response.text}", status_code=status)


class LocalFileTransport(Transport):
    """Reads rows from saved API responses.

    Expected directory structure:
        golden_dir/
            <spreadsheet_id>/
                values.json

    ``values.json`` holds a ``values.get`` response; the range is not used.
    """

    def __init__(self, golden_dir: Path) -> None:
        self._golden_dir = golden_dir

    async def fetch_rows(self, spreadsheet_id: str, range_: str) -> list[list[str]]:  # noqa: ARG002
        path = self._golden_dir / spreadsheet_id / "values.json"
        try:
            value_range = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise NotFoundError(f"No saved values for {spreadsheet_id}: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise TransportError(f"Cannot read {path}: {e}") from e
        return rows_from_value_range(value_range)

    async def close(self) -> None:
        pass

"""Tests for the spreadsheet transports."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from gsi18n.transport import (
    APIError,
    AuthenticationError,
    GoogleSheetsTransport,
    LocalFileTransport,
    NotFoundError,
    TransportError,
)


def make_transport(
    handler: Callable[[httpx.Request], httpx.Response],
) -> GoogleSheetsTransport:
    return GoogleSheetsTransport(
        access_token="ya29.test",
        http_transport=httpx.MockTransport(handler),
    )


class TestGoogleSheetsTransport:
    @pytest.mark.asyncio
    async def test_fetch_rows(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={
                    "range": "Sheet1!A1:C3",
                    "majorDimension": "ROWS",
                    "values": [["key", "en"], ["yes", "Yes"], ["count", 42]],
                },
            )

        transport = make_transport(handler)
        rows = await transport.fetch_rows("sheet123", "Sheet1")
        await transport.close()

        assert rows == [["key", "en"], ["yes", "Yes"], ["count", "42"]]
        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert requests[0].url.path == "/v4/spreadsheets/sheet123/values/Sheet1"
        assert requests[0].headers["Authorization"] == "Bearer ya29.test"

    @pytest.mark.asyncio
    async def test_range_is_quoted(self) -> None:
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, json={"values": []})

        transport = make_transport(handler)
        await transport.fetch_rows("sheet123", "My Sheet!A1:C10")
        await transport.close()

        assert paths == ["/v4/spreadsheets/sheet123/values/My Sheet!A1:C10"]

    @pytest.mark.asyncio
    async def test_missing_values_means_no_rows(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(200, json={"range": "Sheet1!A1:Z1000"})
        )
        assert await transport.fetch_rows("sheet123", "Sheet1") == []
        await transport.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("status", "error_class"),
        [
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (500, APIError),
        ],
    )
    async def test_http_errors(self, status: int, error_class: type) -> None:
        transport = make_transport(
            lambda request: httpx.Response(status, text="failure body")
        )
        with pytest.raises(error_class):
            await transport.fetch_rows("sheet123", "Sheet1")
        await transport.close()

    @pytest.mark.asyncio
    async def test_api_error_keeps_status_and_body(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(400, text="Unable to parse range")
        )
        with pytest.raises(APIError) as exc_info:
            await transport.fetch_rows("sheet123", "Nope!")
        await transport.close()

        assert exc_info.value.status_code == 400
        assert "Unable to parse range" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(TransportError, match="Network error"):
            await transport.fetch_rows("sheet123", "Sheet1")
        await transport.close()


class TestLocalFileTransport:
    @pytest.mark.asyncio
    async def test_reads_golden_values(self, golden_dir: Path) -> None:
        transport = LocalFileTransport(golden_dir)
        rows = await transport.fetch_rows("basic_translations", "Sheet1")
        await transport.close()

        assert rows[0] == ["key", "en", "fr", "de"]
        assert rows[1] == ["yes", "Yes", "Oui", "Ja"]
        assert rows[-1] == ["menu.help"]

    @pytest.mark.asyncio
    async def test_empty_sheet(self, golden_dir: Path) -> None:
        transport = LocalFileTransport(golden_dir)
        assert await transport.fetch_rows("empty_sheet", "Sheet1") == []

    @pytest.mark.asyncio
    async def test_missing_spreadsheet(self, golden_dir: Path) -> None:
        transport = LocalFileTransport(golden_dir)
        with pytest.raises(NotFoundError):
            await transport.fetch_rows("does_not_exist", "Sheet1")

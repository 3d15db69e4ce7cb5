"""I18nClient - Main API for gs-i18n.

Provides the `generate` method: fetch rows, compile trees, emit files.
"""

from __future__ import annotations

import re
from pathlib import Path  # noqa: TC003 - used at runtime

from loguru import logger

from gsi18n.compiler import compile_rows
from gsi18n.emitter import EmitResult, FileEmitter, OutputFormat
from gsi18n.exceptions import FetchError
from gsi18n.transport import Transport, TransportError

DEFAULT_RANGE = "Sheet1"


def parse_spreadsheet_id(id_or_url: str) -> str:
    """Extract spreadsheet ID from a URL or return as-is if already an ID."""
    # https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit...
    url_pattern = r"docs\.google\.com/spreadsheets/d/([a-zA-Z0-9_-]+)"
    match = re.search(url_pattern, id_or_url)
    if match:
        return match.group(1)
    return id_or_url


class I18nClient:
    """Client generating translation files from a spreadsheet.

    Rows are fetched through a Transport, compiled into one tree per
    language and written by a FileEmitter.

    Example:
        >>> from gsi18n.transport import GoogleSheetsTransport
        >>> transport = GoogleSheetsTransport(access_token="ya29...")
        >>> client = I18nClient(transport)
        >>> await client.generate("1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms", "./locales")
    """

    def __init__(self, transport: Transport) -> None:
        """Initialize the client.

        Args:
            transport: Transport implementation for fetching spreadsheet rows
        """
        self._transport = transport

    async def fetch_rows(self, spreadsheet_id: str, range_: str) -> list[list[str]]:
        """Fetch rows, wrapping transport failures in FetchError."""
        try:
            return await self._transport.fetch_rows(spreadsheet_id, range_)
        except TransportError as e:
            raise FetchError(spreadsheet_id, range_, str(e)) from e

    async def generate(
        self,
        spreadsheet_id: str,
        output_dir: str | Path,
        *,
        range_: str = DEFAULT_RANGE,
        key_index: int = 0,
        lang_index: int = 1,
        output_format: OutputFormat = OutputFormat.JSON,
        indent: int = 0,
        lowercase_languages: bool = False,
        skip_question_keys: bool = False,
    ) -> EmitResult:
        """Generate one translation file per language of a spreadsheet.

        Args:
            spreadsheet_id: The ID of the spreadsheet (from the URL)
            output_dir: Directory to write files to
            range_: Range of cells to parse (default: the whole "Sheet1")
            key_index: Index of the key column
            lang_index: Index of the first language column
            output_format: Format of the generated files
            indent: Spaces of indentation in generated files
            lowercase_languages: Lower-case language names from the header
            skip_question_keys: Ignore rows whose key contains "?"

        Returns:
            EmitResult with written files and per-file failures

        Raises:
            FetchError: If the rows cannot be fetched
            EmptyDataError: If the range holds no rows
            OutputDirError: If the output directory cannot be created
        """
        # Step 1: Fetch rows
        rows = await self.fetch_rows(spreadsheet_id, range_)
        logger.debug(f"Fetched {len(rows)} rows from {spreadsheet_id} ({range_})")

        # Step 2: Compile translation trees
        trees = compile_rows(
            rows,
            key_index,
            lang_index,
            lowercase_languages=lowercase_languages,
            skip_question_keys=skip_question_keys,
        )

        # Step 3: Write to disk
        emitter = FileEmitter(output_dir)
        return emitter.emit(trees, output_format, indent)

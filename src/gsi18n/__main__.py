"""CLI entry point for gs-i18n.

Usage:
    gs-i18n --spreadsheet <id_or_url> [options]
    python -m gsi18n --spreadsheet <id_or_url> [options]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable

from google.oauth2.credentials import Credentials
from loguru import logger
from pydantic import ValidationError

from gsi18n import __version__
from gsi18n.client import I18nClient, parse_spreadsheet_id
from gsi18n.config import Settings
from gsi18n.credentials import CredentialsManager
from gsi18n.emitter import MAX_INDENT, EmitResult
from gsi18n.exceptions import I18nError, MissingSpreadsheetIdError
from gsi18n.logging import setup_logging
from gsi18n.transport import GoogleSheetsTransport, Transport

TransportFactory = Callable[[Credentials], Transport]


def _google_transport(credentials: Credentials) -> Transport:
    return GoogleSheetsTransport(access_token=credentials.token)


async def run(
    settings: Settings,
    *,
    credentials_manager: CredentialsManager | None = None,
    transport_factory: TransportFactory = _google_transport,
) -> int:
    """Run the whole pipeline: authenticate, fetch, compile, emit.

    Every terminal error is reported as a single log line.

    Returns:
        0 on success, 1 if the run failed or any file could not be written
    """
    try:
        result = await _generate(settings, credentials_manager, transport_factory)
    except I18nError as e:
        logger.error(str(e))
        return 1

    if not result.success:
        logger.error(
            f"{len(result.failures)} of "
            f"{len(result.failures) + len(result.written)} files could not be written"
        )
        return 1
    return 0


async def _generate(
    settings: Settings,
    credentials_manager: CredentialsManager | None,
    transport_factory: TransportFactory,
) -> EmitResult:
    if not settings.spreadsheet_id:
        raise MissingSpreadsheetIdError()
    spreadsheet_id = parse_spreadsheet_id(settings.spreadsheet_id)

    manager = credentials_manager or CredentialsManager(
        settings.client_secret_path, settings.token_path
    )
    # The code exchange blocks on stdin
    credentials = await asyncio.to_thread(manager.get_credentials)

    transport = transport_factory(credentials)
    client = I18nClient(transport)

    logger.info(f"Loading spreadsheet {spreadsheet_id} ({settings.sheet_range})")
    try:
        return await client.generate(
            spreadsheet_id,
            settings.output_dir,
            range_=settings.sheet_range,
            key_index=settings.key_index,
            lang_index=settings.lang_index,
            output_format=settings.output_format,
            indent=settings.indent,
            lowercase_languages=settings.lowercase_languages,
            skip_question_keys=settings.skip_question_keys,
        )
    finally:
        await transport.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Options default to None so unset flags fall back to the environment.
    """
    parser = argparse.ArgumentParser(
        prog="gs-i18n",
        usage="%(prog)s --spreadsheet <id> [options]",
        description="Generate i18n files from a Google Sheets translation table",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-b",
        "--beautify",
        dest="indent",
        type=int,
        help=f"number of spaces to indent JSON/JS files (min: 0, max: {MAX_INDENT})",
    )
    parser.add_argument(
        "-c",
        "--client",
        dest="client_secret_path",
        help="path of client secret file (default: ./client_secret.json)",
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="output_format",
        choices=["cjs", "esm", "json"],
        help="format of generated files (default: json)",
    )
    parser.add_argument(
        "-k",
        "--key",
        dest="key_index",
        type=int,
        help="index of key column (default: 0)",
    )
    parser.add_argument(
        "-l",
        "--lang",
        dest="lang_index",
        type=int,
        help="index of first language column (default: 1)",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output_dir",
        help="path of output directory (default: ./locales)",
    )
    parser.add_argument(
        "-r",
        "--range",
        dest="sheet_range",
        help="range of data to parse (default: Sheet1)",
    )
    parser.add_argument(
        "-s",
        "--spreadsheet",
        dest="spreadsheet_id",
        help="ID or URL of spreadsheet to parse (required)",
    )
    parser.add_argument(
        "-t",
        "--token",
        dest="token_path",
        help="path of credentials file (default: ./credentials.json)",
    )
    parser.add_argument(
        "--lowercase",
        dest="lowercase_languages",
        action="store_true",
        default=None,
        help="lower-case language names read from the header row",
    )
    parser.add_argument(
        "--skip-question-keys",
        action="store_true",
        default=None,
        help='ignore rows whose key contains "?"',
    )
    parser.add_argument(
        "--log-level",
        help="minimum log level (default: INFO)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Merge command line values over environment settings."""
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        setup_logging()
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "settings"
            logger.error(f"Invalid {field}: {error['msg']}")
        return 2

    setup_logging(settings.log_level, settings.json_logs)
    result: int = asyncio.run(run(settings))
    return result


if __name__ == "__main__":
    sys.exit(main())

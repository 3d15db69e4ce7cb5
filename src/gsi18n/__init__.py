"""gs-i18n - Generate i18n files from a Google Sheets translation table.

Each row of the sheet holds a dot-delimited translation key and one value
per language column; one nested JSON (or JS module) file is written per
language.
"""

__version__ = "0.1.0"

from gsi18n.client import I18nClient, parse_spreadsheet_id
from gsi18n.compiler import compile_rows
from gsi18n.credentials import (
    ClientSecret,
    CredentialsManager,
    obtain_authorized_client,
)
from gsi18n.emitter import EmitResult, FileEmitter, OutputFormat
from gsi18n.exceptions import (
    AuthExchangeError,
    CredentialError,
    EmptyDataError,
    FetchError,
    FileWriteError,
    I18nError,
    MissingSpreadsheetIdError,
    OutputDirError,
)
from gsi18n.transport import (
    GoogleSheetsTransport,
    LocalFileTransport,
    Transport,
    TransportError,
)

__all__ = [
    "AuthExchangeError",
    "ClientSecret",
    "CredentialError",
    "CredentialsManager",
    "EmitResult",
    "EmptyDataError",
    "FetchError",
    "FileEmitter",
    "FileWriteError",
    "GoogleSheetsTransport",
    "I18nClient",
    "I18nError",
    "LocalFileTransport",
    "MissingSpreadsheetIdError",
    "OutputDirError",
    "OutputFormat",
    "Transport",
    "TransportError",
    "__version__",
    "compile_rows",
    "obtain_authorized_client",
    "parse_spreadsheet_id",
]

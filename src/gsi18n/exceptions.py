"""Custom exceptions for the gs-i18n generation workflow."""

from __future__ import annotations


class I18nError(Exception):
    """Base exception for errors that abort a generation run."""

    pass


class MissingSpreadsheetIdError(I18nError):
    """Raised when no spreadsheet ID was configured."""

    def __init__(self) -> None:
        super().__init__("Spreadsheet ID is required")


class CredentialError(I18nError):
    """Raised when the client secret file is missing or invalid."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Error reading {path} file: {detail}")


class AuthExchangeError(I18nError):
    """Raised when the authorization code cannot be exchanged for a token."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Error getting token: {detail}")


class FetchError(I18nError):
    """Raised when the spreadsheet values cannot be retrieved.

    Wraps the transport error that caused it.
    """

    def __init__(self, spreadsheet_id: str, range_: str, detail: str) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.range = range_
        self.detail = detail
        super().__init__(
            f"Error loading spreadsheet {spreadsheet_id} with range {range_}: {detail}"
        )


class EmptyDataError(I18nError):
    """Raised when the fetched range has no rows, not even a header."""

    def __init__(self) -> None:
        super().__init__("No data found in spreadsheet")


class OutputDirError(I18nError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Error creating directory {path}: {detail}")


class FileWriteError(I18nError):
    """A single language file could not be written.

    Not terminal: the emitter records it and moves on to the next language.
    """

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Error writing file {path}: {detail}")

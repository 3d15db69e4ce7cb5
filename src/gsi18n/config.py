"""Run configuration using pydantic-settings.

Every setting can be passed on the command line, or set through a
GS_I18N_<NAME> environment variable or a .env file. Command line values
take precedence over the environment.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gsi18n.emitter import MAX_INDENT, OutputFormat

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Settings of a generation run.

    Defaults:
    - client secret read from ./client_secret.json
    - token stored in ./credentials.json
    - first sheet ("Sheet1"), keys in column 0, languages from column 1
    - compact JSON files written to ./locales
    """

    model_config = SettingsConfigDict(
        env_prefix="GS_I18N_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Spreadsheet - required at runtime, checked before any API call
    spreadsheet_id: str | None = None
    sheet_range: str = "Sheet1"
    key_index: int = Field(default=0, ge=0)
    lang_index: int = Field(default=1, ge=0)

    # Credentials
    client_secret_path: Path = Path("client_secret.json")
    token_path: Path = Path("credentials.json")

    # Output
    output_dir: Path = Path("locales")
    output_format: OutputFormat = OutputFormat.JSON
    indent: int = Field(default=0, ge=0, le=MAX_INDENT)
    lowercase_languages: bool = False
    skip_question_keys: bool = False

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    @field_validator("output_format", mode="before")
    @classmethod
    def parse_output_format(cls, v: object) -> object:
        """Accept format names ("json", "cjs", "esm")."""
        if isinstance(v, str):
            return OutputFormat.from_name(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known loguru level."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {sorted(LOG_LEVELS)}")
        return level

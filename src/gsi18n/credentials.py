"""Credentials management for Google Sheets API access.

Authorizes the tool with an installed-application OAuth client:
1. Read the client secret file downloaded from the Google Cloud console
2. Reuse the token stored by a previous run, if any
3. Otherwise print an authorization URL, read the code pasted back by the
   operator and exchange it for a token, which is stored for later runs
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow
from loguru import logger

from gsi18n.exceptions import AuthExchangeError, CredentialError

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

DEFAULT_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class ClientSecret:
    """OAuth client identifying this application to Google.

    Attributes:
        client_id: OAuth client ID.
        client_secret: OAuth client secret.
        redirect_uri: First redirect URI registered for the client.
    """

    client_id: str
    client_secret: str
    redirect_uri: str
    auth_uri: str = DEFAULT_AUTH_URI
    token_uri: str = DEFAULT_TOKEN_URI

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientSecret:
        """Create ClientSecret from the content of a client secret file."""
        block = data.get("installed") or data.get("web")
        if not isinstance(block, dict):
            raise KeyError("installed")
        return cls(
            client_id=block["client_id"],
            client_secret=block["client_secret"],
            redirect_uri=block["redirect_uris"][0],
            auth_uri=block.get("auth_uri", DEFAULT_AUTH_URI),
            token_uri=block.get("token_uri", DEFAULT_TOKEN_URI),
        )

    def to_client_config(self) -> dict[str, Any]:
        """Return the client config expected by google-auth-oauthlib."""
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": self.auth_uri,
                "token_uri": self.token_uri,
                "redirect_uris": [self.redirect_uri],
            }
        }


def load_client_secret(path: str | Path) -> ClientSecret:
    """Read and parse a client secret file.

    Raises:
        CredentialError: If the file cannot be read or has an unexpected shape
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return ClientSecret.from_dict(data)
    except OSError as e:
        raise CredentialError(str(path), str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CredentialError(str(path), f"Invalid JSON: {e}") from e
    except KeyError as e:
        raise CredentialError(str(path), f"Missing field {e}") from e
    except (IndexError, TypeError, AttributeError) as e:
        raise CredentialError(str(path), f"Unexpected format: {e}") from e


def load_token(path: str | Path) -> dict[str, Any] | None:
    """Load a stored token, or None if it is absent or unusable."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"Invalid stored token in {path}: {e}")
        return None

    if not isinstance(data, dict) or not _access_token(data):
        logger.warning(f"Invalid stored token in {path}: no access token")
        return None
    return data


def save_token(path: str | Path, token: dict[str, Any]) -> None:
    """Write a token to disk as JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(token), encoding="utf-8")


def _access_token(token: dict[str, Any]) -> str | None:
    # google-auth writes "token", the OAuth token endpoint returns "access_token"
    value = token.get("access_token") or token.get("token")
    return value if isinstance(value, str) and value else None


class CredentialsManager:
    """Produces authorized Google credentials for one run.

    Holds the client secret and the current token. When no usable token is
    stored, runs the interactive authorization code exchange; this blocks
    until the operator enters a code and has no timeout.

    Args:
        client_secret_path: Path to the OAuth client secret JSON file.
        token_path: Path where the token is stored between runs.
        input_stream: Stream the authorization code is read from (stdin).
        output_stream: Stream the authorization URL is printed to (stdout).

    Example:
        manager = CredentialsManager("client_secret.json", "credentials.json")
        credentials = manager.get_credentials()
        print(credentials.token)
    """

    def __init__(
        self,
        client_secret_path: str | Path,
        token_path: str | Path,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ) -> None:
        self._client_secret_path = Path(client_secret_path)
        self._token_path = Path(token_path)
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self._client_secret: ClientSecret | None = None
        self._token: dict[str, Any] | None = None

    @property
    def token(self) -> dict[str, Any] | None:
        """Token of the current session, once obtained."""
        return self._token

    def get_credentials(self) -> Credentials:
        """Return authorized credentials, running the code exchange if needed.

        Returns:
            Credentials carrying the access token.

        Raises:
            CredentialError: If the client secret file cannot be read.
            AuthExchangeError: If the authorization code is rejected.
        """
        self._client_secret = load_client_secret(self._client_secret_path)

        token = load_token(self._token_path)
        if token is not None:
            logger.debug(f"Using stored token from {self._token_path}")
        else:
            token = self._get_new_token(self._client_secret)
            self._store_token(token)

        self._token = token
        return self._build_credentials(self._client_secret, token)

    def _create_flow(self, client_secret: ClientSecret) -> Flow:
        return Flow.from_client_config(
            client_secret.to_client_config(),
            scopes=SCOPES,
            redirect_uri=client_secret.redirect_uri,
        )

    def _get_new_token(self, client_secret: ClientSecret) -> dict[str, Any]:
        """Run the interactive authorization code exchange."""
        flow = self._create_flow(client_secret)
        auth_url, _ = flow.authorization_url(access_type="offline")

        print(
            f"Authorize gs-i18n by visiting this url: {auth_url}", file=self._output
        )
        print("Enter the code from that page here: ", end="", file=self._output)
        self._output.flush()

        code = self._input.readline().strip()
        if not code:
            raise AuthExchangeError("no authorization code entered")

        try:
            token = flow.fetch_token(code=code)
        except Exception as e:
            raise AuthExchangeError(str(e)) from e

        return dict(token)

    def _store_token(self, token: dict[str, Any]) -> None:
        """Persist the token; failures are reported but not fatal."""
        try:
            save_token(self._token_path, token)
        except OSError as e:
            logger.error(f"Error writing {self._token_path} file: {e}")
            return
        logger.info(f"Token stored to {self._token_path}")

    @staticmethod
    def _build_credentials(
        client_secret: ClientSecret, token: dict[str, Any]
    ) -> Credentials:
        return Credentials(
            token=_access_token(token),
            refresh_token=token.get("refresh_token"),
            token_uri=client_secret.token_uri,
            client_id=client_secret.client_id,
            client_secret=client_secret.client_secret,
            scopes=SCOPES,
        )


def obtain_authorized_client(
    client_secret_path: str | Path,
    token_path: str | Path,
    input_stream: TextIO | None = None,
    output_stream: TextIO | None = None,
) -> Credentials:
    """Authenticate and return credentials for the Google Sheets API.

    Convenience function that creates a CredentialsManager and returns its
    credentials.

    Example:
        from gsi18n import obtain_authorized_client

        credentials = obtain_authorized_client(
            "client_secret.json", "credentials.json"
        )
    """
    manager = CredentialsManager(
        client_secret_path,
        token_path,
        input_stream=input_stream,
        output_stream=output_stream,
    )
    return manager.get_credentials()

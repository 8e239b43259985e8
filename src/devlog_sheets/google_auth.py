from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow


DEFAULT_TOKEN_PATH = Path("~/.config/devlog-sheets/token.json").expanduser()


def is_service_account_file(path: Path) -> bool:
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and data.get("type") == "service_account"


def get_credentials(
    *,
    scopes: Sequence[str],
    credentials_path: Path | None = None,
    token_path: Path = DEFAULT_TOKEN_PATH,
):
    """Load Google credentials.

    A service-account key file is used directly. Anything else is treated as
    OAuth client secrets: a cached token is reused (and refreshed) if present,
    otherwise the browser consent flow runs and the token is saved.
    """
    if credentials_path and is_service_account_file(credentials_path):
        return service_account.Credentials.from_service_account_file(
            str(credentials_path), scopes=list(scopes)
        )

    creds: Credentials | None = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), scopes=list(scopes))

    if creds and creds.valid:
        return creds

    token_path.parent.mkdir(parents=True, exist_ok=True)

    if creds and creds.expired and creds.refresh_token:
        creds.refresh(Request())
        token_path.write_text(creds.to_json())
        return creds

    if not credentials_path or not credentials_path.exists():
        raise FileNotFoundError(
            "No valid token found. Pass the path to a service-account key or OAuth credentials.json."
        )

    flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), scopes=list(scopes))
    creds = flow.run_local_server(port=0)
    token_path.write_text(creds.to_json())
    return creds

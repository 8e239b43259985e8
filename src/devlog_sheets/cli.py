from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError
from pydantic import ValidationError

from . import __version__
from .config import load_settings
from .errors import DevlogError
from .google_auth import get_credentials
from .logging_config import setup_logging
from .models import SessionInput
from .runner import run_once
from .sheets_client import SHEETS_SCOPES, build_sheets_service

app = typer.Typer(add_completion=False, help="Append a work log entry to a Google Sheet")


def _version_callback(value: bool):
    if value:
        typer.echo(f"devlog-sheets {__version__}")
        raise typer.Exit()


@app.command()
def log(
    credentials_path: Path = typer.Argument(..., help="Service-account key or OAuth credentials.json"),
    sheet_id: str = typer.Argument(..., help="Spreadsheet ID"),
    client: str = typer.Argument(...),
    sub_client: str = typer.Argument(...),
    host_machine: str = typer.Argument(...),
    project: str = typer.Argument(...),
    ticket: str = typer.Argument(...),
    minutes_spent: str = typer.Argument(..., help='Minutes, "" or "?" to compute, "c" to continue'),
    log_entry: str = typer.Argument(..., help='Log text; "stop" closes the open session'),
    config: Optional[Path] = typer.Option(None, help="Path to config.yaml"),
    dry_run: bool = typer.Option(False, help="Print the row instead of appending it"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """Log one work session entry to the RawLog tab."""
    session = SessionInput(
        client=client,
        sub_client=sub_client,
        host_machine=host_machine,
        project=project,
        ticket=ticket,
        minutes_spent=minutes_spent,
        log_entry=log_entry,
    )

    try:
        settings = load_settings(config)
        setup_logging(settings.log_level)

        creds = get_credentials(
            scopes=SHEETS_SCOPES,
            credentials_path=credentials_path,
            token_path=settings.auth.token_path,
        )
        service = build_sheets_service(creds)
        result = run_once(
            service=service,
            spreadsheet_id=sheet_id,
            session=session,
            settings=settings,
            dry_run=dry_run,
        )
    except (yaml.YAMLError, ValidationError) as e:
        typer.echo(f"Invalid config: {e}", err=True)
        raise typer.Exit(code=1)
    except (DevlogError, HttpError, GoogleAuthError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if result.row is None:
        typer.echo("Nothing to append (empty log entry)")
        return

    status = "appended" if result.appended else result.reason
    minutes = "" if result.row.minutes_spent is None else result.row.minutes_spent
    typer.echo(f"{status}: {result.row.date} {result.row.time} minutes={minutes}")


if __name__ == "__main__":
    app()

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from svc_uploads.app.core.logging import setup_logging
from svc_uploads.app.settings import get_upload_settings
from svc_uploads.backup.archive import write_archive
from svc_uploads.exceptions import InternalFailure
from svc_uploads.storage.local import LocalStorage


def backup(
    destination: Path = typer.Argument(..., help="Where to write the zip archive."),
    storage_root: Optional[Path] = typer.Option(
        None, "--storage-root", help="Overrides UPLOADS_STORAGE_ROOT for this command."
    ),
):
    """Write every stored file into a zip archive at DESTINATION."""
    setup_logging()
    root = storage_root or get_upload_settings().storage_root
    destination = destination.resolve()
    if root.resolve() in destination.parents:
        typer.echo("Destination must be outside the storage root", err=True)
        raise typer.Exit(code=2)

    try:
        count = write_archive(LocalStorage(root), destination)
    except InternalFailure as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{destination} ({count} files)")


def register(app_root: typer.Typer) -> None:
    app_root.command("backup")(backup)

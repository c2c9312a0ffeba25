from __future__ import annotations

import typer

from svc_uploads.cli.cmds import register_backup, register_serve

app = typer.Typer(no_args_is_help=True, add_completion=False, help="File upload service commands")

register_serve(app)
register_backup(app)


def main():
    app()


__all__ = ["app", "main"]

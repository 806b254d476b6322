from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from iniscan.cli.ui import get_ui
from iniscan.cli.utils.runtime import fail, load_cli_config
from iniscan.core.errors import ExitCode
from iniscan.parsers import IniError, find_value


def get_cmd(
    path: Path = typer.Argument(..., help="INI file to read."),
    key: str = typer.Argument(..., help="Key to look up."),
    section: Optional[str] = typer.Option(
        None, "--section", "-s", help="Only match the key inside this section."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Print the value of the first matching key; stops reading once found."""
    ui = get_ui(verbose=verbose)
    loaded = load_cli_config(ui, path)

    try:
        value = find_value(path, key, section=section, config=loaded.parser)
    except IniError as e:
        fail(ui, e)
        return

    if value is None:
        where = f"[{section}] " if section else ""
        ui.err_console.print(f"{where}{key}: not found", markup=False, soft_wrap=True)
        raise typer.Exit(code=int(ExitCode.NOT_FOUND))

    typer.echo(value)

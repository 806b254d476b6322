from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
from rich.markup import escape

from iniscan.cli.ui import UI, render_parse_error
from iniscan.core.config import LoadedConfig, load_config
from iniscan.core.errors import ExitCode
from iniscan.core.log import configure_logging
from iniscan.parsers.errors import IniError, IniSyntaxError, SourceNotFoundError


def load_cli_config(
    ui: UI,
    path: Path,
    *,
    legacy_line_numbers: Optional[bool] = None,
    max_line_bytes: Optional[int] = None,
) -> LoadedConfig:
    """
    Resolve config relative to the INI file's directory and set up logging.
    Bad config files exit with ExitCode.ERROR.
    """
    overrides: Dict[str, Any] = {"parser": {}}
    if legacy_line_numbers is not None:
        overrides["parser"]["legacy_line_numbers"] = bool(legacy_line_numbers)
    if max_line_bytes is not None:
        overrides["parser"]["max_line_bytes"] = int(max_line_bytes)
    if ui.verbose:
        overrides["logging"] = {"level": "DEBUG"}

    try:
        loaded = load_config(start_dir=path.parent, cli_overrides=overrides)
    except ValueError as e:
        # TOMLDecodeError and pydantic's ValidationError are both ValueErrors
        ui.err_console.print(f"[err]✗ invalid iniscan config:[/err] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=int(ExitCode.ERROR))

    # parse errors are rendered by fail(); keep them out of the log stream
    configure_logging(
        loaded.logging.level,
        console=ui.err_console,
        host_reported=("iniscan.parsers",),
    )

    if ui.verbose:
        ui.err_console.print("[bold]Config sources:[/bold]")
        ui.err_console.print(f"  global: {loaded.global_path or '-'}")
        ui.err_console.print(f"  repo:   {loaded.repo_path or '-'}")

    return loaded


def exit_code_for(error: IniError) -> ExitCode:
    if isinstance(error, SourceNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, IniSyntaxError):
        return ExitCode.SYNTAX
    return ExitCode.ERROR


def fail(ui: UI, error: IniError) -> NoReturn:
    render_parse_error(ui.err_console, error, verbose=ui.verbose)
    raise typer.Exit(code=int(exit_code_for(error)))

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from iniscan.cli.ui import PairsRenderOptions, get_ui, render_pairs_plain, render_pairs_table
from iniscan.cli.utils.runtime import fail, load_cli_config
from iniscan.core.errors import ExitCode
from iniscan.parsers import IniError, IniSyntaxError, ParsedKV, SourceNotFoundError, iter_pairs


def dump_cmd(
    path: Path = typer.Argument(..., help="INI file to read."),
    section: Optional[str] = typer.Option(
        None, "--section", "-s", help="Only show pairs from this section."
    ),
    missing_ok: bool = typer.Option(
        False, "--missing-ok", help="Exit 0 without output when the file does not exist."
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Print `section.key=value` lines instead of a table."
    ),
    legacy_line_numbers: Optional[bool] = typer.Option(
        None,
        "--legacy-line-numbers/--no-legacy-line-numbers",
        help="Use the old per-step line counter (overrides config if set).",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Print every key-value pair in file order."""
    ui = get_ui(verbose=verbose)
    loaded = load_cli_config(ui, path, legacy_line_numbers=legacy_line_numbers)

    pairs: List[ParsedKV] = []
    error: Optional[IniSyntaxError] = None
    try:
        for kv in iter_pairs(path, config=loaded.parser):
            if section is None or kv.section == section:
                pairs.append(kv)
    except SourceNotFoundError as e:
        if missing_ok:
            raise typer.Exit(code=int(ExitCode.OK))
        fail(ui, e)
    except IniSyntaxError as e:
        # still show what was read before the bad line
        error = e
    except IniError as e:
        fail(ui, e)

    if plain:
        render_pairs_plain(pairs)
    else:
        render_pairs_table(
            ui.console,
            pairs,
            opts=PairsRenderOptions(
                title=f"{escape(str(path))} ({len(pairs)})",
                show_line_numbers=loaded.ui.show_line_numbers,
                max_value_width=loaded.ui.max_value_width,
            ),
        )

    if error is not None:
        fail(ui, error)

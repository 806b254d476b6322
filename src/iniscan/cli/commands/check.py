from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Set

import typer

from iniscan.cli.ui import get_ui, render_summary
from iniscan.cli.utils.runtime import fail, load_cli_config
from iniscan.parsers import IniError, IniParser


@dataclass
class _Tally:
    pairs: int = 0
    sections: Set[str] = field(default_factory=set)


def _count(parser: IniParser, section: Optional[str], key: str, value: str) -> None:
    tally: _Tally = parser.context
    tally.pairs += 1
    if section is not None:
        tally.sections.add(section)


def check_cmd(
    path: Path = typer.Argument(..., help="INI file to validate."),
    max_line_bytes: Optional[int] = typer.Option(
        None, "--max-line-bytes", min=3, help="Physical line read limit (overrides config)."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Parse the whole file and report the first syntax error, if any."""
    ui = get_ui(verbose=verbose)
    loaded = load_cli_config(ui, path, max_line_bytes=max_line_bytes)

    tally = _Tally()
    try:
        with IniParser(path, handler=_count, context=tally, config=loaded.parser) as parser:
            if not parser.run():
                assert parser.error is not None
                fail(ui, parser.error)
    except IniError as e:
        fail(ui, e)

    render_summary(ui.console, str(path), pairs=tally.pairs, sections=len(tally.sections))

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from iniscan.parsers.errors import IniError, IniSyntaxError
from iniscan.parsers.types import ParsedKV


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


# ----------------------------
# Pairs
# ----------------------------

@dataclass(frozen=True)
class PairsRenderOptions:
    title: Optional[str] = None
    show_line_numbers: bool = True
    max_value_width: int = 120


def render_pairs_table(
    console: Console,
    pairs: Sequence[ParsedKV],
    *,
    opts: Optional[PairsRenderOptions] = None,
) -> None:
    opts = opts or PairsRenderOptions()

    if not pairs:
        console.print("[muted]No key-value pairs.[/muted]")
        return

    table = Table(title=opts.title or f"Pairs ({len(pairs)})", show_lines=False)
    if opts.show_line_numbers:
        table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Section", style="section", no_wrap=True)
    table.add_column("Key", style="key", no_wrap=True)
    table.add_column("Value")

    # file order, no sorting
    for kv in pairs:
        row = []
        if opts.show_line_numbers:
            row.append(str(kv.line or ""))
        row.extend(
            [
                Text(kv.section or "-"),
                Text(kv.key),
                Text(_short(kv.value, opts.max_value_width)),
            ]
        )
        table.add_row(*row)

    console.print(table)


def render_pairs_plain(pairs: Sequence[ParsedKV]) -> None:
    # plain stdout, one `section.key=value` per line (pipe friendly)
    for kv in pairs:
        typer.echo(f"{kv.dotted_key}={kv.value}")


# ----------------------------
# Errors / summaries
# ----------------------------

def render_parse_error(console: Console, error: IniError, *, verbose: bool = False) -> None:
    if isinstance(error, IniSyntaxError):
        console.print(
            f"[err]✗ syntax error[/err] in [path]{escape(error.path)}[/path] "
            f"at line {error.line}: {escape(error.reason)}",
            soft_wrap=True,
        )
        if verbose and error.text is not None:
            console.print(Text(f"  > {_short(error.text, 160)}", style="muted"))
        return

    console.print(f"[err]✗ {escape(str(error))}[/err]", soft_wrap=True)


def render_summary(console: Console, path: str, *, pairs: int, sections: int) -> None:
    table = Table(title="Summary", show_header=True, show_lines=False)
    for c in ("file", "pairs", "sections"):
        table.add_column(c, style="bold", no_wrap=True)
    table.add_row(Text(path), str(pairs), str(sections))

    console.print(table)
    console.print("[ok]✓ OK[/ok]")

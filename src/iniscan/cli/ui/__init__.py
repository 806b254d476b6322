from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from iniscan.cli.ui.formatters import (
    PairsRenderOptions,
    render_parse_error,
    render_pairs_plain,
    render_pairs_table,
    render_summary,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "err": "bold red",
        "muted": "dim",
        "path": "cyan",
        "section": "bold magenta",
        "key": "bold",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool = False


def get_ui(*, verbose: bool = False) -> UI:
    return UI(
        console=Console(theme=THEME, highlight=False),
        err_console=Console(theme=THEME, stderr=True, highlight=False),
        verbose=verbose,
    )


__all__ = [
    "PairsRenderOptions",
    "THEME",
    "UI",
    "get_ui",
    "render_pairs_plain",
    "render_pairs_table",
    "render_parse_error",
    "render_summary",
]

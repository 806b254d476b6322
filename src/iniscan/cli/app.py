from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _dist_version

import typer
from rich.console import Console

from iniscan.cli.commands.check import check_cmd
from iniscan.cli.commands.dump import dump_cmd
from iniscan.cli.commands.get import get_cmd
from iniscan.cli.commands.init import init_cmd

app = typer.Typer(
    name="iniscan",
    help="Read INI files one record at a time: dump pairs, look up keys, validate syntax.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        try:
            v = _dist_version("iniscan")
        except PackageNotFoundError:
            v = "0.1.0"
        console.print(f"iniscan {v}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback, is_eager=True
    ),
) -> None:
    pass


app.command("dump")(dump_cmd)
app.command("get")(get_cmd)
app.command("check")(check_cmd)
app.command("init")(init_cmd)

from __future__ import annotations

from pathlib import Path
import typer

from iniscan.cli.utils.files import ensure_dir, write_file

DEFAULT_CONFIG_TOML = """\
[parser]
# physical lines longer than this are read in chunks
max_line_bytes = 4094
# true: reset the line counter on every step (old diagnostics numbering)
legacy_line_numbers = false

[ui]
show_line_numbers = true
max_value_width = 120

[logging]
level = "WARNING"
"""


def init_cmd(
    path: Path = typer.Argument(Path("."), help="Directory to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files."),
) -> None:
    """Write a default .iniscan/config.toml."""
    root = path.resolve()
    cfg_dir = root / ".iniscan"
    ensure_dir(cfg_dir)

    target = cfg_dir / "config.toml"
    if write_file(target, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Initialized {target}")
    else:
        typer.echo(f"{target} already exists (use --force to overwrite)")

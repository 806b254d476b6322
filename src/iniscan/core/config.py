from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from iniscan.core.models import LoggingConfig, ParserConfig, UIConfig

# Python 3.11+ has tomllib; for 3.9/3.10 use tomli
try:
    import tomllib  # type: ignore
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


REPO_CONFIG = ".iniscan/config.toml"
GLOBAL_CONFIGS = ("~/.config/iniscan/config.toml", "~/.iniscan/config.toml")


def _first_file(candidates: Iterable[Path]) -> Optional[Path]:
    for p in candidates:
        if p.is_file():
            return p.resolve()
    return None


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Tables merge recursively; scalars and arrays replace."""
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def find_repo_config(start_dir: Path) -> Optional[Path]:
    """Closest `.iniscan/config.toml` in start_dir or any parent."""
    cur = start_dir.resolve()
    return _first_file(d / REPO_CONFIG for d in (cur, *cur.parents))


def find_global_config() -> Optional[Path]:
    return _first_file(Path(p).expanduser() for p in GLOBAL_CONFIGS)


@dataclass(frozen=True)
class LoadedConfig:
    parser: ParserConfig
    ui: UIConfig
    logging: LoggingConfig
    global_path: Optional[Path]
    repo_path: Optional[Path]


def load_config(
    start_dir: Path,
    cli_overrides: Optional[Dict[str, Any]] = None,
    *,
    use_global: bool = True,
) -> LoadedConfig:
    """
    Layer defaults < global file < closest repo file < cli_overrides, then
    validate the [parser], [ui] and [logging] tables. A table that is not a
    TOML table falls back to defaults.
    """
    global_path = find_global_config() if use_global else None
    repo_path = find_repo_config(start_dir)

    merged: Dict[str, Any] = {}
    for src in (global_path, repo_path):
        if src is not None:
            merged = _merge(merged, tomllib.loads(src.read_text(encoding="utf-8", errors="replace")))
    merged = _merge(merged, cli_overrides or {})

    def table(name: str) -> Dict[str, Any]:
        t = merged.get(name)
        return t if isinstance(t, dict) else {}

    return LoadedConfig(
        parser=ParserConfig.model_validate(table("parser")),
        ui=UIConfig.model_validate(table("ui")),
        logging=LoggingConfig.model_validate(table("logging")),
        global_path=global_path,
        repo_path=repo_path,
    )

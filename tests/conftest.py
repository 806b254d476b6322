from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import pytest

from iniscan.parsers import IniParser

Call = Tuple[Optional[str], str, str]

EXAMPLE_INI = """\
; comment
[server]
host = localhost
port= 8080

[client]
timeout = 30
"""


@pytest.fixture
def write_ini(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: Union[str, bytes], name: str = "test.ini") -> Path:
        p = tmp_path / name
        if isinstance(content, str):
            content = content.encode("latin-1")
        p.write_bytes(content)
        return p

    return _write


@pytest.fixture
def calls() -> List[Call]:
    return []


@pytest.fixture
def recorder(calls: List[Call]):
    def _record(parser: IniParser, section: Optional[str], key: str, value: str) -> None:
        calls.append((section, key, value))

    return _record


@pytest.fixture
def example_ini(write_ini: Callable[..., Path]) -> Path:
    return write_ini(EXAMPLE_INI, name="example.ini")

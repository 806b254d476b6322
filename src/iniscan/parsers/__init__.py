from __future__ import annotations

from iniscan.core.models import ParserConfig, StepStatus
from iniscan.parsers.common import strip_region
from iniscan.parsers.errors import (
    AllocationError,
    ArgumentError,
    IniError,
    IniSyntaxError,
    ParserClosedError,
    ParserCreateError,
    SourceNotFoundError,
)
from iniscan.parsers.ini_parser import (
    IniParser,
    KVHandler,
    dispose,
    find_value,
    iter_pairs,
    read_pairs,
)
from iniscan.parsers.types import ParsedKV

__all__ = [
    "AllocationError",
    "ArgumentError",
    "IniError",
    "IniParser",
    "IniSyntaxError",
    "KVHandler",
    "ParsedKV",
    "ParserClosedError",
    "ParserConfig",
    "ParserCreateError",
    "SourceNotFoundError",
    "StepStatus",
    "dispose",
    "find_value",
    "iter_pairs",
    "read_pairs",
    "strip_region",
]

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedKV:
    """One key-value pair and the section it was found under."""
    section: Optional[str]
    key: str
    value: str
    line: Optional[int] = None

    @property
    def dotted_key(self) -> str:
        return self.key if not self.section else f"{self.section}.{self.key}"

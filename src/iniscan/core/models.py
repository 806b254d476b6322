from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# ================================
# Enums
# ================================


class StepStatus(str, Enum):
    PROGRESS = "progress"
    END = "end"
    ERROR = "error"


# ================================
# Parser config (defaults only)
# ================================

# At most 4094 bytes per physical line read; the remainder is read as the next line.
DEFAULT_MAX_LINE_BYTES = 4094


class ParserConfig(BaseModel):
    """
    Defaults live here.
    Repo/global/CLI overrides are merged by core/config.py (do NOT load config in defaults).
    """

    max_line_bytes: int = Field(
        default=DEFAULT_MAX_LINE_BYTES,
        ge=3,
        le=1_048_576,
        description="Longest physical line read in one go; longer lines are split into chunks.",
    )
    legacy_line_numbers: bool = Field(
        default=False,
        description="Reset the line counter on every step and count from 2 (old diagnostics).",
    )


# ================================
# UI + logging config (defaults only)
# ================================


class UIConfig(BaseModel):
    show_line_numbers: bool = True
    max_value_width: int = Field(default=120, ge=8)


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    level: LogLevel = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

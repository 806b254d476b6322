from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "iniscan-rich"


class HostReportedErrors(logging.Filter):
    """Drop ERROR+ records from loggers whose errors the host prints itself."""

    def __init__(self, names: Sequence[str]) -> None:
        super().__init__()
        self._names = tuple(names)

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno < logging.ERROR:
            return True
        return not any(
            record.name == n or record.name.startswith(n + ".") for n in self._names
        )


def configure_logging(
    level: Union[str, int] = "WARNING",
    *,
    console: Optional[Console] = None,
    host_reported: Sequence[str] = (),
) -> logging.Logger:
    """
    Route the `iniscan` logger tree through Rich on stderr.

    Safe to call repeatedly: the previous handler is replaced, not stacked.
    `host_reported` names loggers whose errors the caller renders on its own.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("iniscan")
    logger.setLevel(level)

    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    if host_reported:
        handler.addFilter(HostReportedErrors(host_reported))
    logger.addHandler(handler)
    return logger

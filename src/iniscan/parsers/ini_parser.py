from __future__ import annotations

import logging
import os
from collections import deque
from typing import IO, Any, Callable, Deque, Iterator, List, Optional, Union

from iniscan.core.models import ParserConfig, StepStatus
from iniscan.parsers.common import SOURCE_ENCODING, is_skippable, strip_region
from iniscan.parsers.errors import (
    AllocationError,
    ArgumentError,
    IniError,
    IniSyntaxError,
    ParserClosedError,
    ParserCreateError,
    SourceNotFoundError,
)
from iniscan.parsers.types import ParsedKV

logger = logging.getLogger(__name__)

PathArg = Union[str, "os.PathLike[str]"]

# handler(parser, section_or_None, key, value)
KVHandler = Callable[["IniParser", Optional[str], str, str], None]


class IniParser:
    """
    Incremental INI reader bound to one source file.

    Each step() consumes physical lines until exactly one logical record
    (a section header or a key-value pair) has been handled. Key-value pairs
    go to the registered handler; headers only update `active_section`.

    Usage:
      with IniParser("app.ini", handler=on_pair) as parser:
          ok = parser.run()
    """

    def __init__(
        self,
        path: PathArg,
        *,
        handler: Optional[KVHandler] = None,
        context: Any = None,
        config: Optional[ParserConfig] = None,
    ) -> None:
        if path is None:
            raise ArgumentError("path is required")
        try:
            path_str = os.fsdecode(path)
        except TypeError as e:
            raise ArgumentError(f"path must be str or os.PathLike, got {type(path).__name__}") from e
        if not path_str:
            raise ArgumentError("path must not be empty")

        self._path = path_str
        self._config = config or ParserConfig()
        self._stream: Optional[IO[bytes]] = None
        self._active_section: Optional[str] = None
        self._running = True
        self._line_number = 0

        self.handler: Optional[KVHandler] = handler
        self.context: Any = context
        self.error: Optional[IniError] = None

        try:
            self._stream = open(path_str, "rb")
        except FileNotFoundError as e:
            raise SourceNotFoundError(path_str) from e
        except MemoryError as e:
            raise AllocationError(f"out of memory opening {path_str}") from e
        except OSError as e:
            raise ParserCreateError(path_str, e.strerror or str(e)) from e

        logger.debug("opened %s", path_str)

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def active_section(self) -> Optional[str]:
        return self._active_section

    @property
    def running(self) -> bool:
        return self._running

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def closed(self) -> bool:
        return self._stream is None

    def set_handler(self, handler: Optional[KVHandler]) -> None:
        self.handler = handler

    # ----------------------------
    # Parsing
    # ----------------------------

    def step(self) -> StepStatus:
        """
        Advance by one logical record.

        Returns PROGRESS after a header or a key-value pair, END when input is
        exhausted, ERROR on a malformed line (details in `self.error`).
        """
        stream = self._require_stream()
        if self._config.legacy_line_numbers:
            self._line_number = 1
        self.error = None

        try:
            while True:
                raw = stream.readline(self._config.max_line_bytes)
                if not raw:
                    return StepStatus.END

                self._line_number += 1
                line = raw.decode(SOURCE_ENCODING)

                if is_skippable(line):
                    continue

                if self._parse_header(line):
                    return StepStatus.PROGRESS

                self._emit_pair(line)
                return StepStatus.PROGRESS

        except IniSyntaxError as e:
            self.error = e
            logger.error("%s", e)
            return StepStatus.ERROR
        except AllocationError as e:
            self.error = e
            logger.error("%s:%d: %s", self._path, self._line_number, e)
            return StepStatus.ERROR

    def run(self) -> bool:
        """
        Step until end of input or halt(). False on the first malformed line.
        """
        status = StepStatus.PROGRESS
        while self._running and status is StepStatus.PROGRESS:
            status = self.step()
            if status is StepStatus.ERROR:
                return False
        return True

    def halt(self) -> None:
        """Stop run() before its next step. A step in progress still completes."""
        self._running = False

    def _parse_header(self, line: str) -> bool:
        trimmed = strip_region(line)
        if len(trimmed) <= 2 or trimmed[0] != "[":
            return False

        if trimmed[-1] != "]":
            raise self._syntax_error("end token `]' not found", line)

        name = strip_region(trimmed[1:-1])
        if not name:
            raise self._syntax_error("empty section name", line)

        self._active_section = name
        logger.debug("%s:%d: section [%s]", self._path, self._line_number, name)
        return True

    def _emit_pair(self, line: str) -> None:
        i = line.find("=")
        if i < 0:
            raise self._syntax_error("token `=' not found", line)

        key = strip_region(line, i)
        value = strip_region(line[i + 1:])

        if self.handler is None:
            logger.debug("%s:%d: no handler, dropping %r", self._path, self._line_number, key)
            return
        self.handler(self, self._active_section, key, value)

    def _syntax_error(self, reason: str, line: str) -> IniSyntaxError:
        return IniSyntaxError(self._path, self._line_number, reason, text=line.rstrip("\r\n"))

    def _require_stream(self) -> IO[bytes]:
        if self._stream is None:
            raise ParserClosedError(f"parser for {self._path} is closed")
        return self._stream

    # ----------------------------
    # Teardown
    # ----------------------------

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self._active_section = None

    def __enter__(self) -> "IniParser":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"line={self._line_number}"
        return f"IniParser({self._path!r}, {state})"


def dispose(parser: Optional[IniParser]) -> None:
    """Close `parser` if there is one. No-op for None or an already closed parser."""
    if parser is None:
        return
    parser.close()


# ----------------------------
# Convenience readers
# ----------------------------


def iter_pairs(path: PathArg, *, config: Optional[ParserConfig] = None) -> Iterator[ParsedKV]:
    """
    Yield pairs lazily, one step() at a time.

    Raises the parser's error (usually IniSyntaxError) at the first malformed
    line; pairs before it have already been yielded.
    """
    pending: Deque[ParsedKV] = deque()

    def _collect(p: IniParser, section: Optional[str], key: str, value: str) -> None:
        pending.append(ParsedKV(section=section, key=key, value=value, line=p.line_number))

    with IniParser(path, handler=_collect, config=config) as parser:
        while True:
            status = parser.step()
            if status is StepStatus.ERROR:
                assert parser.error is not None
                raise parser.error
            while pending:
                yield pending.popleft()
            if status is StepStatus.END:
                return


def read_pairs(path: PathArg, *, config: Optional[ParserConfig] = None) -> List[ParsedKV]:
    return list(iter_pairs(path, config=config))


def find_value(
    path: PathArg,
    key: str,
    *,
    section: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> Optional[str]:
    """
    Value of the first `key` (optionally within `section`), or None.

    Stops reading as soon as the key is found, so malformed lines after it
    are never seen.
    """
    found: List[str] = []

    def _match(p: IniParser, sec: Optional[str], k: str, v: str) -> None:
        if k == key and (section is None or sec == section):
            found.append(v)
            p.halt()

    with IniParser(path, handler=_match, config=config) as parser:
        if not parser.run():
            assert parser.error is not None
            raise parser.error

    return found[0] if found else None

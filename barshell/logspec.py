"""Log level specifications such as ``"info, some::module=debug/pattern"``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

TRACE = 5
OFF = logging.CRITICAL + 10
LOG_ENV_VAR = "BARSHELL_LOG"

logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "off": OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_configured_loggers: set[str] = set()


class LogSpecError(ValueError):
    """Raised when a log specification cannot be parsed."""


class _TextFilter(logging.Filter):
    def __init__(self, pattern: re.Pattern[str]) -> None:
        super().__init__()
        self.pattern = pattern

    def filter(self, record: logging.LogRecord) -> bool:
        return self.pattern.search(record.getMessage()) is not None


@dataclass
class LogSpec:
    """A default level, per-module levels and an optional message filter."""

    default: int = OFF
    modules: dict[str, int] = field(default_factory=dict)
    text_filter: Optional[re.Pattern[str]] = None

    def apply(self) -> None:
        """Make this the active specification, replacing the one applied before."""
        root = logging.getLogger()
        root.setLevel(self.default)
        levels = {name.replace("::", "."): level for name, level in self.modules.items()}
        for stale in _configured_loggers - levels.keys():
            logging.getLogger(stale).setLevel(logging.NOTSET)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)
        _configured_loggers.clear()
        _configured_loggers.update(levels)
        for handler in root.handlers:
            for old in [f for f in handler.filters if isinstance(f, _TextFilter)]:
                handler.removeFilter(old)
            if self.text_filter is not None:
                handler.addFilter(_TextFilter(self.text_filter))


def _level(text: str) -> Optional[int]:
    return _LEVELS.get(text.strip().lower())


def parse_log_spec(spec: str) -> LogSpec:
    """Parse a comma separated list of ``level`` and ``module=level`` entries."""
    body, slash, pattern = spec.partition("/")
    text_filter = None
    if slash:
        if "/" in pattern:
            raise LogSpecError(f"invalid log spec {spec!r}: more than one '/'")
        try:
            text_filter = re.compile(pattern)
        except re.error as error:
            raise LogSpecError(f"invalid text filter {pattern!r}: {error}") from None

    errors: list[str] = []
    result = LogSpec(text_filter=text_filter)
    for part in (piece.strip() for piece in body.split(",")):
        if not part:
            continue
        pieces = part.split("=")
        if len(pieces) > 2:
            errors.append(f"invalid part in log spec {part!r}")
            continue
        name = pieces[0].strip()
        if any(char.isspace() for char in name):
            errors.append(f"module name contains whitespace: {name!r}")
            continue
        if len(pieces) == 1:
            level = _level(name)
            if level is None:
                result.modules[name] = TRACE
            else:
                result.default = level
            continue
        if not name:
            errors.append(f"missing module name in {part!r}")
            continue
        level_text = pieces[1].strip()
        if not level_text:
            result.modules[name] = TRACE
            continue
        level = _level(level_text)
        if level is None:
            errors.append(f"unknown log level {level_text!r}")
            continue
        result.modules[name] = level
    if errors:
        raise LogSpecError("; ".join(errors))
    return result


def log_spec_from_env_or(spec: str) -> LogSpec:
    """Use the specification in the environment if it is set and valid, else ``spec``."""
    from_env = os.environ.get(LOG_ENV_VAR)
    if from_env is not None:
        try:
            return parse_log_spec(from_env)
        except LogSpecError:
            pass
    return parse_log_spec(spec)
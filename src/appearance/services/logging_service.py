"""Logging capture service.

Keeps the most recent log records from the ``appearance`` logger hierarchy
in a bounded ring buffer so a diagnostics panel (or a test) can inspect the
resolver's transitions without configuring handlers itself.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional

__all__ = [
    "LogEntry",
    "LoggingService",
    "DEFAULT_LOGGER_NAME",
]

DEFAULT_LOGGER_NAME = "appearance"

# Per logger name: how many services are attached, and the level found before
# the first one attached. Only the last detach restores that level.
_attach_counts: Dict[str, int] = {}
_saved_levels: Dict[str, int] = {}


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(self, capacity: int = 200, logger_name: str = DEFAULT_LOGGER_NAME) -> None:
        self._capacity = capacity
        self._logger_name = logger_name
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._attached = False

    # Lifecycle --------------------------------------------------------
    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        if self._attached:
            return
        logger = logging.getLogger(self._logger_name)
        logger.addHandler(self._handler)
        count = _attach_counts.get(self._logger_name, 0)
        if count == 0:
            # Capture debug transitions without touching the root logger's level.
            _saved_levels[self._logger_name] = logger.level
            if logger.level == logging.NOTSET or logger.level > logging.DEBUG:
                logger.setLevel(logging.DEBUG)
        _attach_counts[self._logger_name] = count + 1
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logger = logging.getLogger(self._logger_name)
        logger.removeHandler(self._handler)
        remaining = _attach_counts.get(self._logger_name, 1) - 1
        if remaining > 0:
            _attach_counts[self._logger_name] = remaining
        else:
            _attach_counts.pop(self._logger_name, None)
            logger.setLevel(_saved_levels.pop(self._logger_name, logging.NOTSET))
        self._attached = False

    def _ingest_record(self, record: logging.LogRecord) -> None:
        self._entries.append(
            LogEntry(
                level=record.levelname,
                name=record.name,
                message=record.getMessage(),
                created=record.created,
            )
        )

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        self._entries.clear()

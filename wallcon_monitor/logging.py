from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Iterable, Optional

from wallcon_monitor.errors import LogWriteError


def _default_logger_name() -> logging.Logger:
    return logging.getLogger("wallcon")


class ConsoleLog:
    """Configure console logging for the application.

    Diagnostics go to stderr; stdout is reserved for the rendered display.
    """

    def __init__(self, level: str = "WARNING", quiet: bool = False, debug_modules: Iterable[str] | None = None):
        self.level = level.upper()
        self.quiet = quiet
        self.debug_modules = list(debug_modules or [])

    def setup(self) -> logging.Logger:
        # Root logger handles all levels; handlers control visibility.
        root = logging.getLogger()
        root.handlers.clear()
        root.setLevel(logging.DEBUG)

        if not self.quiet:
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(getattr(logging, self.level, logging.WARNING))
            fmt = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
            handler.setFormatter(logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S"))
            root.addHandler(handler)

        for name in self.debug_modules:
            logging.getLogger(name).setLevel(logging.DEBUG)

        return _default_logger_name()


class ResponseLog:
    """Append-only JSONL record of raw device responses.

    One line per successful poll: ``{"timestamp", "command", "body"}``. The
    file is opened on the first write and kept open until ``close()``.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._fh: Optional[IO[str]] = None

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def _open(self) -> IO[str]:
        if self._fh is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("a", encoding="utf-8")
        return self._fh

    def write(self, timestamp: datetime, command: str, body: str) -> None:
        entry = {
            "timestamp": timestamp.isoformat(),
            "command": command,
            "body": body,
        }
        try:
            fh = self._open()
            fh.write(json.dumps(entry, ensure_ascii=False) + "\n")
            fh.flush()
        except OSError as exc:
            raise LogWriteError(self.path, exc) from exc

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            finally:
                self._fh = None

    def __enter__(self) -> "ResponseLog":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)

# wallcon_monitor/errors.py

from __future__ import annotations

from typing import Iterable


class MonitorError(Exception):
    """Base class for failures reported to the user."""

    exit_code = 1


# --- command resolution -------------------------------------------------
class CommandError(MonitorError):
    pass


class UnknownCommand(CommandError):
    def __init__(self, token: str, available: Iterable[str]):
        self.token = token
        self.available = list(available)
        super().__init__(
            f"Unknown command '{token}'. Available commands: {', '.join(self.available)}"
        )


class AmbiguousCommand(CommandError):
    def __init__(self, token: str, candidates: Iterable[str]):
        self.token = token
        self.candidates = list(candidates)
        super().__init__(
            f"Ambiguous command '{token}'. Matches: {', '.join(self.candidates)}"
        )


# --- device client ------------------------------------------------------
class DeviceClientError(MonitorError):
    pass


class TransportError(DeviceClientError):
    def __init__(self, url: str, cause: BaseException):
        self.url = url
        self.cause = cause
        super().__init__(f"request to {url} failed: {cause}")


class DeviceError(DeviceClientError):
    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{url} returned HTTP {status_code}")


class DecodeError(DeviceClientError):
    """Response body does not match the expected endpoint schema."""


# --- response log -------------------------------------------------------
class LogWriteError(MonitorError):
    def __init__(self, path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"could not write response log {path}: {cause}")

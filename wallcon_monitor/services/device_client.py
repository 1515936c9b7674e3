# wallcon_monitor/services/device_client.py

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Union

import requests

from wallcon_monitor.errors import DecodeError, DeviceError, TransportError
from wallcon_monitor.models.lifetime import LifetimeStats
from wallcon_monitor.models.version import VersionInfo
from wallcon_monitor.models.vitals import VitalsSnapshot
from wallcon_monitor.models.wifi import WifiStatus
from wallcon_monitor.services.commands import Command

Record = Union[VersionInfo, VitalsSnapshot, LifetimeStats, WifiStatus]

RECORD_TYPES = {
    Command.LIFETIME: LifetimeStats,
    Command.VERSION: VersionInfo,
    Command.VITALS: VitalsSnapshot,
    Command.WIFI_STATUS: WifiStatus,
}


@dataclass(frozen=True)
class DeviceResponse:
    command: Command
    record: Record
    raw: str
    fetched_at: datetime


class WallConnectorClient:
    """Blocking client for the Wall Connector's local ``/api/1`` endpoints."""

    API_PREFIX = "/api/1"
    DEFAULT_TIMEOUT = 5.0

    def __init__(
        self,
        address: str,
        log,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.address = address.strip().rstrip("/")
        self.log = log
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = clock

    # ------------------------------------------------------------------
    def url_for(self, command: Command) -> str:
        return f"http://{self.address}{self.API_PREFIX}/{command.endpoint}"

    def _decode(self, command: Command, raw: str) -> Record:
        try:
            payload: Any = json.loads(raw)
        except ValueError as exc:
            raise DecodeError(f"{command.endpoint}: response is not valid JSON ({exc})") from exc
        try:
            return RECORD_TYPES[command].from_payload(payload)
        except DecodeError as exc:
            raise DecodeError(f"{command.endpoint}: {exc}") from exc

    # ------------------------------------------------------------------
    def fetch(self, command: Command) -> DeviceResponse:
        url = self.url_for(command)
        fetched_at = self.clock()

        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            self.log.debug("Request to %s failed: %s", url, exc)
            raise TransportError(url, exc) from exc

        if resp.status_code != 200:
            self.log.debug("%s returned HTTP %s", url, resp.status_code)
            raise DeviceError(url, resp.status_code)

        raw = resp.text
        record = self._decode(command, raw)
        self.log.debug("Fetched %s (%d bytes)", command.endpoint, len(raw))
        return DeviceResponse(command=command, record=record, raw=raw, fetched_at=fetched_at)

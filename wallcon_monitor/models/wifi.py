# wallcon_monitor/models/wifi.py
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from wallcon_monitor.models.fields import get_bool, get_int, get_str, require_object


def decode_ssid(encoded: str) -> str:
    """Decode the base64 SSID sent by the device.

    Falls back to the raw value when it is not valid base64 or not UTF-8.
    """
    try:
        return base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return encoded


@dataclass(frozen=True)
class WifiStatus:
    wifi_ssid: str        # base64, as transmitted
    wifi_connected: bool
    wifi_signal_strength: int
    wifi_rssi: int
    wifi_snr: int
    wifi_infra_ip: str
    internet: bool
    wifi_mac: str

    @property
    def ssid(self) -> str:
        return decode_ssid(self.wifi_ssid)

    @classmethod
    def from_payload(cls, payload: Any) -> "WifiStatus":
        data = require_object(payload)
        return cls(
            wifi_ssid=get_str(data, "wifi_ssid"),
            wifi_connected=get_bool(data, "wifi_connected"),
            wifi_signal_strength=get_int(data, "wifi_signal_strength"),
            wifi_rssi=get_int(data, "wifi_rssi"),
            wifi_snr=get_int(data, "wifi_snr"),
            wifi_infra_ip=get_str(data, "wifi_infra_ip"),
            internet=get_bool(data, "internet"),
            wifi_mac=get_str(data, "wifi_mac"),
        )

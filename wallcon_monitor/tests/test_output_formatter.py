# wallcon_monitor/tests/test_output_formatter.py

import io
import json

import pytest

from wallcon_monitor.models.lifetime import LifetimeStats
from wallcon_monitor.models.version import VersionInfo
from wallcon_monitor.models.vitals import VitalsSnapshot
from wallcon_monitor.models.wifi import WifiStatus
from wallcon_monitor.services.output_formatter import (
    emit_human,
    emit_json,
    format_duration,
    format_minutes,
    render,
    render_lifetime,
    render_version,
    render_vitals,
    render_wifi_status,
)

from .fake_device import LIFETIME_PAYLOAD, VERSION_PAYLOAD, VITALS_PAYLOAD, WIFI_PAYLOAD


def _value(lines, label):
    for line in lines:
        stripped = line.strip()
        if stripped.startswith(label + ":"):
            return stripped[len(label) + 1:].strip()
    raise AssertionError(f"{label} not rendered")


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, "0m"),
        (59, "0m"),
        (300, "5m"),
        (3600, "1h 0m"),
        (15300, "4h 15m"),
        (86400, "1d 0h 0m"),
        (101700, "1d 4h 15m"),
        # the documented "104100 s -> 1d 4h 15m" example; 104100 s is really 1d 4h 55m
        (104100, "1d 4h 55m"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_minutes_never_shows_hours():
    assert format_minutes(1530) == "25m"
    assert format_minutes(7260) == "121m"


def test_render_version_layout():
    lines = render_version(VersionInfo.from_payload(VERSION_PAYLOAD))
    assert lines == [
        "Tesla Wall Connector Version Info:",
        "  Firmware Version: 24.28.3+g1bd3d2a0c5d1a4",
        "  Git Branch:       HEAD",
        "  Part Number:      1529455-02-D",
        "  Serial Number:    PGT22155000123",
        "  Web Service:      0.1.0",
    ]


def test_render_wifi_status_decodes_ssid():
    lines = render_wifi_status(WifiStatus.from_payload(WIFI_PAYLOAD))
    assert lines[0] == "Tesla Wall Connector WiFi Status:"
    assert _value(lines, "SSID") == "MyNetwork"
    assert _value(lines, "Connected") == "true"
    assert _value(lines, "Signal Strength") == "64%"
    assert _value(lines, "RSSI") == "-58 dBm"
    assert _value(lines, "SNR") == "31 dB"
    assert _value(lines, "MAC Address") == "98:ED:5C:00:11:22"


def test_render_lifetime_units_and_durations():
    lines = render_lifetime(LifetimeStats.from_payload(LIFETIME_PAYLOAD))
    assert _value(lines, "Energy Delivered") == "4321.99 kWh"
    assert _value(lines, "Charging Time") == "1h 2m"
    assert _value(lines, "Uptime") == "1d 4h 15m"
    assert _value(lines, "Avg Startup Temp") == "22.4°C"
    assert _value(lines, "Loaded Cycles") == "3"


def test_render_vitals_fixed_precision():
    lines = render_vitals(VitalsSnapshot.from_payload(VITALS_PAYLOAD))
    assert lines[0] == "Tesla Wall Connector Vitals:"
    assert _value(lines, "Vehicle Connected") == "true"
    assert _value(lines, "Session Time") == "25m"
    assert _value(lines, "Session Energy") == "2.842 kWh"
    assert _value(lines, "Grid Voltage") == "241.3 V"
    assert _value(lines, "Grid Frequency") == "59.97 Hz"
    assert _value(lines, "Current A/B/C/N") == "31.5 / 31.7 / 0.0 / 0.2 A"
    assert _value(lines, "Voltage A/B/C") == "120.4 / 120.9 / 0.0 V"
    assert _value(lines, "PCBA Temp") == "38.4°C"
    assert _value(lines, "Handle Temp") == "27.9°C"
    assert _value(lines, "Input Thermopile") == "-176 µV"
    assert _value(lines, "Uptime") == "1d 4h 15m"
    assert _value(lines, "Not Ready Reasons") == "none"


def test_render_vitals_lists_not_ready_codes():
    vitals = VitalsSnapshot.from_payload(dict(VITALS_PAYLOAD, evse_not_ready_reasons=[4, 9]))
    assert _value(render_vitals(vitals), "Not Ready Reasons") == "4, 9"


def test_vitals_uptime_104100_seconds():
    # 1d 4h 15m would be 101700 s; the 104100 s reading decomposes to 1d 4h 55m
    vitals = VitalsSnapshot.from_payload(dict(VITALS_PAYLOAD, uptime_s=104100))
    assert _value(render_vitals(vitals), "Uptime") == "1d 4h 55m"


def test_labels_are_column_aligned():
    lines = render_vitals(VitalsSnapshot.from_payload(VITALS_PAYLOAD))
    starts = set()
    for line in lines[1:]:
        label, _, rest = line.partition(":")
        starts.add(len(label) + 1 + len(rest) - len(rest.lstrip()))
    assert len(starts) == 1


@pytest.mark.parametrize(
    "record",
    [
        VersionInfo.from_payload(VERSION_PAYLOAD),
        VitalsSnapshot.from_payload(VITALS_PAYLOAD),
        LifetimeStats.from_payload(LIFETIME_PAYLOAD),
        WifiStatus.from_payload(WIFI_PAYLOAD),
    ],
)
def test_render_is_deterministic(record):
    assert render(record) == render(record)


def test_render_handles_zero_and_negative_values():
    payload = {key: 0 for key in VITALS_PAYLOAD}
    payload.update(
        vehicle_connected=False,
        contactor_closed=False,
        current_alerts=[],
        evse_not_ready_reasons=[],
        pilot_low_v=-12.0,
        uptime_s=-5,
    )
    lines = render(VitalsSnapshot.from_payload(payload))
    assert _value(lines, "Uptime") == "0m"
    assert _value(lines, "Session Energy") == "0.000 kWh"


def test_emit_json_uses_device_field_names():
    out = io.StringIO()
    emit_json(VitalsSnapshot.from_payload(VITALS_PAYLOAD), out)
    data = json.loads(out.getvalue())
    assert data["currentA_a"] == 31.5
    assert data["voltageC_v"] == 0.0
    assert data["evse_not_ready_reasons"] == []
    assert "phase_currents_a" not in data


def test_emit_json_includes_decoded_ssid():
    out = io.StringIO()
    emit_json(WifiStatus.from_payload(WIFI_PAYLOAD), out)
    data = json.loads(out.getvalue())
    assert data["wifi_ssid"] == "TXlOZXR3b3Jr"
    assert data["wifi_ssid_decoded"] == "MyNetwork"


def test_emit_human_writes_one_line_each():
    out = io.StringIO()
    emit_human(["a", "b"], out)
    assert out.getvalue() == "a\nb\n"

# wallcon_monitor/services/output_formatter.py

from __future__ import annotations

import json
from dataclasses import asdict
from typing import IO, Iterable, List, Sequence, Tuple

from wallcon_monitor.models.lifetime import LifetimeStats
from wallcon_monitor.models.version import VersionInfo
from wallcon_monitor.models.vitals import PHASE_CURRENT_KEYS, PHASE_VOLTAGE_KEYS, VitalsSnapshot
from wallcon_monitor.models.wifi import WifiStatus

Row = Tuple[str, str]

DEVICE_NAME = "Tesla Wall Connector"


def format_duration(seconds: int) -> str:
    """Render seconds as ``Xd Yh Zm``, dropping leading zero units."""
    seconds = max(int(seconds), 0)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    mins = (seconds % 3600) // 60
    if days > 0:
        return f"{days}d {hours}h {mins}m"
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


def format_minutes(seconds: int) -> str:
    return f"{max(int(seconds), 0) // 60}m"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _series(values: Sequence[float], unit: str) -> str:
    return " / ".join(f"{v:.1f}" for v in values) + f" {unit}"


def _block(title: str, rows: Iterable[Row]) -> List[str]:
    rows = list(rows)
    width = max(len(label) for label, _ in rows) + 2
    lines = [f"{DEVICE_NAME} {title}:"]
    for label, value in rows:
        lines.append(f"  {(label + ':').ljust(width)}{value}")
    return lines


# ----------------------------------------------------------------------
def render_version(info: VersionInfo) -> List[str]:
    return _block(
        "Version Info",
        [
            ("Firmware Version", info.firmware_version),
            ("Git Branch", info.git_branch),
            ("Part Number", info.part_number),
            ("Serial Number", info.serial_number),
            ("Web Service", info.web_service),
        ],
    )


def render_vitals(vitals: VitalsSnapshot) -> List[str]:
    reasons = ", ".join(str(code) for code in vitals.evse_not_ready_reasons) or "none"
    return _block(
        "Vitals",
        [
            ("Vehicle Connected", _flag(vitals.vehicle_connected)),
            ("Contactor Closed", _flag(vitals.contactor_closed)),
            ("Session Time", format_minutes(vitals.session_s)),
            ("Session Energy", f"{vitals.session_energy_kwh:.3f} kWh"),
            ("Vehicle Current", f"{vitals.vehicle_current_a:.1f} A"),
            ("Grid Voltage", f"{vitals.grid_v:.1f} V"),
            ("Grid Frequency", f"{vitals.grid_hz:.2f} Hz"),
            ("Current A/B/C/N", _series(vitals.phase_currents_a, "A")),
            ("Voltage A/B/C", _series(vitals.phase_voltages_v, "V")),
            ("PCBA Temp", f"{vitals.pcba_temp_c:.1f}°C"),
            ("Handle Temp", f"{vitals.handle_temp_c:.1f}°C"),
            ("MCU Temp", f"{vitals.mcu_temp_c:.1f}°C"),
            ("Pilot High/Low", f"{vitals.pilot_high_v:.1f} / {vitals.pilot_low_v:.1f} V"),
            ("Proximity", f"{vitals.prox_v:.1f} V"),
            ("Relay Coil", f"{vitals.relay_coil_v:.1f} V"),
            ("Input Thermopile", f"{vitals.input_thermopile_uv} µV"),
            ("Uptime", format_duration(vitals.uptime_s)),
            ("EVSE State", str(vitals.evse_state)),
            ("Config Status", str(vitals.config_status)),
            ("Not Ready Reasons", reasons),
        ],
    )


def render_lifetime(stats: LifetimeStats) -> List[str]:
    return _block(
        "Lifetime Stats",
        [
            ("Charge Starts", str(stats.charge_starts)),
            ("Energy Delivered", f"{stats.energy_kwh:.2f} kWh"),
            ("Charging Time", format_duration(stats.charging_time_s)),
            ("Uptime", format_duration(stats.uptime_s)),
            ("Contactor Cycles", str(stats.contactor_cycles)),
            ("Loaded Cycles", str(stats.contactor_cycles_loaded)),
            ("Connector Cycles", str(stats.connector_cycles)),
            ("Thermal Foldbacks", str(stats.thermal_foldbacks)),
            ("Alert Count", str(stats.alert_count)),
            ("Avg Startup Temp", f"{stats.avg_startup_temp:.1f}°C"),
        ],
    )


def render_wifi_status(status: WifiStatus) -> List[str]:
    return _block(
        "WiFi Status",
        [
            ("SSID", status.ssid),
            ("Connected", _flag(status.wifi_connected)),
            ("Signal Strength", f"{status.wifi_signal_strength}%"),
            ("RSSI", f"{status.wifi_rssi} dBm"),
            ("SNR", f"{status.wifi_snr} dB"),
            ("IP Address", status.wifi_infra_ip),
            ("Internet", _flag(status.internet)),
            ("MAC Address", status.wifi_mac),
        ],
    )


_RENDERERS = {
    VersionInfo: render_version,
    VitalsSnapshot: render_vitals,
    LifetimeStats: render_lifetime,
    WifiStatus: render_wifi_status,
}


def render(record) -> List[str]:
    return _RENDERERS[type(record)](record)


# ----------------------------------------------------------------------
def _record_to_dict(record) -> dict:
    payload = asdict(record)
    if isinstance(record, VitalsSnapshot):
        payload.update(zip(PHASE_CURRENT_KEYS, payload.pop("phase_currents_a")))
        payload.update(zip(PHASE_VOLTAGE_KEYS, payload.pop("phase_voltages_v")))
        payload["evse_not_ready_reasons"] = list(payload["evse_not_ready_reasons"])
    elif isinstance(record, WifiStatus):
        payload["wifi_ssid_decoded"] = record.ssid
    return payload


def emit_json(record, out: IO[str]) -> None:
    out.write(json.dumps(_record_to_dict(record), indent=2, ensure_ascii=False) + "\n")


def emit_human(lines: Iterable[str], out: IO[str]) -> None:
    for line in lines:
        out.write(line + "\n")

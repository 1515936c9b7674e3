# wallcon_monitor/models/vitals.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wallcon_monitor.models.fields import (
    get_bool,
    get_float,
    get_int,
    get_int_list,
    require_object,
)

PHASE_CURRENT_KEYS = ("currentA_a", "currentB_a", "currentC_a", "currentN_a")
PHASE_VOLTAGE_KEYS = ("voltageA_v", "voltageB_v", "voltageC_v")


@dataclass(frozen=True)
class VitalsSnapshot:
    """Live electrical and thermal readings from ``/api/1/vitals``."""

    vehicle_connected: bool
    contactor_closed: bool
    session_s: int
    session_energy_wh: float
    vehicle_current_a: float
    grid_v: float
    grid_hz: float
    phase_currents_a: tuple[float, ...]   # A, B, C, N
    phase_voltages_v: tuple[float, ...]   # A, B, C
    pcba_temp_c: float
    handle_temp_c: float
    mcu_temp_c: float
    pilot_high_v: float
    pilot_low_v: float
    prox_v: float
    relay_coil_v: float
    input_thermopile_uv: int
    uptime_s: int
    evse_state: int
    config_status: int
    evse_not_ready_reasons: tuple[int, ...]  # opaque firmware codes

    @property
    def session_energy_kwh(self) -> float:
        return self.session_energy_wh / 1000.0

    @classmethod
    def from_payload(cls, payload: Any) -> "VitalsSnapshot":
        data = require_object(payload)
        return cls(
            vehicle_connected=get_bool(data, "vehicle_connected"),
            contactor_closed=get_bool(data, "contactor_closed"),
            session_s=get_int(data, "session_s"),
            session_energy_wh=get_float(data, "session_energy_wh"),
            vehicle_current_a=get_float(data, "vehicle_current_a"),
            grid_v=get_float(data, "grid_v"),
            grid_hz=get_float(data, "grid_hz"),
            phase_currents_a=tuple(get_float(data, key) for key in PHASE_CURRENT_KEYS),
            phase_voltages_v=tuple(get_float(data, key) for key in PHASE_VOLTAGE_KEYS),
            pcba_temp_c=get_float(data, "pcba_temp_c"),
            handle_temp_c=get_float(data, "handle_temp_c"),
            mcu_temp_c=get_float(data, "mcu_temp_c"),
            pilot_high_v=get_float(data, "pilot_high_v"),
            pilot_low_v=get_float(data, "pilot_low_v"),
            prox_v=get_float(data, "prox_v"),
            relay_coil_v=get_float(data, "relay_coil_v"),
            input_thermopile_uv=get_int(data, "input_thermopile_uv"),
            uptime_s=get_int(data, "uptime_s"),
            evse_state=get_int(data, "evse_state"),
            config_status=get_int(data, "config_status"),
            evse_not_ready_reasons=get_int_list(data, "evse_not_ready_reasons"),
        )

# wallcon_monitor/models/lifetime.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wallcon_monitor.models.fields import get_float, get_int, require_object


@dataclass(frozen=True)
class LifetimeStats:
    charge_starts: int
    contactor_cycles: int
    contactor_cycles_loaded: int
    connector_cycles: int
    thermal_foldbacks: int
    alert_count: int
    energy_wh: float
    charging_time_s: int
    uptime_s: int
    avg_startup_temp: float

    @property
    def energy_kwh(self) -> float:
        return self.energy_wh / 1000.0

    @classmethod
    def from_payload(cls, payload: Any) -> "LifetimeStats":
        data = require_object(payload)
        return cls(
            charge_starts=get_int(data, "charge_starts"),
            contactor_cycles=get_int(data, "contactor_cycles"),
            contactor_cycles_loaded=get_int(data, "contactor_cycles_loaded"),
            connector_cycles=get_int(data, "connector_cycles"),
            thermal_foldbacks=get_int(data, "thermal_foldbacks"),
            alert_count=get_int(data, "alert_count"),
            energy_wh=get_float(data, "energy_wh"),
            charging_time_s=get_int(data, "charging_time_s"),
            uptime_s=get_int(data, "uptime_s"),
            avg_startup_temp=get_float(data, "avg_startup_temp"),
        )

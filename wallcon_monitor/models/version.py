# wallcon_monitor/models/version.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wallcon_monitor.models.fields import get_str, require_object


@dataclass(frozen=True)
class VersionInfo:
    firmware_version: str
    git_branch: str
    part_number: str
    serial_number: str
    web_service: str

    @classmethod
    def from_payload(cls, payload: Any) -> "VersionInfo":
        data = require_object(payload)
        return cls(
            firmware_version=get_str(data, "firmware_version"),
            git_branch=get_str(data, "git_branch"),
            part_number=get_str(data, "part_number"),
            serial_number=get_str(data, "serial_number"),
            web_service=get_str(data, "web_service"),
        )

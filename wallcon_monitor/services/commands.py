# wallcon_monitor/services/commands.py

from __future__ import annotations

from enum import Enum

from wallcon_monitor.errors import AmbiguousCommand, UnknownCommand


class Command(Enum):
    LIFETIME = "lifetime"
    VERSION = "version"
    VITALS = "vitals"
    WIFI_STATUS = "wifi_status"

    @property
    def endpoint(self) -> str:
        """Path segment under ``/api/1/``."""
        return self.value

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


COMMAND_NAMES = tuple(cmd.value for cmd in Command)


def resolve_command(token: str) -> Command:
    """Return the command whose name starts with ``token`` (case-sensitive)."""
    for cmd in Command:
        if cmd.value == token:
            return cmd

    matches = [cmd for cmd in Command if cmd.value.startswith(token)]
    if not matches:
        raise UnknownCommand(token, COMMAND_NAMES)
    if len(matches) > 1:
        raise AmbiguousCommand(token, [cmd.value for cmd in matches])
    return matches[0]

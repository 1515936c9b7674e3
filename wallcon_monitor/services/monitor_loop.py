# wallcon_monitor/services/monitor_loop.py

from __future__ import annotations

import sys
from datetime import datetime
from typing import IO, Callable, List, Optional

from rich.console import Console
from rich.text import Text

from wallcon_monitor.errors import DeviceClientError, LogWriteError
from wallcon_monitor.logging import ResponseLog
from wallcon_monitor.services.commands import Command
from wallcon_monitor.services.device_client import DeviceResponse, WallConnectorClient
from wallcon_monitor.services.output_formatter import emit_human, emit_json, render
from wallcon_monitor.services.terminal import KeyWatcher

EXIT_HINT = "Press Esc, q or Ctrl-C to exit."


class MonitorLoop:
    """Drives single-shot and continuous polling of one Wall Connector."""

    def __init__(
        self,
        client: WallConnectorClient,
        log,
        response_log: Optional[ResponseLog] = None,
        out: Optional[IO[str]] = None,
        clock: Callable[[], datetime] = datetime.now,
        console: Optional[Console] = None,
    ):
        self.client = client
        self.log = log
        self.response_log = response_log
        self.out = out if out is not None else sys.stdout
        self.clock = clock
        # Control codes (clear, cursor) are only emitted when out is a terminal.
        self.console = console if console is not None else Console(file=self.out, highlight=False)

    # ------------------------------------------------------------------
    def _record_response(self, response: DeviceResponse) -> Optional[str]:
        """Write the raw body to the response log; return a warning on failure."""
        if self.response_log is None:
            return None
        try:
            self.response_log.write(response.fetched_at, response.command.value, response.raw)
        except LogWriteError as exc:
            self.log.warning("Response log write failed: %s", exc)
            return str(exc)
        return None

    def poll(self, command: Command) -> tuple[DeviceResponse, Optional[str]]:
        response = self.client.fetch(command)
        return response, self._record_response(response)

    # ------------------------------------------------------------------
    def run_once(self, command: Command, json_output: bool = False) -> None:
        response, _ = self.poll(command)
        if json_output:
            emit_json(response.record, self.out)
        else:
            emit_human(render(response.record), self.out)
        self.out.flush()

    # ------------------------------------------------------------------
    def _tick(self, command: Command) -> List[Text]:
        try:
            response, log_warning = self.poll(command)
        except DeviceClientError as exc:
            self.log.debug("Tick failed: %s", exc)
            return [Text(f"Error fetching {command.label}: {exc}", style="bold red")]

        lines = [Text(line) for line in render(response.record)]
        if log_warning:
            lines.append(Text(""))
            lines.append(Text(f"Warning: {log_warning}", style="yellow"))
        return lines

    def _redraw(self, lines: List[Text], delay: int) -> None:
        self.console.clear()
        for line in lines:
            self.console.print(line, soft_wrap=True)
        self.console.print()
        self.console.print(
            Text(f"Updated {self.clock():%H:%M:%S}, refreshing every {delay}s. {EXIT_HINT}", style="dim"),
            soft_wrap=True,
        )
        self.out.flush()

    def run_continuous(self, command: Command, delay: int, watcher=None) -> int:
        """Poll until cancelled; return the number of completed ticks."""
        if command is not Command.VITALS:
            raise ValueError("continuous mode only supports the vitals command")
        if delay <= 0:
            raise ValueError("delay must be a positive number of seconds")

        watcher = watcher if watcher is not None else KeyWatcher()
        ticks = 0
        self.console.show_cursor(False)
        try:
            with watcher:
                while True:
                    self._redraw(self._tick(command), delay)
                    ticks += 1
                    if watcher.wait(delay):
                        self.log.debug("Cancel key pressed; stopping after %d ticks", ticks)
                        break
        except KeyboardInterrupt:
            self.log.debug("Interrupted; stopping after %d ticks", ticks)
        finally:
            self.console.show_cursor(True)
            self.out.flush()
        return ticks

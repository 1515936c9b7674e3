# wallcon_monitor/services/terminal.py

from __future__ import annotations

import asyncio
import sys
import time
from typing import Iterable, Optional

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

# Raw mode turns Ctrl-C into a key press rather than SIGINT.
CANCEL_KEYS = {Keys.Escape, Keys.ControlC, "q"}


class KeyWatcher:
    """Cancellation watcher for continuous mode.

    As a context manager it puts the terminal in raw mode through
    prompt_toolkit and restores it on exit. ``wait`` doubles as the tick
    timer: it returns ``False`` when the timeout elapses and ``True`` as soon
    as Esc, ``q`` or Ctrl-C is pressed. Escape sequences such as arrow keys
    are parsed by prompt_toolkit and do not count as Esc.
    """

    # A lone ESC byte is held by the vt100 parser until this much idle time
    # shows it is not the start of a longer sequence.
    FLUSH_TIMEOUT = 0.05

    def __init__(self, input: Optional[Input] = None):
        self.input = input
        self._owns_input = False
        self._raw = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def interactive(self) -> bool:
        return self._loop is not None

    def __enter__(self) -> "KeyWatcher":
        if self.input is None:
            if not sys.stdin.isatty():
                return self
            self.input = create_input()
            self._owns_input = True

        self._raw = self.input.raw_mode()
        self._raw.__enter__()
        self._loop = asyncio.new_event_loop()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._raw is not None:
                self._raw.__exit__(exc_type, exc, tb)
        finally:
            self._raw = None
            if self._loop is not None:
                self._loop.close()
                self._loop = None
            if self._owns_input and self.input is not None:
                self.input.close()
                self.input = None
                self._owns_input = False

    # ------------------------------------------------------------------
    def wait(self, timeout: float) -> bool:
        if self._loop is None:
            if timeout > 0:
                time.sleep(timeout)
            return False
        return self._loop.run_until_complete(self._wait(timeout))

    async def _wait(self, timeout: float) -> bool:
        loop = asyncio.get_running_loop()
        cancelled = asyncio.Event()
        flush_handle = None

        def _handle(keys: Iterable[KeyPress]) -> None:
            if any(key_press.key in CANCEL_KEYS for key_press in keys):
                cancelled.set()

        def _flush() -> None:
            _handle(self.input.flush_keys())

        def _keys_ready() -> None:
            nonlocal flush_handle
            _handle(self.input.read_keys())
            if flush_handle is not None:
                flush_handle.cancel()
            flush_handle = loop.call_later(self.FLUSH_TIMEOUT, _flush)

        # An ESC left in the parser by the previous tick counts now.
        _flush()
        if cancelled.is_set():
            return True
        if timeout <= 0:
            return False

        with self.input.attach(_keys_ready):
            try:
                await asyncio.wait_for(cancelled.wait(), timeout)
                return True
            except asyncio.TimeoutError:
                return False
            finally:
                if flush_handle is not None:
                    flush_handle.cancel()

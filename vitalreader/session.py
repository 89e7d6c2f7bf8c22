"""A live reading session: keyboard commands, incoming data and statistics."""

from __future__ import annotations

import os
import select
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator, Optional

from .config import SerialConfig
from .connection import PortConnection
from .parser import DataParser
from .stats import SessionStats

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

_BUFFER_SIZE = 1024
_POLL_INTERVAL = 0.01
_RULE = "─" * 64

_QUIT = "q"
_SEND = "s"
_HELP = "h"


def format_timestamp() -> str:
    """Current local time with millisecond precision."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


def _stdin_is_tty() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError, OSError):
        return False


class _Keyboard:
    """Non-blocking single key reads from the terminal, when there is one."""

    def __init__(self, enabled: bool) -> None:
        self._enabled = enabled
        self._active = False
        self._fd: Optional[int] = None
        self._saved = None

    def __enter__(self) -> _Keyboard:
        self._start()
        return self

    def __exit__(self, *args) -> None:
        self._stop()

    def _start(self) -> None:
        if not self._enabled or not _stdin_is_tty():
            return
        if msvcrt is not None:
            self._active = True
        elif termios is not None:
            self._fd = sys.stdin.fileno()
            self._saved = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
            self._active = True

    def _stop(self) -> None:
        if self._saved is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)
            self._saved = None
        self._active = False

    @contextmanager
    def suspended(self) -> Iterator[None]:
        """Restore normal line input for the duration of the block."""
        was_active = self._active
        self._stop()
        try:
            yield
        finally:
            if was_active:
                self._start()

    def poll(self) -> Optional[str]:
        if not self._active:
            return None
        if msvcrt is not None:
            return msvcrt.getwch() if msvcrt.kbhit() else None
        ready, _, _ = select.select([self._fd], [], [], 0)
        if ready:
            return os.read(self._fd, 1).decode(errors="ignore") or None
        return None


class ReaderSession:
    """Reads a serial port until the user quits, reacting to single keys.

    Keys: q quits, s sends a typed command, h shows help. When ``keys`` is
    given it replaces the keyboard (None meaning no key pressed) and the
    session ends once it runs out.
    """

    def __init__(
        self,
        port_name: str,
        config: SerialConfig,
        timeout_ms: int = 100,
        show_stats: bool = False,
        *,
        keys: Optional[Iterable[Optional[str]]] = None,
    ) -> None:
        self._port = PortConnection.open(port_name, config, timeout_ms)
        self.parser = DataParser()
        self.stats = SessionStats()
        self.show_stats = show_stats
        self._keys = None if keys is None else iter(keys)

    def __enter__(self) -> ReaderSession:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def run(self) -> None:
        """Read and display data until quit; print statistics if requested."""
        print(f"[{format_timestamp()}] Connected to {self._port.name() or ''}")
        print(_RULE)
        try:
            with _Keyboard(enabled=self._keys is None) as keyboard:
                self._read_loop(keyboard)
        finally:
            if self.show_stats:
                self._print_session_stats()

    def _next_key(self, keyboard: _Keyboard) -> Optional[str]:
        if self._keys is not None:
            return next(self._keys, _QUIT)
        return keyboard.poll()

    def _read_loop(self, keyboard: _Keyboard) -> None:
        while True:
            key = self._next_key(keyboard)
            if key == _QUIT:
                print(f"\n\n[{format_timestamp()}] Disconnecting...")
                return
            if key == _HELP:
                self._print_help()
            elif key == _SEND:
                with keyboard.suspended():
                    self._prompt_and_send()

            data = self._port.read(_BUFFER_SIZE)
            if data:
                self.stats.add_bytes(len(data))
                self.parser.process_data(data, format_timestamp())

            time.sleep(_POLL_INTERVAL)

    def _prompt_and_send(self) -> None:
        command = input("\nEnter command to send: ").strip()
        if command:
            self.send_command(command)

    def send_command(self, command: str) -> bytes:
        """Send command terminated by CR LF and return the bytes written."""
        data = f"{command}\r\n".encode()
        self._port.write(data)
        self._port.flush()
        print(f"[{format_timestamp()}] SENT: {command}")
        return data

    def close(self) -> None:
        """Close the serial port."""
        self._port.close()

    @staticmethod
    def _print_help() -> None:
        print("\n╔════════════════════════════════════════╗")
        print("║        VITAL READER COMMANDS          ║")
        print("╠════════════════════════════════════════╣")
        print("║ [q] - Quit application                ║")
        print("║ [s] - Send command to device          ║")
        print("║ [h] - Show this help                  ║")
        print("╚════════════════════════════════════════╝\n")

    def _print_session_stats(self) -> None:
        print(f"\n{_RULE}")
        print("Statistics:")
        print(f"  Total bytes received: {self.stats.total_bytes}")
        print(f"  Connection time:      {self.stats.elapsed():.3f}s")
        print(f"  Average rate:         {self.stats.average_rate():.2f} bytes/sec")
        self.parser.print_stats()
"""An open serial port with timeouts turned into empty reads."""

from __future__ import annotations

from typing import Optional

import serial

from .config import SerialConfig


class PortError(OSError):
    """Raised when a serial port cannot be opened, read or written."""


class PortConnection:
    """Wraps an open pyserial port."""

    def __init__(self, port: serial.SerialBase) -> None:
        self._port = port

    @classmethod
    def open(cls, port_name: str, config: SerialConfig, timeout_ms: int) -> PortConnection:
        """Open port_name (a device or pyserial URL) with the given settings."""
        try:
            port = serial.serial_for_url(
                port_name,
                baudrate=config.baud,
                bytesize=config.data_bits.value,
                parity=config.parity.value,
                stopbits=config.stop_bits.value,
                timeout=timeout_ms / 1000.0,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
            )
        except (serial.SerialException, ValueError, OSError) as exc:
            raise PortError(f"Failed to open port {port_name}: {exc}") from exc
        return cls(port)

    def read(self, size: int = 1024) -> bytes:
        """Read up to size bytes; an empty result means the read timed out."""
        try:
            return self._port.read(size)
        except (serial.SerialException, OSError) as exc:
            raise PortError(f"Read error: {exc}") from exc

    def write(self, data: bytes) -> int:
        """Write data and return the number of bytes written."""
        try:
            written = self._port.write(data)
        except (serial.SerialException, OSError) as exc:
            raise PortError(f"Failed to write to port: {exc}") from exc
        return len(data) if written is None else written

    def flush(self) -> None:
        """Wait until all written data has been sent."""
        try:
            self._port.flush()
        except (serial.SerialException, OSError) as exc:
            raise PortError(f"Failed to flush port: {exc}") from exc

    def close(self) -> None:
        """Close the port."""
        self._port.close()

    def is_connected(self) -> bool:
        """True while the port is open."""
        return bool(self._port.is_open)

    def name(self) -> Optional[str]:
        """The name the port was opened with."""
        return self._port.port

    def __enter__(self) -> PortConnection:
        return self

    def __exit__(self, *args) -> None:
        self.close()
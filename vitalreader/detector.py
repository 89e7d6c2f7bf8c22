"""Discovery and probing of serial ports."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

import serial
from serial.tools import list_ports as _list_ports

from .connection import PortError


def _port_kind(port) -> str:
    """Classify a port as USB, PCI, Bluetooth or Unknown."""
    if getattr(port, "vid", None) is not None:
        return "USB"
    hwid = (getattr(port, "hwid", "") or "").upper()
    device = (getattr(port, "device", "") or "").lower()
    if "BTHENUM" in hwid or "bluetooth" in device or "rfcomm" in device:
        return "Bluetooth"
    if "PCI" in hwid:
        return "PCI"
    return "Unknown"


def available_ports() -> list:
    """Return the serial ports found on this system, or an empty list."""
    try:
        return list(_list_ports.comports())
    except OSError:
        return []


def common_port_hints(platform: Optional[str] = None) -> list[str]:
    """Lines naming the usual port names for the given platform."""
    platform = sys.platform if platform is None else platform
    if platform.startswith("win"):
        return ["    Windows: COM1, COM3, COM4"]
    if platform.startswith("linux"):
        return ["    Linux: /dev/ttyUSB0, /dev/ttyUSB1, /dev/ttyACM0"]
    if platform == "darwin":
        return ["    macOS: /dev/cu.usbserial, /dev/cu.usbmodem"]
    return []


def describe_ports(ports: Sequence) -> list[str]:
    """Lines describing each port, or hints when there are none."""
    if not ports:
        return [
            "  No serial ports detected.",
            "  Common ports to check:",
            *common_port_hints(),
        ]
    lines = []
    for number, port in enumerate(ports, start=1):
        lines.append(f"  [{number}] {port.device}")
        kind = _port_kind(port)
        lines.append(f"      Type: {kind}")
        if kind == "USB":
            if getattr(port, "manufacturer", None):
                lines.append(f"      Manufacturer: {port.manufacturer}")
            if getattr(port, "product", None):
                lines.append(f"      Product: {port.product}")
            lines.append(f"      VID:PID: {port.vid:04x}:{port.pid or 0:04x}")
        lines.append("")
    return lines


def list_ports() -> None:
    """Print a description of the available ports."""
    for line in describe_ports(available_ports()):
        print(line)


def suggest_port(ports: Optional[Sequence] = None) -> Optional[str]:
    """Prefer the first USB port, else the first port; None if there are none."""
    ports = available_ports() if ports is None else ports
    for port in ports:
        if _port_kind(port) == "USB":
            return port.device
    return ports[0].device if ports else None


def test_port(port_name: str, baud: int) -> str:
    """Try to open a port; return a success message or raise PortError."""
    try:
        with serial.serial_for_url(port_name, baudrate=baud, timeout=0.1):
            pass
    except (serial.SerialException, ValueError, OSError) as exc:
        raise PortError(f"✗ Cannot open port {port_name}: {exc}") from exc
    return f"✓ Port {port_name} is accessible"


test_port.__test__ = False
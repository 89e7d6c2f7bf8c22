"""Interactive choice of a serial port."""

from __future__ import annotations

import re
from typing import Optional, Sequence

from . import ui
from .detector import _port_kind, available_ports, describe_ports

_NUMBER = re.compile(r"\+?[0-9]+")


def _parse_choice(text: str) -> int:
    if not _NUMBER.fullmatch(text):
        return 0
    value = int(text)
    return value if value < 1 << 64 else 0


def _manual_entry() -> str:
    return ui.prompt("Enter port name: ")


def select_interactive(ports: Optional[Sequence] = None) -> str:
    """Show a numbered menu of ports and return the chosen port name."""
    ports = available_ports() if ports is None else list(ports)

    if not ports:
        print("\n⚠ No serial ports detected!")
        for line in describe_ports(ports):
            print(line)
        return _manual_entry()

    print("\nAvailable ports:")
    for number, port in enumerate(ports, start=1):
        print(f"  [{number}] {port.device}")
        kind = _port_kind(port)
        if kind == "USB" and getattr(port, "product", None):
            print(f"      → {port.product}")
        elif kind == "Bluetooth":
            print("      → Bluetooth Serial Port")
    print("  [0] Enter custom port name")

    choice = _parse_choice(ui.prompt(f"\nSelect port [1-{len(ports)}]: "))
    if choice == 0:
        return _manual_entry()
    if choice <= len(ports):
        return ports[choice - 1].device
    print("Invalid selection, using first port")
    return ports[0].device


def get_port(cli_port: Optional[str] = None) -> str:
    """Use the port given on the command line, or ask for one."""
    if cli_port is not None:
        return cli_port
    return select_interactive()
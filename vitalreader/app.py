"""Command line entry point: read a serial port or start the interactive menu."""

from __future__ import annotations

import argparse
import re
import sys
from enum import Enum
from typing import Callable, Optional, Sequence

from .config import ConfigError, SerialConfig
from .connection import PortError
from .detector import available_ports, describe_ports, suggest_port
from .menu import run_cli_mode
from .session import ReaderSession

_UNSIGNED = re.compile(r"\+?[0-9]+")


def _unsigned(bits: int) -> Callable[[str], int]:
    def convert(text: str) -> int:
        if not _UNSIGNED.fullmatch(text) or int(text) >= 1 << bits:
            raise argparse.ArgumentTypeError(f"invalid value: {text!r}")
        return int(text)

    convert.__name__ = f"u{bits}"
    return convert


def _variant(member: Enum) -> str:
    return member.name.capitalize()


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="vital-reader",
        description="Serial port data reader for medical devices (GE/Dräger scopes)",
    )
    parser.add_argument("-p", "--port", help="Serial port path (e.g., COM3, /dev/ttyUSB0)")
    parser.add_argument("-b", "--baud", type=_unsigned(32), default=115200, help="Baud rate")
    parser.add_argument(
        "--data-bits", type=_unsigned(8), default=8, help="Data bits (5, 6, 7, 8)"
    )
    parser.add_argument("--parity", default="none", help="Parity (none, odd, even)")
    parser.add_argument("--stop-bits", type=_unsigned(8), default=1, help="Stop bits (1, 2)")
    parser.add_argument(
        "-c",
        "--config",
        help="Configuration string baud,parity,data_bits,stop_bits (e.g. 57600,0,8,1); "
        "overrides individual settings",
    )
    parser.add_argument("--cli", action="store_true", help="Enable interactive CLI mode")
    parser.add_argument(
        "--stats", action="store_true", help="Show statistics (bytes received, connection time)"
    )
    parser.add_argument(
        "--timeout", type=_unsigned(64), default=100, help="Read timeout in milliseconds"
    )
    return parser


def print_configuration(port_name: str, config: SerialConfig) -> None:
    """Print the banner and the settings about to be used."""
    print("\n╔════════════════════════════════════════╗")
    print("║      VITAL SERIAL READER v0.1.0       ║")
    print("╚════════════════════════════════════════╝")
    print("\nConfiguration:")
    print(f"  Port:         {port_name}")
    print(f"  Baud rate:    {config.baud}")
    print(f"  Data bits:    {_variant(config.data_bits)}")
    print(f"  Parity:       {_variant(config.parity)}")
    print(f"  Stop bits:    {_variant(config.stop_bits)}")
    print("\nPress [h] for help, [q] to quit\n")


def run_reader_mode(args: argparse.Namespace) -> None:
    """Open the chosen port and read it until the user quits."""
    port_name = args.port
    if port_name is None:
        print("No port specified. Available ports:")
        ports = available_ports()
        for line in describe_ports(ports):
            print(line)
        suggested = suggest_port(ports)
        if suggested is None:
            raise PortError("No serial ports found. Please specify --port")
        print(f"\nUsing suggested port: {suggested}")
        port_name = suggested

    if args.config is not None:
        print(f"Using config string: {args.config}")
        config = SerialConfig.from_string(args.config)
    else:
        config = SerialConfig.from_values(args.baud, args.data_bits, args.parity, args.stop_bits)

    print_configuration(port_name, config)

    with ReaderSession(port_name, config, args.timeout, args.stats) as session:
        session.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the program; return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        if args.cli:
            run_cli_mode()
        else:
            run_reader_mode(args)
    except (ConfigError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
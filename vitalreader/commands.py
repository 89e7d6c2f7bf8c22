"""Commands behind the interactive menu: probing, reading, sending and command building."""

from __future__ import annotations

import os
import re
import sys
import time
from datetime import datetime
from enum import Enum
from typing import Optional

import serial

from . import detector, ui
from .config import ConfigError, DataBits, Parity, SerialConfig, StopBits
from .connection import PortConnection, PortError
from .generators import (
    send_continuous,
    send_hex,
    send_text,
    send_vital_signs,
    send_waveform,
)
from .hl7 import send_hl7
from .parser import DataParser
from .selector import select_interactive

EXE_NAME = "vital-reader"

_DOUBLE_RULE = "════════════════════════════════════════════════════"
_THIN_RULE = "────────────────────────────────────────────────────"

_DEFAULT_BAUD = 115200
_READ_LIMIT = 30.0
_NO_DATA_LIMIT = 5.0
_POLL_INTERVAL = 0.01
_MONITOR_INTERVAL = 0.1

_INTEGER = re.compile(r"[+-]?[0-9]+")

_U8 = (0, (1 << 8) - 1)
_U32 = (0, (1 << 32) - 1)
_U64 = (0, (1 << 64) - 1)
_I32 = (-(1 << 31), (1 << 31) - 1)

_DATA_BITS_BY_COUNT = {5: DataBits.FIVE, 6: DataBits.SIX, 7: DataBits.SEVEN}
_PARITY_BY_CODE = {1: Parity.ODD, 2: Parity.EVEN}
_PARITY_BY_NAME = {"odd": Parity.ODD, "o": Parity.ODD, "even": Parity.EVEN, "e": Parity.EVEN}
_PARITY_CODE_BY_NAME = {"odd": "1", "o": "1", "even": "2", "e": "2"}


def _is_windows() -> bool:
    return sys.platform.startswith("win")


def _default_exe() -> str:
    return f"{EXE_NAME}.exe" if _is_windows() else EXE_NAME


def _int_or(text: str, default: int, low: int, high: int) -> int:
    """Parse an integer within [low, high], falling back to default."""
    if not _INTEGER.fullmatch(text):
        return default
    if low >= 0 and text.startswith("-"):
        return default
    value = int(text)
    return value if low <= value <= high else default


def _variant(member: Enum) -> str:
    return member.name.capitalize()


def _data_bits_or_eight(count: int) -> DataBits:
    return _DATA_BITS_BY_COUNT.get(count, DataBits.EIGHT)


def _stop_bits_or_one(count: int) -> StopBits:
    return StopBits.TWO if count == 2 else StopBits.ONE


def _prompt_baud(message: str) -> int:
    return _int_or(ui.prompt_with_default(message, str(_DEFAULT_BAUD)), _DEFAULT_BAUD, *_U32)


def parse_lenient_config(text: str) -> SerialConfig:
    """Parse "baud,parity,data_bits,stop_bits", using defaults for unreadable fields.

    Only a wrong number of fields is an error.
    """
    parts = text.split(",")
    if len(parts) != 4:
        raise ConfigError("Invalid config format")
    baud_text, parity_text, data_bits_text, stop_bits_text = parts
    return SerialConfig(
        baud=_int_or(baud_text, _DEFAULT_BAUD, *_U32),
        data_bits=_data_bits_or_eight(_int_or(data_bits_text, 8, *_I32)),
        parity=_PARITY_BY_CODE.get(_int_or(parity_text, 0, *_U8), Parity.NONE),
        stop_bits=_stop_bits_or_one(_int_or(stop_bits_text, 1, *_I32)),
    )


def parity_code(parity: str) -> str:
    """Numeric code of a parity name as used in config strings: 0, 1 or 2."""
    return _PARITY_CODE_BY_NAME.get(parity.lower(), "0")


def build_command(
    exe_name: str, port_name: str, config_str: Optional[str] = None, show_stats: bool = False
) -> str:
    """Command line that starts the listener with the given settings."""
    command = f"{exe_name} --port {port_name}"
    if config_str is not None:
        command += f' --config "{config_str}"'
    if show_stats:
        command += " --stats"
    return command


def is_in_path(exe_name: Optional[str] = None, path_var: Optional[str] = None) -> bool:
    """True if exe_name exists in one of the directories of path_var (default PATH)."""
    exe_name = exe_name or _default_exe()
    if path_var is None:
        path_var = os.environ.get("PATH")
        if path_var is None:
            return False
    return any(
        os.path.exists(os.path.join(directory, exe_name))
        for directory in path_var.split(os.pathsep)
    )


def list_ports() -> None:
    """Show the serial ports on this system."""
    ui.print_section_header("Available Serial Ports")
    detector.list_ports()
    ui.wait_for_enter()


def test_port() -> None:
    """Ask for a port and a baud rate and report whether the port opens."""
    ui.print_section_header("Test Port Connectivity")
    port_name = select_interactive()
    baud = _prompt_baud("Enter baud rate [115200]: ")

    print(f"\nTesting {port_name}...")
    try:
        print(detector.test_port(port_name, baud))
    except PortError as exc:
        print(exc)

    ui.wait_for_enter()


test_port.__test__ = False


def monitor_ports() -> None:
    """Poll every port for a while and report which ones deliver data."""
    ui.print_section_header("Monitor Port for Data Activity")

    ports = detector.available_ports()
    if not ports:
        print("No serial ports detected!")
        ui.wait_for_enter()
        return

    print("\nAvailable ports:")
    for number, port in enumerate(ports, start=1):
        print(f"  [{number}] {port.device}")

    duration = _int_or(
        ui.prompt_with_default("\nMonitoring duration in seconds [10]: ", "10"), 10, *_U64
    )
    baud = _prompt_baud("Baud rate [115200]: ")

    print(f"\nMonitoring all ports for {duration} seconds...")
    print(_THIN_RULE)

    activity_detected = False
    start = time.monotonic()
    while int(time.monotonic() - start) < duration:
        for port in ports:
            try:
                with serial.serial_for_url(port.device, baudrate=baud, timeout=0.1) as handle:
                    data = handle.read(256)
            except (serial.SerialException, ValueError, OSError):
                continue
            if data:
                activity_detected = True
                print(f"✓ Data detected on {port.device}: {len(data)} bytes")
        time.sleep(_MONITOR_INTERVAL)

    print(_THIN_RULE)
    if activity_detected:
        print("Monitoring complete.")
    else:
        print("No data activity detected on any port.")

    ui.wait_for_enter()


def _config_from_string() -> SerialConfig:
    print("\nExamples:")
    print("  57600,0,8,1  (57600 baud, no parity, 8 data bits, 1 stop bit)")
    print("  9600,2,7,1   (9600 baud, even parity, 7 data bits, 1 stop bit)")
    print("  115200,1,8,2 (115200 baud, odd parity, 8 data bits, 2 stop bits)")
    text = ui.prompt("\nConfig string: ")
    try:
        return parse_lenient_config(text)
    except ConfigError:
        print("Error: Invalid config format!")
        raise


def _config_individually() -> SerialConfig:
    baud = _prompt_baud("\nBaud rate [115200]: ")
    data_bits = _data_bits_or_eight(
        _int_or(ui.prompt_with_default("Data bits (5-8) [8]: ", "8"), 8, *_I32)
    )
    parity = _PARITY_BY_NAME.get(
        ui.prompt_with_default("Parity (none/odd/even) [none]: ", "none").lower(), Parity.NONE
    )
    stop_bits = _stop_bits_or_one(
        _int_or(ui.prompt_with_default("Stop bits (1/2) [1]: ", "1"), 1, *_I32)
    )
    return SerialConfig(baud=baud, data_bits=data_bits, parity=parity, stop_bits=stop_bits)


def connect_and_read() -> None:
    """Read from a chosen port for up to 30 seconds and show what arrives."""
    ui.print_section_header("Connect and Read from Port")
    port_name = select_interactive()

    print("\nConfiguration options:")
    print("  [1] Use config string (e.g., 57600,0,8,1)")
    print("  [2] Configure individually")
    choice = ui.prompt("Select [1/2]: ")
    config = _config_from_string() if choice == "1" else _config_individually()

    print(f"\n{_DOUBLE_RULE}")
    print("Configuration:")
    print(f"  Port:      {port_name}")
    print(f"  Baud:      {config.baud}")
    print(f"  Data bits: {_variant(config.data_bits)}")
    print(f"  Parity:    {_variant(config.parity)}")
    print(f"  Stop bits: {_variant(config.stop_bits)}")
    print(_DOUBLE_RULE)
    print("\nConnecting... (Press Ctrl+C to stop)")

    parser = DataParser()
    total_bytes = 0
    with PortConnection.open(port_name, config, 100) as port:
        start = time.monotonic()
        last_data = start
        print("Connected! Reading data...")
        print(f"{_THIN_RULE}\n")

        while True:
            try:
                data = port.read(1024)
            except PortError as exc:
                print(f"\nRead error: {exc}")
                break
            if data:
                total_bytes += len(data)
                last_data = time.monotonic()
                parser.process_data(data, datetime.now().strftime("%H:%M:%S.%f")[:-3])
            elif time.monotonic() - last_data > _NO_DATA_LIMIT and total_bytes == 0:
                print("\nNo data received after 5 seconds.")
                print("Check if:")
                print("  - Device is powered on")
                print("  - Correct port is selected")
                print("  - Baud rate matches device settings")
                break

            if time.monotonic() - start > _READ_LIMIT:
                print("\n\nReading time limit reached (30 seconds).")
                break

            time.sleep(_POLL_INTERVAL)

        elapsed = time.monotonic() - start

    print(f"\n{_DOUBLE_RULE}")
    print("Session Statistics:")
    print(f"  Total bytes:      {total_bytes}")
    print(f"  Duration:         {elapsed:.3f}s")
    if total_bytes > 0:
        print(f"  Average rate:     {total_bytes / elapsed:.2f} bytes/sec")
        parser.print_stats()
    print(_DOUBLE_RULE)

    ui.wait_for_enter()


def send_fake_data() -> None:
    """Send one of the simulated data sets to a chosen port."""
    ui.print_section_header("Send Fake Data to Port (Testing)")
    port_name = select_interactive()
    baud = _prompt_baud("Baud rate [115200]: ")

    print("\nFake Data Presets:")
    print("  [1] Vital Signs (ASCII) - Simulates patient monitor")
    print("  [2] Waveform Data (Binary) - Simulates ECG/waveform")
    print("  [3] HL7 Complete (GE Monitor + Dräger) - Full medical data")
    print("  [4] Custom text message")
    print("  [5] Custom hex data")
    print("  [6] Continuous random data stream")
    preset = ui.prompt("\nSelect preset [1-6]: ")

    with PortConnection.open(port_name, SerialConfig(baud=baud), 1000) as port:
        print(f"\n{_DOUBLE_RULE}")
        print("Sending fake data...")
        print(f"{_DOUBLE_RULE}\n")

        if preset == "1":
            send_vital_signs(port, 10)
        elif preset == "2":
            send_waveform(port)
        elif preset == "3":
            send_hl7(port)
        elif preset == "4":
            send_text(port, ui.prompt("\nEnter text to send (will add \\n): "))
        elif preset == "5":
            hex_input = ui.prompt("\nEnter hex bytes (space separated, e.g., 02 1A FF 3C): ")
            try:
                send_hex(port, hex_input)
            except ValueError as exc:
                print(f"Error parsing hex: {exc}")
        elif preset == "6":
            send_continuous(port)
        else:
            print("Invalid preset selected.")

    print(f"\n{_DOUBLE_RULE}")
    print("Data sending complete.")
    ui.wait_for_enter()


def generate_command() -> None:
    """Ask for settings and print the command line that starts the listener."""
    ui.print_section_header("Generate Command for Listener")

    in_path = is_in_path()
    windows = _is_windows()
    if in_path:
        print(f"\n✓ '{EXE_NAME}' found in PATH")
    else:
        print(f"\n⚠ '{EXE_NAME}' is not in your system PATH")
        print("You'll need to use the full path to the executable.")
        print("\nCommon locations:")
        if windows:
            print("  - .\\target\\release\\vital-reader.exe")
            print("  - C:\\path\\to\\vital-reader.exe")
        else:
            print("  - ./target/release/vital-reader")
            print("  - /usr/local/bin/vital-reader")

    print(f"\n{_THIN_RULE}")

    port_name = select_interactive()

    print("\nConfiguration method:")
    print("  [1] Use config string (e.g., 57600,0,8,1)")
    print("  [2] Configure individually")
    choice = ui.prompt("Select [1/2]: ")

    if choice == "1":
        print("\nExamples:")
        print("  57600,0,8,1  (57600 baud, no parity, 8 data bits, 1 stop bit)")
        print("  9600,2,7,1   (9600 baud, even parity, 7 data bits, 1 stop bit)")
        config_str = ui.prompt("\nConfig string: ")
        stats = ui.prompt("Show statistics? (y/n) [n]: ")
    else:
        baud = ui.prompt_with_default("\nBaud rate [115200]: ", "115200")
        data_bits = ui.prompt_with_default("Data bits (5-8) [8]: ", "8")
        parity = ui.prompt_with_default("Parity (none/odd/even) [none]: ", "none")
        stop_bits = ui.prompt_with_default("Stop bits (1/2) [1]: ", "1")
        stats = ui.prompt("Show statistics? (y/n) [n]: ")
        config_str = f"{baud},{parity_code(parity)},{data_bits},{stop_bits}"
    show_stats = stats.lower() == "y"

    if in_path:
        exe_name = EXE_NAME
    elif windows:
        exe_name = ".\\target\\release\\vital-reader.exe"
    else:
        exe_name = "./target/release/vital-reader"

    command = build_command(exe_name, port_name, config_str, show_stats)

    print(f"\n{_DOUBLE_RULE}")
    print("Generated Command:")
    print(_DOUBLE_RULE)
    print(f"\n{command}\n")
    print(_DOUBLE_RULE)
    print("\n📋 Copy the command above and run it in your terminal.")

    if windows:
        print("\nWindows PowerShell example:")
        print(f"  {command}")
        print("\nWindows CMD example:")
        print(f"  {command}")
    else:
        print("\nLinux/macOS example:")
        print(f"  {command}")

    if not in_path:
        print(f"\n💡 Tip: Add {EXE_NAME} to your PATH to use it from anywhere:")
        if windows:
            print("  1. Copy vital-reader.exe to C:\\Users\\YourName\\.local\\bin\\")
            print("  2. Add that directory to your PATH environment variable")
        else:
            print("  sudo cp ./target/release/vital-reader /usr/local/bin/")

    ui.wait_for_enter()
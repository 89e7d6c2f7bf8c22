"""Synthetic traffic for exercising a listener: text, hex, noise, vitals, waveform."""

from __future__ import annotations

import math
import re
import time
from datetime import datetime
from typing import BinaryIO, Iterator

_HEX_BYTE = re.compile(r"\+?[0-9A-Fa-f]+")


def _hex_list(data: bytes) -> str:
    return "[" + ", ".join(f"{b:02X}" for b in data) + "]"


def _write(port: BinaryIO, data: bytes) -> None:
    port.write(data)
    port.flush()


def parse_hex(text: str) -> bytes:
    """Parse whitespace separated hex bytes such as "02 1A FF 3C"."""
    values = []
    for token in text.split():
        if not _HEX_BYTE.fullmatch(token):
            raise ValueError(f"invalid hex byte: {token!r}")
        value = int(token, 16)
        if value > 0xFF:
            raise ValueError(f"hex value out of range for a byte: {token!r}")
        values.append(value)
    return bytes(values)


def send_text(port: BinaryIO, text: str) -> bytes:
    """Send the trimmed text followed by a newline."""
    data = f"{text.strip()}\n".encode()
    _write(port, data)
    print(f"Sent: {data.decode().strip()}")
    return data


def send_hex(port: BinaryIO, hex_input: str) -> bytes:
    """Parse hex input and send the bytes; raises ValueError on bad input."""
    data = parse_hex(hex_input)
    _write(port, data)
    print(f"Sent {len(data)} bytes: {_hex_list(data)}")
    return data


def random_bytes(count: int) -> Iterator[int]:
    """Yield a fixed pseudo-random byte sequence from a linear congruential generator."""
    state = 0
    for _ in range(count):
        state = (state * 1664525 + 1013904223) & 0xFFFFFFFF
        yield state % 256


def send_continuous(port: BinaryIO, count: int = 1000, delay: float = 0.01) -> int:
    """Send count pseudo-random bytes one at a time."""
    print("Sending continuous random data...")
    print("Press Ctrl+C to stop\n")
    for index, value in enumerate(random_bytes(count)):
        port.write(bytes([value]))
        if index % 100 == 0:
            port.flush()
            print(f"Sent {index} bytes...")
        if delay:
            time.sleep(delay)
    print(f"\nSent {count} bytes total.")
    return count


def vital_signs_record(index: int, time_str: str) -> str:
    """Build one newline-terminated patient monitor record."""
    hr = 60 + index % 20
    spo2 = 95 + index % 5
    bp_sys = 110 + index % 20
    bp_dia = 70 + index % 10
    temp = 36.5 + index * 0.1
    return (
        f"PATIENT_ID=12345|HR={hr}|SPO2={spo2}|BP={bp_sys}/{bp_dia}"
        f"|TEMP={temp:.1f}|TIME={time_str}\n"
    )


def send_vital_signs(port: BinaryIO, num_samples: int = 10, delay: float = 1.0) -> int:
    """Send num_samples vital sign records, one per delay interval."""
    print(f"Sending vital signs data ({num_samples} samples)...\n")
    for index in range(1, num_samples + 1):
        record = vital_signs_record(index, datetime.now().strftime("%H:%M:%S"))
        _write(port, record.encode())
        print(f"Sent: {record.strip()}")
        if delay:
            time.sleep(delay)
    return num_samples


def waveform_packet(index: int) -> bytes:
    """Build the packet [STX, SEQ, VALUE, CHECKSUM, ETX] for one sine sample."""
    raw = math.sin(index * 0.1) * 127.0 + 128.0
    value = min(max(int(raw), 0), 255)
    seq = index % 256
    checksum = (seq + value) % 256
    return bytes([0x02, seq, value, checksum, 0x03])


def send_waveform(port: BinaryIO, delay: float = 0.05) -> int:
    """Send 100 waveform packets simulating an ECG trace."""
    print("Sending binary waveform data (simulated ECG)...\n")
    packets = 100
    for index in range(packets):
        packet = waveform_packet(index)
        _write(port, packet)
        if index % 10 == 0:
            print(f"Sent packet #{index}: {_hex_list(packet)}")
        if delay:
            time.sleep(delay)
    return packets
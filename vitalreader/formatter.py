"""Rendering of received lines as ASCII, hex or mixed text."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional


class DataType(Enum):
    """Kind of traffic seen on the line."""

    ASCII = "Ascii"
    BINARY = "Binary"
    MIXED = "Mixed"


_WHITESPACE = "".join(
    map(
        chr,
        [
            *range(0x09, 0x0E),
            0x20,
            0x85,
            0xA0,
            0x1680,
            *range(0x2000, 0x200B),
            0x2028,
            0x2029,
            0x202F,
            0x205F,
            0x3000,
        ],
    )
)


def _hex_list(data: Iterable[int]) -> str:
    return "[" + ", ".join(f"{b:02X}" for b in data) + "]"


def is_printable_ascii(byte: int) -> bool:
    """True for tab, LF, CR and the printable range 32..126."""
    return byte in (9, 10, 13) or 32 <= byte <= 126


def format_ascii(data: bytes, timestamp: str) -> Optional[str]:
    """Format a line as text; None if it is not UTF-8 or is blank."""
    try:
        text = bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return None
    text = text.rstrip("\r").rstrip("\n").rstrip(_WHITESPACE)
    if not text:
        return None
    return f"[{timestamp}] ASCII: {text}"


def format_binary(data: bytes, timestamp: str) -> str:
    """Format a line as space separated hex bytes."""
    hex_string = " ".join(f"{b:02X}" for b in data)
    return f"[{timestamp}] BINARY: [{hex_string}] ({len(data)} bytes)"


def format_mixed(data: bytes, timestamp: str) -> str:
    """Format printable bytes as text and runs of other bytes as hex lists."""
    pieces: list[str] = []
    pending: list[int] = []
    for byte in data:
        if byte in (0x0D, 0x0A):
            continue
        if is_printable_ascii(byte):
            if pending:
                pieces.append(f"[{_hex_list(pending)}]")
                pending.clear()
            pieces.append(chr(byte))
        else:
            pending.append(byte)
    if pending:
        pieces.append(f"[{_hex_list(pending)}]")
    output = "".join(pieces).rstrip(_WHITESPACE)
    return f"[{timestamp}] MIXED: {output}"


def format_data(data: bytes, data_type: DataType, timestamp: str) -> Optional[str]:
    """Format a line according to the detected data type."""
    if data_type is DataType.ASCII:
        return format_ascii(data, timestamp)
    if data_type is DataType.BINARY:
        return format_binary(data, timestamp)
    return format_mixed(data, timestamp)
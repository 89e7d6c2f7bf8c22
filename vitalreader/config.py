"""Serial line settings: baud rate, framing and parity."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class ConfigError(ValueError):
    """Raised when a serial configuration cannot be understood."""


class Parity(Enum):
    """Parity checking mode; values match pyserial's parity constants."""

    NONE = "N"
    ODD = "O"
    EVEN = "E"


class DataBits(Enum):
    """Number of data bits per character."""

    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8


class StopBits(Enum):
    """Number of stop bits per character."""

    ONE = 1
    TWO = 2


_UNSIGNED = re.compile(r"\+?[0-9]+")

_PARITY_BY_CODE = {0: Parity.NONE, 1: Parity.ODD, 2: Parity.EVEN}

_PARITY_BY_NAME = {
    "none": Parity.NONE,
    "n": Parity.NONE,
    "odd": Parity.ODD,
    "o": Parity.ODD,
    "even": Parity.EVEN,
    "e": Parity.EVEN,
}

_FORMAT_HELP = (
    "Invalid config format. Expected: baud,parity,data_bits,stop_bits "
    "(e.g., 57600,0,8,1)"
)


def _parse_unsigned(text: str, bits: int, message: str) -> int:
    """Parse an unsigned integer of the given width, strictly (no spaces)."""
    if not _UNSIGNED.fullmatch(text):
        raise ConfigError(message)
    value = int(text)
    if value >= 1 << bits:
        raise ConfigError(message)
    return value


def _data_bits(bits: int) -> DataBits:
    try:
        return DataBits(bits)
    except ValueError:
        raise ConfigError(f"Invalid data bits: {bits}") from None


def _stop_bits(bits: int) -> StopBits:
    try:
        return StopBits(bits)
    except ValueError:
        raise ConfigError(f"Invalid stop bits: {bits}") from None


def _parity(name: str) -> Parity:
    try:
        return _PARITY_BY_NAME[name.lower()]
    except KeyError:
        raise ConfigError(f"Invalid parity: {name}") from None


@dataclass(frozen=True)
class SerialConfig:
    """Serial port configuration."""

    baud: int = 115200
    data_bits: DataBits = DataBits.EIGHT
    parity: Parity = Parity.NONE
    stop_bits: StopBits = StopBits.ONE

    @classmethod
    def from_values(cls, baud: int, data_bits: int, parity: str, stop_bits: int) -> SerialConfig:
        """Build a configuration from plain numbers and a parity name."""
        if not 0 <= baud < 1 << 32:
            raise ConfigError(f"Invalid baud rate: {baud}")
        return cls(
            baud=baud,
            data_bits=_data_bits(data_bits),
            parity=_parity(parity),
            stop_bits=_stop_bits(stop_bits),
        )

    @classmethod
    def from_string(cls, config: str) -> SerialConfig:
        """Parse "baud,parity,data_bits,stop_bits", parity 0=none, 1=odd, 2=even."""
        parts = config.split(",")
        if len(parts) != 4:
            raise ConfigError(_FORMAT_HELP)
        baud_text, parity_text, data_bits_text, stop_bits_text = parts

        baud = _parse_unsigned(baud_text, 32, "Invalid baud rate")

        parity_code = _parse_unsigned(
            parity_text, 8, "Invalid parity (0=none, 1=odd, 2=even)"
        )
        try:
            parity = _PARITY_BY_CODE[parity_code]
        except KeyError:
            raise ConfigError("Parity must be 0 (none), 1 (odd), or 2 (even)") from None

        data_bits = _data_bits(_parse_unsigned(data_bits_text, 8, "Invalid data bits"))
        stop_bits = _stop_bits(_parse_unsigned(stop_bits_text, 8, "Invalid stop bits"))

        return cls(baud=baud, data_bits=data_bits, parity=parity, stop_bits=stop_bits)
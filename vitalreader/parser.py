"""Splitting of a serial byte stream into lines and classifying its content."""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Optional

from .formatter import DataType, format_data, is_printable_ascii

MAX_LINE_LENGTH = 65536
DETECTION_MINIMUM = 100
ASCII_THRESHOLD = 0.95
BINARY_THRESHOLD = 0.3


def _percent(part: int, total: int) -> str:
    if total == 0:
        return "NaN"
    return f"{part / total * 100.0:.1f}"


class DataParser:
    """Collects bytes into lines, formats them and keeps byte statistics."""

    def __init__(self, output: Callable[[str], object] = print) -> None:
        self._output = output
        self.ascii_count = 0
        self.binary_count = 0
        self.total_count = 0
        self.detected_type = DataType.MIXED
        self.char_frequency: Counter[int] = Counter()
        self._line = bytearray()
        self._last_was_cr = False

    def _detect_data_type(self) -> None:
        if self.total_count < DETECTION_MINIMUM:
            return
        ratio = self.ascii_count / self.total_count
        if ratio > ASCII_THRESHOLD:
            self.detected_type = DataType.ASCII
        elif ratio < BINARY_THRESHOLD:
            self.detected_type = DataType.BINARY
        else:
            self.detected_type = DataType.MIXED

    def _flush_line(self, timestamp: str) -> Optional[str]:
        if not self._line:
            return None
        formatted = format_data(bytes(self._line), self.detected_type, timestamp)
        self._line.clear()
        if formatted is not None:
            self._output(formatted)
        return formatted

    def process_data(self, data: Iterable[int], timestamp: str) -> list[str]:
        """Feed received bytes; emit and return the lines they complete."""
        emitted: list[str] = []

        def flush() -> None:
            line = self._flush_line(timestamp)
            if line is not None:
                emitted.append(line)

        for byte in data:
            self.total_count += 1
            self.char_frequency[byte] += 1
            if is_printable_ascii(byte):
                self.ascii_count += 1
            else:
                self.binary_count += 1

            if byte == 0x0D:
                self._line.append(byte)
                self._last_was_cr = True
                flush()
            elif byte == 0x0A:
                if not self._last_was_cr:
                    self._line.append(byte)
                    flush()
                self._last_was_cr = False
            else:
                self._last_was_cr = False
                self._line.append(byte)
                if len(self._line) > MAX_LINE_LENGTH:
                    flush()

        self._detect_data_type()
        return emitted

    def stats_report(self) -> str:
        """Return the byte statistics as printable text."""
        total = self.total_count
        lines = [
            "Data Analysis:",
            f"  Total bytes:      {total}",
            f"  ASCII bytes:      {self.ascii_count} ({_percent(self.ascii_count, total)}%)",
            f"  Binary bytes:     {self.binary_count} ({_percent(self.binary_count, total)}%)",
            f"  Detected type:    {self.detected_type.value}",
            "",
            "Most common bytes:",
        ]
        for byte, count in self.char_frequency.most_common(5):
            char_repr = f"'{chr(byte)}' " if is_printable_ascii(byte) else ""
            lines.append(
                f"    0x{byte:02X} {char_repr}: {count} times ({_percent(count, total)}%)"
            )
        return "\n".join(lines)

    def print_stats(self) -> str:
        """Print the byte statistics and return the text that was printed."""
        text = "\n" + self.stats_report()
        print(text)
        return text
"""Serial port reader for medical devices: line formatting, statistics, simulated data and an interactive menu."""

__version__ = "1.0.0"
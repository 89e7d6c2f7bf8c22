[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vitalreader"
version = "1.0.0"
description = "Serial port data reader for medical devices (GE/Dräger scopes)"
requires-python = ">=3.10"
keywords = ["serial", "rs232", "hl7", "patient-monitor", "ventilator", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Healthcare Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]
dependencies = [
    "pyserial>=3.5",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
vital-reader = "vitalreader.app:main"

[tool.hatch.build.targets.wheel]
packages = ["vitalreader"]

[tool.pytest.ini_options]
addopts = "-ra"

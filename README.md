# vitalreader

vitalreader is a console tool that reads data from serial ports. It is meant
for patient monitors, ventilators and similar devices that send data over
RS-232 or USB-serial adapters. It splits incoming bytes into lines at CR, LF
or CR LF and prints each line as ASCII, hex (binary) or mixed output. After
100 bytes have arrived, the form is chosen from the share of printable bytes
received so far. If more than 95% are printable the output is ASCII. If less
than 30% are printable it is binary. Anything in between is shown as mixed.

There is also an interactive mode. It can list ports, test them, read from a
port for a short time, send simulated device data and build a
`vital-reader` command line.

## Installation

```
pip install .
```

This installs the `vital-reader` command, which runs `vitalreader.app:main`.

## Reading from a port

```
vital-reader --port /dev/ttyUSB0 --baud 115200
```

The port may be a device name or a pyserial URL such as `loop://`. If you
leave out `--port`, the available ports are listed and a suggested one is
used. The first USB port is chosen if there is one, otherwise the first port.
If no ports are found, the command exits with an error.

Settings can be given one at a time. Parity accepts `none`/`n`, `odd`/`o` and
`even`/`e` in any case:

```
vital-reader --port COM3 --baud 9600 --data-bits 7 --parity even --stop-bits 1
```

Settings can also be given as a single string in the form
`baud,parity,data_bits,stop_bits`. In the string, parity is `0` (none), `1`
(odd) or `2` (even). The string overrides the individual settings:

```
vital-reader --port /dev/ttyUSB0 --config "57600,0,8,1" --stats
```

Other options:

- `--timeout MS`: read timeout in milliseconds (default 100).
- `--stats`: when the session ends, print the number of bytes received, the
  connection time, the average rate, the ASCII/binary split and the five
  most common bytes.

While reading from an interactive terminal, you can press:

- `q`: quit
- `s`: type a command to send to the device (`\r\n` is appended)
- `h`: show help

Invalid settings and ports that cannot be opened are reported on standard
error, and the exit status is 1.

## Interactive mode

```
vital-reader --cli
```

The menu offers:

1. List available serial ports, with type and, for USB ports, manufacturer,
   product and VID:PID.
2. Test whether a port can be opened at a given baud rate.
3. Connect and read. This stops after 30 seconds, or after 5 seconds if
   nothing has arrived, and then shows session statistics.
4. Send fake data to a port. The options are:
   - vital-sign text records
   - binary sine-wave packets (`STX SEQ VALUE CHECKSUM ETX`)
   - a full HL7 ORU^R01 message (monitor, ventilator and humidifier observations)
   - custom text
   - custom hex bytes
   - 1000 pseudo-random bytes
5. Generate a `vital-reader` command line from the chosen settings.

## Using it as a library

```python
from vitalreader.config import SerialConfig
from vitalreader.parser import DataParser

config = SerialConfig.from_string("9600,2,7,1")
parser = DataParser()
lines = parser.process_data(b"OBX|1|NM|8867-4^Heart Rate^LN||72|bpm\r", "12:00:00")
print(parser.stats_report())
```

The modules are:

- `vitalreader.config`: `SerialConfig` with `from_string` and `from_values`. A
  setting it cannot parse raises `ConfigError`.
- `vitalreader.formatter`: `is_printable_ascii`, `format_ascii`,
  `format_binary`, `format_mixed`, `format_data` and `DataType`.
- `vitalreader.parser`: `DataParser`, which splits a byte stream into lines
  and keeps byte statistics.
- `vitalreader.stats`: `SessionStats`, a byte counter with timing.
- `vitalreader.connection`: `PortConnection`, a pyserial port that can be used
  as a context manager. Failures raise `PortError`.
- `vitalreader.detector`: `available_ports`, `describe_ports`, `suggest_port`
  and `test_port`.
- `vitalreader.generators` and `vitalreader.hl7`: the simulated data.
  `vital_signs_record`, `waveform_packet`, `random_bytes` and `hl7_messages`
  build the data without sending it.
- `vitalreader.session`: `ReaderSession`, the live reading loop.

## What it does not do

vitalreader only shows what it receives. It does not decode HL7 or any device
protocol into fields, and it does not store or log readings to a file.

## Running the tests

```
pip install ".[test]"
pytest
```
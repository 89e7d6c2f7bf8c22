import io

import pytest

from vitalreader.generators import (
    parse_hex,
    random_bytes,
    send_continuous,
    send_hex,
    send_text,
    send_vital_signs,
    send_waveform,
    vital_signs_record,
    waveform_packet,
)


def test_parse_hex_example():
    assert parse_hex("02 1A FF 3C") == bytes([0x02, 0x1A, 0xFF, 0x3C])


def test_parse_hex_lowercase_and_extra_space():
    assert parse_hex("  0a\tff  ") == bytes([0x0A, 0xFF])


def test_parse_hex_empty():
    assert parse_hex("") == b""


@pytest.mark.parametrize("text", ["ZZ", "100", "0x10", "1_0", "-1"])
def test_parse_hex_rejects(text):
    with pytest.raises(ValueError):
        parse_hex(text)


def test_send_text_appends_newline(capsys):
    port = io.BytesIO()
    sent = send_text(port, "  hello monitor \n")
    assert port.getvalue() == b"hello monitor\n"
    assert sent == port.getvalue()
    assert "Sent: hello monitor" in capsys.readouterr().out


def test_send_hex_writes_bytes(capsys):
    port = io.BytesIO()
    sent = send_hex(port, "02 1A FF 3C")
    assert port.getvalue() == bytes([0x02, 0x1A, 0xFF, 0x3C])
    assert sent == port.getvalue()
    assert "Sent 4 bytes: [02, 1A, FF, 3C]" in capsys.readouterr().out


def test_send_hex_bad_input_sends_nothing():
    port = io.BytesIO()
    with pytest.raises(ValueError):
        send_hex(port, "02 GG")
    assert port.getvalue() == b""


def test_random_bytes_deterministic():
    first = list(random_bytes(1000))
    assert first == list(random_bytes(1000))
    assert len(first) == 1000
    assert all(0 <= b <= 255 for b in first)
    assert len(set(first)) > 1


def test_random_bytes_prefix():
    assert list(random_bytes(10)) == list(random_bytes(1000))[:10]


def test_send_continuous_writes_sequence(capsys):
    port = io.BytesIO()
    count = send_continuous(port, 250, 0)
    assert count == 250
    assert port.getvalue() == bytes(random_bytes(250))
    out = capsys.readouterr().out
    assert "Sent 200 bytes..." in out
    assert "Sent 250 bytes total." in out


def test_vital_signs_record_pinned():
    assert (
        vital_signs_record(1, "12:00:00")
        == "PATIENT_ID=12345|HR=61|SPO2=96|BP=111/71|TEMP=36.6|TIME=12:00:00\n"
    )


def _fields(record):
    return dict(part.split("=", 1) for part in record.strip().split("|"))


@pytest.mark.parametrize("index", range(1, 41))
def test_vital_signs_ranges(index):
    fields = _fields(vital_signs_record(index, "t"))
    assert 60 <= int(fields["HR"]) < 80
    assert 95 <= int(fields["SPO2"]) < 100
    sys_bp, dia_bp = map(int, fields["BP"].split("/"))
    assert 110 <= sys_bp < 130
    assert 70 <= dia_bp < 80
    assert fields["TIME"] == "t"


def test_vital_signs_periodic():
    a = _fields(vital_signs_record(3, "t"))
    b = _fields(vital_signs_record(23, "t"))
    assert a["HR"] == b["HR"] and a["SPO2"] == b["SPO2"] and a["BP"] == b["BP"]
    assert float(b["TEMP"]) > float(a["TEMP"])


def test_send_vital_signs(capsys):
    port = io.BytesIO()
    assert send_vital_signs(port, 3, 0) == 3
    lines = port.getvalue().decode().splitlines()
    assert len(lines) == 3
    assert all(line.startswith("PATIENT_ID=12345|") for line in lines)


def test_waveform_packet_zero():
    assert waveform_packet(0) == bytes([0x02, 0x00, 0x80, 0x80, 0x03])


@pytest.mark.parametrize("index", [0, 1, 15, 63, 99, 300])
def test_waveform_packet_framing(index):
    packet = waveform_packet(index)
    assert len(packet) == 5
    assert packet[0] == 0x02 and packet[-1] == 0x03
    assert packet[1] == index % 256
    assert packet[3] == (packet[1] + packet[2]) % 256


def test_send_waveform(capsys):
    port = io.BytesIO()
    assert send_waveform(port, 0) == 100
    data = port.getvalue()
    assert data == b"".join(waveform_packet(i) for i in range(100))
    assert "Sent packet #90:" in capsys.readouterr().out
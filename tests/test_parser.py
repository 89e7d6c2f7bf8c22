import pytest

from vitalreader.config import SerialConfig
from vitalreader.formatter import DataType
from vitalreader.parser import DataParser


@pytest.fixture
def parser():
    return DataParser(output=lambda line: None)


def test_new_parser_state(parser):
    assert parser.total_count == 0
    assert parser.detected_type is DataType.MIXED


def test_output_callback_receives_lines():
    seen = []
    parser = DataParser(output=seen.append)
    returned = parser.process_data(b"abc\r", "t")
    assert seen == returned == ["[t] MIXED: abc"]


def test_empty_data(parser):
    assert parser.process_data(b"", "12:00:00") == []
    assert parser.total_count == 0


def test_single_byte(parser):
    assert parser.process_data(b"A", "12:00:00") == []
    assert parser.process_data(b"\n", "12:00:00") == ["[12:00:00] MIXED: A"]
    assert parser.total_count == 2


def test_ascii_detection(parser):
    data = b"Hello World\nThis is ASCII text\n" * 10
    lines = parser.process_data(data, "12:00:00")
    assert len(lines) == 20
    assert lines[0] == "[12:00:00] MIXED: Hello World"
    assert parser.detected_type is DataType.ASCII
    assert parser.process_data(b"next\n", "t") == ["[t] ASCII: next"]


def test_binary_sequence_is_mixed(parser):
    data = bytes(i % 256 for i in range(200))
    parser.process_data(data, "12:00:00")
    assert parser.ascii_count == 98
    assert parser.binary_count == 102
    assert parser.detected_type is DataType.MIXED


def test_pure_binary_detection(parser):
    parser.process_data(b"\xff" * 100, "12:00:00")
    assert parser.detected_type is DataType.BINARY


def test_handles_cr(parser):
    lines = parser.process_data(b"Line1\rLine2\r", "12:00:00")
    assert lines == ["[12:00:00] MIXED: Line1", "[12:00:00] MIXED: Line2"]


def test_handles_lf(parser):
    lines = parser.process_data(b"Line1\nLine2\n", "12:00:00")
    assert lines == ["[12:00:00] MIXED: Line1", "[12:00:00] MIXED: Line2"]


def test_handles_crlf(parser):
    lines = parser.process_data(b"Line1\r\nLine2\r\n", "12:00:00")
    assert lines == ["[12:00:00] MIXED: Line1", "[12:00:00] MIXED: Line2"]


def test_large_buffer(parser):
    lines = parser.process_data(b"A" * 70000, "12:00:00")
    assert lines == ["[12:00:00] MIXED: " + "A" * 65537]


def test_line_buffer_exactly_over_limit(parser):
    lines = parser.process_data(b"A" * 65537, "12:00:00")
    assert len(lines) == 1
    assert lines[0].endswith("A" * 65537)


def test_line_buffer_at_limit_not_flushed(parser):
    assert parser.process_data(b"A" * 65536, "12:00:00") == []


def test_hl7_message(parser):
    msg = b"MSH|^~\\&|GE_MONITOR|ICU|VITAL_REC|HOSPITAL|20250104120000||ORU^R01|MSG001|P|2.5\r"
    lines = parser.process_data(msg, "12:00:00")
    assert lines == ["[12:00:00] MIXED: " + msg[:-1].decode()]


def test_multiple_hl7_messages(parser):
    msg1 = b"OBX|1|NM|8867-4^Heart Rate^LN||72|bpm|60-100|N|||F\r"
    msg2 = b"OBX|2|NM|2708-6^Oxygen Sat^LN||98|%|95-100|N|||F\r"
    first = parser.process_data(msg1, "12:00:00")
    second = parser.process_data(msg2, "12:00:01")
    assert first == ["[12:00:00] MIXED: " + msg1[:-1].decode()]
    assert second == ["[12:00:01] MIXED: " + msg2[:-1].decode()]


def test_hl7_parsing_workflow(parser):
    messages = [
        b"MSH|^~\\&|GE_MONITOR|ICU|VITAL_REC|HOSPITAL|20250104120000||ORU^R01|MSG001|P|2.5\r",
        b"PID|1||123456^^^HOSPITAL^MR||DOE^JOHN^A||19800515|M\r",
        b"OBX|1|NM|8867-4^Heart Rate^LN||72|bpm|60-100|N|||F\r",
    ]
    lines = [line for msg in messages for line in parser.process_data(msg, "12:00:00")]
    assert len(lines) == 3
    assert parser.total_count == sum(len(m) for m in messages)
    assert parser.detected_type is DataType.ASCII


def test_print_stats(capsys):
    parser = DataParser(output=lambda line: None)
    parser.process_data(b"test data\n", "12:00:00")
    parser.print_stats()
    out = capsys.readouterr().out
    assert "  Total bytes:      10" in out
    assert "  ASCII bytes:      10 (100.0%)" in out
    assert "  Binary bytes:     0 (0.0%)" in out
    assert "  Detected type:    Mixed" in out
    assert "    0x74 't' : 3 times (30.0%)" in out


def test_stats_report_top_five(parser):
    parser.process_data(b"test data\n", "12:00:00")
    report = parser.stats_report().splitlines()
    entries = report[report.index("Most common bytes:") + 1 :]
    assert len(entries) == 5
    assert entries[1] == "    0x61 'a' : 2 times (20.0%)"


def test_stats_report_empty(parser):
    report = parser.stats_report()
    assert "  ASCII bytes:      0 (NaN%)" in report
    assert report.endswith("Most common bytes:")


def test_stats_report_non_printable(parser):
    parser.process_data(b"\x00", "t")
    assert "    0x00 : 1 times (100.0%)" in parser.stats_report()


def test_mixed_line_endings(parser):
    lines = parser.process_data(b"Line1\rLine2\nLine3\r\n", "12:00:00")
    assert [line.split(": ")[1] for line in lines] == ["Line1", "Line2", "Line3"]


def test_no_line_ending(parser):
    assert parser.process_data(b"No line ending here", "12:00:00") == []
    assert parser.total_count == 19


def test_pure_ascii_detection(parser):
    parser.process_data(b"Pure ASCII text data\n" * 15, "12:00:00")
    assert parser.detected_type is DataType.ASCII


def test_mixed_detection(parser):
    parser.process_data(b"Text\x00\xff" * 50, "12:00:00")
    assert parser.ascii_count == 200
    assert parser.binary_count == 100
    assert parser.detected_type is DataType.MIXED


def test_consecutive_cr(parser):
    lines = parser.process_data(b"Data\r\r\rMore\r", "12:00:00")
    assert lines == [
        "[12:00:00] MIXED: Data",
        "[12:00:00] MIXED: ",
        "[12:00:00] MIXED: ",
        "[12:00:00] MIXED: More",
    ]


def test_lone_lf_after_non_cr(parser):
    assert len(parser.process_data(b"Text\nMore\n", "12:00:00")) == 2


def test_less_than_100_bytes(parser):
    parser.process_data(b"Short", "12:00:00")
    assert parser.total_count == 5
    assert parser.detected_type is DataType.MIXED


def test_empty_line_flush(parser):
    assert parser.process_data(b"\r", "12:00:00") == ["[12:00:00] MIXED: "]


def test_all_control_chars(parser):
    lines = parser.process_data(bytes(range(32)), "12:00:00")
    assert len(lines) == 3
    assert parser.ascii_count == 3
    assert parser.binary_count == 29


def test_exact_100_bytes_triggers_detection(parser):
    parser.process_data(b"A" * 100, "12:00:00")
    assert parser.detected_type is DataType.ASCII


def test_ratio_95_percent_is_mixed(parser):
    parser.process_data(b"A" * 95 + b"\xff" * 5, "12:00:00")
    assert parser.detected_type is DataType.MIXED


def test_ratio_96_percent_is_ascii(parser):
    parser.process_data(b"A" * 96 + b"\xff" * 4, "12:00:00")
    assert parser.detected_type is DataType.ASCII


def test_ratio_30_percent_is_mixed(parser):
    parser.process_data(b"A" * 30 + b"\xff" * 70, "12:00:00")
    assert parser.detected_type is DataType.MIXED


def test_all_data_type_combinations(parser):
    parser.process_data(b"A" * 30 + b"\xff" * 70, "12:00:00")
    parser.process_data(b"B" * 95 + b"\xfe" * 5, "12:00:00")
    assert parser.ascii_count == 125
    assert parser.detected_type is DataType.MIXED


def test_cr_then_other_byte(parser):
    assert parser.process_data(b"\rX", "12:00:00") == ["[12:00:00] MIXED: "]
    assert parser.process_data(b"\n", "t") == ["[t] MIXED: X"]


def test_lf_after_cr_across_chunks(parser):
    assert parser.process_data(b"\r", "12:00:00") == ["[12:00:00] MIXED: "]
    assert parser.process_data(b"\n", "12:00:01") == []


def test_data_processing_pipeline(parser):
    assert parser.process_data(b"ASCII Line 1\r", "12:00:00") == ["[12:00:00] MIXED: ASCII Line 1"]
    assert parser.process_data(b"ASCII Line 2\n", "12:00:01") == ["[12:00:01] MIXED: ASCII Line 2"]
    assert parser.process_data(bytes([0x00, 0xFF, 0x80]), "12:00:02") == []
    assert parser.process_data(b"Mixed\x00\xff\r", "12:00:03") == [
        "[12:00:03] MIXED: [[00, FF, 80]]Mixed[[00, FF]]"
    ]


def test_config_to_parser_flow(parser):
    config = SerialConfig.from_string("115200,0,8,1")
    assert config.baud == 115200
    assert parser.process_data(b"Test data flow\r", "12:00:00") == [
        "[12:00:00] MIXED: Test data flow"
    ]


def test_char_frequency(parser):
    parser.process_data(b"aab", "t")
    assert parser.char_frequency[ord("a")] == 2
    assert parser.char_frequency[ord("b")] == 1
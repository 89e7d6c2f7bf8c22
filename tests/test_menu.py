import builtins

import pytest
from serial.tools import list_ports as serial_list_ports

from vitalreader.config import ConfigError
from vitalreader.menu import run_cli_mode


@pytest.fixture(autouse=True)
def no_ports(monkeypatch):
    monkeypatch.setattr(serial_list_ports, "comports", lambda: [])


def feed(monkeypatch, answers):
    queue = list(answers)

    def fake_input(prompt=""):
        if not queue:
            raise EOFError
        return queue.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)
    return queue


@pytest.mark.parametrize("key", ["q", "Q"])
def test_quit(monkeypatch, capsys, key):
    feed(monkeypatch, [key])
    run_cli_mode()
    out = capsys.readouterr().out
    assert "INTERACTIVE CLI MODE" in out
    assert "Goodbye!" in out


def test_invalid_option_then_quit(monkeypatch, capsys):
    remaining = feed(monkeypatch, ["x", "q"])
    run_cli_mode()
    out = capsys.readouterr().out
    assert "Invalid option. Please try again." in out
    assert out.count("Main Menu") == 2
    assert remaining == []


def test_end_of_input_quits(monkeypatch, capsys):
    feed(monkeypatch, [])
    run_cli_mode()
    assert "Goodbye!" in capsys.readouterr().out


def test_list_ports_option(monkeypatch, capsys):
    feed(monkeypatch, ["1", "", "q"])
    run_cli_mode()
    out = capsys.readouterr().out
    assert "Available Serial Ports" in out
    assert "No serial ports detected." in out


def test_test_port_option(monkeypatch, capsys):
    feed(monkeypatch, ["2", "loop://", "", "", "q"])
    run_cli_mode()
    assert "✓ Port loop:// is accessible" in capsys.readouterr().out


def test_command_error_propagates(monkeypatch):
    feed(monkeypatch, ["3", "loop://", "1", "bad"])
    with pytest.raises(ConfigError):
        run_cli_mode()
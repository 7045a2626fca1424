import pytest

from tapedrive import log


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("ANSI_COLORS_DISABLED", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)


def test_print_title(capsys):
    log.print_title("Heading")
    assert capsys.readouterr().out == "\nHeading\n"


def test_print_info(capsys):
    log.print_info("plain text")
    assert capsys.readouterr().out == "plain text\n"


def test_print_divider(capsys):
    log.print_divider()
    assert capsys.readouterr().out == "\n"


def test_print_section_header(capsys):
    log.print_section_header("Tape Account")
    assert capsys.readouterr().out == "\n=== Tape Account ===\n"


def test_print_message(capsys):
    log.print_message("Signature: abc")
    assert capsys.readouterr().out == "→ Signature: abc\n"


def test_print_count(capsys):
    log.print_count("Total Chunks: 3")
    assert capsys.readouterr().out == "⟐ Total Chunks: 3\n"


def test_print_error(capsys):
    log.print_error("Write operation cancelled")
    assert capsys.readouterr().out == "✗ Write operation cancelled\n"
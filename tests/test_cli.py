# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import sys

import pytest

from textbookrsa import __main__ as cli

pytestmark = pytest.mark.filterwarnings("ignore::RuntimeWarning")


def run_cli(monkeypatch, *args: str, answers: list[str] | None = None) -> None:
    monkeypatch.setattr(sys, "argv", ["textbookrsa", *args])
    if answers is not None:
        feed = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt="": next(feed))
    cli.main()


def test_demo(monkeypatch, capsys):
    run_cli(monkeypatch, "-n", "demo", "--bits", "64")
    assert capsys.readouterr().out.splitlines() == ["hej", "1488", "Alice signatur"]


def test_encrypt_number(monkeypatch, capsys):
    run_cli(monkeypatch, "-n", "encrypt", "--bits", "64", "--number", "--message", "1488")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert int(lines[0]) >= 0
    assert lines[1] == "1488"


def test_encrypt_text_fixed_exponent(monkeypatch, capsys):
    run_cli(monkeypatch, "encrypt", "-b", "64", "--pub-exponent", "65537", "-m", "hej")
    out = capsys.readouterr().out.splitlines()
    assert out[-2:] == ["Cleartext:", "hej"]


def test_encrypt_not_a_number(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "encrypt", "--bits", "64", "--number", "--message", "abc")
    assert exc.value.code == 1
    assert "not an integer" in capsys.readouterr().out


def test_encrypt_message_too_long(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "encrypt", "--bits", "16", "--message", "This does not fit in 32 bits")
    assert exc.value.code == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_sign(monkeypatch, capsys):
    run_cli(monkeypatch, "sign", "--bits", "64", "--message", "Alice signatur")
    out = capsys.readouterr().out.splitlines()
    assert out[-3:] == ["Recovered:", "Alice signatur", "Signature Verified!"]


def test_subparser_does_not_shadow_encrypt():
    assert cli.encrypt_parser.prog.endswith("encrypt")
    assert not hasattr(cli, "encrypt")


def test_bad_exponent_rejected(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "sign", "--bits", "64", "--pub-exponent", "many", "-m", "hej")
    assert exc.value.code == 2


def test_even_exponent_reported(monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "-n", "sign", "--bits", "64", "--pub-exponent", "4", "-m", "hej")
    assert exc.value.code == 1
    assert "odd" in capsys.readouterr().out


def test_non_interactive_missing_message(monkeypatch):
    with pytest.raises(IOError):
        run_cli(monkeypatch, "-n", "sign", "--bits", "64")


def test_interactive(monkeypatch, capsys):
    run_cli(monkeypatch, answers=["encrypt", "hej", "64"])
    out = capsys.readouterr().out.splitlines()
    assert out[-2:] == ["Cleartext:", "hej"]


def test_interactive_retries_bad_values(monkeypatch, capsys):
    run_cli(monkeypatch, "demo", answers=["sixty-four", "64"])
    out = capsys.readouterr().out
    assert "We could not convert your value with int." in out
    assert out.splitlines()[-3:] == ["hej", "1488", "Alice signatur"]

"""Tests for the terminal game loop."""

from __future__ import annotations

import logging

import pytest

from shogi_rules import cli


def _feed(monkeypatch: pytest.MonkeyPatch, answers: list[str]) -> None:
    it = iter(answers)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


def test_parse_arguments_defaults() -> None:
    args = cli.parse_arguments([])
    assert args.opponent == "random"
    assert args.seed is None
    assert not args.no_checkmate_detection


def test_resign_ends_game(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["r"])
    cli.main(["--opponent", "human"])
    out = capsys.readouterr().out
    assert "Resignation. GOTE wins!" in out


def test_invalid_input_then_move(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed(monkeypatch, ["x", "999", "0"])
    cli.main(["--opponent", "random", "--seed", "1"])
    out = capsys.readouterr().out
    assert "Enter a number." in out
    assert "Invalid: choose" in out
    assert "GOTE plays:" in out
    assert "Game aborted." in out


@pytest.mark.parametrize(("flags", "level"), [([], logging.WARNING), (["--verbose"], logging.DEBUG)])
def test_verbose_sets_log_level(
    monkeypatch: pytest.MonkeyPatch, flags: list[str], level: int
) -> None:
    seen: dict[str, object] = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: seen.update(kwargs))
    _feed(monkeypatch, ["r"])
    cli.main(["--opponent", "human", *flags])
    assert seen["level"] == level

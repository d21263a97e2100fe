"""Tests for the terminal practice mode."""

import random
import sys
from pathlib import Path

import pytest

from prizecheck.jobs import practice
from prizecheck.jobs.practice import play_rounds
from prizecheck.services.dealer import parse_and_deal


def scripted(answers: list[str]):
    """An input function that replays answers and records prompts."""
    remaining = iter(answers)
    prompts: list[str] = []

    def ask(prompt: str) -> str:
        prompts.append(prompt)
        return next(remaining)

    ask.prompts = prompts
    return ask


class TestPlayRounds:
    def test_perfect_round(self, sample_decklist: str) -> None:
        """Guessing the dealt prizes scores 6 of 6."""
        prizes = parse_and_deal(sample_decklist, random.Random(3)).prizes
        ask = scripted([*prizes, "n"])
        output: list[str] = []

        rounds = play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert rounds == 1
        assert "Score: 6/6" in output
        assert "Your hand:" in output
        assert sum(p.startswith("Prize ") for p in ask.prompts) == 6

    def test_wrong_guesses(self, sample_decklist: str) -> None:
        ask = scripted(["Mewtwo"] * 6 + ["no"])
        output: list[str] = []

        play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert "Score: 0/6" in output

    def test_play_again(self, sample_decklist: str) -> None:
        """Answering yes deals another round."""
        ask = scripted(["Mewtwo"] * 6 + ["y"] + ["Mewtwo"] * 6 + [""])
        output: list[str] = []

        rounds = play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert rounds == 2
        assert output.count("Your hand:") == 2

    def test_blank_guess_reprompts(self, sample_decklist: str) -> None:
        """An empty guess asks for the same slot again."""
        ask = scripted(["", *(["Mewtwo"] * 6), "n"])
        output: list[str] = []

        play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert ask.prompts[:2] == ["Prize 1: ", "Prize 1: "]

    def test_search_suggestions(self, sample_decklist: str) -> None:
        """A guess ending in ? lists matching deck cards."""
        ask = scripted(["chu?", *(["Mewtwo"] * 6), "n"])
        output: list[str] = []

        play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert "  Pikachu ex SSP 57, Raichu V BRS 45" in output

    def test_reports_skipped_lines(self, sample_decklist: str) -> None:
        ask = scripted(["Mewtwo"] * 6 + ["n"])
        output: list[str] = []

        play_rounds(sample_decklist, ask=ask, say=output.append, rng=random.Random(3))

        assert "Skipped line: Total Cards: 60" in output


class TestMain:
    def test_missing_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["prizecheck-practice", str(tmp_path / "nope.txt")])

        practice.main()

        assert "Decklist file not found" in capsys.readouterr().out

    def test_wrong_size(
        self,
        tmp_path: Path,
        short_decklist: str,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
    ) -> None:
        """A deck that is not 60 cards is reported, not raised."""
        deck_file = tmp_path / "deck.txt"
        deck_file.write_text(short_decklist, encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["prizecheck-practice", str(deck_file)])

        practice.main()

        out = capsys.readouterr().out
        assert "Please ensure your deck contains exactly 60 cards" in out
        assert "Deck contains 59 cards" in out

    def test_plays_from_file(
        self,
        tmp_path: Path,
        sample_decklist: str,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture,
    ) -> None:
        deck_file = tmp_path / "deck.txt"
        deck_file.write_text(sample_decklist, encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["prizecheck-practice", str(deck_file), "--seed", "1"])
        answers = iter(["Mewtwo"] * 6 + ["n"])
        monkeypatch.setattr("builtins.input", lambda _prompt="": next(answers))

        practice.main()

        assert "Score: 0/6" in capsys.readouterr().out

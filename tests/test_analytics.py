"""Tests for game history analytics."""

from datetime import UTC, datetime

import pytest

from prizecheck.models.game import SessionRecord
from prizecheck.services.analytics import (
    ANONYMOUS_PLAYER,
    accuracy_timeline,
    guessed_card_success_rates,
    prize_recall_rates,
    rank_players,
    summarize,
)

PRIZES = ["Pikachu", "Pikachu", "Iono", "Switch", "Nest Ball", "Ultra Ball"]


def make_record(
    record_id: int,
    correct: int,
    guesses: list[str] | None = None,
    created_at: datetime | None = None,
    time_spent_ms: int = 10_000,
    user_id: str = "user-1",
) -> SessionRecord:
    return SessionRecord(
        id=record_id,
        user_id=user_id,
        deck_id=1,
        deck_name="Pikachu ex",
        correct_guesses=correct,
        total_prizes=6,
        time_spent_ms=time_spent_ms,
        guessed_cards=guesses or ["Mewtwo"] * 6,
        actual_prizes=list(PRIZES),
        created_at=created_at,
    )


class TestAccuracyTimeline:
    def test_oldest_first(self) -> None:
        """Points are ordered by when the game was played."""
        records = [
            make_record(2, 3, created_at=datetime(2024, 3, 2, tzinfo=UTC)),
            make_record(1, 6, created_at=datetime(2024, 3, 1, tzinfo=UTC)),
        ]

        points = accuracy_timeline(records)

        assert [p.accuracy for p in points] == [100.0, 50.0]
        assert points[0].deck_name == "Pikachu ex"

    def test_mixed_timezones_and_missing_dates(self) -> None:
        """Naive timestamps and missing ones still sort."""
        records = [
            make_record(1, 3, created_at=datetime(2024, 3, 2)),
            make_record(2, 1, created_at=None),
            make_record(3, 6, created_at=datetime(2024, 3, 1, tzinfo=UTC)),
        ]

        points = accuracy_timeline(records)

        assert [round(p.accuracy) for p in points] == [17, 100, 50]

    def test_empty(self) -> None:
        assert accuracy_timeline([]) == []


class TestGuessedCardSuccessRates:
    def test_counts_each_guess(self) -> None:
        """Correct and total attempts per guessed card."""
        records = [
            make_record(1, 2, guesses=["Pikachu", "Iono", "Mewtwo", "Mewtwo", "Mewtwo", "Mewtwo"]),
            make_record(2, 1, guesses=["Pikachu", "Zapdos", "Mewtwo", "Mewtwo", "Mewtwo", "Mewtwo"]),
        ]

        rates = {rate.card: rate for rate in guessed_card_success_rates(records)}

        assert rates["Pikachu"].correct == 2
        assert rates["Pikachu"].total == 2
        assert rates["Pikachu"].success_rate == 100.0
        assert rates["Mewtwo"].correct == 0
        assert rates["Mewtwo"].total == 8
        assert rates["Zapdos"].success_rate == 0.0

    def test_first_seen_order(self) -> None:
        """Cards are listed in the order they were first guessed."""
        records = [make_record(1, 0, guesses=["Zapdos", "Mewtwo", "Mew", "Mew", "Mew", "Mew"])]

        assert [r.card for r in guessed_card_success_rates(records)] == ["Zapdos", "Mewtwo", "Mew"]


class TestPrizeRecallRates:
    def test_best_recalled_first(self) -> None:
        """Prize cards are ordered by recall rate."""
        records = [
            make_record(1, 1, guesses=["Iono", "Mewtwo", "Mewtwo", "Mewtwo", "Mewtwo", "Mewtwo"]),
            make_record(2, 2, guesses=["Iono", "Switch", "Mewtwo", "Mewtwo", "Mewtwo", "Mewtwo"]),
        ]

        rates = prize_recall_rates(records)

        assert rates[0].card == "Iono"
        assert rates[0].success_rate == 100.0
        assert rates[1].card == "Switch"
        assert rates[1].success_rate == 50.0

    def test_limit(self) -> None:
        """Only the requested number of cards is returned."""
        records = [make_record(1, 0)]

        assert len(prize_recall_rates(records, limit=2)) == 2
        assert len(prize_recall_rates(records, limit=None)) == 5


class TestSummarize:
    def test_aggregates(self) -> None:
        """Games, average accuracy, best score and average time."""
        records = [
            make_record(1, 6, time_spent_ms=20_000),
            make_record(2, 3, time_spent_ms=10_000),
        ]

        stats = summarize(records)

        assert stats.games_played == 2
        assert stats.average_accuracy == pytest.approx(75.0)
        assert stats.best_score == 6
        assert stats.total_correct == 9
        assert stats.average_time_ms == pytest.approx(15_000)

    def test_empty(self) -> None:
        """No games gives zeroed stats."""
        stats = summarize([])

        assert stats.games_played == 0
        assert stats.average_accuracy == 0.0


class TestRankPlayers:
    def test_ranks_by_accuracy_then_games(self) -> None:
        """Higher accuracy first; ties go to the player with more games."""
        records = {
            "alice": [make_record(1, 3, user_id="alice")] * 2,
            "bob": [make_record(2, 6, user_id="bob")],
            "carol": [make_record(3, 3, user_id="carol")] * 4,
        }
        names = {"alice": "Alice", "bob": "Bob", "carol": "Carol"}

        ranked = rank_players(records, names)

        assert [(e.rank, e.display_name) for e in ranked] == [
            (1, "Bob"),
            (2, "Carol"),
            (3, "Alice"),
        ]

    def test_only_listed_users(self) -> None:
        """Users missing from display_names are not ranked."""
        records = {"alice": [make_record(1, 3)], "bob": [make_record(2, 6)]}

        ranked = rank_players(records, {"alice": "Alice"})

        assert [e.user_id for e in ranked] == ["alice"]

    def test_min_games(self) -> None:
        """Players below the minimum number of games are left out."""
        records = {"alice": [make_record(1, 3)] * 3, "bob": [make_record(2, 6)]}

        ranked = rank_players(records, {"alice": "Alice", "bob": "Bob"}, min_games=3)

        assert [e.display_name for e in ranked] == ["Alice"]

    def test_no_games_not_ranked(self) -> None:
        """Opted-in players without games are left out."""
        ranked = rank_players({}, {"alice": "Alice"}, min_games=0)

        assert ranked == []

    def test_anonymous_fallback(self) -> None:
        """Players without a display name are shown anonymously."""
        ranked = rank_players({"alice": [make_record(1, 3)]}, {"alice": None})

        assert ranked[0].display_name == ANONYMOUS_PLAYER

    def test_profile_picture_and_limit(self) -> None:
        """Pictures are attached and the list is capped."""
        records = {"alice": [make_record(1, 6)], "bob": [make_record(2, 3)]}

        ranked = rank_players(
            records,
            {"alice": "Alice", "bob": "Bob"},
            profile_pictures={"alice": "https://example.com/a.png"},
            limit=1,
        )

        assert len(ranked) == 1
        assert ranked[0].profile_picture_url == "https://example.com/a.png"

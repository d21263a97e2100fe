"""
Game history analytics.

Aggregates recorded sessions into an accuracy timeline, per-card success
rates and summary figures, and ranks players for the leaderboard.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime

from prizecheck.models.analytics import (
    AccuracyPoint,
    CardSuccessRate,
    LeaderboardEntry,
    SessionStats,
)
from prizecheck.models.game import SessionRecord
from prizecheck.services.scoring import guess_breakdown, prize_recall

ANONYMOUS_PLAYER = "Anonymous Player"

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _sort_key(record: SessionRecord) -> datetime:
    if record.created_at is None:
        return _EPOCH
    if record.created_at.tzinfo is None:
        return record.created_at.replace(tzinfo=UTC)
    return record.created_at


def accuracy_timeline(records: Iterable[SessionRecord]) -> list[AccuracyPoint]:
    """Accuracy of each game, oldest first."""
    return [
        AccuracyPoint(
            created_at=record.created_at,
            accuracy=record.accuracy,
            deck_name=record.deck_name,
            time_spent_ms=record.time_spent_ms,
        )
        for record in sorted(records, key=_sort_key)
    ]


def _tally(pairs: Iterable[tuple[str, bool]]) -> dict[str, list[int]]:
    tally: dict[str, list[int]] = {}
    for card, correct in pairs:
        counts = tally.setdefault(card, [0, 0])
        counts[1] += 1
        if correct:
            counts[0] += 1
    return tally


def guessed_card_success_rates(records: Iterable[SessionRecord]) -> list[CardSuccessRate]:
    """
    Success rate per guessed card, in first-seen order.

    A guess counts as correct when it claimed one of the matching prize cards.
    """
    pairs: list[tuple[str, bool]] = []
    for record in records:
        for outcome in guess_breakdown(record.guessed_cards, record.actual_prizes):
            pairs.append((outcome.guessed_card, outcome.correct))

    return [
        CardSuccessRate(card=card, correct=correct, total=total)
        for card, (correct, total) in _tally(pairs).items()
    ]


def prize_recall_rates(
    records: Iterable[SessionRecord], limit: int | None = 10
) -> list[CardSuccessRate]:
    """
    Recall rate per actual prize card, best recalled first.

    Args:
        records: Sessions to aggregate (typically one deck's games)
        limit: Maximum number of cards to return; None for all
    """
    pairs: list[tuple[str, bool]] = []
    for record in records:
        pairs.extend(prize_recall(record.guessed_cards, record.actual_prizes))

    rates = [
        CardSuccessRate(card=card, correct=correct, total=total)
        for card, (correct, total) in _tally(pairs).items()
    ]
    rates.sort(key=lambda rate: rate.success_rate, reverse=True)
    return rates[:limit] if limit is not None else rates


def summarize(records: Sequence[SessionRecord]) -> SessionStats:
    """Summary figures for a set of games."""
    if not records:
        return SessionStats()

    games = len(records)
    return SessionStats(
        games_played=games,
        average_accuracy=sum(r.accuracy for r in records) / games,
        best_score=max(r.correct_guesses for r in records),
        total_correct=sum(r.correct_guesses for r in records),
        average_time_ms=sum(r.time_spent_ms for r in records) / games,
    )


def rank_players(
    records_by_user: Mapping[str, Sequence[SessionRecord]],
    display_names: Mapping[str, str | None],
    profile_pictures: Mapping[str, str | None] | None = None,
    min_games: int = 1,
    limit: int | None = None,
) -> list[LeaderboardEntry]:
    """
    Rank players by average accuracy, then by games played.

    Only users present in display_names are ranked; callers pass the users
    that opted in. Users with fewer than min_games games are left out.
    """
    profile_pictures = profile_pictures or {}

    candidates: list[tuple[str, SessionStats]] = []
    for user_id in display_names:
        stats = summarize(records_by_user.get(user_id, []))
        if stats.games_played < min_games or stats.games_played == 0:
            continue
        candidates.append((user_id, stats))

    candidates.sort(key=lambda item: (-item[1].average_accuracy, -item[1].games_played, item[0]))
    if limit is not None:
        candidates = candidates[:limit]

    return [
        LeaderboardEntry(
            rank=position,
            user_id=user_id,
            display_name=display_names.get(user_id) or ANONYMOUS_PLAYER,
            profile_picture_url=profile_pictures.get(user_id),
            stats=stats,
        )
        for position, (user_id, stats) in enumerate(candidates, start=1)
    ]

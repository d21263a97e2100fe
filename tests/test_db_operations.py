"""Tests for database CRUD operations."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prizecheck.db.operations import (
    create_decklist,
    delete_decklist,
    find_by_display_name,
    get_decklist,
    get_game_session,
    get_leaderboard_participants,
    get_or_create_preferences,
    get_preferences,
    is_display_name_available,
    list_decklists,
    list_game_sessions,
    list_sessions_for_users,
    record_game_session,
    rename_decklist,
    session_to_record,
    update_preferences,
)
from prizecheck.models.db import GameSessionDB
from prizecheck.models.game import ScoreResult

PRIZES = ("Pikachu", "Pikachu", "Iono", "Switch", "Nest Ball", "Ultra Ball")


@pytest.fixture
def score_result() -> ScoreResult:
    return ScoreResult(
        correct_count=3,
        guesses=("Pikachu", "Iono", "Switch", "Mewtwo", "Mewtwo", "Mewtwo"),
        actual_prizes=PRIZES,
        time_spent_ms=42_000,
        total_prizes=6,
    )


class TestDecklistOperations:
    async def test_create_decklist(self, session: AsyncSession) -> None:
        """Can save a decklist."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "60 Basic Energy")

        assert decklist.id is not None
        assert decklist.user_id == "user-123"
        assert decklist.cards == "60 Basic Energy"
        assert decklist.created_at is not None

    async def test_get_decklist(self, session: AsyncSession) -> None:
        """Can retrieve a saved decklist."""
        created = await create_decklist(session, "user-123", "Pikachu ex", "60 Basic Energy")
        await session.commit()

        decklist = await get_decklist(session, "user-123", created.id)

        assert decklist is not None
        assert decklist.name == "Pikachu ex"

    async def test_get_decklist_other_user(self, session: AsyncSession) -> None:
        """Decks are not visible to other users."""
        created = await create_decklist(session, "user-123", "Pikachu ex", "60 Basic Energy")
        await session.commit()

        assert await get_decklist(session, "someone-else", created.id) is None

    async def test_get_decklist_not_found(self, session: AsyncSession) -> None:
        assert await get_decklist(session, "user-123", 999) is None

    async def test_list_decklists_newest_first(self, session: AsyncSession) -> None:
        """Decks come back newest first and only for the owner."""
        await create_decklist(session, "user-123", "First", "1 A")
        await create_decklist(session, "user-123", "Second", "1 B")
        await create_decklist(session, "other", "Theirs", "1 C")
        await session.commit()

        decklists = await list_decklists(session, "user-123")

        assert [d.name for d in decklists] == ["Second", "First"]

    async def test_list_decklists_search(self, session: AsyncSession) -> None:
        """Search filters by name, ignoring case."""
        await create_decklist(session, "user-123", "Pikachu ex", "1 A")
        await create_decklist(session, "user-123", "Gardevoir", "1 B")
        await session.commit()

        decklists = await list_decklists(session, "user-123", search="PIKA")

        assert [d.name for d in decklists] == ["Pikachu ex"]

    async def test_rename_decklist(self, session: AsyncSession) -> None:
        created = await create_decklist(session, "user-123", "Old", "1 A")
        await session.commit()

        renamed = await rename_decklist(session, "user-123", created.id, "New")

        assert renamed is not None
        assert renamed.name == "New"

    async def test_rename_missing(self, session: AsyncSession) -> None:
        assert await rename_decklist(session, "user-123", 999, "New") is None

    async def test_delete_decklist_removes_games(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """Deleting a deck deletes the games played with it."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "1 A")
        await record_game_session(session, "user-123", decklist.id, score_result)
        await session.commit()

        deleted = await delete_decklist(session, "user-123", decklist.id)
        await session.commit()

        assert deleted is True
        assert await get_decklist(session, "user-123", decklist.id) is None
        remaining = await session.execute(select(GameSessionDB))
        assert remaining.scalars().all() == []

    async def test_delete_other_users_deck(self, session: AsyncSession) -> None:
        """Users cannot delete each other's decks."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "1 A")
        await session.commit()

        assert await delete_decklist(session, "intruder", decklist.id) is False
        assert await get_decklist(session, "user-123", decklist.id) is not None


class TestGameSessionOperations:
    async def test_record_game_session(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """A score result is stored as-is."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "1 A")

        game = await record_game_session(session, "user-123", decklist.id, score_result)

        assert game.id is not None
        assert game.correct_guesses == 3
        assert game.total_prizes == 6
        assert game.time_spent == 42_000
        assert game.guessed_cards == list(score_result.guesses)
        assert game.actual_prizes == list(PRIZES)
        assert game.created_at is not None

    async def test_get_game_session(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """A recorded game can be read back with its deck."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "1 A")
        game = await record_game_session(session, "user-123", decklist.id, score_result)
        await session.commit()

        loaded = await get_game_session(session, "user-123", game.id)

        assert loaded is not None
        assert loaded.decklist.name == "Pikachu ex"
        assert await get_game_session(session, "other", game.id) is None

    async def test_list_game_sessions(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """Games can be listed per user and per deck."""
        first = await create_decklist(session, "user-123", "First", "1 A")
        second = await create_decklist(session, "user-123", "Second", "1 B")
        await record_game_session(session, "user-123", first.id, score_result)
        await record_game_session(session, "user-123", second.id, score_result)
        await record_game_session(session, "user-123", second.id, score_result)
        await session.commit()

        assert len(await list_game_sessions(session, "user-123")) == 3
        assert len(await list_game_sessions(session, "user-123", deck_id=second.id)) == 2
        assert len(await list_game_sessions(session, "user-123", limit=1)) == 1
        assert await list_game_sessions(session, "other") == []

    async def test_list_sessions_for_users(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """Games are grouped by user; users without games get an empty list."""
        decklist = await create_decklist(session, "alice", "Deck", "1 A")
        await record_game_session(session, "alice", decklist.id, score_result)
        await session.commit()

        grouped = await list_sessions_for_users(session, ["alice", "bob"])

        assert len(grouped["alice"]) == 1
        assert grouped["bob"] == []

    async def test_list_sessions_for_no_users(self, session: AsyncSession) -> None:
        assert await list_sessions_for_users(session, []) == {}

    async def test_session_to_record(
        self, session: AsyncSession, score_result: ScoreResult
    ) -> None:
        """Database rows convert to domain records."""
        decklist = await create_decklist(session, "user-123", "Pikachu ex", "1 A")
        game = await record_game_session(session, "user-123", decklist.id, score_result)
        await session.commit()

        loaded = await get_game_session(session, "user-123", game.id)
        record = session_to_record(loaded)

        assert record.deck_id == decklist.id
        assert record.deck_name == "Pikachu ex"
        assert record.time_spent_ms == 42_000
        assert record.accuracy == pytest.approx(50.0)


class TestPreferenceOperations:
    async def test_get_preferences_missing(self, session: AsyncSession) -> None:
        assert await get_preferences(session, "user-123") is None

    async def test_get_or_create(self, session: AsyncSession) -> None:
        """Defaults are created once."""
        preferences, created = await get_or_create_preferences(session, "user-123")
        await session.commit()
        again, created_again = await get_or_create_preferences(session, "user-123")

        assert created is True
        assert created_again is False
        assert preferences.show_on_leaderboard is False
        assert again.user_id == "user-123"

    async def test_update_preferences(self, session: AsyncSession) -> None:
        """Only the given fields change."""
        await update_preferences(session, "user-123", display_name="Ash")
        await session.commit()

        preferences = await update_preferences(session, "user-123", show_on_leaderboard=True)

        assert preferences.display_name == "Ash"
        assert preferences.show_on_leaderboard is True
        assert preferences.profile_picture_url is None

    async def test_display_name_availability(self, session: AsyncSession) -> None:
        """A name is free unless another user holds it."""
        await update_preferences(session, "user-123", display_name="Ash")
        await session.commit()

        assert await is_display_name_available(session, "user-123", "Ash") is True
        assert await is_display_name_available(session, "user-456", "Ash") is False
        assert await is_display_name_available(session, "user-456", "Misty") is True

    async def test_find_by_display_name(self, session: AsyncSession) -> None:
        await update_preferences(session, "user-123", display_name="Ash")
        await session.commit()

        holder = await find_by_display_name(session, "Ash")

        assert holder is not None
        assert holder.user_id == "user-123"

    async def test_leaderboard_participants(self, session: AsyncSession) -> None:
        """Only opted-in users take part."""
        await update_preferences(session, "alice", display_name="Alice", show_on_leaderboard=True)
        await update_preferences(session, "bob", display_name="Bob")
        await session.commit()

        participants = await get_leaderboard_participants(session)

        assert [p.user_id for p in participants] == ["alice"]

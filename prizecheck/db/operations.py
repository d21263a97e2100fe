"""
Database CRUD operations.

Provides async functions for decklists, recorded game sessions and user
preferences. Every decklist and session query is scoped to its owner.
"""

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from prizecheck.models.db import DecklistDB, GameSessionDB, UserPreferencesDB
from prizecheck.models.game import ScoreResult, SessionRecord

# --- Decklist Operations ---


async def create_decklist(
    session: AsyncSession, user_id: str, name: str, cards: str
) -> DecklistDB:
    """Save a new decklist for a user. The text is stored unparsed."""
    decklist = DecklistDB(user_id=user_id, name=name, cards=cards)
    session.add(decklist)
    await session.flush()
    await session.refresh(decklist)
    return decklist


async def get_decklist(session: AsyncSession, user_id: str, deck_id: int) -> DecklistDB | None:
    """
    Get one of a user's decklists.

    Returns None if the deck does not exist or belongs to someone else.
    """
    result = await session.execute(
        select(DecklistDB).where(DecklistDB.id == deck_id, DecklistDB.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def list_decklists(
    session: AsyncSession, user_id: str, search: str | None = None
) -> list[DecklistDB]:
    """
    Get a user's decklists, newest first.

    Args:
        search: Optional case-insensitive substring filter on the deck name
    """
    query = select(DecklistDB).where(DecklistDB.user_id == user_id)
    if search:
        query = query.where(func.lower(DecklistDB.name).contains(search.lower()))

    result = await session.execute(
        query.order_by(DecklistDB.created_at.desc(), DecklistDB.id.desc())
    )
    return list(result.scalars().all())


async def rename_decklist(
    session: AsyncSession, user_id: str, deck_id: int, name: str
) -> DecklistDB | None:
    """Rename a decklist. Returns None if not found."""
    decklist = await get_decklist(session, user_id, deck_id)
    if decklist is None:
        return None

    decklist.name = name
    await session.flush()
    return decklist


async def delete_decklist(session: AsyncSession, user_id: str, deck_id: int) -> bool:
    """
    Delete a decklist together with the games played with it.

    Returns True if deleted, False if not found.
    """
    decklist = await get_decklist(session, user_id, deck_id)
    if decklist is None:
        return False

    await session.execute(delete(GameSessionDB).where(GameSessionDB.decklist_id == deck_id))
    await session.delete(decklist)
    await session.flush()
    return True


# --- Game Session Operations ---


async def record_game_session(
    session: AsyncSession, user_id: str, deck_id: int, result: ScoreResult
) -> GameSessionDB:
    """Store a finished game. The score result is written as-is."""
    game = GameSessionDB(
        user_id=user_id,
        decklist_id=deck_id,
        guessed_cards=list(result.guesses),
        actual_prizes=list(result.actual_prizes),
        correct_guesses=result.correct_count,
        total_prizes=result.total_prizes,
        time_spent=result.time_spent_ms,
    )
    session.add(game)
    await session.flush()
    await session.refresh(game, attribute_names=["created_at", "decklist"])
    return game


async def get_game_session(
    session: AsyncSession, user_id: str, session_id: int
) -> GameSessionDB | None:
    """Get one of a user's recorded games, with its decklist loaded."""
    result = await session.execute(
        select(GameSessionDB)
        .where(GameSessionDB.id == session_id, GameSessionDB.user_id == user_id)
        .options(selectinload(GameSessionDB.decklist))
    )
    return result.scalar_one_or_none()


async def list_game_sessions(
    session: AsyncSession,
    user_id: str,
    deck_id: int | None = None,
    limit: int | None = None,
) -> list[GameSessionDB]:
    """Get a user's recorded games, newest first, optionally for one deck."""
    query = (
        select(GameSessionDB)
        .where(GameSessionDB.user_id == user_id)
        .options(selectinload(GameSessionDB.decklist))
    )
    if deck_id is not None:
        query = query.where(GameSessionDB.decklist_id == deck_id)

    query = query.order_by(GameSessionDB.created_at.desc(), GameSessionDB.id.desc())
    if limit is not None:
        query = query.limit(limit)

    result = await session.execute(query)
    return list(result.scalars().all())


async def list_sessions_for_users(
    session: AsyncSession, user_ids: Sequence[str]
) -> dict[str, list[GameSessionDB]]:
    """Get all recorded games for several users, grouped by user."""
    grouped: dict[str, list[GameSessionDB]] = {user_id: [] for user_id in user_ids}
    if not user_ids:
        return grouped

    result = await session.execute(
        select(GameSessionDB)
        .where(GameSessionDB.user_id.in_(list(user_ids)))
        .options(selectinload(GameSessionDB.decklist))
    )
    for game in result.scalars().all():
        grouped[game.user_id].append(game)
    return grouped


def session_to_record(game: GameSessionDB) -> SessionRecord:
    """Convert a database game session to a domain record."""
    return SessionRecord(
        id=game.id,
        user_id=game.user_id,
        deck_id=game.decklist_id,
        deck_name=game.decklist.name if game.decklist is not None else None,
        correct_guesses=game.correct_guesses,
        total_prizes=game.total_prizes,
        time_spent_ms=game.time_spent,
        guessed_cards=list(game.guessed_cards),
        actual_prizes=list(game.actual_prizes),
        created_at=game.created_at,
    )


# --- Preference Operations ---


async def get_preferences(session: AsyncSession, user_id: str) -> UserPreferencesDB | None:
    """Get a user's preferences. Returns None if never saved."""
    result = await session.execute(
        select(UserPreferencesDB).where(UserPreferencesDB.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_or_create_preferences(
    session: AsyncSession, user_id: str
) -> tuple[UserPreferencesDB, bool]:
    """
    Get existing preferences or create defaults.

    Returns:
        Tuple of (preferences, created) where created is True if new.
    """
    preferences = await get_preferences(session, user_id)
    if preferences:
        return preferences, False

    preferences = UserPreferencesDB(user_id=user_id, show_on_leaderboard=False)
    session.add(preferences)
    await session.flush()
    return preferences, True


async def find_by_display_name(
    session: AsyncSession, display_name: str
) -> UserPreferencesDB | None:
    """Find the preferences holding a display name."""
    result = await session.execute(
        select(UserPreferencesDB).where(UserPreferencesDB.display_name == display_name)
    )
    return result.scalar_one_or_none()


async def is_display_name_available(
    session: AsyncSession, user_id: str, display_name: str
) -> bool:
    """A name is available when nobody else holds it."""
    holder = await find_by_display_name(session, display_name)
    return holder is None or holder.user_id == user_id


async def update_preferences(
    session: AsyncSession,
    user_id: str,
    display_name: str | None = None,
    profile_picture_url: str | None = None,
    show_on_leaderboard: bool | None = None,
) -> UserPreferencesDB:
    """
    Update a user's preferences, creating them if needed.

    Arguments left as None are not changed. Display name uniqueness is the
    caller's responsibility (see is_display_name_available).
    """
    preferences, _ = await get_or_create_preferences(session, user_id)

    if display_name is not None:
        preferences.display_name = display_name
    if profile_picture_url is not None:
        preferences.profile_picture_url = profile_picture_url
    if show_on_leaderboard is not None:
        preferences.show_on_leaderboard = show_on_leaderboard

    await session.flush()
    return preferences


async def get_leaderboard_participants(session: AsyncSession) -> list[UserPreferencesDB]:
    """Preferences of every user who opted in to the leaderboard."""
    result = await session.execute(
        select(UserPreferencesDB).where(UserPreferencesDB.show_on_leaderboard.is_(True))
    )
    return list(result.scalars().all())

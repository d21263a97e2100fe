from prizecheck.db.database import get_session, init_db
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

__all__ = [
    "create_decklist",
    "delete_decklist",
    "find_by_display_name",
    "get_decklist",
    "get_game_session",
    "get_leaderboard_participants",
    "get_or_create_preferences",
    "get_preferences",
    "get_session",
    "init_db",
    "is_display_name_available",
    "list_decklists",
    "list_game_sessions",
    "list_sessions_for_users",
    "record_game_session",
    "rename_decklist",
    "session_to_record",
    "update_preferences",
]

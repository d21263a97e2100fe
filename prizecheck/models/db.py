"""
SQLAlchemy ORM models for persistent storage.

Stores decklists, finished game sessions and per-user preferences.
"""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class DecklistDB(Base):
    """
    A saved decklist.

    The raw decklist text is stored as entered; it is parsed on use.
    """

    __tablename__ = "decklists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    name: Mapped[str] = mapped_column(String(255))
    cards: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<DecklistDB(id={self.id}, name={self.name})>"


class GameSessionDB(Base):
    """
    A finished prize-guessing game.

    Immutable once written; time_spent is in milliseconds.
    """

    __tablename__ = "game_sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    decklist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("decklists.id", ondelete="CASCADE"), index=True
    )
    guessed_cards: Mapped[list[str]] = mapped_column(JSON, default=list)
    actual_prizes: Mapped[list[str]] = mapped_column(JSON, default=list)
    correct_guesses: Mapped[int] = mapped_column(Integer)
    total_prizes: Mapped[int] = mapped_column(Integer, default=6)
    time_spent: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # Many-to-one only; load with selectinload when the deck name is needed
    decklist: Mapped["DecklistDB"] = relationship()

    def __repr__(self) -> str:
        return (
            f"<GameSessionDB(id={self.id}, score={self.correct_guesses}/{self.total_prizes})>"
        )


class UserPreferencesDB(Base):
    """Profile settings for a user."""

    __tablename__ = "user_preferences"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    display_name: Mapped[str | None] = mapped_column(
        String(100), unique=True, index=True, nullable=True
    )
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    show_on_leaderboard: Mapped[bool] = mapped_column(Boolean, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserPreferencesDB(user_id={self.user_id}, display_name={self.display_name})>"

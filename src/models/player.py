"""players table model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PlayerRow(Base):
    """Current rating state of one ladder player (one row per name)."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("number_of_games >= 0", name="ck_players_number_of_games"),
    )

    # The primary key is what keeps names unique.
    name: Mapped[str] = mapped_column(Text, primary_key=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    number_of_games: Mapped[int] = mapped_column(Integer, nullable=False)

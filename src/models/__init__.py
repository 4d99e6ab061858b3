"""ORM models."""

from models.base import Base
from models.player import PlayerRow

__all__ = [
    "Base",
    "PlayerRow",
]

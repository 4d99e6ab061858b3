"""Rating ladder domain modules."""

from domain.common import GameOutcome, GameRecord, Player, SideResult
from domain.errors import (
    LadderError,
    PlayerAlreadyExistsError,
    PlayerNotFoundError,
    SelfPlayError,
    StorageUnavailableError,
)
from domain.protocol import StoreBackend

__all__ = [
    "GameOutcome",
    "GameRecord",
    "LadderError",
    "Player",
    "PlayerAlreadyExistsError",
    "PlayerNotFoundError",
    "SelfPlayError",
    "SideResult",
    "StorageUnavailableError",
    "StoreBackend",
]

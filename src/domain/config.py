"""Load ladder settings from a TOML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
import tomllib

from db import DEFAULT_MAX_OVERFLOW, DEFAULT_POOL_SIZE, DEFAULT_POOL_TIMEOUT
from domain.elo.calculator import (
    DEFAULT_INITIAL_RATING,
    DEFAULT_K_FACTOR,
    DEFAULT_SCALE_FACTOR,
    EloParameters,
)
from domain.protocol import StoreBackend


@dataclass(frozen=True)
class StorageConfig:
    """Where players live and how many connections may be borrowed at once."""

    backend: StoreBackend = StoreBackend.MEMORY
    db_url: str | None = None
    pool_size: int = DEFAULT_POOL_SIZE
    max_overflow: int = DEFAULT_MAX_OVERFLOW
    pool_timeout: float = DEFAULT_POOL_TIMEOUT


@dataclass(frozen=True)
class LadderConfig:
    """Configuration for one ladder deployment."""

    name: str
    description: str | None
    file_path: Path | None
    parameters: EloParameters = field(default_factory=EloParameters)
    storage: StorageConfig = field(default_factory=StorageConfig)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "initial_rating": self.parameters.initial_rating,
            "k_factor": self.parameters.k_factor,
            "scale_factor": self.parameters.scale_factor,
            "backend": self.storage.backend.value,
            "db_url": self.storage.db_url,
            "pool_size": self.storage.pool_size,
            "max_overflow": self.storage.max_overflow,
            "pool_timeout": self.storage.pool_timeout,
        }


def load_ladder_config(file_path: Path) -> LadderConfig:
    """Load and validate one ladder TOML config file."""
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return parse_ladder_config(raw, file_path)


def parse_ladder_config(raw: dict[str, Any], file_path: Path | None = None) -> LadderConfig:
    label = str(file_path) if file_path is not None else "<config>"
    ladder_raw = raw.get("ladder", {})
    elo_raw = raw.get("elo", {})
    storage_raw = raw.get("storage", {})

    name = str(ladder_raw.get("name", "default")).strip()
    if not name:
        raise ValueError(f"{label}: [ladder].name must not be empty")

    description_value = ladder_raw.get("description")
    description = None if description_value is None else str(description_value)

    parameters = EloParameters(
        initial_rating=int(elo_raw.get("initial_rating", DEFAULT_INITIAL_RATING)),
        k_factor=float(elo_raw.get("k_factor", DEFAULT_K_FACTOR)),
        scale_factor=float(elo_raw.get("scale_factor", DEFAULT_SCALE_FACTOR)),
    )
    _validate_parameters(label=label, parameters=parameters)

    backend_value = str(storage_raw.get("backend", StoreBackend.MEMORY.value)).strip().lower()
    try:
        backend = StoreBackend(backend_value)
    except ValueError as exc:
        choices = ", ".join(member.value for member in StoreBackend)
        raise ValueError(
            f"{label}: [storage].backend must be one of {choices}, got {backend_value!r}"
        ) from exc

    db_url_value = storage_raw.get("db_url")
    storage = StorageConfig(
        backend=backend,
        db_url=None if db_url_value is None else str(db_url_value),
        pool_size=int(storage_raw.get("pool_size", DEFAULT_POOL_SIZE)),
        max_overflow=int(storage_raw.get("max_overflow", DEFAULT_MAX_OVERFLOW)),
        pool_timeout=float(storage_raw.get("pool_timeout", DEFAULT_POOL_TIMEOUT)),
    )
    _validate_storage(label=label, storage=storage)

    return LadderConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        storage=storage,
    )


def _validate_parameters(*, label: str, parameters: EloParameters) -> None:
    if parameters.initial_rating <= 0:
        raise ValueError(f"{label}: [elo].initial_rating must be > 0")
    if parameters.k_factor <= 0.0:
        raise ValueError(f"{label}: [elo].k_factor must be > 0")
    if parameters.scale_factor <= 0.0:
        raise ValueError(f"{label}: [elo].scale_factor must be > 0")


def _validate_storage(*, label: str, storage: StorageConfig) -> None:
    if storage.backend is not StoreBackend.MEMORY and not storage.db_url:
        raise ValueError(f"{label}: [storage].db_url is required for backend {storage.backend.value!r}")
    if storage.pool_size <= 0:
        raise ValueError(f"{label}: [storage].pool_size must be > 0")
    if storage.max_overflow < 0:
        raise ValueError(f"{label}: [storage].max_overflow must be >= 0")
    if storage.pool_timeout <= 0.0:
        raise ValueError(f"{label}: [storage].pool_timeout must be > 0")


__all__ = ["LadderConfig", "StorageConfig", "load_ladder_config", "parse_ladder_config"]

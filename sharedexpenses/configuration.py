"""Mini README: Centralised configuration for the shared expense tracker.

Structure:
    * SharedExpensesSettings - Pydantic settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read the participant roster, where ledger data
    lives on disk, and which host/port the JSON interface binds to. Every field
    can be overridden with a ``SHARED_EXPENSES_`` prefixed environment variable
    or a local ``.env`` file. List fields such as the roster take JSON, e.g.
    ``SHARED_EXPENSES_ROSTER='["Ana", "Luis"]'``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ROSTER = ("Juan", "María", "Pedro")


class SharedExpensesSettings(BaseSettings):
    """Runtime configuration for the expense tracker."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level name (DEBUG, INFO, WARNING, ...).",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory where the JSON ledger store keeps its files.",
    )
    storage_namespace: str = Field(
        "shared-expenses",
        description="Prefix for the two ledger store keys (expenses and settled debts).",
        min_length=1,
    )
    roster: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ROSTER),
        description="Fixed, closed set of participants sharing expenses.",
    )
    seed_demo_expenses: bool = Field(
        False,
        description="Seed the demo expense fixtures when the store holds no expenses yet.",
    )
    report_period_days: int = Field(
        15,
        description="Number of days the report average is spread across.",
        ge=1,
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the JSON API to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the JSON API exposes.",
        ge=1,
        le=65535,
    )

    model_config = SettingsConfigDict(
        env_prefix="SHARED_EXPENSES_",
        env_file=".env",
        case_sensitive=False,
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("roster")
    @classmethod
    def _validate_roster(cls, value: List[str]) -> List[str]:
        """Strip names and reject empty or duplicated rosters."""

        names = [name.strip() for name in value]
        if not names or any(not name for name in names):
            raise ValueError("Roster must contain at least one non-empty name.")
        if len(set(names)) != len(names):
            raise ValueError("Roster names must be unique.")
        return names

    @property
    def expenses_key(self) -> str:
        return f"{self.storage_namespace}:expenses"

    @property
    def settled_key(self) -> str:
        return f"{self.storage_namespace}:settled"


@lru_cache()
def get_settings() -> SharedExpensesSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return SharedExpensesSettings()

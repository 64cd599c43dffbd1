"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache), single instance per process
    - Swap limits default to the protocol constants in core/domain_types

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box for local runs
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from swapmatch.core.domain_types import (
    MAX_COUNTER_OFFER_DEPTH,
    MAX_EXPIRATION_WINDOW,
    MAX_ITEMS_PER_SIDE,
    MAX_USER_SWAPS,
)
from swapmatch.core.swap_state import SwapLimits


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="SWAPMATCH_", case_sensitive=False,
    )

    # Escrow authority allowed to complete accepted swaps
    finalizer_identity: str = "deployer"

    # Swap limits
    max_items_per_side: int = Field(MAX_ITEMS_PER_SIDE, ge=1)
    max_counter_offer_depth: int = Field(MAX_COUNTER_OFFER_DEPTH, ge=0)
    max_expiration_window: int = Field(MAX_EXPIRATION_WINDOW, ge=1)
    max_user_swaps: int = Field(MAX_USER_SWAPS, ge=1)

    # Logical clock starting height for the manual clock
    initial_block_height: int = Field(0, ge=0)

    # Events kept in memory for GET /events
    event_log_size: int = Field(1000, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("finalizer_identity")
    @classmethod
    def strip_finalizer(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("finalizer_identity cannot be empty")
        return v

    @property
    def swap_limits(self) -> SwapLimits:
        return SwapLimits(
            max_items_per_side=self.max_items_per_side,
            max_counter_offer_depth=self.max_counter_offer_depth,
            max_expiration_window=self.max_expiration_window,
            max_user_swaps=self.max_user_swaps,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()

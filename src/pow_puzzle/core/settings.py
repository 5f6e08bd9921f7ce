"""Application settings and configuration.

Settings are loaded from environment variables (or an `.env` file) with
sensible defaults. They only feed the command-line tooling and
`SolveParams.from_settings()`; builders never fall back to them.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Proof-of-work settings loaded from environment variables."""

    # Hashing and difficulty
    hash_algorithm: str = Field(default="sha256", alias="POW_HASH_ALGORITHM")
    leading_zero_bit_count: int = Field(default=16, ge=0, alias="POW_LEADING_ZERO_BIT_COUNT")
    hash_data_layout: str = Field(
        default="{leading_zero_bit_count}:{payload}:{nonce}",
        alias="POW_HASH_DATA_LAYOUT",
    )

    # Mining limits
    max_attempt_count: int | None = Field(default=None, ge=0, alias="POW_MAX_ATTEMPT_COUNT")
    random_nonce_min: int = Field(default=0, alias="POW_RANDOM_NONCE_MIN")
    random_nonce_max: int = Field(default=2**64, alias="POW_RANDOM_NONCE_MAX")

    # Challenge lifetime
    challenge_ttl_seconds: int = Field(default=300, ge=0, alias="POW_CHALLENGE_TTL_SECONDS")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def normalize_hash_algorithm(cls, value: str) -> str:
        """Hash names are matched case-insensitively."""
        return value.strip().lower()

    @model_validator(mode="after")
    def check_random_nonce_range(self) -> "Settings":
        """Reject an empty random nonce range early."""
        if self.random_nonce_max <= self.random_nonce_min:
            raise ValueError("POW_RANDOM_NONCE_MAX must be greater than POW_RANDOM_NONCE_MIN")
        return self


settings = Settings()

from __future__ import annotations
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Default digest for trees created without an explicit hash function
    hash_algorithm: str = Field(default="sha256", alias="MERKLE_HASH_ALGORITHM")

    log_level: str = Field(default="INFO", alias="MERKLE_LOG_LEVEL")

    # Largest file the CLI will read as a single data block (bytes)
    max_block_bytes: int = Field(default=16 * 1024 * 1024, alias="MERKLE_MAX_BLOCK_BYTES")


settings = Settings()  # load at import

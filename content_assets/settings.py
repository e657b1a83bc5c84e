"""Core configuration settings for asset storage.

@public

This module provides centralized configuration management for Content Assets,
handling the locations of the stores and the defaults used when writing.
Settings are loaded from environment variables with .env file support via
pydantic-settings.

Environment variables:
    ASSETS_LOOSE_PATH: Base directory of the loose files store
    ASSETS_ARCHIVE_PATH: Directory holding pre-built archive files
    ASSETS_HASH_KIND: Hash kind used by new writers (default "blake2b")
    ASSETS_COPY_CHUNK_SIZE: Chunk size in bytes for streaming copies

Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values

Example:
    >>> from content_assets.settings import settings
    >>>
    >>> print(settings.assets_loose_path)
    >>> print(settings.assets_hash_kind)

Note:
    Settings are loaded once at module import and frozen. The process must be
    restarted to pick up changes to environment variables or .env file.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from content_assets.digests import HashKind


class Settings(BaseSettings):
    """Configuration for asset stores.

    @public

    Attributes:
        assets_loose_path: Base directory of the loose files store. Empty
                           means not configured.

        assets_archive_path: Directory scanned for archive files. Empty
                             means not configured.

        assets_hash_kind: Canonical name of the hash kind used by writers.
                          Must name a known HashKind.

        assets_copy_chunk_size: Read size used by put_stream and the CLI
                                when copying from a file object.

    Example:
        >>> s = Settings(assets_loose_path="/var/lib/assets")
        >>> s.hash_kind
        <HashKind.BLAKE2B: 'blake2b'>
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Store locations
    assets_loose_path: str = ""
    assets_archive_path: str = ""

    # Writing
    assets_hash_kind: str = HashKind.default().value
    assets_copy_chunk_size: int = 65536

    @field_validator("assets_hash_kind")
    @classmethod
    def validate_hash_kind(cls, value: str) -> str:
        """Reject names that don't map to a HashKind."""
        return HashKind.from_name(value).value

    @field_validator("assets_copy_chunk_size")
    @classmethod
    def validate_chunk_size(cls, value: int) -> int:
        """Chunk size must be positive."""
        if value <= 0:
            raise ValueError(f"assets_copy_chunk_size must be positive, got {value}")
        return value

    @property
    def hash_kind(self) -> HashKind:
        """Configured hash kind as an enum member."""
        return HashKind(self.assets_hash_kind)


settings = Settings()
"""Global settings instance.

@public

Access this instance rather than creating new Settings objects.
"""

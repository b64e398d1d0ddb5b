"""Configuration management for derbyjson with safe library defaults."""

from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(str, Enum):
    """Log renderer selection."""
    JSON = "json"
    TEXT = "text"
    STRUCTURED = "structured"


class UnknownFieldPolicy(str, Enum):
    """What decode does with keys the schema does not declare."""
    PRESERVE = "preserve"
    FORBID = "forbid"

    @classmethod
    def _missing_(cls, value):
        """Accept a few common spellings."""
        if isinstance(value, str):
            v_lower = value.strip().lower()
            if v_lower in ('allow', 'keep'):
                return cls.PRESERVE
            if v_lower in ('strict', 'deny'):
                return cls.FORBID
        return None


class DerbyJSONSettings(BaseSettings):
    """Settings for the schema mapper.

    Environment variables use the ``DERBYJSON_`` prefix, e.g.
    ``DERBYJSON_UNKNOWN_FIELDS=forbid``. A ``.env`` file is read if present.
    """

    model_config = SettingsConfigDict(
        env_prefix='DERBYJSON_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = Field(default='WARNING', description='Logging level')
    LOG_FORMAT: LogFormat = Field(
        default=LogFormat.TEXT,
        description='Log format: json, text, or structured'
    )

    # ===================
    # Decoding
    # ===================
    UNKNOWN_FIELDS: UnknownFieldPolicy = Field(
        default=UnknownFieldPolicy.PRESERVE,
        description='Keep unknown keys (preserve) or reject them (forbid)'
    )
    CHECK_VERSION: bool = Field(
        default=True,
        description='Reject documents whose "version" is not a supported format version'
    )

    # ===================
    # Encoding
    # ===================
    VALIDATE_ON_ENCODE: bool = Field(
        default=True,
        description='Re-validate value trees before serializing them'
    )
    ENCODE_INDENT: Optional[int] = Field(
        default=None,
        ge=0,
        description='Indent width for encoded JSON; compact output when unset'
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator('UNKNOWN_FIELDS', mode='before')
    @classmethod
    def validate_unknown_fields(cls, v) -> UnknownFieldPolicy:
        """Normalize the unknown-field policy, accepting a few common spellings."""
        if isinstance(v, str):
            v = v.strip().lower()
        try:
            return UnknownFieldPolicy(v)
        except ValueError:
            raise ValueError(f"UNKNOWN_FIELDS must be preserve or forbid (got: {v})") from None

    def is_strict(self) -> bool:
        """Check if unknown fields are rejected."""
        return self.UNKNOWN_FIELDS == UnknownFieldPolicy.FORBID


@lru_cache()
def get_settings() -> DerbyJSONSettings:
    """Get cached settings.

    Loads settings from:
    1. Environment variables
    2. .env file (if exists)
    3. Default values

    Returns:
        DerbyJSONSettings: Cached settings instance
    """
    return DerbyJSONSettings()

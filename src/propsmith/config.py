"""Configuration management for PropSmith."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .placeholders import PlaceholderResolver

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


def _parse_separator() -> Optional[str]:
    """Parse the value separator; an empty string disables defaults."""
    separator = os.getenv("VALUE_SEPARATOR", ":")
    return separator or None


def _parse_max_depth() -> Optional[int]:
    """Parse the optional recursion limit."""
    max_depth = os.getenv("PLACEHOLDER_MAX_DEPTH")
    if max_depth:
        return int(max_depth)
    return None


class Settings(BaseModel):
    """Application settings."""

    # Placeholder syntax
    placeholder_prefix: str = os.getenv("PLACEHOLDER_PREFIX", "${")
    placeholder_suffix: str = os.getenv("PLACEHOLDER_SUFFIX", "}")
    value_separator: Optional[str] = _parse_separator()

    # Resolution policy
    ignore_unresolvable: bool = os.getenv("IGNORE_UNRESOLVABLE", "true").lower() == "true"
    max_depth: Optional[int] = _parse_max_depth()  # Unset means unlimited nesting

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def build_resolver(self, **overrides) -> PlaceholderResolver:
        """Create a PlaceholderResolver from these settings, with optional overrides."""
        options = {
            "prefix": self.placeholder_prefix,
            "suffix": self.placeholder_suffix,
            "separator": self.value_separator,
            "ignore_unresolvable": self.ignore_unresolvable,
            "max_depth": self.max_depth,
        }
        options.update(overrides)
        return PlaceholderResolver(**options)


settings = Settings()

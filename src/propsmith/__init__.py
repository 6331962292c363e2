"""PropSmith - recursive ${placeholder} resolution for configuration text."""

from .placeholders import (
    PlaceholderResolver,
    PlaceholderError,
    InvalidConfigError,
    CircularReferenceError,
    UnresolvablePlaceholderError,
    MaxDepthExceededError,
    replace_placeholders,
)

__version__ = "0.1.0"

__all__ = [
    "PlaceholderResolver",
    "PlaceholderError",
    "InvalidConfigError",
    "CircularReferenceError",
    "UnresolvablePlaceholderError",
    "MaxDepthExceededError",
    "replace_placeholders",
]

"""Placeholder resolution engine.

This module provides functionality to find placeholders (like ${name} or
${name:default}) in text and replace them with values supplied by a lookup,
resolving nested keys and values recursively.
"""

from .models import (
    Placeholder,
    PlaceholderConfig,
    ValidationResult,
    PlaceholderError,
    InvalidConfigError,
    CircularReferenceError,
    UnresolvablePlaceholderError,
    MaxDepthExceededError,
)
from .parser import PlaceholderParser
from .resolver import (
    PlaceholderLookup,
    PlaceholderResolver,
    as_lookup,
    replace_placeholders,
)
from .syntax import PLACEHOLDER_PREFIX, PLACEHOLDER_SUFFIX, VALUE_SEPARATOR

__all__ = [
    "Placeholder",
    "PlaceholderConfig",
    "ValidationResult",
    "PlaceholderError",
    "InvalidConfigError",
    "CircularReferenceError",
    "UnresolvablePlaceholderError",
    "MaxDepthExceededError",
    "PlaceholderParser",
    "PlaceholderLookup",
    "PlaceholderResolver",
    "as_lookup",
    "replace_placeholders",
    "PLACEHOLDER_PREFIX",
    "PLACEHOLDER_SUFFIX",
    "VALUE_SEPARATOR",
]

"""Placeholder syntax definitions and marker helpers."""

from typing import Optional

# Standard ${name:default} syntax
PLACEHOLDER_PREFIX = "${"
PLACEHOLDER_SUFFIX = "}"
VALUE_SEPARATOR = ":"

# Closing bracket -> opening bracket used to balance nested placeholders
WELL_KNOWN_SIMPLE_PREFIXES: dict[str, str] = {
    "}": "{",
    "]": "[",
    ")": "(",
}


def derive_simple_prefix(prefix: str, suffix: str) -> str:
    """
    Work out the token that opens a nested placeholder.

    When the suffix is a well-known closing bracket and the prefix ends with
    the matching opening bracket, nesting is tracked on that single bracket,
    so "${a{b}}" balances even though "{b}" is not a full placeholder.
    Otherwise the whole prefix is used.

    Args:
        prefix: The placeholder prefix (e.g. "${")
        suffix: The placeholder suffix (e.g. "}")

    Returns:
        The simple prefix used for nesting detection
    """
    opening = WELL_KNOWN_SIMPLE_PREFIXES.get(suffix)
    if opening is not None and prefix.endswith(opening):
        return opening
    return prefix


def split_default(key: str, separator: Optional[str]) -> tuple[str, Optional[str]]:
    """Split a key at the first separator into (name, default)."""
    if not separator:
        return key, None
    index = key.find(separator)
    if index == -1:
        return key, None
    return key[:index], key[index + len(separator):]


def substring_match(text: str, index: int, token: str) -> bool:
    """Check whether *token* occurs in *text* starting exactly at *index*."""
    return text.startswith(token, index)

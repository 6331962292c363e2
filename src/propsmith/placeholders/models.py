"""Data models and errors for the placeholder engine."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .syntax import derive_simple_prefix


class PlaceholderConfig(BaseModel):
    """Immutable marker configuration shared by the parser and the resolver."""

    model_config = ConfigDict(frozen=True)

    prefix: str  # Marker starting a placeholder (e.g. "${")
    suffix: str  # Marker ending a placeholder (e.g. "}")
    separator: Optional[str] = None  # Splits key from inline default (e.g. ":")
    ignore_unresolvable: bool = True  # Leave unknown placeholders untouched
    max_depth: Optional[int] = None  # Recursion limit, None means unlimited
    simple_prefix: str = ""  # Derived from prefix/suffix, never set by callers

    @model_validator(mode="before")
    @classmethod
    def check_markers(cls, data):
        if isinstance(data, dict):
            prefix = data.get("prefix")
            suffix = data.get("suffix")
            if not prefix:
                raise InvalidConfigError("Placeholder prefix must not be empty")
            if not suffix:
                raise InvalidConfigError("Placeholder suffix must not be empty")
            max_depth = data.get("max_depth")
            if max_depth is not None and max_depth < 1:
                raise InvalidConfigError(f"max_depth must be at least 1, got {max_depth}")
            data = dict(data)
            data["simple_prefix"] = derive_simple_prefix(prefix, suffix)
        return data


class Placeholder(BaseModel):
    """A top-level placeholder span found in a piece of text."""

    key: str  # Raw text between prefix and suffix
    name: str  # Key before the first separator
    default: Optional[str] = None  # Inline default after the first separator
    syntax: str  # Full span including markers (e.g. "${port:8080}")
    start_pos: int = 0  # Index of the prefix
    end_pos: int = 0  # Index just past the suffix
    nested: bool = False  # Key itself contains placeholders


class ValidationResult(BaseModel):
    """Result of validating placeholder syntax."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class PlaceholderError(Exception):
    """Base class for placeholder resolution failures."""

    pass


class InvalidConfigError(PlaceholderError):
    """Raised when a resolver is built with empty markers or a bad limit."""

    pass


class CircularReferenceError(PlaceholderError):
    """Raised when a placeholder key re-enters its own expansion path."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Circular placeholder reference '{key}' in property definitions")


class UnresolvablePlaceholderError(PlaceholderError):
    """Raised in strict mode when a placeholder has no value and no default."""

    def __init__(self, key: str, text: str):
        self.key = key
        self.text = text
        super().__init__(f"Could not resolve placeholder '{key}' in value \"{text}\"")


class MaxDepthExceededError(PlaceholderError):
    """Raised when nested resolution goes deeper than the configured limit."""

    def __init__(self, depth: int, text: str):
        self.depth = depth
        self.text = text
        super().__init__(
            f"Placeholder nesting exceeded maximum depth of {depth} while resolving \"{text}\""
        )

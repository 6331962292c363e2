"""Recursive placeholder resolution engine."""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable

from .models import (
    CircularReferenceError,
    MaxDepthExceededError,
    PlaceholderConfig,
    UnresolvablePlaceholderError,
)
from .parser import PlaceholderParser
from .syntax import split_default

logger = logging.getLogger(__name__)


@runtime_checkable
class PlaceholderLookup(Protocol):
    """Strategy that supplies replacement values for placeholder names."""

    def resolve_placeholder(self, name: str) -> Optional[str]:
        """Return the value for *name*, or None if there is none."""
        ...


LookupLike = Union[PlaceholderLookup, Callable[[str], Optional[str]], Mapping]


def as_lookup(lookup: LookupLike) -> Callable[[str], Optional[str]]:
    """
    Adapt any supported lookup form to a plain ``name -> value`` callable.

    Whatever the form, non-string values are converted with ``str()`` and
    ``None`` counts as missing.
    """
    if isinstance(lookup, Mapping):
        fetch = lookup.get
    elif isinstance(lookup, PlaceholderLookup):
        fetch = lookup.resolve_placeholder
    elif callable(lookup):
        fetch = lookup
    else:
        raise TypeError(
            f"Unsupported lookup type {type(lookup).__name__}: expected a mapping, "
            "a callable or an object with resolve_placeholder()"
        )

    def _as_text(name: str) -> Optional[str]:
        value = fetch(name)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    return _as_text


class PlaceholderResolver:
    """
    Replace ``prefix...key...suffix`` placeholders with looked-up values.

    Keys and values are resolved recursively, so both "${a${b}}" and a value
    that itself contains placeholders work. A key seen again on its own
    expansion path raises CircularReferenceError. With a separator configured,
    "${name:default}" falls back to "default" when "name" has no value.

    Instances hold only immutable configuration and can be shared between
    threads.
    """

    def __init__(
        self,
        prefix: str,
        suffix: str,
        separator: Optional[str] = None,
        ignore_unresolvable: bool = True,
        max_depth: Optional[int] = None,
    ):
        """
        Initialize the resolver.

        Args:
            prefix: Marker that starts a placeholder (e.g. "${")
            suffix: Marker that ends a placeholder (e.g. "}")
            separator: Optional marker between a key and its default value
            ignore_unresolvable: Leave unresolvable placeholders as-is (True)
                or raise UnresolvablePlaceholderError (False)
            max_depth: Optional limit on nested resolution depth

        Raises:
            InvalidConfigError: If prefix or suffix is empty
        """
        self.config = PlaceholderConfig(
            prefix=prefix,
            suffix=suffix,
            separator=separator,
            ignore_unresolvable=ignore_unresolvable,
            max_depth=max_depth,
        )
        self.parser = PlaceholderParser(self.config)

    @classmethod
    def from_config(cls, config: PlaceholderConfig) -> "PlaceholderResolver":
        """Create a resolver from an existing configuration."""
        return cls(
            prefix=config.prefix,
            suffix=config.suffix,
            separator=config.separator,
            ignore_unresolvable=config.ignore_unresolvable,
            max_depth=config.max_depth,
        )

    @property
    def prefix(self) -> str:
        return self.config.prefix

    @property
    def suffix(self) -> str:
        return self.config.suffix

    @property
    def simple_prefix(self) -> str:
        return self.config.simple_prefix

    @property
    def separator(self) -> Optional[str]:
        return self.config.separator

    @property
    def ignore_unresolvable(self) -> bool:
        return self.config.ignore_unresolvable

    def resolve(self, text: str, lookup: LookupLike) -> str:
        """
        Replace all placeholders in text with values from lookup.

        Args:
            text: The text containing placeholders
            lookup: Mapping, callable or PlaceholderLookup supplying values

        Returns:
            The text with placeholders replaced

        Raises:
            CircularReferenceError: If a placeholder refers back to itself
            UnresolvablePlaceholderError: If strict and a placeholder has no value
            MaxDepthExceededError: If nesting exceeds the configured max_depth
        """
        if text is None:
            raise TypeError("text must not be None")
        return self._parse_string_value(text, as_lookup(lookup), None, 0)

    # Alias matching the traditional helper name
    replace_placeholders = resolve

    def resolve_nested(self, value: Any, lookup: LookupLike) -> Any:
        """
        Resolve every string inside a nested structure of dicts, lists and tuples.

        Non-string leaves are returned unchanged. Dict keys are not resolved.
        """
        resolve_fn = as_lookup(lookup)

        def _walk(item: Any) -> Any:
            if isinstance(item, str):
                return self._parse_string_value(item, resolve_fn, None, 0)
            if isinstance(item, dict):
                return {k: _walk(v) for k, v in item.items()}
            if isinstance(item, list):
                return [_walk(v) for v in item]
            if isinstance(item, tuple):
                return tuple(_walk(v) for v in item)
            return item

        return _walk(value)

    def _parse_string_value(
        self,
        value: str,
        lookup: Callable[[str], Optional[str]],
        visited: Optional[set[str]],
        depth: int,
    ) -> str:
        prefix = self.config.prefix
        suffix = self.config.suffix

        start_index = value.find(prefix)
        if start_index == -1:
            return value

        max_depth = self.config.max_depth
        if max_depth is not None and depth > max_depth:
            raise MaxDepthExceededError(max_depth, value)

        result = value
        while start_index != -1:
            end_index = self.parser.find_placeholder_end(result, start_index)
            if end_index == -1:
                # Unterminated prefix is literal text
                start_index = result.find(prefix, start_index + len(prefix))
                continue

            original_placeholder = result[start_index + len(prefix):end_index]
            if visited is None:
                visited = set()
            if original_placeholder in visited:
                raise CircularReferenceError(original_placeholder)
            visited.add(original_placeholder)

            placeholder = self._parse_string_value(
                original_placeholder, lookup, visited, depth + 1
            )

            prop_value = lookup(placeholder)
            if prop_value is None and self.config.separator:
                actual_placeholder, default_value = split_default(
                    placeholder, self.config.separator
                )
                if default_value is not None:
                    prop_value = lookup(actual_placeholder)
                    if prop_value is None:
                        prop_value = default_value

            if prop_value is not None:
                prop_value = self._parse_string_value(prop_value, lookup, visited, depth + 1)
                result = result[:start_index] + prop_value + result[end_index + len(suffix):]
                logger.debug(f"Resolved placeholder '{placeholder}'")
                start_index = result.find(prefix, start_index + len(prop_value))
            elif self.config.ignore_unresolvable:
                start_index = result.find(prefix, end_index + len(suffix))
            else:
                raise UnresolvablePlaceholderError(placeholder, value)

            visited.remove(original_placeholder)

        return result


def replace_placeholders(
    text: str,
    lookup: LookupLike,
    prefix: str = "${",
    suffix: str = "}",
    separator: Optional[str] = ":",
    ignore_unresolvable: bool = True,
) -> str:
    """
    Resolve placeholders in text with a one-off resolver.

    Convenience wrapper for callers that do not keep a resolver around.
    """
    resolver = PlaceholderResolver(
        prefix=prefix,
        suffix=suffix,
        separator=separator,
        ignore_unresolvable=ignore_unresolvable,
    )
    return resolver.resolve(text, lookup)

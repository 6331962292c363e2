"""Ordered property source chains and a placeholder-aware property lookup."""

import logging
from typing import Iterator, Optional

from ..placeholders import PlaceholderResolver
from ..placeholders.syntax import PLACEHOLDER_PREFIX, PLACEHOLDER_SUFFIX, VALUE_SEPARATOR
from .base import PropertySource

logger = logging.getLogger(__name__)


class PropertySources:
    """
    Ordered collection of property sources searched first to last.

    Source names are unique; adding a source with an existing name replaces
    the old one at the new position. The first source that returns a value
    wins.
    """

    def __init__(self, sources: Optional[list[PropertySource]] = None):
        self._sources: list[PropertySource] = []
        for source in sources or []:
            self.add_last(source)

    def add_first(self, source: PropertySource) -> None:
        """Add a source with the highest precedence."""
        self._remove_if_present(source.name)
        self._sources.insert(0, source)

    def add_last(self, source: PropertySource) -> None:
        """Add a source with the lowest precedence."""
        self._remove_if_present(source.name)
        self._sources.append(source)

    def remove(self, name: str) -> Optional[PropertySource]:
        """Remove and return the source called *name*, if any."""
        return self._remove_if_present(name)

    def get(self, name: str) -> Optional[PropertySource]:
        """Return the source called *name*, if any."""
        for source in self._sources:
            if source.name == name:
                return source
        return None

    def _remove_if_present(self, name: str) -> Optional[PropertySource]:
        for index, source in enumerate(self._sources):
            if source.name == name:
                return self._sources.pop(index)
        return None

    def get_property(self, name: str) -> Optional[str]:
        """Return the first value found for *name* across all sources."""
        for source in self._sources:
            value = source.get_property(name)
            if value is not None:
                logger.debug(f"Found key '{name}' in property source '{source.name}'")
                return value
        return None

    def resolve_placeholder(self, name: str) -> Optional[str]:
        return self.get_property(name)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[PropertySource]:
        return iter(list(self._sources))

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        names = ", ".join(source.name for source in self._sources)
        return f"PropertySources([{names}])"


class ResolvingPropertyLookup:
    """
    Property lookup whose values have their placeholders resolved.

    Values are resolved against the same sources they come from, so one
    property can refer to another ("url=${host}:${port}/api").
    """

    def __init__(
        self,
        sources: PropertySources,
        prefix: str = PLACEHOLDER_PREFIX,
        suffix: str = PLACEHOLDER_SUFFIX,
        separator: Optional[str] = VALUE_SEPARATOR,
    ):
        self.sources = sources
        self._lenient = PlaceholderResolver(prefix, suffix, separator, ignore_unresolvable=True)
        self._strict = PlaceholderResolver(prefix, suffix, separator, ignore_unresolvable=False)

    def get_property(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the resolved value for *name*, or *default* if it is missing."""
        value = self.sources.get_property(name)
        if value is None:
            return default
        return self._lenient.resolve(value, self.sources)

    def get_required_property(self, name: str) -> str:
        """Return the resolved value for *name*, raising KeyError if it is missing."""
        value = self.get_property(name)
        if value is None:
            raise KeyError(f"Required key '{name}' not found")
        return value

    def resolve_placeholders(self, text: str) -> str:
        """Resolve placeholders in text, leaving unresolvable ones untouched."""
        return self._lenient.resolve(text, self.sources)

    def resolve_required_placeholders(self, text: str) -> str:
        """Resolve placeholders in text, raising if any cannot be resolved."""
        return self._strict.resolve(text, self.sources)

    def resolve_placeholder(self, name: str) -> Optional[str]:
        return self.get_property(name)

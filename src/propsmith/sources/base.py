"""Base property source interface."""

from abc import ABC, abstractmethod
from typing import Optional


class PropertySource(ABC):
    """Abstract base class for named sources of property values."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("Property source name must not be empty")
        self.name = name

    @abstractmethod
    def get_property(self, name: str) -> Optional[str]:
        """Return the value for *name*, or None if this source has none."""
        pass

    @abstractmethod
    def property_names(self) -> list[str]:
        """Return the names of all properties this source knows about."""
        pass

    def contains_property(self, name: str) -> bool:
        """Check whether this source holds a value for *name*."""
        return self.get_property(name) is not None

    def resolve_placeholder(self, name: str) -> Optional[str]:
        """Lookup hook so a single source can be passed straight to a resolver."""
        return self.get_property(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

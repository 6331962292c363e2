"""Property sources that can back placeholder lookups."""

from .base import PropertySource
from .mapping import MapPropertySource, EnvironmentPropertySource, DotenvPropertySource
from .chain import PropertySources, ResolvingPropertyLookup

__all__ = [
    "PropertySource",
    "MapPropertySource",
    "EnvironmentPropertySource",
    "DotenvPropertySource",
    "PropertySources",
    "ResolvingPropertyLookup",
]

"""Property sources backed by in-memory mappings, the environment and .env files."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import dotenv_values

from .base import PropertySource

logger = logging.getLogger(__name__)


class MapPropertySource(PropertySource):
    """Property source reading from a mapping; values are converted with str()."""

    def __init__(self, name: str, source: Mapping[str, Any]):
        super().__init__(name)
        self.source = source

    def get_property(self, name: str) -> Optional[str]:
        value = self.source.get(name)
        if value is None:
            return None
        return str(value)

    def property_names(self) -> list[str]:
        return [str(key) for key in self.source.keys()]


class EnvironmentPropertySource(MapPropertySource):
    """
    Property source over process environment variables.

    Reads ``os.environ`` live unless an explicit mapping is given, so
    variables set after construction are still visible.
    """

    def __init__(self, name: str = "environment", environ: Optional[Mapping[str, str]] = None):
        super().__init__(name, environ if environ is not None else os.environ)


class DotenvPropertySource(MapPropertySource):
    """
    Property source loaded once from a .env file via python-dotenv.

    python-dotenv interpolation is switched off; ${...} references are left
    for the placeholder resolver.
    """

    def __init__(self, path: Union[str, Path], name: Optional[str] = None):
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"Env file not found: {self.path}")
        values = dotenv_values(self.path, interpolate=False)
        logger.debug(f"Loaded {len(values)} properties from {self.path}")
        super().__init__(name or f"dotenv:{self.path}", values)

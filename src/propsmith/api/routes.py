"""API routes for PropSmith."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..config import settings
from ..placeholders import (
    CircularReferenceError,
    InvalidConfigError,
    MaxDepthExceededError,
    PlaceholderResolver,
    UnresolvablePlaceholderError,
)
from ..sources import EnvironmentPropertySource, MapPropertySource, PropertySources

logger = logging.getLogger(__name__)

router = APIRouter()

# Global resolver built from settings
_placeholder_resolver: Optional[PlaceholderResolver] = None


def get_placeholder_resolver() -> PlaceholderResolver:
    """Get the global placeholder resolver instance."""
    global _placeholder_resolver
    if _placeholder_resolver is None:
        _placeholder_resolver = settings.build_resolver()
    return _placeholder_resolver


class SyntaxOverrides(BaseModel):
    """Optional per-request placeholder syntax."""

    prefix: Optional[str] = None
    suffix: Optional[str] = None
    separator: Optional[str] = None
    ignore_unresolvable: Optional[bool] = None

    def overrides(self) -> dict[str, Any]:
        # An explicit null separator disables defaults; other nulls are ignored
        overrides = {}
        for key in ("prefix", "suffix", "separator", "ignore_unresolvable"):
            if key not in self.model_fields_set:
                continue
            value = getattr(self, key)
            if value is None and key != "separator":
                continue
            overrides[key] = value
        return overrides


class PlaceholderParseRequest(SyntaxOverrides):
    """Request to parse placeholders from text."""

    text: str


class PlaceholderResolveRequest(SyntaxOverrides):
    """Request to resolve placeholders in text."""

    text: str
    properties: dict[str, Optional[str]] = Field(default_factory=dict)
    include_environment: bool = False


def _resolver_for(request: SyntaxOverrides) -> PlaceholderResolver:
    overrides = request.overrides()
    if not overrides:
        return get_placeholder_resolver()
    try:
        return settings.build_resolver(**overrides)
    except InvalidConfigError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "invalid_config", "message": str(e)},
        )


@router.get("/health")
async def health_check():
    """Health check endpoint with the active placeholder syntax."""
    return {
        "status": "ok",
        "service": "propsmith",
        "config": {
            "placeholder_prefix": settings.placeholder_prefix,
            "placeholder_suffix": settings.placeholder_suffix,
            "value_separator": settings.value_separator,
            "ignore_unresolvable": settings.ignore_unresolvable,
            "max_depth": settings.max_depth,
        },
    }


# Placeholder endpoints


@router.post("/placeholders/parse")
async def parse_placeholders(request: PlaceholderParseRequest):
    """
    Parse text and extract placeholders.

    Returns:
    - List of top-level placeholders with name and default value
    - Validation results (unterminated placeholders, empty names)
    """
    resolver = _resolver_for(request)
    parser = resolver.parser

    placeholders = parser.extract_placeholders(request.text)
    validation = parser.validate_syntax(request.text)

    return {
        "placeholders": [
            {
                "name": p.name,
                "key": p.key,
                "default": p.default,
                "syntax": p.syntax,
                "start_pos": p.start_pos,
                "end_pos": p.end_pos,
                "nested": p.nested,
            }
            for p in placeholders
        ],
        "validation": {
            "valid": validation.valid,
            "errors": validation.errors,
            "warnings": validation.warnings,
        },
    }


@router.post("/placeholders/resolve")
async def resolve_placeholders(request: PlaceholderResolveRequest):
    """
    Resolve placeholders in text against the given properties.

    Request properties take precedence over environment variables when
    include_environment is set.
    """
    resolver = _resolver_for(request)

    sources = PropertySources([MapPropertySource("request", request.properties)])
    if request.include_environment:
        sources.add_last(EnvironmentPropertySource())

    try:
        resolved = resolver.resolve(request.text, sources)
    except CircularReferenceError as e:
        logger.warning(f"Circular reference while resolving text: {e}")
        raise HTTPException(
            status_code=409,
            detail={"error": "circular_reference", "message": str(e), "key": e.key},
        )
    except UnresolvablePlaceholderError as e:
        logger.warning(f"Unresolvable placeholder: {e}")
        raise HTTPException(
            status_code=422,
            detail={"error": "unresolvable_placeholder", "message": str(e), "key": e.key},
        )
    except MaxDepthExceededError as e:
        logger.warning(f"Placeholder nesting too deep: {e}")
        raise HTTPException(
            status_code=422,
            detail={"error": "max_depth_exceeded", "message": str(e), "max_depth": e.depth},
        )

    return {
        "original": request.text,
        "resolved": resolved,
        "unresolved": [p.syntax for p in resolver.parser.extract_placeholders(resolved)],
    }

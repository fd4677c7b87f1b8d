"""Media utilities public API (re-exports)."""

from .negotiator import WILDCARD, FormatNegotiator, resolve_factory
from .types import (
    FactoryReference,
    FormatRegistryConfig,
    HandlerFactory,
    MediaType,
    media_type_key,
)

__all__ = [
    "FormatNegotiator",
    "FormatRegistryConfig",
    "MediaType",
    "HandlerFactory",
    "FactoryReference",
    "media_type_key",
    "resolve_factory",
    "WILDCARD",
]

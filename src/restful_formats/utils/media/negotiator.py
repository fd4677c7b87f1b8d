"""Response format negotiation.

This module provides the format negotiator: an ordered registry of MIME
type to handler factory, and the algorithm that picks one registered type
from a client's Accept-style preference string.

Matching is deliberately simple. Candidates are the comma-separated parts
of the preference string, tried left to right with no quality-factor
ordering. A candidate selects the first registered type it contains as a
substring, so ``application/json; charset=utf-8`` selects
``application/json``. A literal ``*/*`` candidate selects the default
(first registered) type, and so does an empty preference string.

Candidates are stripped of surrounding whitespace before the wildcard
comparison, so ``text/html, */*`` selects the default type the same way
``text/html,*/*`` does. Parameters still count: ``*/*;q=0.8`` is not the
wildcard, and a candidate that matches nothing never falls back to it.
"""

import importlib
import logging
from typing import Dict, List, Optional

from ...config.settings import Settings
from ...exceptions import ConfigurationError, UnsupportedMediaTypeError
from .types import FactoryReference, FormatRegistryConfig, HandlerFactory, media_type_key

logger = logging.getLogger(__name__)

WILDCARD = "*/*"


def resolve_factory(reference: FactoryReference) -> HandlerFactory:
    """Resolve a handler factory reference.

    :param reference: Callable factory, or an import path written as
                      ``package.module:Name`` or ``package.module.Name``
    :type reference: FactoryReference
    :return: Callable handler factory
    :rtype: HandlerFactory
    :raises ConfigurationError: If the import path cannot be resolved or
                                the reference is not callable
    """
    if isinstance(reference, str):
        path = reference.strip()
        if ":" in path:
            module_name, _, attr = path.partition(":")
        else:
            module_name, _, attr = path.rpartition(".")
        if not module_name or not attr:
            raise ConfigurationError(
                f"Invalid handler factory path: {reference!r}", setting="formats"
            )
        try:
            factory = getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError) as e:
            raise ConfigurationError(
                f"Handler factory {reference!r} does not exist: {e}",
                setting="formats",
            ) from e
    else:
        factory = reference

    if not callable(factory):
        raise ConfigurationError(
            f"Handler factory must be callable, got {type(factory).__name__}",
            setting="formats",
        )
    return factory


class FormatNegotiator:
    """Registry of response formats with Accept-style negotiation.

    The registry is meant to be configured at startup and only read while
    serving requests; it does no locking of its own.

    :param config: Initial registry content, the built-in formats when omitted
    :type config: Optional[FormatRegistryConfig]
    :raises ConfigurationError: If an initial entry cannot be resolved
    """

    def __init__(self, config: Optional[FormatRegistryConfig] = None):
        self._formats: Dict[str, HandlerFactory] = {}
        if config is None:
            config = FormatRegistryConfig()
        for mime_type, factory in config.formats.items():
            self.register(mime_type, factory)

    def register(self, mime_type: str, factory: FactoryReference) -> "FormatNegotiator":
        """Register a handler factory for a MIME type.

        Replaces any factory already registered for the type; the type
        keeps its original position in the registry.

        :param mime_type: MIME type the factory produces
        :type mime_type: str
        :param factory: Handler factory or import path to one
        :type factory: FactoryReference
        :return: The negotiator, for chaining
        :rtype: FormatNegotiator
        :raises ConfigurationError: If the MIME type is empty or the
                                    factory cannot be resolved
        """
        key = media_type_key(mime_type)
        if not isinstance(key, str) or not key.strip():
            raise ConfigurationError(
                f"MIME type must be a non-empty string, got {mime_type!r}",
                setting="formats",
            )
        self._formats[key] = resolve_factory(factory)
        logger.debug("Registered format: %s", key)
        return self

    def unregister(self, mime_type: str) -> None:
        """Remove a MIME type from the registry; unknown types are ignored.

        :param mime_type: MIME type to remove
        :type mime_type: str
        """
        key = media_type_key(mime_type)
        if self._formats.pop(key, None) is not None:
            logger.debug("Unregistered format: %s", key)

    @property
    def registered_types(self) -> List[str]:
        """Registered MIME types in registration order."""
        return list(self._formats)

    @property
    def default_type(self) -> Optional[str]:
        """The first registered MIME type, or None for an empty registry."""
        return next(iter(self._formats), None)

    def is_registered(self, mime_type: str) -> bool:
        """Return whether a MIME type is registered (exact match)."""
        return media_type_key(mime_type) in self._formats

    def __contains__(self, mime_type: object) -> bool:
        return self.is_registered(mime_type)

    def __len__(self) -> int:
        return len(self._formats)

    def resolve(self, accept: Optional[str], override: Optional[str] = None) -> str:
        """Resolve the MIME type to respond with.

        :param accept: Raw Accept-style preference string
        :type accept: Optional[str]
        :param override: Explicitly requested MIME type; when truthy it is
                         returned as-is without matching
        :type override: Optional[str]
        :return: Resolved MIME type
        :rtype: str
        :raises UnsupportedMediaTypeError: If no candidate matches a
                                           registered type
        """
        if override:
            logger.debug("Using override format: %s", override)
            return media_type_key(override)

        if not accept:
            return self._default_or_fail(accept)

        registered = self.registered_types
        for candidate in accept.split(","):
            candidate = candidate.strip()
            if candidate == WILDCARD:
                return self._default_or_fail(accept)
            for mime_type in registered:
                if mime_type in candidate:
                    logger.debug("Negotiated %s for Accept %r", mime_type, accept)
                    return mime_type

        raise UnsupportedMediaTypeError(f"Unknown Accept header: {accept}", accept=accept)

    def is_acceptable(self, accept: Optional[str]) -> bool:
        """Return whether a preference string resolves to a registered type.

        :param accept: Raw Accept-style preference string
        :type accept: Optional[str]
        :return: True if :meth:`resolve` would succeed without an override
        :rtype: bool
        """
        try:
            self.resolve(accept)
        except UnsupportedMediaTypeError:
            return False
        return True

    def get_factory(self, mime_type: str) -> HandlerFactory:
        """Return the factory registered for a MIME type.

        :param mime_type: Registered MIME type
        :type mime_type: str
        :return: Handler factory
        :rtype: HandlerFactory
        :raises UnsupportedMediaTypeError: If the type is not registered
        """
        key = media_type_key(mime_type)
        try:
            return self._formats[key]
        except KeyError:
            raise UnsupportedMediaTypeError(
                f"Unregistered format for {key}", accept=key
            ) from None

    def create_handler(self, mime_type: str, settings: Optional[Settings] = None):
        """Instantiate the format handler registered for a MIME type.

        :param mime_type: Registered MIME type
        :type mime_type: str
        :param settings: Settings passed to the factory
        :type settings: Optional[Settings]
        :return: Format handler
        :rtype: FormatHandler
        :raises UnsupportedMediaTypeError: If the type is not registered
        :raises ConfigurationError: If the factory fails to build a handler
        """
        factory = self.get_factory(mime_type)
        try:
            return factory(settings)
        except Exception as e:
            logger.warning("Handler factory for %s failed: %s", mime_type, e)
            raise ConfigurationError(
                f"Cannot create format handler for {mime_type}: {e}",
                setting="formats",
            ) from e

    def _default_or_fail(self, accept: Optional[str]) -> str:
        default = self.default_type
        if default is None:
            raise UnsupportedMediaTypeError(
                f"No formats registered to serve Accept header: {accept or ''}",
                accept=accept,
            )
        return default


__all__ = [
    "FormatNegotiator",
    "resolve_factory",
    "WILDCARD",
]

"""Media type names and format registry configuration.

This module names the built-in media types and defines the configuration
object a :class:`~restful_formats.utils.media.FormatNegotiator` is seeded
from. The configuration is an ordered mapping of MIME type to handler
factory; its first entry is the default format.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ...formats.base import FormatHandler

HandlerFactory = Callable[..., "FormatHandler"]
"""Callable building a format handler; called with the active settings."""

FactoryReference = Union[HandlerFactory, str]
"""A handler factory, or an import path (``package.module:Name``) to one."""


class MediaType(str, Enum):
    """MIME types of the built-in formats."""

    JSON = "application/json"
    JSONP = "application/javascript"
    QUERY = "application/x-www-form-urlencoded"
    XML = "application/xml"


def media_type_key(mime_type: Any) -> str:
    """Return the plain string form of a MIME type or :class:`MediaType`."""
    if isinstance(mime_type, Enum):
        return str(mime_type.value)
    return mime_type


def _builtin_formats() -> Dict[str, Any]:
    from ...formats import default_formats

    return default_formats()


class FormatRegistryConfig(BaseModel):
    """Initial content of a format registry.

    :param formats: Ordered mapping of MIME type to handler factory or
                    import path. The first entry is the default format.
    :type formats: Dict[str, Any]
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    formats: Dict[str, Any] = Field(
        default_factory=_builtin_formats,
        description="Ordered MIME type to handler factory entries",
    )

    @classmethod
    def empty(cls) -> "FormatRegistryConfig":
        """Return a configuration without any registered format."""
        return cls(formats={})


__all__ = [
    "MediaType",
    "HandlerFactory",
    "FactoryReference",
    "FormatRegistryConfig",
    "media_type_key",
]

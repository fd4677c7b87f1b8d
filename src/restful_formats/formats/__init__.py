"""Format handlers package.

This package contains the built-in wire formats. Each handler class is a
handler factory and can be registered directly with a
:class:`~restful_formats.utils.media.FormatNegotiator`.
"""

from typing import Dict

from ..utils.media.types import HandlerFactory, MediaType
from .base import FormatHandler
from .json import JsonFormat, JsonpFormat
from .query import QueryFormat
from .xml import XmlFormat


def default_formats() -> Dict[str, HandlerFactory]:
    """Return the built-in registry entries in priority order.

    JSON comes first and is therefore the default format.

    :return: Ordered mapping of MIME type to handler factory
    :rtype: Dict[str, HandlerFactory]
    """
    return {
        MediaType.JSON.value: JsonFormat,
        MediaType.JSONP.value: JsonpFormat,
        MediaType.QUERY.value: QueryFormat,
        MediaType.XML.value: XmlFormat,
    }


__all__ = [
    "FormatHandler",
    "JsonFormat",
    "JsonpFormat",
    "QueryFormat",
    "XmlFormat",
    "default_formats",
]

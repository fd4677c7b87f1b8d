"""Build HTTP responses from resources.

The response factory is the caller that composes negotiation and mapping
for every response: it reads the Accept header and the override query
parameters from the request, resolves a MIME type with the
:class:`~restful_formats.utils.media.FormatNegotiator`, and encodes the
resource with the handler registered for that type.

``httpx.Request`` and ``httpx.Response`` are used as plain data carriers;
nothing here sends or receives anything.
"""

import logging
from typing import Any, Dict, Optional, Type

import httpx

from ..config.settings import Settings
from ..config.settings import settings as default_settings
from ..exceptions import (
    ConfigurationError,
    InvalidInputError,
    MalformedDocumentError,
    MappingError,
    RestfulFormatsError,
    UnsupportedMediaTypeError,
)
from ..formats.json import JsonFormat
from ..utils.media import FormatNegotiator, MediaType
from .models import Resource

logger = logging.getLogger(__name__)

NO_CONTENT = 204

_OUTBOUND_STATUS: Dict[Type[RestfulFormatsError], int] = {
    UnsupportedMediaTypeError: 406,
    InvalidInputError: 500,
    MappingError: 500,
    ConfigurationError: 500,
}
_INBOUND_STATUS: Dict[Type[RestfulFormatsError], int] = {
    UnsupportedMediaTypeError: 415,
    MalformedDocumentError: 400,
    InvalidInputError: 400,
    MappingError: 400,
    ConfigurationError: 500,
}


def error_status(error: RestfulFormatsError, inbound: bool = False) -> int:
    """Classify an error as an HTTP status code.

    :param error: Error raised by negotiation or mapping
    :type error: RestfulFormatsError
    :param inbound: True when the error came from parsing a request body
    :type inbound: bool
    :return: HTTP status code
    :rtype: int
    """
    table = _INBOUND_STATUS if inbound else _OUTBOUND_STATUS
    for error_type in type(error).__mro__:
        if error_type in table:
            return table[error_type]
    return 500


class ResponseFactory:
    """Create API responses in the format the client asked for.

    :param negotiator: Format registry, the built-in formats when omitted
    :type negotiator: Optional[FormatNegotiator]
    :param settings: Settings for override keys and format options
    :type settings: Optional[Settings]
    """

    def __init__(
        self,
        negotiator: Optional[FormatNegotiator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.negotiator = negotiator if negotiator is not None else FormatNegotiator()
        self.jsonp_key = self.settings.jsonp_key
        self.pretty_print_key = self.settings.pretty_print_key
        self.pretty_print = self.settings.pretty_print

    def resolve_content_type(self, request: Optional[httpx.Request]) -> str:
        """Resolve the response MIME type for a request.

        A truthy value for the JSONP query key forces JSONP; otherwise the
        Accept header is negotiated.

        :param request: Incoming request, None negotiates an empty Accept
        :type request: Optional[httpx.Request]
        :return: MIME type
        :rtype: str
        :raises UnsupportedMediaTypeError: If the Accept header matches
                                           no registered format
        """
        if request is None:
            return self.negotiator.resolve(None)
        override = None
        if self.jsonp_key and request.url.params.get(self.jsonp_key):
            override = MediaType.JSONP.value
        return self.negotiator.resolve(request.headers.get("Accept"), override)

    def is_acceptable(self, accept: Optional[str]) -> bool:
        """Return whether an Accept header can be served."""
        return self.negotiator.is_acceptable(accept)

    def is_pretty_print(self, request: Optional[httpx.Request]) -> bool:
        """Return whether the response should be pretty printed.

        The query value ``false`` or ``true`` for the pretty print key
        wins over the configured default.
        """
        if request is not None and self.pretty_print_key:
            value = request.url.params.get(self.pretty_print_key)
            if value == "false":
                return False
            if value == "true":
                return True
        return self.pretty_print

    def create(
        self,
        resource: Resource,
        request: Optional[httpx.Request] = None,
        content_type: Optional[str] = None,
    ) -> httpx.Response:
        """Create the response for a resource.

        :param resource: Resource to respond with
        :type resource: Resource
        :param request: Incoming request used for negotiation
        :type request: Optional[httpx.Request]
        :param content_type: MIME type to use instead of negotiating
        :type content_type: Optional[str]
        :return: 204 response without data, else a 200 response with the
                 encoded resource
        :rtype: httpx.Response
        :raises UnsupportedMediaTypeError: If no registered format applies
        :raises ConfigurationError: If the format handler cannot be built
        :raises MappingError: If the resource cannot be encoded
        """
        if content_type is None:
            content_type = self.resolve_content_type(request)

        if not self.negotiator.is_registered(content_type):
            raise UnsupportedMediaTypeError(
                f"Unregistered API response for {content_type}", accept=content_type
            )

        if not resource.has_data():
            logger.debug("Resource has no data, responding with %d", NO_CONTENT)
            return httpx.Response(NO_CONTENT, request=request)

        handler = self.negotiator.create_handler(content_type, self.settings)
        options: Dict[str, Any] = {}
        if self.jsonp_key and request is not None:
            options["callback"] = request.url.params.get(self.jsonp_key)
        body = handler.encode(
            resource.data, pretty_print=self.is_pretty_print(request), **options
        )
        logger.debug("Created %s response (%d bytes)", content_type, len(body))
        return httpx.Response(
            200,
            headers={"Content-Type": f"{content_type}; charset=utf-8"},
            content=body,
            request=request,
        )

    def parse_request(self, request: httpx.Request) -> Any:
        """Decode a request body into a resource tree.

        The format is resolved from the request's Content-Type header the
        same way Accept headers are negotiated.

        :param request: Incoming request with a read body
        :type request: httpx.Request
        :return: Decoded resource tree, an empty dict for an empty body
        :rtype: Any
        :raises UnsupportedMediaTypeError: If the Content-Type is not registered
        :raises MalformedDocumentError: If the body cannot be parsed
        """
        content = request.content
        if not content:
            return {}
        content_type = self.negotiator.resolve(request.headers.get("Content-Type"))
        handler = self.negotiator.create_handler(content_type, self.settings)
        return handler.decode(content)

    def create_error(
        self,
        error: RestfulFormatsError,
        request: Optional[httpx.Request] = None,
        inbound: bool = False,
    ) -> httpx.Response:
        """Create a JSON error response for a negotiation or mapping error.

        :param error: Error to report
        :type error: RestfulFormatsError
        :param request: Request that failed
        :type request: Optional[httpx.Request]
        :param inbound: True when the error came from :meth:`parse_request`
        :type inbound: bool
        :return: Error response
        :rtype: httpx.Response
        """
        status = error_status(error, inbound)
        body = JsonFormat(self.settings).encode(
            error.to_dict(), pretty_print=self.is_pretty_print(request)
        )
        logger.info("Responding with %d: %s", status, error.message)
        return httpx.Response(
            status,
            headers={"Content-Type": f"{MediaType.JSON.value}; charset=utf-8"},
            content=body,
            request=request,
        )

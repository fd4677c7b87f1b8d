"""Define the format handler interface.

A format handler turns a resource tree into the bytes of one wire format
and back. Handlers are created per response by the factory registered for
their MIME type in the :class:`~restful_formats.utils.media.FormatNegotiator`;
a handler class is itself a valid factory since it is called with the
active settings.

Examples
--------
.. code-block:: python

   from restful_formats.formats.base import FormatHandler

   class PlainTextFormat(FormatHandler):
       content_type = "text/plain"

       def encode(self, data, pretty_print=True, **options):
           return str(data).encode("utf-8")

       def decode(self, payload):
           return self.payload_text(payload)

   negotiator.register("text/plain", PlainTextFormat)
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config.settings import Settings
from ..config.settings import settings as default_settings
from ..exceptions import MalformedDocumentError


class FormatHandler(ABC):
    """Provide the encode/decode contract for a wire format.

    :param settings: Settings to read format options from, the global
                     settings when omitted
    :type settings: Optional[Settings]
    """

    content_type: str = ""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    @abstractmethod
    def encode(self, data: Any, pretty_print: bool = True, **options: Any) -> bytes:
        """Serialize a resource tree.

        :param data: Resource tree to serialize
        :param pretty_print: Whether whitespace formatting is wanted
        :param options: Format-specific options (e.g. a JSONP callback)
        :return: Encoded payload
        """
        pass

    @abstractmethod
    def decode(self, payload: bytes) -> Any:
        """Parse a payload into a resource tree.

        :param payload: Encoded payload
        :return: Resource tree
        """
        pass

    def payload_text(self, payload: Any) -> str:
        """Return a payload as text, decoding bytes as UTF-8."""
        if isinstance(payload, str):
            return payload
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDocumentError(
                f"Payload is not valid UTF-8: {e.reason}", column=e.start + 1
            ) from e

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} content_type={self.content_type!r}>"

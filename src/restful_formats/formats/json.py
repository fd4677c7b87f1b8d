"""JSON and JSONP format handlers.

Encoding is delegated to the standard :mod:`json` codec. Pydantic models
found in the resource tree are dumped in JSON mode first.
"""

import json
import re
from typing import Any, Optional

from pydantic import BaseModel

from ..exceptions import InvalidInputError, MalformedDocumentError, MappingError
from ..utils.media.types import MediaType
from .base import FormatHandler

_CALLBACK_PATTERN = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonFormat(FormatHandler):
    """Encode and decode ``application/json`` payloads."""

    content_type = MediaType.JSON.value

    def dumps(self, data: Any, pretty_print: bool = True) -> str:
        """Serialize data to JSON text.

        :param data: Resource tree to serialize
        :type data: Any
        :param pretty_print: Indent with the configured JSON indent
        :type pretty_print: bool
        :return: JSON text
        :rtype: str
        :raises MappingError: If the data holds values JSON cannot carry
        """
        try:
            return json.dumps(
                data,
                indent=self.settings.json_indent if pretty_print else None,
                ensure_ascii=False,
                default=_default,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise MappingError(f"Cannot map data to JSON: {e}", original_error=e) from e

    def encode(self, data: Any, pretty_print: bool = True, **options: Any) -> bytes:
        return self.dumps(data, pretty_print).encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        text = self.payload_text(payload)
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedDocumentError(
                f"Input is not valid JSON document: {e.msg} on line {e.lineno}",
                line=e.lineno,
                column=e.colno,
            ) from e


class JsonpFormat(JsonFormat):
    """Wrap a JSON payload in a JavaScript callback call."""

    content_type = MediaType.JSONP.value

    def encode(
        self,
        data: Any,
        pretty_print: bool = True,
        callback: Optional[str] = None,
        **options: Any,
    ) -> bytes:
        """Serialize data as ``callback(<json>);``.

        :param data: Resource tree to serialize
        :type data: Any
        :param pretty_print: Indent the JSON body
        :type pretty_print: bool
        :param callback: JavaScript function name, dotted paths allowed
        :type callback: Optional[str]
        :return: JSONP payload
        :rtype: bytes
        :raises InvalidInputError: If the callback is missing or not a
                                   valid JavaScript identifier path
        """
        if not callback or not _CALLBACK_PATTERN.match(callback):
            raise InvalidInputError(
                f"Invalid JSONP callback: {callback!r}", value_type="callback"
            )
        body = self.dumps(data, pretty_print)
        return f"{callback}({body});".encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        raise MappingError("JSONP payloads cannot be decoded")

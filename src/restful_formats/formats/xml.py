"""XML format handler backed by :class:`~restful_formats.mapping.XmlTreeMapper`."""

from typing import Any, Optional

from ..config.settings import Settings
from ..mapping.xml import XmlTreeMapper
from ..utils.media.types import MediaType
from .base import FormatHandler


class XmlFormat(FormatHandler):
    """Encode and decode ``application/xml`` payloads.

    The root and item element names come from the settings
    (``xml_root_element`` and ``xml_item_element``).
    """

    content_type = MediaType.XML.value

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(settings)
        self.mapper = XmlTreeMapper(
            root_element=self.settings.xml_root_element,
            item_element=self.settings.xml_item_element,
        )

    def encode(self, data: Any, pretty_print: bool = True, **options: Any) -> bytes:
        return self.mapper.encode(data, pretty_print).encode("utf-8")

    def decode(self, payload: bytes) -> Any:
        return self.mapper.decode(payload)

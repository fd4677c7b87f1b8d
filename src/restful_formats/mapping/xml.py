"""Schema-less mapping between resource trees and XML.

A resource tree is a scalar, a list, or a mapping, nested arbitrarily.
Encoding turns mapping keys into element names and repeats the element
named by the nearest mapping key for every list item, so that a list has
no wrapper element of its own::

    {"name": "a", "tags": ["x", "y"]}

    <root><name>a</name><tags>x</tags><tags>y</tags></root>

Decoding reverses the transform without a schema: sibling elements that
share a tag become a list, a single element becomes a scalar or a nested
mapping. Attributes are not part of the resource tree and are dropped.
The round trip is lossy: scalar types are not preserved, a list with one
item comes back as a scalar, and an empty container comes back as an
empty string.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from lxml import etree
from pydantic import BaseModel

from ..exceptions import (
    ConfigurationError,
    InvalidInputError,
    MalformedDocumentError,
    MappingError,
)

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DEFAULT_ROOT_ELEMENT = "root"
ITEM_ELEMENT = "item"

_TEXT_TYPES = (str, bytes, bytearray)


def as_tree(value: Any) -> Any:
    """Return pydantic models as plain JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value


def _is_positional(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def is_container(value: Any) -> bool:
    """Return whether a value is a mapping or a (non-text) sequence."""
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def is_list(value: Any) -> bool:
    """Return whether a value is encoded as repeated sibling elements.

    Sequences are lists. A non-empty mapping whose keys are exactly the
    positions ``0..n-1`` in order is a list as well.

    :param value: Value to classify
    :type value: Any
    :return: True if the value is list-like
    :rtype: bool
    """
    if isinstance(value, Mapping):
        return bool(value) and all(
            _is_positional(key) and key == index for index, key in enumerate(value)
        )
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def iter_entries(value: Any) -> Iterable[Tuple[Any, Any]]:
    """Yield (key, value) pairs of a mapping or (index, item) pairs of a sequence."""
    if isinstance(value, Mapping):
        return value.items()
    return enumerate(value)


def scalar_to_text(value: Any) -> Optional[str]:
    """Render a scalar as text; None has no text, booleans are lowercase."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


class XmlTreeMapper:
    """Encode resource trees to XML text and decode XML text to trees.

    The mapper holds only its element names, every call builds its own
    document, so one instance can be shared between threads.

    :param root_element: Name of the document root, None to omit it
    :type root_element: Optional[str]
    :param item_element: Name used for items of a list that has no parent key
    :type item_element: str
    """

    def __init__(
        self,
        root_element: Optional[str] = DEFAULT_ROOT_ELEMENT,
        item_element: str = ITEM_ELEMENT,
    ):
        self.root_element = root_element
        self.item_element = item_element

    @property
    def root_element(self) -> Optional[str]:
        """Name of the document root element, or None when disabled."""
        return self._root_element

    @root_element.setter
    def root_element(self, value: Optional[str]) -> None:
        if value is not None and not isinstance(value, str):
            raise ConfigurationError(
                "Root element must be of type string or None if disabled",
                setting="xml_root_element",
            )
        # An empty name disables the root like None does.
        self._root_element = value or None

    def encode(self, data: Any, pretty_print: bool = True) -> str:
        """Serialize a resource tree to XML text.

        With a root element the result is a complete document starting
        with an XML declaration. Without one, the top-level children are
        serialized back to back as a fragment.

        :param data: Mapping or sequence to serialize
        :type data: Any
        :param pretty_print: Indent the output
        :type pretty_print: bool
        :return: XML text
        :rtype: str
        :raises InvalidInputError: If data is not a mapping or a sequence
        :raises MappingError: If a key is not a valid element name or a
                              value cannot be carried by XML
        """
        data = as_tree(data)
        if not is_container(data):
            raise InvalidInputError(
                "Data must be a mapping or a sequence",
                value_type=type(data).__name__,
            )

        try:
            container = etree.Element(self._root_element or self.item_element)
            self._to_xml(data, container, self.item_element)
        except (ValueError, TypeError, RecursionError) as e:
            raise MappingError(f"Cannot map data to XML: {e}", original_error=e) from e

        if self._root_element is None:
            return "".join(
                etree.tostring(child, encoding="unicode", pretty_print=pretty_print)
                for child in container
            )
        body = etree.tostring(container, encoding="unicode", pretty_print=pretty_print)
        return f"{XML_DECLARATION}\n{body}"

    def decode(self, text: Union[str, bytes]) -> Any:
        """Parse XML text into a resource tree.

        The root element's own tag is not part of the result. An element
        without child elements becomes its text (an empty string if it
        has none); an element with children becomes a mapping, with
        repeated tags collapsed into lists. A bare empty root, with no
        text and no attributes, is an empty mapping.

        A str document is parsed as the text it already is, any encoding
        named in its XML declaration is ignored.

        :param text: XML document
        :type text: Union[str, bytes]
        :return: Decoded resource tree
        :rtype: Any
        :raises InvalidInputError: If text is neither str nor bytes
        :raises MalformedDocumentError: If text is not well-formed XML
        :raises MappingError: If the parsed document cannot be converted
        """
        encoding = None
        if isinstance(text, str):
            payload = text.encode("utf-8")
            encoding = "utf-8"
        elif isinstance(text, (bytes, bytearray)):
            payload = bytes(text)
        else:
            raise InvalidInputError(
                "XML input must be str or bytes", value_type=type(text).__name__
            )

        if not payload.strip():
            raise MalformedDocumentError(
                "Input is not valid XML document: Document is empty on line 1",
                line=1,
                column=1,
            )

        parser = etree.XMLParser(
            remove_comments=True,
            remove_pis=True,
            resolve_entities=False,
            no_network=True,
            encoding=encoding,
        )
        try:
            root = etree.fromstring(payload, parser)
        except etree.XMLSyntaxError as e:
            message = e.msg or str(e)
            raise MalformedDocumentError(
                f"Input is not valid XML document: {message} on line {e.lineno}",
                line=e.lineno,
                column=e.offset,
            ) from e

        if not len(root) and not root.attrib and not root.text:
            logger.debug("Decoded empty XML document with root <%s>", root.tag)
            return {}

        try:
            result = self._from_xml(root)
        except (ValueError, TypeError, RecursionError) as e:
            raise MappingError(
                f"Error in parsing XML document: {e}", original_error=e
            ) from e
        logger.debug("Decoded XML document with root <%s>", root.tag)
        return result

    def _to_xml(self, data: Any, parent: etree._Element, inherited_tag: str) -> None:
        data = as_tree(data)
        if not is_container(data):
            parent.text = scalar_to_text(data)
            return

        for key, value in iter_entries(data):
            value = as_tree(value)
            if _is_positional(key):
                node = etree.SubElement(parent, inherited_tag)
                tag = inherited_tag
            else:
                tag = str(key)
                # Lists are flattened into siblings named after their key.
                node = parent if is_list(value) else etree.SubElement(parent, tag)
            self._to_xml(value, node, tag)

    def _from_xml(self, element: etree._Element) -> Any:
        children = [child for child in element if isinstance(child.tag, str)]
        if not children:
            return element.text or ""

        grouped: Dict[str, List[Any]] = {}
        for child in children:
            tag = etree.QName(child).localname
            grouped.setdefault(tag, []).append(self._from_xml(child))
        return {
            tag: values[0] if len(values) == 1 else values
            for tag, values in grouped.items()
        }


def encode(
    data: Any,
    pretty_print: bool = True,
    root_element: Optional[str] = DEFAULT_ROOT_ELEMENT,
) -> str:
    """Serialize a resource tree to XML text with a one-off mapper."""
    return XmlTreeMapper(root_element=root_element).encode(data, pretty_print)


def decode(text: Union[str, bytes]) -> Any:
    """Parse XML text into a resource tree with a one-off mapper."""
    return XmlTreeMapper().decode(text)


__all__ = [
    "XmlTreeMapper",
    "encode",
    "decode",
    "is_list",
    "is_container",
    "scalar_to_text",
    "as_tree",
    "iter_entries",
    "XML_DECLARATION",
    "DEFAULT_ROOT_ELEMENT",
    "ITEM_ELEMENT",
]

"""URL-encoded form format handler.

Nested data is flattened with bracket notation, the way HTML forms and
most web frameworks spell it::

    {"user": {"name": "a"}, "tags": ["x", "y"]}

    user[name]=a&tags[0]=x&tags[1]=y

Decoding rebuilds the nesting. Mappings keyed ``0..n-1`` come back as
lists, and a plain key repeated in the query becomes a list as well.
"""

import re
from typing import Any, Dict, List, Tuple
from urllib.parse import parse_qsl, urlencode

from ..exceptions import InvalidInputError
from ..mapping.xml import as_tree, iter_entries, is_container, scalar_to_text
from ..utils.media.types import MediaType
from .base import FormatHandler

_NAME_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def flatten(data: Any, prefix: str = "") -> List[Tuple[str, str]]:
    """Flatten a resource tree into bracket-notation query pairs.

    ``None`` values are skipped.

    :param data: Mapping or sequence to flatten
    :type data: Any
    :param prefix: Name of the enclosing field
    :type prefix: str
    :return: Ordered list of (name, value) pairs
    :rtype: List[Tuple[str, str]]
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in iter_entries(as_tree(data)):
        name = f"{prefix}[{key}]" if prefix else str(key)
        value = as_tree(value)
        if is_container(value):
            pairs.extend(flatten(value, name))
        elif value is not None:
            pairs.append((name, scalar_to_text(value)))
    return pairs


def _split_name(name: str) -> List[str]:
    match = _NAME_PATTERN.match(name)
    if not match:
        return [name]
    return [match.group(1)] + _SEGMENT_PATTERN.findall(match.group(2))


def _assign(target: Dict[str, Any], path: List[str], value: str) -> None:
    key = path[0] or str(len(target))
    if len(path) == 1:
        if key not in target:
            target[key] = value
        elif isinstance(target[key], list):
            target[key].append(value)
        else:
            target[key] = [target[key], value]
        return
    child = target.get(key)
    if not isinstance(child, dict):
        child = {}
        target[key] = child
    _assign(child, path[1:], value)


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    node = {key: _listify(value) for key, value in node.items()}
    if node and list(node) == [str(i) for i in range(len(node))]:
        return list(node.values())
    return node


def unflatten(pairs: List[Tuple[str, str]]) -> Any:
    """Rebuild a resource tree from bracket-notation query pairs."""
    tree: Dict[str, Any] = {}
    for name, value in pairs:
        _assign(tree, _split_name(name), value)
    return _listify(tree)


class QueryFormat(FormatHandler):
    """Encode and decode ``application/x-www-form-urlencoded`` payloads."""

    content_type = MediaType.QUERY.value

    def encode(self, data: Any, pretty_print: bool = True, **options: Any) -> bytes:
        data = as_tree(data)
        if not is_container(data):
            raise InvalidInputError(
                "Data must be a mapping or a sequence",
                value_type=type(data).__name__,
            )
        return urlencode(flatten(data)).encode("ascii")

    def decode(self, payload: bytes) -> Any:
        text = self.payload_text(payload)
        return unflatten(parse_qsl(text, keep_blank_values=True))

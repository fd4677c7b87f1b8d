"""Mapping between resource trees and wire documents."""

from .xml import XmlTreeMapper, decode, encode, is_container, is_list, scalar_to_text

__all__ = [
    "XmlTreeMapper",
    "encode",
    "decode",
    "is_container",
    "is_list",
    "scalar_to_text",
]

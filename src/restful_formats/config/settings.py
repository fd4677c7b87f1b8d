"""Configuration settings for restful-formats.

This module defines the configuration settings for response negotiation
and data mapping, including the query keys that override negotiation,
pretty printing defaults, and XML element names. Settings are loaded from
environment variables (prefixed with ``RESTFUL_``) and .env files.
"""

import re
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_TAG_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")
_DISABLED_VALUES = {"", "none", "null", "false"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    :param jsonp_key: Query parameter that forces a JSONP response
    :type jsonp_key: Optional[str]
    :param pretty_print_key: Query parameter that overrides pretty printing
    :type pretty_print_key: Optional[str]
    :param pretty_print: Pretty print responses unless the request says otherwise
    :type pretty_print: bool
    :param xml_root_element: Root element name for XML documents, None disables it
    :type xml_root_element: Optional[str]
    :param xml_item_element: Element name for list items without a parent key
    :type xml_item_element: str
    :param json_indent: Indentation used for pretty printed JSON
    :type json_indent: int
    :param log_level: Logging level for the application
    :type log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    """

    model_config = SettingsConfigDict(
        env_prefix="RESTFUL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )

    # Negotiation overrides
    jsonp_key: Optional[str] = Field(
        None, description="Query key that forces JSONP (disabled when unset)"
    )
    pretty_print_key: Optional[str] = Field(
        "prettyPrint", description="Query key that overrides pretty printing"
    )
    pretty_print: bool = Field(True, description="Pretty print responses by default")

    # XML mapping
    xml_root_element: Optional[str] = Field(
        "root", description="XML root element name (empty disables the wrapper)"
    )
    xml_item_element: str = Field(
        "item", description="XML element name for items of a bare list"
    )

    # JSON
    json_indent: int = Field(4, ge=0, description="Indent for pretty printed JSON")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level"
    )

    @field_validator("jsonp_key", "pretty_print_key")
    @classmethod
    def blank_key_disables(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank query key as disabled.

        :param v: The configured query key
        :type v: Optional[str]
        :return: The stripped key, or None when blank
        :rtype: Optional[str]
        """
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("xml_root_element")
    @classmethod
    def validate_root_element(cls, v: Optional[str]) -> Optional[str]:
        """Validate the XML root element name.

        Values such as an empty string, ``none`` or ``null`` disable the
        root wrapper so that top-level children are emitted directly.

        :param v: The configured root element name
        :type v: Optional[str]
        :return: Validated element name or None when disabled
        :rtype: Optional[str]
        :raises ValueError: If the name is not a valid XML element name
        """
        if v is None or v.strip().lower() in _DISABLED_VALUES:
            return None
        v = v.strip()
        if not _TAG_PATTERN.match(v):
            raise ValueError(f"Invalid XML element name: {v!r}")
        return v

    @field_validator("xml_item_element")
    @classmethod
    def validate_item_element(cls, v: str) -> str:
        """Validate the generic XML item element name.

        :param v: The configured item element name
        :type v: str
        :return: Validated element name
        :rtype: str
        :raises ValueError: If the name is not a valid XML element name
        """
        v = v.strip()
        if not _TAG_PATTERN.match(v):
            raise ValueError(f"Invalid XML element name: {v!r}")
        return v


settings = Settings()
"""Global settings instance for restful-formats.

This instance is created once and used as the default wherever a
component is constructed without explicit settings.
"""

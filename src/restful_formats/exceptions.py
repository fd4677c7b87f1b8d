"""Structured exception classes for restful-formats."""

import json
from typing import Any, Dict, Optional


class RestfulFormatsError(Exception):
    """Base exception for all restful-formats errors.

    This exception serves as the parent class for every error raised by
    the negotiation and mapping layer, providing a consistent interface
    for callers that translate failures into transport status codes.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class ConfigurationError(RestfulFormatsError):
    """Raised for configuration-related errors.

    This exception is raised at setup time, when a format handler cannot
    be resolved or instantiated, or when a configured value is invalid.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
        self.setting = setting


class UnsupportedMediaTypeError(RestfulFormatsError):
    """Raised when negotiation cannot match any registered media type.

    :param message: Description of the negotiation failure
    :param accept: The raw preference string that could not be matched
    """

    def __init__(self, message: str, accept: Optional[str] = None):
        """Initialize unsupported media type error with the raw input."""
        details = {}
        if accept is not None:
            details["accept"] = accept
        super().__init__(
            message=message, code="UNSUPPORTED_MEDIA_TYPE", details=details
        )
        self.accept = accept


class InvalidInputError(RestfulFormatsError):
    """Raised when a mapper is handed data it cannot represent.

    The typical case is a bare scalar passed as the document root.

    :param message: Description of the invalid input
    :param value_type: Optional type name of the offending value
    """

    def __init__(self, message: str, value_type: Optional[str] = None):
        """Initialize invalid input error with message and optional type."""
        details = {}
        if value_type:
            details["value_type"] = value_type
        super().__init__(message=message, code="INVALID_INPUT", details=details)
        self.value_type = value_type


class MalformedDocumentError(RestfulFormatsError):
    """Raised when an inbound document is not well-formed.

    :param message: Description of the parse failure
    :param line: Optional line number reported by the parser
    :param column: Optional column number reported by the parser
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """Initialize malformed document error with parser position."""
        details: Dict[str, Any] = {}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message=message, code="MALFORMED_DOCUMENT", details=details)
        self.line = line
        self.column = column


class MappingError(RestfulFormatsError):
    """Raised when translating between a document and a resource tree fails.

    Wraps the original error with additional context.

    :param message: Description of the mapping error
    :param original_error: Optional original exception that caused the failure
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """Initialize mapping error with message and optional cause."""
        details = {}
        if original_error:
            details["original_error"] = str(original_error)
            details["error_type"] = type(original_error).__name__
        super().__init__(message=message, code="MAPPING_ERROR", details=details)
        self.original_error = original_error

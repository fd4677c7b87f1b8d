"""Response construction on top of negotiation and mapping."""

from .factory import ResponseFactory, error_status
from .models import Resource

__all__ = ["Resource", "ResponseFactory", "error_status"]

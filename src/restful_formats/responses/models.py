"""Resource model passed from application code to the response factory."""

from collections.abc import Sized
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Payload of an API response.

    :param data: Resource tree (scalar, list, mapping, or pydantic model)
    :type data: Any
    :param content_type: MIME type the application prefers, if any
    :type content_type: Optional[str]
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: Any = Field(None, description="Resource tree to serialize")
    content_type: Optional[str] = Field(
        None, description="Preferred MIME type for the response"
    )

    def has_data(self) -> bool:
        """Return whether there is anything to serialize.

        ``None`` and empty strings or containers count as no data.
        """
        if self.data is None:
            return False
        if isinstance(self.data, Sized):
            return len(self.data) > 0
        return True

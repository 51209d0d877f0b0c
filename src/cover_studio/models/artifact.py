"""
Artifact: one produced image, exchanged as media type + base64 payload.
"""

import base64
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_MEDIA_TYPE = "image/png"

_DATA_URL_PREFIX = re.compile(r"^data:([^;,]+);base64,")


class Artifact(BaseModel):
    """Immutable image payload. Identity is its position in the history."""

    model_config = ConfigDict(frozen=True)

    media_type: str = DEFAULT_MEDIA_TYPE
    data: str

    @property
    def data_url(self) -> str:
        """Combined display form: data:<media_type>;base64,<payload>"""
        return f"data:{self.media_type};base64,{self.bare_payload}"

    @property
    def bare_payload(self) -> str:
        """The payload with any leading data-URL prefix stripped."""
        return _DATA_URL_PREFIX.sub("", self.data, count=1)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.bare_payload)

    @classmethod
    def from_data_url(cls, value: str) -> "Artifact":
        match = _DATA_URL_PREFIX.match(value)
        if not match:
            return cls(data=value)
        return cls(media_type=match.group(1), data=value[match.end():])

    @classmethod
    def from_bytes(cls, raw: bytes, media_type: Optional[str] = None) -> "Artifact":
        return cls(
            media_type=media_type or DEFAULT_MEDIA_TYPE,
            data=base64.b64encode(raw).decode("ascii"),
        )

    def __repr__(self) -> str:
        return f"Artifact(media_type={self.media_type!r}, data=<{len(self.data)} chars>)"

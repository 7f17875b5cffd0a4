import json
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .._utils.constants import HEADER_CONTENT_TYPE


class Response(BaseModel):
    """Normalized result of a dispatched request.

    Non-2xx statuses are ordinary responses, not errors.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: Dict[str, List[str]] = Field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "Response":
        """Build from an httpx response whose body has already been read."""
        headers: Dict[str, List[str]] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name, []).append(value)

        return cls(
            status_code=response.status_code,
            headers=headers,
            body=response.text,
        )

    def header(self, name: str) -> Optional[str]:
        """First value of a header, matched case-insensitively."""
        wanted = name.lower()
        for key, values in self.headers.items():
            if key.lower() == wanted and values:
                return values[0]
        return None

    @property
    def content_type(self) -> Optional[str]:
        return self.header(HEADER_CONTENT_TYPE)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json_body(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)

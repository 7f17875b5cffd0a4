from dataclasses import dataclass, field
from typing import Optional

from ._multipart import MultipartForm
from ._utils.constants import DEFAULT_CONTENT_TYPE, HEADER_CONTENT_TYPE


@dataclass
class RequestState:
    """Everything a builder has accumulated for one outbound request.

    A state belongs to a single builder and is not synchronized. It is meant
    to be dispatched once; dispatching it again sends a second, identical
    request.
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    query_params: Optional[dict[str, str]] = None
    basic_auth: Optional[tuple[str, str]] = None
    body: Optional[bytes] = None
    form: Optional[MultipartForm] = None

    @property
    def content_type(self) -> str:
        """Declared ``Content-Type``, or the JSON default."""
        return self.headers.get(HEADER_CONTENT_TYPE) or DEFAULT_CONTENT_TYPE

    @property
    def content(self) -> Optional[bytes]:
        """Bytes that will be sent. A multipart form wins over a raw body."""
        if self.form is not None:
            return self.form.content
        return self.body

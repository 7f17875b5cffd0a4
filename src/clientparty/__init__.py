"""Build an HTTP request step by step, then send it once.

```python
from clientparty import ContentType, HttpMethod, RequestBuilder

response = (
    RequestBuilder(HttpMethod.GET, "https://example.com/items")
    .set_query_param({"q": "shoes"})
    .send()
)
```
"""

from ._builder import RequestBuilder
from ._config import Config
from ._dispatcher import Dispatcher
from ._encoding import BodyEncoding
from ._multipart import MultipartForm
from ._request_state import RequestState
from ._utils import setup_logging
from ._utils.constants import (
    MIME_HTML,
    MIME_JSON,
    MIME_MSGPACK,
    MIME_MSGPACK2,
    MIME_MULTIPART_POST_FORM,
    MIME_PLAIN,
    MIME_POST_FORM,
    MIME_PROTOBUF,
    MIME_XML,
    MIME_XML2,
    MIME_YAML,
    ContentType,
    HttpMethod,
)
from .models import (
    BodyReadError,
    EncodingError,
    NetworkError,
    PartyError,
    RequestConstructionError,
    Response,
)

__all__ = [
    "BodyEncoding",
    "BodyReadError",
    "Config",
    "ContentType",
    "Dispatcher",
    "EncodingError",
    "HttpMethod",
    "MIME_HTML",
    "MIME_JSON",
    "MIME_MSGPACK",
    "MIME_MSGPACK2",
    "MIME_MULTIPART_POST_FORM",
    "MIME_PLAIN",
    "MIME_POST_FORM",
    "MIME_PROTOBUF",
    "MIME_XML",
    "MIME_XML2",
    "MIME_YAML",
    "MultipartForm",
    "NetworkError",
    "PartyError",
    "RequestBuilder",
    "RequestConstructionError",
    "RequestState",
    "Response",
    "setup_logging",
]

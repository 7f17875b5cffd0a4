from enum import Enum
from logging import getLogger
from typing import Any, Mapping, Optional, Union

import httpx

from ._config import Config
from ._dispatcher import Dispatcher
from ._encoding import BodyEncoding, encode_body
from ._multipart import build_form
from ._request_state import RequestState
from ._utils.constants import DEFAULT_CONTENT_TYPE, HEADER_CONTENT_TYPE, HttpMethod
from .models.response import Response

logger = getLogger(__name__)


def _str_value(value: Union[str, Enum]) -> str:
    return value.value if isinstance(value, Enum) else value


class RequestBuilder:
    """Accumulates one outbound HTTP request through chained calls.

    Every ``set_*`` call mutates this builder and returns it, so calls can be
    chained. Nothing touches the network until :meth:`send`. A builder has a
    single owner: it is not thread-safe and should not be reused for a second
    request.

    Example:
        ```python
        response = (
            RequestBuilder(HttpMethod.POST, "https://api.example.com/items")
            .set_header(ContentType.JSON, {"X-Trace": "abc"})
            .set_basic_auth("user", "secret")
            .set_request_body({"name": "a"})
            .send(client)
        )
        ```
    """

    def __init__(self, method: Union[HttpMethod, str], url: str) -> None:
        self._state = RequestState(method=_str_value(method), url=url)

    @classmethod
    def create(cls, method: Union[HttpMethod, str], url: str) -> "RequestBuilder":
        return cls(method, url)

    @property
    def state(self) -> RequestState:
        return self._state

    def set_header(
        self,
        content_type: Union[str, Enum] = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> "RequestBuilder":
        """Merge headers and declare the body's content type.

        The content type also selects how :meth:`set_request_body` serializes,
        so call this first.

        Args:
            content_type: Value for ``Content-Type``. When empty, an existing
                ``Content-Type`` is kept and ``application/json`` is used
                otherwise.
            headers: Headers merged over the ones already set; later values
                win per name.
        """
        merged = {**self._state.headers, **(headers or {})}
        content_type = _str_value(content_type)
        if content_type:
            merged[HEADER_CONTENT_TYPE] = content_type
        elif HEADER_CONTENT_TYPE not in merged:
            merged[HEADER_CONTENT_TYPE] = DEFAULT_CONTENT_TYPE

        self._state.headers = merged
        return self

    def set_query_param(self, params: Mapping[str, str]) -> "RequestBuilder":
        """Replace the query parameters appended at dispatch."""
        self._state.query_params = dict(params)
        return self

    def set_basic_auth(self, username: str, password: str) -> "RequestBuilder":
        """Replace the basic-auth credential."""
        self._state.basic_auth = (username, password)
        return self

    def set_request_body(self, value: Any) -> "RequestBuilder":
        """Serialize ``value`` according to the declared ``Content-Type``.

        JSON for ``application/json`` and for unknown or unset types, XML for
        ``application/xml`` and ``text/xml``, ``key=value&...`` sorted by key
        for ``application/x-www-form-urlencoded``. Multipart bodies are built
        with :meth:`set_form_data` instead; for them this call does nothing.

        Raises:
            EncodingError: if the value cannot be represented. The builder is
                left unchanged.
        """
        encoding = BodyEncoding.from_content_type(self._state.content_type)
        body = encode_body(value, encoding)
        if body is None:
            logger.debug(
                f"{self._state.content_type} bodies are not set from a value; "
                "use set_form_data"
            )
            return self

        self._state.body = body
        return self

    def set_request_body_str(self, text: str) -> "RequestBuilder":
        """Send ``text`` as-is, bypassing content-type driven encoding."""
        self._state.body = text.encode("utf-8")
        return self

    def set_request_body_bytes(self, data: bytes) -> "RequestBuilder":
        self._state.body = bytes(data)
        return self

    def set_form_data(
        self,
        files: Optional[Mapping[str, str]] = None,
        fields: Optional[Mapping[str, str]] = None,
    ) -> "RequestBuilder":
        """Build a ``multipart/form-data`` body.

        Every file is opened, copied into the body and closed before the next
        one is touched. At dispatch the multipart boundary content type
        replaces whatever ``Content-Type`` was declared, and the form takes
        precedence over any raw body.

        Args:
            files: field name -> local file path.
            fields: field name -> text value.

        Raises:
            BodyReadError: if a file cannot be opened or read.
            EncodingError: if a part cannot be written.
        """
        self._state.form = build_form(files, fields)
        self._state.body = None
        return self

    def send(
        self,
        client: Optional[httpx.Client] = None,
        config: Optional[Config] = None,
    ) -> Response:
        """Dispatch the request and wait for the response.

        Args:
            client: Shared transport. A private client is created and closed
                around this call when omitted.
            config: Overrides the environment-derived configuration.

        Raises:
            RequestConstructionError: malformed method or URL.
            NetworkError: the transport failed.
            BodyReadError: the response body could not be read.
        """
        with Dispatcher(client=client, config=config) as dispatcher:
            return dispatcher.dispatch(self._state)

    async def send_async(
        self,
        client: Optional[httpx.AsyncClient] = None,
        config: Optional[Config] = None,
    ) -> Response:
        """Asynchronous :meth:`send`."""
        async with Dispatcher(async_client=client, config=config) as dispatcher:
            return await dispatcher.dispatch_async(self._state)

import base64
import re
from logging import getLogger
from typing import Optional

import httpx

from ._config import Config
from ._request_state import RequestState
from ._utils import masked_headers, setup_logging
from ._utils.constants import (
    DEFAULT_CONTENT_TYPE,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
)
from .models.errors import BodyReadError, NetworkError, RequestConstructionError
from .models.response import Response

logger = getLogger(__name__)

_METHOD_TOKEN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_SCHEMES = ("http", "https")


class Dispatcher:
    """Turns a :class:`RequestState` into one HTTP round trip.

    The transport is an injected ``httpx.Client`` (or ``httpx.AsyncClient``)
    that may be shared by any number of dispatchers; pooling, TLS, timeouts
    and cancellation are configured there. When no client is given the
    dispatcher creates one on first use and closes it in :meth:`close`.
    No retries are attempted.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        config: Optional[Config] = None,
    ) -> None:
        self._config = config or Config.from_env(dotenv=False)
        self._client = client
        self._client_async = async_client
        self._owns_client = client is None
        self._owns_client_async = async_client is None

        if self._config.debug:
            setup_logging(should_debug=True)

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client()
        return self._client

    @property
    def client_async(self) -> httpx.AsyncClient:
        if self._client_async is None:
            self._client_async = httpx.AsyncClient()
        return self._client_async

    def build_request(self, state: RequestState) -> httpx.Request:
        """Build the wire-level request without sending it.

        Raises:
            RequestConstructionError: if the method or URL is malformed.
        """
        if not _METHOD_TOKEN.match(state.method or ""):
            raise RequestConstructionError(
                f"invalid HTTP method: {state.method!r}", state.method, state.url
            )

        try:
            url = httpx.URL(state.url)
        except (httpx.InvalidURL, TypeError) as e:
            raise RequestConstructionError(
                f"invalid URL {state.url!r}: {e}", state.method, state.url
            ) from e
        if url.scheme not in _SCHEMES or not url.host:
            raise RequestConstructionError(
                f"URL must be absolute http(s): {state.url!r}", state.method, state.url
            )

        if state.query_params is not None:
            url = _merge_query(url, state.query_params)

        content = state.content
        if state.form is not None and state.body is not None:
            logger.warning(
                f"Raw body of {len(state.body)} bytes ignored: "
                "multipart form takes precedence"
            )

        headers = httpx.Headers()
        for name, value in state.headers.items():
            headers[name] = value
        if state.form is not None:
            headers[HEADER_CONTENT_TYPE] = state.form.content_type
        elif content is not None and HEADER_CONTENT_TYPE not in headers:
            headers[HEADER_CONTENT_TYPE] = DEFAULT_CONTENT_TYPE
        if HEADER_USER_AGENT not in headers:
            headers[HEADER_USER_AGENT] = self._config.user_agent

        if state.basic_auth is not None:
            username, password = state.basic_auth
            headers[HEADER_AUTHORIZATION] = _basic_auth_header(username, password)

        try:
            return httpx.Request(state.method, url, headers=headers, content=content)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(
                f"cannot build {state.method} {state.url}: {e}", state.method, state.url
            ) from e

    def dispatch(self, state: RequestState) -> Response:
        """Send the request described by ``state`` and read the whole response.

        Raises:
            RequestConstructionError: if the method or URL is malformed.
            NetworkError: on connection, DNS, timeout or any other transport fault.
            BodyReadError: if the response body cannot be fully read.
        """
        request = self.build_request(state)
        self._log_request(request)

        try:
            response = self.client.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise _construction_error(request, e) from e
        except httpx.RequestError as e:
            raise _network_error(request, e) from e

        try:
            response.read()
        except (httpx.RequestError, httpx.StreamError) as e:
            raise _read_error(request, e) from e
        finally:
            response.close()

        return self._to_response(request, response)

    async def dispatch_async(self, state: RequestState) -> Response:
        """Asynchronous :meth:`dispatch`."""
        request = self.build_request(state)
        self._log_request(request)

        try:
            response = await self.client_async.send(request, stream=True)
        except httpx.UnsupportedProtocol as e:
            raise _construction_error(request, e) from e
        except httpx.RequestError as e:
            raise _network_error(request, e) from e

        try:
            await response.aread()
        except (httpx.RequestError, httpx.StreamError) as e:
            raise _read_error(request, e) from e
        finally:
            await response.aclose()

        return self._to_response(request, response)

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    async def aclose(self) -> None:
        if self._owns_client_async and self._client_async is not None:
            await self._client_async.aclose()
            self._client_async = None
        self.close()

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    async def __aenter__(self) -> "Dispatcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    def _log_request(self, request: httpx.Request) -> None:
        logger.debug(f"Request: {request.method} {request.url}")
        logger.debug(f"HEADERS: {masked_headers(request.headers)}")

    def _to_response(self, request: httpx.Request, response: httpx.Response) -> Response:
        logger.debug(
            f"Response: {request.method} {request.url} -> {response.status_code}"
        )
        return Response.from_httpx(response)


def _merge_query(url: httpx.URL, params: dict[str, str]) -> httpx.URL:
    """Add ``params`` to the query of ``url``.

    Colliding keys keep both values. The result is sorted by key, values of
    one key keep their order.
    """
    query = url.params
    for key, value in params.items():
        query = query.add(key, value)
    items = sorted(query.multi_items(), key=lambda item: item[0])
    return url.copy_with(params=httpx.QueryParams(items))


def _basic_auth_header(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
    return f"Basic {token.decode('ascii')}"


def _construction_error(
    request: httpx.Request, error: Exception
) -> RequestConstructionError:
    return RequestConstructionError(
        f"cannot send {request.method} {request.url}: {error}",
        request.method,
        str(request.url),
    )


def _network_error(request: httpx.Request, error: Exception) -> NetworkError:
    return NetworkError(
        f"{request.method} {request.url} failed: {error}",
        request.method,
        str(request.url),
    )


def _read_error(request: httpx.Request, error: Exception) -> BodyReadError:
    return BodyReadError(
        f"cannot read response body of {request.method} {request.url}: {error}"
    )

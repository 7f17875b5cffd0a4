class PartyError(Exception):
    """Base class for clientparty exceptions."""


class EncodingError(PartyError, ValueError):
    """The request body could not be serialized into the declared content type."""

    def __init__(self, message: str, content_type: str | None = None):
        self.message = message
        self.content_type = content_type
        super().__init__(self.message)


class BodyReadError(PartyError, OSError):
    """A local form file or the response body could not be fully read."""

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


class RequestConstructionError(PartyError, ValueError):
    """The method/URL pair does not form a valid outbound request."""

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        self.message = message
        self.method = method
        self.url = url
        super().__init__(self.message)


class NetworkError(PartyError, ConnectionError):
    """Transport-level failure: DNS, connect, timeout, TLS.

    The transport's own exception is available as ``__cause__``.
    """

    def __init__(self, message: str, method: str | None = None, url: str | None = None):
        self.message = message
        self.method = method
        self.url = url
        super().__init__(self.message)

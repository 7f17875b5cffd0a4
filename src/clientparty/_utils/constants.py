from enum import Enum

# Headers
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_AUTHORIZATION = "Authorization"

# Environment variables
ENV_USER_AGENT = "CLIENTPARTY_USER_AGENT"
ENV_DEBUG = "CLIENTPARTY_DEBUG"

# Content types
MIME_JSON = "application/json"
MIME_HTML = "text/html"
MIME_XML = "application/xml"
MIME_XML2 = "text/xml"
MIME_PLAIN = "text/plain"
MIME_POST_FORM = "application/x-www-form-urlencoded"
MIME_MULTIPART_POST_FORM = "multipart/form-data"
MIME_PROTOBUF = "application/x-protobuf"
MIME_MSGPACK = "application/x-msgpack"
MIME_MSGPACK2 = "application/msgpack"
MIME_YAML = "application/x-yaml"

DEFAULT_CONTENT_TYPE = MIME_JSON
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


class ContentType(str, Enum):
    """Content types recognized as header values.

    Only JSON, XML and URL-encoded forms are serialized automatically; the
    rest are passed through as declared.
    """

    JSON = MIME_JSON
    HTML = MIME_HTML
    XML = MIME_XML
    XML2 = MIME_XML2
    PLAIN = MIME_PLAIN
    POST_FORM = MIME_POST_FORM
    MULTIPART_POST_FORM = MIME_MULTIPART_POST_FORM
    PROTOBUF = MIME_PROTOBUF
    MSGPACK = MIME_MSGPACK
    MSGPACK2 = MIME_MSGPACK2
    YAML = MIME_YAML


class HttpMethod(str, Enum):
    """HTTP verbs."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"  # RFC 5789
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

from .errors import (
    BodyReadError,
    EncodingError,
    NetworkError,
    PartyError,
    RequestConstructionError,
)
from .response import Response

__all__ = [
    "BodyReadError",
    "EncodingError",
    "NetworkError",
    "PartyError",
    "RequestConstructionError",
    "Response",
]

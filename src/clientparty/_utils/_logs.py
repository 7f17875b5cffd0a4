import logging
import sys
from typing import Mapping

from .constants import HEADER_AUTHORIZATION

LOGGER_NAME = "clientparty"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(should_debug: bool = False) -> None:
    """Attach a stderr handler to the package logger.

    Calling it again only adjusts the level; handlers are not duplicated.
    """
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)

    if not any(getattr(h, "_clientparty", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handler._clientparty = True  # type: ignore[attr-defined]
        logger.addHandler(handler)


def masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe to log."""
    return {
        k: ("***" if k.lower() == HEADER_AUTHORIZATION.lower() else v)
        for k, v in headers.items()
    }

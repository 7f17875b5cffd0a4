import json
import sys
from pathlib import Path
from typing import Generator

import httpx
import pytest

# Ensure local source package (src/clientparty) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from clientparty import Config  # noqa: E402


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Answer with a JSON description of the request that was received."""
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": request.content.decode("utf-8"),
        },
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    monkeypatch.delenv("CLIENTPARTY_USER_AGENT", raising=False)
    monkeypatch.delenv("CLIENTPARTY_DEBUG", raising=False)


@pytest.fixture
def base_url() -> str:
    return "http://example.test"


@pytest.fixture
def user_agent() -> str:
    return "clientparty-tests/1.0"


@pytest.fixture
def config(user_agent: str) -> Config:
    return Config(user_agent=user_agent)


@pytest.fixture
def echo_client() -> Generator[httpx.Client, None, None]:
    """A shared client whose transport echoes every request back."""
    with httpx.Client(transport=httpx.MockTransport(echo_handler)) as client:
        yield client


@pytest.fixture
def echoed():
    """Decode the body produced by ``echo_handler``."""

    def _decode(response) -> dict:
        return json.loads(response.body)

    return _decode

from importlib.metadata import PackageNotFoundError, version

from ._logs import masked_headers, setup_logging


def user_agent_value() -> str:
    try:
        package_version = version("clientparty")
    except PackageNotFoundError:
        package_version = "0.0.0"
    return f"clientparty/{package_version}"


__all__ = [
    "masked_headers",
    "setup_logging",
    "user_agent_value",
]

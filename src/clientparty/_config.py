from os import environ as env

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from ._utils import user_agent_value
from ._utils.constants import ENV_DEBUG, ENV_USER_AGENT

_TRUTHY = {"1", "true", "yes", "on"}


class Config(BaseModel):
    user_agent: str = Field(default_factory=user_agent_value)
    debug: bool = False

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> "Config":
        """Build a config from ``CLIENTPARTY_*`` environment variables.

        Args:
            dotenv: Load a ``.env`` file from the working directory first.
                Variables already set in the environment take precedence.
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        values: dict[str, object] = {}
        user_agent = env.get(ENV_USER_AGENT)
        if user_agent:
            values["user_agent"] = user_agent
        debug = env.get(ENV_DEBUG)
        if debug is not None:
            values["debug"] = debug.strip().lower() in _TRUTHY

        return cls(**values)

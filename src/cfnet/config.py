"""Configuration for the request layer.

Settings are read from the environment (and an optional ``.env``) only when
``NetworkSettings()`` is constructed; importing cfnet never touches the
environment. Dispatchers take a ``DispatcherConfig`` so tests and
composition roots can build them without any environment at all.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from rich import print


# using pydantic_settings to manage environment variables
# and do automatic type casting in a central place
class NetworkSettings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }
    CFNET_LOG_LEVEL: str = "INFO"
    # total seconds for one request; unset leaves aiohttp's own default in place
    CFNET_TRANSPORT_TIMEOUT: Optional[float] = None

    def print_settings(self) -> None:
        """Prints the settings for debugging purposes"""
        print(self)


class DispatcherConfig(BaseModel):
    """Configuration for AioHttpNetworkDispatcher.

    Attributes:
        timeout: Total timeout in seconds handed to aiohttp (None = aiohttp default)
        json_content_type: Content-Type to add to requests that carry a JSON body
            when the caller did not set one (None, the default, adds nothing)
    """

    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Total timeout in seconds passed to the transport (None keeps the transport default)",
    )

    json_content_type: Optional[str] = Field(
        default=None,
        description="Opt-in Content-Type for JSON bodies when the request sets none (None adds no header)",
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_settings(cls, settings: NetworkSettings) -> "DispatcherConfig":
        """Factory method to construct config from a NetworkSettings instance."""
        return cls(timeout=settings.CFNET_TRANSPORT_TIMEOUT)

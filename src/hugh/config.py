import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from hugh.exceptions import ConfigError

DEFAULT_TIMEOUT = 10.0
DEFAULT_APP_NAME = "hugh"


class ClientConfig(BaseModel):
    """Settings shared by discovery, pairing and the light repository.

    ``device_name`` ends up in the pairing ``devicetype`` string; when it is
    left unset the local hostname is used.
    """

    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    discovery_timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    app_name: str = DEFAULT_APP_NAME
    device_name: Optional[str] = None
    bridge_ip: Optional[str] = None
    app_key: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True, **overrides) -> "ClientConfig":
        """Read ``HUE_*`` variables, optionally from a ``.env`` file first.

        Keyword overrides win over the environment; ``None`` overrides are
        ignored so argparse defaults can be passed straight through.

        Raises:
            ConfigError: a value does not validate
        """
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        values = {
            "timeout": os.getenv("HUE_TIMEOUT"),
            "discovery_timeout": os.getenv("HUE_DISCOVERY_TIMEOUT"),
            "app_name": os.getenv("HUE_APP_NAME"),
            "device_name": os.getenv("HUE_DEVICE_NAME"),
            "bridge_ip": os.getenv("HUE_BRIDGE_IP"),
            "app_key": os.getenv("HUE_APP_KEY"),
        }
        values.update(overrides)
        try:
            return cls(**{k: v for k, v in values.items() if v is not None})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

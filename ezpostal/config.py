"""
Relay connection settings.

Values can be passed directly or read from the environment (a `.env` file in
the working directory is loaded first):

  POSTAL_ADDR      base URI of the Postal server, e.g. https://postal.example.com
  POSTAL_TOKEN     server API key
  POSTAL_TIMEOUT   optional request timeout in seconds
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .utils import validate_api_config


@dataclass(frozen=True)
class PostalConfig:
    base_uri: str
    token: str
    timeout: float | None = None

    def __post_init__(self):
        validate_api_config(self.base_uri, self.token)

    @classmethod
    def from_env(cls) -> "PostalConfig":
        """
        Build a config from POSTAL_ADDR, POSTAL_TOKEN and POSTAL_TIMEOUT.

        Raises ValueError if the address or token is missing, or if the
        timeout is not a number.
        """
        load_dotenv()

        raw_timeout = os.getenv("POSTAL_TIMEOUT")
        timeout = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"POSTAL_TIMEOUT must be a number of seconds, got {raw_timeout!r}")

        return cls(
            base_uri=os.getenv("POSTAL_ADDR", ""),
            token=os.getenv("POSTAL_TOKEN", ""),
            timeout=timeout,
        )

    def __repr__(self) -> str:
        return f"PostalConfig(base_uri={self.base_uri!r}, token='***', timeout={self.timeout!r})"

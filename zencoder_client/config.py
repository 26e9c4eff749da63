"""
Configuration for the Zencoder client.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_ENDPOINT = "https://app.zencoder.com/api/v2/jobs"
DEFAULT_RESPONSE_TYPE = "application/json"
DEFAULT_TIMEOUT = 30

SUPPORTED_RESPONSE_TYPES = ("application/json", "application/xml")


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings for an EncodingJobClient.

    Empty ``api_endpoint`` and ``response_type`` values and non-positive
    ``timeout`` values are replaced by their defaults when the client is built.
    """
    api_key: str
    api_endpoint: str = ""
    response_type: str = ""
    timeout: int = 0

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ClientConfig":
        """
        Build a configuration from environment variables.

        Reads ZENCODER_API_KEY, ZENCODER_API_ENDPOINT, ZENCODER_RESPONSE_TYPE
        and ZENCODER_TIMEOUT. Values from ``env_file`` (or ``.env`` in the
        working directory) are loaded first without overriding variables that
        are already set.

        Args:
            env_file: Optional path to a .env file

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: If ZENCODER_TIMEOUT is not an integer
        """
        if env_file:
            if load_dotenv(env_file):
                logger.info(f"Loaded environment variables from {env_file}")
            else:
                logger.warning(f"Environment file not found or empty: {env_file}")
        else:
            load_dotenv()

        raw_timeout = os.getenv('ZENCODER_TIMEOUT', '')
        try:
            timeout = int(raw_timeout) if raw_timeout else 0
        except ValueError:
            raise ConfigurationError(
                f"ZENCODER_TIMEOUT must be an integer, got {raw_timeout!r}",
                {"timeout": raw_timeout}
            )

        return cls(
            api_key=os.getenv('ZENCODER_API_KEY', ''),
            api_endpoint=os.getenv('ZENCODER_API_ENDPOINT', ''),
            response_type=os.getenv('ZENCODER_RESPONSE_TYPE', ''),
            timeout=timeout
        )

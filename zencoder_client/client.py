"""
Client for submitting encoding jobs to the Zencoder API.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    ClientConfig,
    DEFAULT_API_ENDPOINT,
    DEFAULT_RESPONSE_TYPE,
    DEFAULT_TIMEOUT,
    SUPPORTED_RESPONSE_TYPES,
)
from .exceptions import ConfigurationError, ServiceError, TransportError
from .models import JobSpec
from .utils import decode_response, encode_payload

API_KEY_HEADER = 'Zencoder-Api-Key'


class EncodingJobClient:
    """Client for the Zencoder job-submission endpoint."""

    def __init__(
        self,
        config: Optional[ClientConfig],
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the encoding job client.

        Args:
            config: Client configuration; empty endpoint, response type and
                non-positive timeout values fall back to the defaults
            logger: Optional logger for request diagnostics. Defaults to the
                module logger, which is silent unless the application
                configures logging.

        Raises:
            ConfigurationError: If config is missing, the API key is empty
                or the response type is unsupported
        """
        if config is None:
            raise ConfigurationError("Cannot initialize Zencoder client without a configuration")

        if not config.api_key:
            raise ConfigurationError("Must supply an API key to initialize the Zencoder client")

        response_type = config.response_type or DEFAULT_RESPONSE_TYPE
        if response_type not in SUPPORTED_RESPONSE_TYPES:
            raise ConfigurationError(
                f"Unsupported response type {config.response_type!r}: response type may be "
                f"application/json (default) or application/xml",
                {"response_type": config.response_type}
            )

        self.config = replace(
            config,
            api_endpoint=config.api_endpoint or DEFAULT_API_ENDPOINT,
            response_type=response_type,
            timeout=config.timeout if config.timeout and config.timeout > 0 else DEFAULT_TIMEOUT
        )
        self.logger = logger or logging.getLogger(__name__)

    @property
    def api_endpoint(self) -> str:
        return self.config.api_endpoint

    @property
    def response_type(self) -> str:
        return self.config.response_type

    @property
    def timeout(self) -> int:
        return self.config.timeout

    def _headers(self) -> Dict[str, str]:
        return {
            'Content-Type': self.response_type,
            'Accept': self.response_type,
            API_KEY_HEADER: self.config.api_key
        }

    def _new_session(self) -> requests.Session:
        session = requests.Session()

        # One submission is exactly one request
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def submit(self, job_spec: JobSpec) -> Dict[str, Any]:
        """
        Submit an encoding job.

        The timeout bounds connection establishment only; once connected the
        call waits for the full response.

        Args:
            job_spec: Job to submit

        Returns:
            Decoded service response

        Raises:
            TransportError: If the request could not be delivered
            ServiceError: If the service answered with HTTP 400 or above
            DecodeError: If a successful response body could not be decoded
        """
        payload = encode_payload(job_spec.to_dict(), self.response_type)
        self.logger.debug(f"Zencoder request payload: {payload.decode('utf-8')}")

        session = self._new_session()
        try:
            response = session.post(
                self.api_endpoint,
                data=payload,
                headers=self._headers(),
                timeout=(self.timeout, None),
                allow_redirects=False
            )
        except requests.RequestException as e:
            self.logger.debug(f"Failed to submit job to {self.api_endpoint}: {e}")
            raise TransportError(
                f"Failed to reach Zencoder API at {self.api_endpoint}: {e}",
                original_error=e,
                details={"api_endpoint": self.api_endpoint}
            ) from e
        finally:
            session.close()

        if response.status_code >= 400:
            self.logger.debug(f"Zencoder API rejected job with HTTP {response.status_code}: {response.text}")
            raise ServiceError(response.status_code, response.text)

        result = decode_response(response.text, self.response_type)
        self.logger.debug(f"Zencoder job submitted: {result}")
        return result

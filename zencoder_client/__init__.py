"""
Zencoder Client Package

A Python client library for submitting video encoding jobs to the
Zencoder API.
"""

import logging

__version__ = "0.1.0"

from .client import EncodingJobClient
from .config import ClientConfig, DEFAULT_API_ENDPOINT
from .exceptions import (
    ZencoderError,
    ConfigurationError,
    TransportError,
    ServiceError,
    DecodeError,
)
from .models import JobSpec, Output, Stream, NotificationPayload, parse_notification

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EncodingJobClient",
    "ClientConfig",
    "DEFAULT_API_ENDPOINT",
    "JobSpec",
    "Output",
    "Stream",
    "NotificationPayload",
    "parse_notification",
    "ZencoderError",
    "ConfigurationError",
    "TransportError",
    "ServiceError",
    "DecodeError",
]

"""Asynchronous S3 object client with retry and redirect handling."""

from .aws_services.s3 import Item
from .exceptions import (
    S3ItemError,
    ConfigurationError,
    RedirectError,
    RequestFailed,
    RetriesExhausted,
    TransportFailed,
)
from .models import Options, Ok, Err, Result

__version__ = "1.0.0"

__all__ = [
    "Item",
    "Options",
    "Ok",
    "Err",
    "Result",
    "S3ItemError",
    "ConfigurationError",
    "RedirectError",
    "RequestFailed",
    "RetriesExhausted",
    "TransportFailed",
]

"""Identity provider API client.

Synchronous client for an organization-scoped identity management HTTP API.
Builds authenticated JSON requests, dispatches them under a cancellable
context and turns non-2xx responses into typed errors.

Exports:
    Client: HTTP client with authentication and error handling.
    Context: Cancellation and deadline carrier passed to every call.
    Response: Response wrapper holding the decoded payload.
    types: Module containing Pydantic models for API resources.
"""

from . import types
from .auth import Authenticator, StaticTokenAuthenticator
from .client import DEFAULT_TIMEOUT, Client
from .context import Context
from .errors import (
    APIError,
    CancellationError,
    ContextCancelledError,
    DeadlineExceededError,
    DecodeError,
    EncodingError,
    ErrorResponse,
    IdpClientError,
    TransportError,
    URLError,
)
from .options import QueryOptions
from .response import Response

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TIMEOUT",
    "APIError",
    "Authenticator",
    "CancellationError",
    "Client",
    "Context",
    "ContextCancelledError",
    "DeadlineExceededError",
    "DecodeError",
    "EncodingError",
    "ErrorResponse",
    "IdpClientError",
    "QueryOptions",
    "Response",
    "StaticTokenAuthenticator",
    "TransportError",
    "URLError",
    "types",
]

"""Exception hierarchy for the identity provider API client.

Every failure raised by the client derives from :class:`IdpClientError`.
Lower layers never retry; errors propagate to the immediate caller, chained
to the underlying cause where there is one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .response import Response


class IdpClientError(Exception):
    """Base class for all client errors.

    ``response`` holds the API response when the failure happened after one
    was received, so its status and headers stay inspectable.
    """

    response: Response | None = None


class URLError(IdpClientError):
    """Raised when the base origin or a resource path is not a valid URL."""


class EncodingError(IdpClientError):
    """Raised when a request body or query options cannot be serialized."""


class DecodeError(EncodingError):
    """Raised when a successful response body cannot be decoded."""


class TransportError(IdpClientError):
    """Raised when the request could not be completed at the network level."""

    def __init__(self, message: str, method: str = "", url: str = ""):
        super().__init__(message)
        self.method = method
        self.url = url


class CancellationError(TransportError):
    """Raised when the call's context terminated before the call completed."""


class ContextCancelledError(CancellationError):
    """The context was explicitly cancelled."""

    def __init__(self, message: str = "context cancelled"):
        super().__init__(message)


class DeadlineExceededError(CancellationError):
    """The context deadline passed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class APIError(IdpClientError):
    """A non-2xx response from the API.

    Attributes:
        code: HTTP status code.
        type: Reason phrase for the status code.
        message: Raw response body text, not parsed.
        response: The :class:`~idp_client.response.Response` that caused
            the error, kept for header and status inspection.
    """

    def __init__(
        self,
        code: int,
        type: str,  # noqa: A002
        message: str,
        response: Response | None = None,
    ):
        self.code = code
        self.type = type
        self.message = message
        self.response = response
        super().__init__(self._describe())

    def _describe(self) -> str:
        method, url = "", ""
        if self.response is not None:
            method = self.response.request.method
            url = str(self.response.request.url)
        return (
            f"{method} {url}: API responded with code {self.code}, "
            f"type {self.type} and message {self.message}"
        )


ErrorResponse = APIError

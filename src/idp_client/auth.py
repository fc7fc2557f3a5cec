"""Request authentication.

The remote API authenticates with a static API token sent using the ``SSWS``
scheme. Authenticators receive the call's context so that implementations
which refresh credentials over the network can honor cancellation.
"""

from typing import Protocol

import httpx
import structlog

from .context import Context

logger = structlog.get_logger(__name__)

AUTH_SCHEME = "SSWS"


class Authenticator(Protocol):
    """Injects credentials into an outbound request."""

    def authorize(self, request: httpx.Request, ctx: Context) -> None: ...


class StaticTokenAuthenticator:
    """Sets ``Authorization: SSWS <token>`` on every request.

    An empty token leaves requests unauthenticated.
    """

    def __init__(self, token: str | None):
        self._token = token or ""
        if not self._token:
            logger.warning("No API token configured, requests will be unauthenticated")

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    def authorize(self, request: httpx.Request, ctx: Context) -> None:  # noqa: ARG002
        if self._token:
            request.headers["Authorization"] = f"{AUTH_SCHEME} {self._token}"

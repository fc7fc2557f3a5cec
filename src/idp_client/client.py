"""Identity provider API client.

Builds authenticated JSON requests against the organization-scoped origin,
dispatches them through httpx bound to a cancellable :class:`Context`, and
interprets responses by status class.
"""

import contextlib
import json
import time
from collections.abc import Callable
from typing import Any, BinaryIO

import httpx
import pydantic
import structlog

from .auth import Authenticator, StaticTokenAuthenticator
from .context import Context
from .errors import APIError, EncodingError, IdpClientError, TransportError, URLError
from .metrics import ClientMetrics
from .options import SupportsQueryItems
from .resources.groups import GroupService
from .resources.users import UserService
from .response import Response, check_response, decode_body
from .urls import add_options, build_base_url, resolve_reference

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

# Unread body bytes discarded before close so the connection can be reused.
DRAIN_LIMIT = 512


def encode_json(body: Any) -> bytes:
    """Serialize a request body to UTF-8 JSON.

    Raises:
        EncodingError: If ``body`` is not JSON serializable.
    """
    try:
        if isinstance(body, pydantic.BaseModel):
            return body.model_dump_json(by_alias=True, exclude_none=True).encode()
        return json.dumps(body, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        msg = f"failed to encode request body as JSON: {exc}"
        raise EncodingError(msg) from exc


def drain_and_close(response: httpx.Response) -> None:
    """Discard up to DRAIN_LIMIT unread bytes and close the response."""
    if not response.is_stream_consumed:
        with contextlib.suppress(httpx.HTTPError, httpx.StreamError):
            for _ in response.iter_raw(chunk_size=DRAIN_LIMIT):
                break
    response.close()


def _bind_context(request: httpx.Request, ctx: Context) -> None:
    """Cap every transport timeout of ``request`` by the context's remaining time."""
    remaining = ctx.remaining()
    if remaining is None:
        return
    timeout = dict(request.extensions.get("timeout", {}))
    for key in ("connect", "read", "write", "pool"):
        current = timeout.get(key)
        timeout[key] = remaining if current is None else min(current, remaining)
    request.extensions["timeout"] = timeout


class Client:
    """HTTP client for the identity provider API.

    Holds configuration only; no per-request state is kept, so a single
    instance can be shared by many threads. The underlying ``http_client``
    may be replaced, e.g. with one using ``httpx.MockTransport`` in tests.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        api_token: str | None,
        organization: str,
        user_agent: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        authenticator: Authenticator | None = None,
        metrics: ClientMetrics | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client. No network I/O is performed.

        Args:
            api_token: Static API token sent with the ``SSWS`` scheme.
            organization: Organization identifier used to build the origin.
            user_agent: Optional ``User-Agent`` header value.
            http_client: Transport to use instead of a new ``httpx.Client``.
            authenticator: Replaces the static token authenticator.
            metrics: Optional Prometheus instrumentation.
            timeout: Default transport timeout in seconds.

        Raises:
            URLError: If the organization does not produce a valid origin.
            ValueError: If timeout is not positive.
        """
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)

        self.organization = organization
        self.base_url = build_base_url(organization)
        self.user_agent = user_agent
        self.authenticator = authenticator or StaticTokenAuthenticator(api_token)
        self.metrics = metrics
        self.http_client = http_client or httpx.Client(timeout=timeout)

        self.users = UserService(self)
        self.groups = GroupService(self)

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the underlying HTTP client."""
        self.http_client.close()

    def new_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: SupportsQueryItems | None = None,
    ) -> httpx.Request:
        """Build a request for ``path`` relative to the base origin.

        The body, if provided, is serialized to JSON.

        Args:
            method: HTTP method.
            path: Resource path, resolved against ``base_url``.
            body: Optional JSON-serializable value or pydantic model.
            params: Optional query options replacing the path's query.

        Returns:
            The unsent request.

        Raises:
            URLError: If the path cannot be resolved.
            EncodingError: If the body or options cannot be serialized.
        """
        url = resolve_reference(self.base_url, add_options(path, params))

        headers = {"Accept": "application/json"}
        content = None
        if body is not None:
            content = encode_json(body)
            headers["Content-Type"] = "application/json"
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            return self.http_client.build_request(
                method,
                url,
                content=content,
                headers=headers,
            )
        except httpx.InvalidURL as exc:
            msg = f"invalid request URL {url}: {exc}"
            raise URLError(msg) from exc

    def authorize(self, request: httpx.Request, ctx: Context) -> None:
        """Inject credentials into ``request``."""
        self.authenticator.authorize(request, ctx)

    def send(self, ctx: Context, request: httpx.Request) -> httpx.Response:
        """Dispatch ``request`` bound to ``ctx`` and return the unread response.

        The caller owns the returned response and must close it, typically
        through :func:`drain_and_close`.

        Raises:
            CancellationError: If ``ctx`` is done before or during dispatch.
            TransportError: For any other network-level failure.
        """
        if (err := ctx.err()) is not None:
            raise err
        _bind_context(request, ctx)
        try:
            return self.http_client.send(request, stream=True)
        except httpx.TransportError as exc:
            raise self._transport_error(ctx, request, exc) from exc

    def do(self, ctx: Context, request: httpx.Request, into: Any = None) -> Response:
        """Send ``request`` and decode its JSON body into ``into``.

        Args:
            ctx: Cancellation context for the call.
            request: Request built by :meth:`new_request`.
            into: Type to decode the body into (a pydantic model, ``dict``,
                ``list[Model]``...). None discards the body.

        Returns:
            Response whose ``data`` holds the decoded value, or None for an
            empty body.

        Raises:
            APIError: For a non-2xx status. ``error.response`` carries the
                response for inspection.
            DecodeError: If a successful body does not decode into ``into``.
            TransportError: For network failures, or the context's
                CancellationError when the context is the cause.

        Any error raised after the response headers arrived carries that
        response as ``error.response``.
        """
        return self._execute(ctx, request, lambda raw: decode_body(raw.read(), into))

    def do_raw(self, ctx: Context, request: httpx.Request, sink: BinaryIO) -> Response:
        """Send ``request`` and copy the raw body bytes into ``sink``.

        The body is not parsed. Errors are the same as for :meth:`do`.
        """

        def copy(raw: httpx.Response) -> None:
            for chunk in raw.iter_bytes():
                if (err := ctx.err()) is not None:
                    raise err
                sink.write(chunk)

        return self._execute(ctx, request, copy)

    def request(
        self,
        ctx: Context,
        method: str,
        path: str,
        *,
        body: Any = None,
        into: Any = None,
        params: SupportsQueryItems | None = None,
    ) -> Response:
        """Build and send a request in one call."""
        request = self.new_request(method, path, body=body, params=params)
        return self.do(ctx, request, into=into)

    def get(
        self,
        ctx: Context,
        path: str,
        *,
        into: Any = None,
        params: SupportsQueryItems | None = None,
    ) -> Response:
        """GET ``path``, decoding the body into ``into``."""
        return self.request(ctx, "GET", path, into=into, params=params)

    def post(
        self,
        ctx: Context,
        path: str,
        *,
        body: Any = None,
        into: Any = None,
        params: SupportsQueryItems | None = None,
    ) -> Response:
        """POST ``body`` as JSON to ``path``."""
        return self.request(ctx, "POST", path, body=body, into=into, params=params)

    def put(
        self,
        ctx: Context,
        path: str,
        *,
        body: Any = None,
        into: Any = None,
    ) -> Response:
        """PUT ``body`` as JSON to ``path``."""
        return self.request(ctx, "PUT", path, body=body, into=into)

    def delete(self, ctx: Context, path: str, *, into: Any = None) -> Response:
        """DELETE ``path``. Most deletions answer 204, leaving ``data`` None."""
        return self.request(ctx, "DELETE", path, into=into)

    def _execute(
        self,
        ctx: Context,
        request: httpx.Request,
        consume: Callable[[httpx.Response], Any],
    ) -> Response:
        """Authorize, send, check and consume a response.

        The response body is drained and closed on every exit path.
        """
        self.authorize(request, ctx)
        start_time = time.time()
        logger.debug("Making API request", method=request.method, url=str(request.url))

        try:
            raw = self.send(ctx, request)
        except TransportError as exc:
            logger.warning(
                "API request failed",
                method=request.method,
                url=str(request.url),
                error=str(exc),
            )
            if self.metrics is not None:
                self.metrics.observe_error(request.method, exc)
            raise

        try:
            check_response(raw)
            data = consume(raw)
        except httpx.TransportError as exc:
            error = self._transport_error(ctx, request, exc)
            error.response = Response(raw=raw)
            raise error from exc
        except APIError as exc:
            logger.warning(
                "API error response",
                method=request.method,
                url=str(request.url),
                status_code=exc.code,
            )
            raise
        except IdpClientError as exc:
            # Decode failures and cancellation while reading the body.
            if exc.response is None:
                exc.response = Response(raw=raw)
            raise
        finally:
            drain_and_close(raw)
            duration = time.time() - start_time
            if self.metrics is not None:
                self.metrics.observe_response(request.method, raw.status_code, duration)

        logger.debug(
            "API request completed",
            status_code=raw.status_code,
            duration_seconds=round(duration, 3),
        )
        return Response(raw=raw, data=data)

    @staticmethod
    def _transport_error(
        ctx: Context,
        request: httpx.Request,
        exc: httpx.TransportError,
    ) -> IdpClientError:
        """Prefer the context's termination reason over the transport error."""
        if (err := ctx.err()) is not None:
            return err
        return TransportError(str(exc), method=request.method, url=str(request.url))

"""Response wrapper and interpretation.

HTTP status codes from 200 to 299 are successes. Anything else becomes an
:class:`~idp_client.errors.APIError` whose message is the raw body text; the
body is not parsed as a structured error.
"""

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Generic, TypeVar

import httpx
import pydantic

from .errors import APIError, DecodeError

T = TypeVar("T")


@dataclass(frozen=True)
class Response(Generic[T]):
    """An API response together with its decoded payload.

    Attributes:
        raw: The underlying httpx response. Its body stream has already been
            consumed or closed by the client.
        data: Decoded payload, or None when the body was empty, discarded or
            written to a sink.
    """

    raw: httpx.Response
    data: T | None = None

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    @property
    def request(self) -> httpx.Request:
        return self.raw.request


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299  # noqa: PLR2004


def status_text(status_code: int) -> str:
    """Return the standard reason phrase for ``status_code``, or "" if unknown."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def check_response(response: httpx.Response) -> None:
    """Raise an APIError if ``response`` does not have a 2xx status.

    The error body is read in full. Read failures are not masked; they
    propagate as httpx errors for the caller to translate.

    Raises:
        APIError: For any status outside 200..299.
    """
    if is_success(response.status_code):
        return

    response.read()
    raise APIError(
        code=response.status_code,
        type=status_text(response.status_code),
        message=response.text,
        response=Response(raw=response),
    )


def decode_body(content: bytes, into: Any) -> Any:
    """Decode a JSON body into ``into``.

    Args:
        content: Raw response body.
        into: Target type understood by pydantic (a model class, ``dict``,
            ``list[Model]``...), or None to discard the body.

    Returns:
        The decoded value, or None for an empty body or no target.

    Raises:
        DecodeError: If the body is not valid JSON for ``into``, or ``into``
            is a type pydantic cannot validate.
    """
    if into is None or not content.strip():
        return None
    try:
        return pydantic.TypeAdapter(into).validate_json(content)
    except (pydantic.ValidationError, pydantic.PydanticSchemaGenerationError) as exc:
        msg = f"failed to decode response body as {into!r}: {exc}"
        raise DecodeError(msg) from exc

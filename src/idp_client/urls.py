"""URL helpers: organization-scoped origin, reference resolution and query
options.
"""

import urllib.parse

import httpx

from .errors import EncodingError, URLError
from .options import SupportsQueryItems

BASE_URL_TEMPLATE = "https://{organization}.example-idp.com/"


def build_base_url(organization: str, template: str = BASE_URL_TEMPLATE) -> httpx.URL:
    """Build the organization-scoped base origin.

    Args:
        organization: Organization identifier substituted into the template.
        template: Format string with an ``{organization}`` placeholder.

    Returns:
        Absolute base URL.

    Raises:
        URLError: If the organization is empty or the formatted string is not
            a valid absolute URL.
    """
    if not organization:
        msg = "organization cannot be empty"
        raise URLError(msg)

    raw = template.format(organization=organization)
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        msg = f"invalid base URL {raw!r}: {exc}"
        raise URLError(msg) from exc

    if not url.is_absolute_url or not url.host:
        msg = f"invalid base URL {raw!r}: not an absolute URL"
        raise URLError(msg)
    return url


def resolve_reference(base: httpx.URL, path: str) -> httpx.URL:
    """Resolve ``path`` against ``base`` following RFC 3986.

    Relative paths inherit scheme and host from ``base``; absolute URLs
    replace it entirely.

    Raises:
        URLError: If ``path`` cannot be parsed as a URL reference.
    """
    try:
        return base.join(path)
    except httpx.InvalidURL as exc:
        msg = f"invalid resource path {path!r}: {exc}"
        raise URLError(msg) from exc


def add_options(path: str, options: SupportsQueryItems | None) -> str:
    """Replace the query component of ``path`` with the encoded ``options``.

    Args:
        path: Resource path, relative or absolute.
        options: Query parameter record, or None to leave ``path`` untouched.

    Returns:
        The path with a canonical (key-sorted) query string.

    Raises:
        EncodingError: If ``options`` does not provide ``query_items()`` or
            ``path`` is not parseable.
    """
    if options is None:
        return path

    if not isinstance(options, SupportsQueryItems):
        msg = f"query options must provide query_items(), got {type(options).__name__}"
        raise EncodingError(msg)

    try:
        url = httpx.URL(path)
    except httpx.InvalidURL as exc:
        msg = f"invalid resource path {path!r}: {exc}"
        raise EncodingError(msg) from exc

    items = sorted(options.query_items(), key=lambda item: item[0])
    return str(url.copy_with(params=httpx.QueryParams(items)))


def path_segment(value: str) -> str:
    """Percent-encode ``value`` as a single path segment.

    Reserved characters such as ``/``, ``?`` and ``#`` are escaped so an id
    can never address a different resource.

    Raises:
        URLError: If ``value`` is empty or a dot segment.
    """
    if value in {"", ".", ".."}:
        msg = f"invalid path segment {value!r}"
        raise URLError(msg)
    return urllib.parse.quote(value, safe="")

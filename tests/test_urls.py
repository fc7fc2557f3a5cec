"""Tests for origin building, reference resolution and query options."""

import urllib.parse

import httpx
import pytest

from idp_client import EncodingError, QueryOptions, URLError, urls
from idp_client.types import GroupListOptions, UserListOptions

# ---------------------------------------------------------------------------
# build_base_url
# ---------------------------------------------------------------------------


def test_build_base_url_substitutes_organization():
    """The organization becomes the leftmost host label."""
    url = urls.build_base_url("acme")
    assert str(url) == "https://acme.example-idp.com/"


def test_build_base_url_empty_organization_raises():
    """An empty organization cannot form a valid host."""
    with pytest.raises(URLError):
        urls.build_base_url("")


def test_build_base_url_non_absolute_template_raises():
    """A template that does not produce an absolute URL is rejected."""
    with pytest.raises(URLError):
        urls.build_base_url("acme", template="{organization}/relative")


# ---------------------------------------------------------------------------
# resolve_reference
# ---------------------------------------------------------------------------


@pytest.fixture
def origin() -> httpx.URL:
    return urls.build_base_url("acme")


def test_resolve_relative_path_keeps_scheme_and_host(origin: httpx.URL):
    """Relative paths inherit the origin's scheme and host."""
    url = urls.resolve_reference(origin, "users/42")
    assert url.scheme == "https"
    assert url.host == "acme.example-idp.com"
    assert str(url) == "https://acme.example-idp.com/users/42"


def test_resolve_absolute_path(origin: httpx.URL):
    """An absolute path replaces the origin's path."""
    url = urls.resolve_reference(origin, "/api/v1/users")
    assert str(url) == "https://acme.example-idp.com/api/v1/users"


def test_resolve_absolute_url_overrides_origin(origin: httpx.URL):
    """A full URL replaces scheme and host, as RFC 3986 requires."""
    url = urls.resolve_reference(origin, "http://other.example.com/x")
    assert url.host == "other.example.com"
    assert url.scheme == "http"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("users", "https://acme.example-idp.com/api/v1/users"),
        ("../v2/users", "https://acme.example-idp.com/api/v2/users"),
        ("./groups?q=eng", "https://acme.example-idp.com/api/v1/groups?q=eng"),
    ],
)
def test_resolve_against_base_with_path(path: str, expected: str):
    """Dot segments and relative paths resolve against the base path."""
    base = httpx.URL("https://acme.example-idp.com/api/v1/")
    assert str(urls.resolve_reference(base, path)) == expected


def test_resolve_invalid_path_raises(origin: httpx.URL):
    with pytest.raises(URLError):
        urls.resolve_reference(origin, "users/\x00")


# ---------------------------------------------------------------------------
# add_options
# ---------------------------------------------------------------------------


def test_add_options_none_is_identity():
    """No options leaves the path, including any query, untouched."""
    assert urls.add_options("users?limit=5", None) == "users?limit=5"


def test_add_options_round_trips_pairs():
    """Parsing the produced query recovers the record's pairs."""
    options = UserListOptions(limit=20, filter='status eq "ACTIVE"', after="00u1")
    path = urls.add_options("api/v1/users", options)

    query = urllib.parse.urlsplit(path).query
    assert sorted(urllib.parse.parse_qsl(query)) == sorted(options.query_items())


def test_add_options_is_independent_of_field_order():
    """Records with the same values encode to the same canonical query."""
    first = UserListOptions(limit=5, q="ann")
    second = UserListOptions(q="ann", limit=5)
    assert urls.add_options("users", first) == urls.add_options("users", second)
    assert urls.add_options("users", first) == "users?limit=5&q=ann"


def test_add_options_replaces_existing_query():
    path = urls.add_options("users?limit=1&stale=yes", UserListOptions(limit=3))
    assert path == "users?limit=3"


def test_add_options_empty_record_drops_query():
    """A present but empty record yields no query component."""
    assert urls.add_options("users?limit=1", UserListOptions()) == "users"


def test_add_options_repeats_list_values():
    options = GroupListOptions(expand=["stats", "app"])
    path = urls.add_options("groups", options)
    assert httpx.URL(path).params.get_list("expand") == ["stats", "app"]


def test_add_options_renders_booleans_lowercase():
    class Flags(QueryOptions):
        activate: bool = False

    assert urls.add_options("users", Flags()) == "users?activate=false"


def test_add_options_rejects_plain_mapping():
    """Options must state their own pairs; arbitrary objects are refused."""
    with pytest.raises(EncodingError):
        urls.add_options("users", {"limit": 5})


def test_add_options_invalid_path_raises():
    with pytest.raises(EncodingError):
        urls.add_options("users/\x00", UserListOptions(limit=1))


# ---------------------------------------------------------------------------
# path_segment
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("00u1", "00u1"),
        ("ann@example.com", "ann%40example.com"),
        ("a/b?c#d", "a%2Fb%3Fc%23d"),
        ("a/../../admin", "a%2F..%2F..%2Fadmin"),
    ],
)
def test_path_segment_escapes_reserved_characters(value: str, expected: str):
    assert urls.path_segment(value) == expected


@pytest.mark.parametrize("value", ["", ".", ".."])
def test_path_segment_rejects_dot_and_empty_segments(value: str):
    with pytest.raises(URLError):
        urls.path_segment(value)


def test_escaped_segment_stays_within_resource(origin: httpx.URL):
    """Resolving an escaped id cannot climb out of the collection path."""
    path = f"api/v1/users/{urls.path_segment('a/../../admin?x=1')}"
    url = urls.resolve_reference(origin, path)
    assert url.raw_path == b"/api/v1/users/a%2F..%2F..%2Fadmin%3Fx%3D1"
    assert url.query == b""

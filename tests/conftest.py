"""Shared fixtures: clients wired to an in-process httpx transport."""

from collections.abc import Callable

import httpx
import pytest

from idp_client import Client

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client() -> Callable[..., Client]:
    """Factory for a Client whose transport is served by ``handler``."""
    created: list[Client] = []

    def factory(handler: Handler, **kwargs) -> Client:
        kwargs.setdefault("api_token", "tok123")
        kwargs.setdefault("organization", "acme")
        api_client = Client(
            http_client=httpx.Client(transport=httpx.MockTransport(handler)),
            **kwargs,
        )
        created.append(api_client)
        return api_client

    yield factory

    for api_client in created:
        api_client.close()

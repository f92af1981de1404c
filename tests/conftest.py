"""Shared fixtures: a client wired to an in-memory router."""

from typing import Iterator

import httpx
import pytest

from mcp_keenetic_router import ClientConfig, KeeneticClient

from .fake_router import LOGIN, PASSWORD, FakeRouter


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(host="192.168.1.1", login=LOGIN, password=PASSWORD)


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter()


@pytest.fixture
def client(config: ClientConfig, router: FakeRouter) -> Iterator[KeeneticClient]:
    client = KeeneticClient(config, http_transport=httpx.MockTransport(router.handle))
    yield client
    client.close()

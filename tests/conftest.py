import contextlib

import httpx
import pytest

from http_client import HttpClient
from dog_breeds.api import DogAPI

BASE_URL = "https://dog.example/api"

def json_handler(payload, status=200):
    """MockTransport handler answering every request with the same JSON body."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=payload)
    return handler

@pytest.fixture
def dog_api():
    """Factory: `async with dog_api(handler) as api:` gives a DogAPI over a MockTransport."""
    @contextlib.asynccontextmanager
    async def _make(handler, base_url=BASE_URL):
        async with HttpClient(base_url=base_url, connect_timeout=1, read_timeout=1,
                              transport=httpx.MockTransport(handler)) as http:
            yield DogAPI(http)
    return _make

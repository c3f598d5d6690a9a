"""
Async API wrapper around the dog.ceo endpoints.

Provides:
- Listing all breeds (`list_all_breeds`)
- Fetching a random image for one breed (`random_breed_image`)

Both return the raw `httpx.Response`; decoding lives in `fetchers.py`.
Transport errors (network, timeouts, non-2xx) come out as `TransportFailure`,
an unusable base URL as `InvalidRequestURL`.
"""
from __future__ import annotations

import httpx

from http_client import HttpClient

from .errors import TransportFailure
from .utils import BREED_LIST_PATH, breed_image_path, validate_base_url

class DogAPI:

    def __init__(self, http: HttpClient):
        self.http = http

    async def list_all_breeds(self) -> httpx.Response:
        return await self._get(BREED_LIST_PATH)

    async def random_breed_image(self, breed: str) -> httpx.Response:
        return await self._get(breed_image_path(breed))

    async def _get(self, path: str) -> httpx.Response:
        validate_base_url(self.http.base_url)
        try:
            return await self.http.request("GET", path)
        except httpx.HTTPError as e:
            raise TransportFailure(str(e) or type(e).__name__) from e

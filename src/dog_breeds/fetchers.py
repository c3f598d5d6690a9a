from __future__ import annotations
import sys
from typing import Any, List

import httpx

from .api import DogAPI
from .errors import BreedFetchError, DecodeFailure, EmptyResponseBody, ImageLoadFailure
from .models import BreedImageResponse, BreedListResponse
from .utils import is_breed_mapping, sorted_breed_names

def decode_json_body(resp: httpx.Response) -> Any:
    """
    Decode a response body as JSON.
    Empty body -> EmptyResponseBody; anything json can't parse -> DecodeFailure.
    """
    if not resp.content:
        raise EmptyResponseBody()
    try:
        return resp.json()
    except ValueError as e:
        print(f"[warn] non-JSON body from {resp.request.url}: {resp.text[:200]!r}", file=sys.stderr)
        raise DecodeFailure(str(e)) from e

def decode_breed_list(payload: Any) -> BreedListResponse:
    if not isinstance(payload, dict) or "message" not in payload:
        raise DecodeFailure("expected an object with a 'message' field")
    if not is_breed_mapping(payload["message"]):
        raise DecodeFailure("'message' is not a mapping of breed -> [sub-breed]")
    return payload

def decode_breed_image(payload: Any) -> BreedImageResponse:
    if not isinstance(payload, dict) or not isinstance(payload.get("message"), str):
        raise DecodeFailure("expected an object with a string 'message' field")
    return payload

async def fetch_breed_names(api: DogAPI) -> List[str]:
    """
    GET /breeds/list/all and return breed names sorted ascending.
    Raises InvalidRequestURL, TransportFailure, EmptyResponseBody or DecodeFailure.
    An empty 'message' object gives [], not an error.
    """
    resp = await api.list_all_breeds()
    body = decode_breed_list(decode_json_body(resp))
    return sorted_breed_names(body["message"])

async def fetch_breed_image(api: DogAPI, breed: str, *, detailed_errors: bool = False) -> str:
    """
    GET /breed/{breed}/images/random and return the image URL unmodified.

    By default every failure is collapsed into ImageLoadFailure (the specific
    error is kept as `.reason`). With detailed_errors=True the specific error
    propagates as is.
    """
    try:
        resp = await api.random_breed_image(breed)
        body = decode_breed_image(decode_json_body(resp))
    except BreedFetchError as e:
        if detailed_errors:
            raise
        raise ImageLoadFailure(e) from e
    return body["message"]

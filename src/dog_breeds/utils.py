from __future__ import annotations
from typing import Any, List
from urllib.parse import quote

import httpx

from .errors import InvalidRequestURL

DEFAULT_BASE_URL = "https://dog.ceo/api"
BREED_LIST_PATH = "/breeds/list/all"
BREED_IMAGE_PATH = "/breed/{breed}/images/random"

def escape_path_segment(segment: str) -> str:
    """
    Percent-encode a value for use as exactly one URL path segment ('/' included).
    Text that can't be UTF-8 encoded (e.g. lone surrogates from undecodable argv
    bytes) raises InvalidRequestURL.
    """
    try:
        return quote(segment, safe="")
    except UnicodeEncodeError as e:
        raise InvalidRequestURL(f"{segment!r} is not valid UTF-8 text") from e

def breed_image_path(breed: str) -> str:
    if not breed:
        raise InvalidRequestURL("empty breed name")
    return BREED_IMAGE_PATH.format(breed=escape_path_segment(breed))

def validate_base_url(base_url: str) -> httpx.URL:
    """Parse base_url; must be absolute http(s) with a host, else InvalidRequestURL."""
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidRequestURL(f"{base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidRequestURL(f"{base_url!r} is not an absolute http(s) URL")
    return url

def is_breed_mapping(obj: Any) -> bool:
    """True iff obj looks like {str: [str, ...]}."""
    if not isinstance(obj, dict):
        return False
    return all(
        isinstance(k, str) and isinstance(v, list) and all(isinstance(s, str) for s in v)
        for k, v in obj.items()
    )

def sorted_breed_names(breeds: dict[str, Any]) -> List[str]:
    """Keys sorted ascending on the raw string (no case folding)."""
    return sorted(breeds)

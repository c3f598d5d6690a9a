#!/usr/bin/env python3
"""
Minimal dog breeds client (synchronous, one script).

Needs the dog_breeds package importable (pip install -e . or PYTHONPATH=src):
error types and URL helpers are shared with it.

- GET /breeds/list/all -> breed names sorted ascending
- GET /breed/{breed}/images/random -> one image URL (breed is percent-encoded)
- Same error kinds as the async package: InvalidRequestURL, TransportFailure,
  EmptyResponseBody, DecodeFailure; the image call collapses them into
  ImageLoadFailure unless --detailed-errors is given
- One attempt per request, no retries

Usage:
  python dog_breeds_simple.py [--base-url URL] list
  python dog_breeds_simple.py [--base-url URL] image akita [--detailed-errors]

Config via env:
  DOG_API_BASE_URL (default https://dog.ceo/api)
  CONNECT_TIMEOUT (default 5)
  READ_TIMEOUT (default 30)
"""

import argparse
import itertools
import os
import sys
from typing import Any, List

import requests

from dog_breeds.errors import (
    BreedFetchError,
    DecodeFailure,
    EmptyResponseBody,
    ImageLoadFailure,
    TransportFailure,
)
from dog_breeds.utils import (
    BREED_LIST_PATH,
    DEFAULT_BASE_URL,
    breed_image_path,
    is_breed_mapping,
    sorted_breed_names,
    validate_base_url,
)

_req_counter = itertools.count(1)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Minimal synchronous dog breeds client")
    p.add_argument("--base-url", default=os.getenv("DOG_API_BASE_URL", DEFAULT_BASE_URL))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("list")
    image = sub.add_parser("image")
    image.add_argument("breed")
    image.add_argument("--detailed-errors", action="store_true")
    return p.parse_args(argv)


class RequestsDogAPI:
    """Thin dog.ceo client using requests with timeouts; raises the package's error types."""
    def __init__(self, base_url: str, connect_timeout: float, read_timeout: float):
        self.base_url = base_url.rstrip("/")
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.session = requests.Session()
        self.session.headers["Accept"] = "application/json"

    def _get_json(self, path: str) -> Any:
        """One GET; transport problems and non-2xx -> TransportFailure, then decode the body."""
        validate_base_url(self.base_url)
        url = self.base_url + path
        req_id = next(_req_counter)
        try:
            resp = self.session.request("GET", url, timeout=(self.connect_timeout, self.read_timeout))
            resp.raise_for_status()
        except requests.RequestException as e:
            print(f"[req#{req_id}] [fatal] GET {url}: {e}", file=sys.stderr)
            raise TransportFailure(str(e) or type(e).__name__) from e

        if not resp.content:
            raise EmptyResponseBody()
        try:
            return resp.json()
        except ValueError as e:
            print(f"[req#{req_id}] [warn] non-JSON body: {resp.text[:200]!r}", file=sys.stderr)
            raise DecodeFailure(str(e)) from e

    def breed_names(self) -> List[str]:
        payload = self._get_json(BREED_LIST_PATH)
        if not isinstance(payload, dict) or not is_breed_mapping(payload.get("message")):
            raise DecodeFailure("expected {'message': {breed: [sub-breed]}}")
        return sorted_breed_names(payload["message"])

    def breed_image(self, breed: str, detailed_errors: bool = False) -> str:
        try:
            payload = self._get_json(breed_image_path(breed))
            if not isinstance(payload, dict) or not isinstance(payload.get("message"), str):
                raise DecodeFailure("expected {'message': '<image-url>'}")
        except BreedFetchError as e:
            if detailed_errors:
                raise
            raise ImageLoadFailure(e) from e
        return payload["message"]

    def close(self):
        self.session.close()


def main(argv=None):
    args = parse_args(argv)
    api = RequestsDogAPI(args.base_url, args.connect_timeout, args.read_timeout)
    try:
        if args.command == "list":
            for name in api.breed_names():
                print(name)
        else:
            print(api.breed_image(args.breed, detailed_errors=args.detailed_errors))
    except BreedFetchError as e:
        print(e.user_message, file=sys.stderr)
        return 1
    finally:
        api.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

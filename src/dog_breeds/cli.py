"""
Command-line entrypoint for the dog breeds browser.

- Parses CLI args and config
- Initializes HttpClient and DogAPI
- `list`: opens the breed list screen and prints the sorted names
- `image BREED`: opens the detail screen for BREED and prints the image URL

Failures print the screen's notice to stderr and exit 1; Ctrl-C exits 130.
"""
from __future__ import annotations
import asyncio, sys
from typing import Optional, Sequence

from http_client import HttpClient

from .api import DogAPI
from .config import parse_args
from .errors import BreedFetchError
from .screens import BreedDetailScreen, BreedListScreen
from .utils import validate_base_url

async def run(args) -> int:
    validate_base_url(args.base_url)
    if args.verbose:
        print(f"""
            ====== Dog Breeds ======
            Base URL       : {args.base_url}
            Retries        : {args.retries}
            Timeouts (s)   : connect={args.connect_timeout} read={args.read_timeout}
            ========================
        """, file=sys.stderr)
    async with HttpClient(
        base_url=args.base_url,
        connect_timeout=args.connect_timeout,
        read_timeout=args.read_timeout,
        retries=args.retries,
    ) as http:
        api = DogAPI(http)
        if args.command == "list":
            async with BreedListScreen(api) as screen:
                outcome = await screen.appear()
                for name in screen.breeds:
                    print(name)
        else:
            async with BreedDetailScreen(api, args.breed, detailed_errors=args.detailed_errors) as screen:
                outcome = await screen.load()
                if screen.image_url is not None:
                    print(screen.image_url)
        if not outcome.ok:
            print(screen.notice, file=sys.stderr)
            return 1
    return 0

def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    try:
        code = asyncio.run(run(args))
    except BreedFetchError as e:
        print(e.user_message, file=sys.stderr)
        code = 1
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        code = 130
    sys.exit(code)

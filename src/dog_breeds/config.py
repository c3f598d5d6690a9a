from __future__ import annotations
import argparse, os
from typing import Optional, Sequence

from .utils import DEFAULT_BASE_URL

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dog-breeds", description="Browse dog breeds from the dog.ceo API")
    p.add_argument("--base-url", default=os.getenv("DOG_API_BASE_URL", DEFAULT_BASE_URL))
    p.add_argument("--retries", type=int, default=int(os.getenv("MAX_RETRIES", "1")),
                   help="attempts per request (1 = no retry)")
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    p.add_argument("-v", "--verbose", action="store_true", help="print the effective config to stderr")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="print all breed names, sorted")
    image = sub.add_parser("image", help="print a random image URL for a breed")
    image.add_argument("breed")
    image.add_argument("--detailed-errors", action="store_true",
                       help="report the specific failure instead of a generic one")
    return p

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)

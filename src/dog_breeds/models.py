"""
TypedDict models for responses from the dog.ceo API.

Includes:
- BreedListResponse: GET /breeds/list/all (breed -> sub-breeds)
- BreedImageResponse: GET /breed/{breed}/images/random (one image URL)

Only `message` is consumed; `status` is kept for completeness.
"""

from __future__ import annotations
from typing import Dict, List, TypedDict

BreedName = str

# GET /breeds/list/all
class BreedListResponse(TypedDict, total=False):
    message: Dict[BreedName, List[str]]   # sub-breeds unused
    status: str

# GET /breed/{breed}/images/random
class BreedImageResponse(TypedDict, total=False):
    message: str                          # image URL
    status: str

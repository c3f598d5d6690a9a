"""
Error taxonomy for breed fetches.

Every error carries a `user_message` meant for the notice shown to the user.
The list flow surfaces each kind separately; the image flow collapses them
into `ImageLoadFailure` unless detailed errors are requested.
"""
from __future__ import annotations
from typing import Optional

class BreedFetchError(Exception):
    user_message = "Something went wrong."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or self.user_message)

class InvalidRequestURL(BreedFetchError):
    user_message = "Invalid URL."

class TransportFailure(BreedFetchError):
    """Network-level failure or non-2xx status; `message` is the transport's own text."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"Error: {self.message}"

class EmptyResponseBody(BreedFetchError):
    user_message = "No data received."

class DecodeFailure(BreedFetchError):
    user_message = "Failed to decode data."

class ImageLoadFailure(BreedFetchError):
    user_message = "Failed to load image."

    def __init__(self, reason: BreedFetchError):
        self.reason = reason
        super().__init__(str(reason))

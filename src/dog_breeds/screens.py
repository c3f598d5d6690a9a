"""
Headless screen controllers for the two views of the app.

- BreedListScreen: fetches the breed list the first time it appears
- BreedDetailScreen: fetches a random image for one breed

Each screen owns at most one in-flight fetch, run as an asyncio task. The
task is cancelled when the screen is closed (or its `async with` block
exits), and a closed screen never delivers a result. Results are handed to
`on_result` through the `dispatch` callable, so the caller picks the
context they land on (e.g. `loop.call_soon_threadsafe` of a UI loop).
"""
from __future__ import annotations
import asyncio, enum, sys
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, TypeVar

from .api import DogAPI
from .errors import BreedFetchError
from .fetchers import fetch_breed_image, fetch_breed_names

T = TypeVar("T")

Dispatch = Callable[[Callable[[], None]], None]

def call_inline(callback: Callable[[], None]) -> None:
    callback()

class LoadState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"
    CANCELLED = "cancelled"

@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result-or-error of one fetch."""
    value: Optional[T] = None
    error: Optional[BreedFetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class _Screen(Generic[T]):

    def __init__(
        self,
        api: DogAPI,
        *,
        dispatch: Dispatch = call_inline,
        on_result: Optional[Callable[[Outcome[T]], None]] = None,
    ):
        self.api = api
        self.dispatch = dispatch
        self.on_result = on_result
        self.state = LoadState.IDLE
        self.outcome: Optional[Outcome[T]] = None
        self.closed = False
        self._task: Optional[asyncio.Task] = None

    async def _fetch(self) -> T:
        raise NotImplementedError

    def _start(self) -> asyncio.Task:
        if self.closed:
            raise RuntimeError(f"{type(self).__name__} is closed")
        if self._task is not None and not self._task.done():
            return self._task
        self.state = LoadState.LOADING
        self.outcome = None
        self._task = asyncio.create_task(self._run())
        return self._task

    async def _run(self) -> Outcome[T]:
        try:
            outcome: Outcome[T] = Outcome(value=await self._fetch())
        except BreedFetchError as e:
            print(f"[warn] {type(self).__name__}: {type(e).__name__}: {e}", file=sys.stderr)
            outcome = Outcome(error=e)
        self.dispatch(lambda: self._deliver(outcome))
        return outcome

    def _deliver(self, outcome: Outcome[T]) -> None:
        if self.closed:
            return
        self.outcome = outcome
        self.state = LoadState.LOADED if outcome.ok else LoadState.FAILED
        if self.on_result is not None:
            self.on_result(outcome)

    @property
    def loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def notice(self) -> Optional[str]:
        """User-facing message for the last failure, if any."""
        if self.outcome is None or self.outcome.error is None:
            return None
        return self.outcome.error.user_message

    def dismiss_notice(self) -> None:
        # keeps the inert state (empty list / no image); only the notice goes away
        if self.outcome is not None and self.outcome.error is not None:
            self.outcome = Outcome()

    async def wait(self) -> Outcome[T]:
        """Wait for the current fetch; raises CancelledError if the screen was closed."""
        if self._task is None:
            raise RuntimeError("nothing to wait for, fetch not started")
        return await self._task

    def close(self) -> None:
        self.closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            self.state = LoadState.CANCELLED

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

class BreedListScreen(_Screen[List[str]]):

    def __init__(self, api: DogAPI, **kwargs):
        super().__init__(api, **kwargs)
        self._appeared = False

    async def _fetch(self) -> List[str]:
        return await fetch_breed_names(self.api)

    def appear(self) -> asyncio.Task:
        """Fetch on first appearance only; later calls return the same task."""
        if self._appeared and self._task is not None:
            return self._task
        task = self._start()
        self._appeared = True
        return task

    def reload(self) -> asyncio.Task:
        task = self._start()
        self._appeared = True
        return task

    @property
    def breeds(self) -> List[str]:
        if self.outcome is None or self.outcome.value is None:
            return []
        return self.outcome.value

    def select(self, breed: str, **kwargs) -> "BreedDetailScreen":
        """Open the detail screen for breed; it shares this screen's API and dispatch."""
        kwargs.setdefault("dispatch", self.dispatch)
        return BreedDetailScreen(self.api, breed, **kwargs)

class BreedDetailScreen(_Screen[str]):

    def __init__(self, api: DogAPI, breed: str, *, detailed_errors: bool = False, **kwargs):
        super().__init__(api, **kwargs)
        self.breed = breed
        self.detailed_errors = detailed_errors

    async def _fetch(self) -> str:
        return await fetch_breed_image(self.api, self.breed, detailed_errors=self.detailed_errors)

    def load(self) -> asyncio.Task:
        return self._start()

    @property
    def image_url(self) -> Optional[str]:
        return self.outcome.value if self.outcome is not None else None

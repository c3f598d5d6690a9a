# http_client.py (shared by dog_breeds)
from __future__ import annotations
import sys, asyncio, random, uuid
from typing import Optional
import httpx

class RetryPolicy:
    def __init__(
        self,
        retries: int = 1,
        backoff_base: float = 0.25,
        backoff_cap: float = 4.0,
        retry_statuses: set[int] | None = None,
    ):
        # retries is the total attempt budget; 1 means a single attempt
        self.retries = max(1, retries)
        self.backoff_base = backoff_base
        self.backoff_cap = backoff_cap
        self.retry_statuses = retry_statuses or {500, 502, 503, 504}

    def sleep_seconds(self, attempt: int) -> float:
        # exponential (0.25, 0.5, 1, 2, 4...) + jitter [0..0.5]
        return min(self.backoff_cap, self.backoff_base * (2 ** (attempt - 1))) + random.uniform(0, 0.5)

def upstream_message(resp: httpx.Response) -> str:
    """Best-effort error text from a JSON error body ({"status": "error", "message": ...})."""
    try:
        payload = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason_phrase
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return str(payload)[:200]

class HttpClient:
    """
    - Reusable async HTTP client with:
      - base_url
      - httpx timeouts
      - attempt budget (retries 5xx + network only when > 1)
      - 4xx fail fast
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float,
        read_timeout: float,
        retries: int = 1,
        *,
        retry_statuses: Optional[set[int]] = None,
        default_headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.policy = RetryPolicy(retries=retries, retry_statuses=retry_statuses)
        self.default_headers = {"Accept": "application/json", **(default_headers or {})}
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.default_headers,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send one logical request within the attempt budget.
        Retries transient 5xx + network errors while attempts remain; fails fast on 4xx.
        Each request tagged with X-Request-Id for traceability.
        """
        if self._client is None:
            raise RuntimeError("HttpClient used outside of 'async with'")
        last_exc: Exception | None = None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = dict(kwargs.pop("headers", None) or {})
        headers.setdefault("X-Request-Id", req_id)
        kwargs["headers"] = headers

        url = self.base_url + path # for logs

        for attempt in range(1, self.policy.retries + 1):
            try:
                resp = await self._client.request(method, path, **kwargs)
                status = resp.status_code

                # Transient 5xx
                if status in self.policy.retry_statuses:
                    raise httpx.HTTPStatusError(f"server error {status}", request=resp.request, response=resp)

                # Fail fast on 4xx, log what the API said
                if 400 <= status < 500:
                    print(f"[req#{req_id}] [fatal] {method} {url} returned {status}: "
                          f"{upstream_message(resp)}", file=sys.stderr)
                    resp.raise_for_status()

                # No other non-2xx should slip through
                if not (200 <= status < 300):
                    print(f"[req#{req_id}] [fatal] {method} {url} returned {status}, not retrying", file=sys.stderr)
                    raise httpx.HTTPStatusError(f"unexpected status {status}", request=resp.request, response=resp)

                if attempt > 1:
                    print(f"[req#{req_id}] succeeded after {attempt} attempt(s)", file=sys.stderr)
                return resp

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status not in self.policy.retry_statuses:
                    raise
                last_exc = e

            except httpx.HTTPError as e:
                last_exc = e

            if attempt < self.policy.retries:
                sleep = self.policy.sleep_seconds(attempt)
                err_kind = f"HTTP {last_exc.response.status_code}" \
                           if isinstance(last_exc, httpx.HTTPStatusError) else "network"
                print(f"[req#{req_id}] [retry {attempt}/{self.policy.retries}] {method} {url} "
                      f"failed: {err_kind}: {last_exc}. Sleeping {sleep:.2f}s", file=sys.stderr)
                await asyncio.sleep(sleep)
            else:
                print(f"[req#{req_id}] [giving up] {method} {url}: {last_exc}", file=sys.stderr)
                raise last_exc

        raise last_exc or RuntimeError("request failed")

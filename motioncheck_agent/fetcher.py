from __future__ import annotations

import logging
import time
from typing import Callable

import httpx

from .config import FILE_FETCH_DELAY_MS, MAX_FILE_FETCH_ATTEMPTS, Settings, get_settings
from .errors import TransientFetchError
from .models import FetchResult

logger = logging.getLogger("motioncheck_agent.fetcher")


def proxy_request_url(proxy_base: str) -> str:
    return f"{proxy_base.rstrip('/')}/get"


def _fetch_once(client: httpx.Client, url: str, settings: Settings) -> str:
    """Run a single proxy round trip and return the target's raw text.

    Every failure mode is reported as TransientFetchError so the retry loop
    only has one thing to catch.
    """
    try:
        res = client.get(
            proxy_request_url(settings.proxy_base),
            params={"url": url},
            headers={
                "user-agent": settings.user_agent,
                "accept": "application/json",
            },
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransientFetchError(f"Network error: {e}") from e

    if res.status_code < 200 or res.status_code >= 300:
        raise TransientFetchError(f"Network response was not ok (status: {res.status_code})")

    try:
        data = res.json()
    except ValueError as e:
        raise TransientFetchError("Proxy returned malformed JSON") from e

    contents = data.get("contents") if isinstance(data, dict) else None
    if not contents or not isinstance(contents, str):
        raise TransientFetchError("No content received from proxy")
    return contents


def fetch_with_retry(
    url: str,
    max_attempts: int = MAX_FILE_FETCH_ATTEMPTS,
    delay_ms: int = FILE_FETCH_DELAY_MS,
    *,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    """Fetch ``url`` through the proxy, retrying with a flat delay.

    Attempts are strictly sequential. Worst case latency is
    ``max_attempts * delay_ms``. Never raises: exhaustion comes back as
    ``FetchResult(success=False, error=<last message>)``.
    """
    settings = settings or get_settings()
    max_attempts = max(1, int(max_attempts))
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.timeout_ms / 1000, follow_redirects=True)

    last_error = "No attempt made"
    try:
        for attempt in range(1, max_attempts + 1):
            logger.debug("Attempt %d/%d for %s", attempt, max_attempts, url)
            try:
                content = _fetch_once(client, url, settings)
            except TransientFetchError as e:
                last_error = str(e)
                logger.warning("Failed attempt %d/%d for %s: %s", attempt, max_attempts, url, last_error)
                if attempt < max_attempts:
                    sleep(delay_ms / 1000)
                continue

            logger.info("Fetched %s on attempt %d/%d", url, attempt, max_attempts)
            return FetchResult(success=True, content=content, attempts=attempt)
    finally:
        if owns_client:
            client.close()

    logger.error("Giving up on %s after %d attempts: %s", url, max_attempts, last_error)
    return FetchResult(success=False, content="", error=last_error, attempts=max_attempts)

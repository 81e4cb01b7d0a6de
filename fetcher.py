"""HTTP fetcher for listing pages with timeouts and optional bounded retries."""
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import requests
from requests.exceptions import RequestException, Timeout, HTTPError, ConnectionError

from models import FetchResult

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-IE,en;q=0.8",
}


@dataclass
class FetchConfig:
    """Configuration for page retrieval.

    Args:
        timeout: Per-request timeout in seconds
        retries: Total attempts per URL (1 means a single attempt)
        backoff_factor: Exponential backoff multiplier between attempts
        headers: Request headers sent with every request
    """
    timeout: float = 30.0
    retries: int = 1
    backoff_factor: float = 0.5
    headers: dict[str, str] = field(default_factory=lambda: dict(HEADERS))


def _describe(exc: RequestException) -> str:
    if isinstance(exc, Timeout):
        return "timeout"
    return str(exc) or exc.__class__.__name__


def fetch_html(
    url: str,
    config: Optional[FetchConfig] = None,
    session: Optional[requests.Session] = None,
) -> FetchResult:
    """Fetch the HTML of a listing page.

    Never raises for network problems: failures are reported through the
    returned ``FetchResult``.

    Args:
        url: Page to fetch
        config: Fetch configuration. Uses defaults if None.
        session: Optional session to reuse connections across calls

    Returns:
        FetchResult with ``html`` on success or ``error`` on failure
    """
    if config is None:
        config = FetchConfig()
    http = session if session is not None else requests
    retries = max(1, config.retries)
    start_time = time.time()
    error = "unknown error"
    status_code = None

    for attempt in range(retries):
        try:
            logger.debug(f"Fetching {url} (attempt {attempt + 1}/{retries})")
            response = http.get(
                url,
                headers=config.headers,
                timeout=config.timeout,
                allow_redirects=True,
            )
            status_code = response.status_code
            response.raise_for_status()

            if not response.text or not response.text.strip():
                error = "Empty response body"
                logger.warning(f"Empty response body for {url}")
                break

            duration = time.time() - start_time
            logger.debug(f"Fetched {url} ({response.status_code}) in {duration:.2f}s")
            return FetchResult(
                url=url,
                html=response.text,
                status_code=status_code,
                duration=duration,
                success=True,
            )

        except HTTPError as e:
            error = _describe(e)
            logger.warning(f"HTTP error for {url}: {error}")
            if e.response is not None and 400 <= e.response.status_code < 500:
                break

        except (Timeout, ConnectionError) as e:
            error = _describe(e)
            logger.warning(f"Attempt {attempt + 1} failed for {url}: {error}")

        except RequestException as e:
            error = _describe(e)
            logger.warning(f"Request failed for {url}: {error}")
            break

        if attempt < retries - 1:
            sleep_time = config.backoff_factor * (2 ** attempt)
            logger.info(f"Retrying in {sleep_time:.2f} seconds...")
            time.sleep(sleep_time)

    duration = time.time() - start_time
    logger.debug(f"Gave up on {url} after {duration:.2f}s")
    return FetchResult(
        url=url,
        error=error,
        status_code=status_code,
        duration=duration,
        success=False,
    )

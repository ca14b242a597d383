# -*- coding: utf-8 -*-
"""
Justel fetcher

Fetches year index pages and individual law pages from the Belgian legal
publication portal (ejustice.just.fgov.be), with a shared minimum interval
between requests and bounded linear-backoff retries.

Justel predates UTF-8 and mislabels or omits its charset, so response bytes are
always decoded with the configured single-byte encoding, never from headers.

"""
# Standard library
import codecs
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

# Project root (src/ingestion/justel_fetcher.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
import requests

# Local
from configs.config import SCRAPER_CONFIG
from src.ingestion.justel_urls import build_index_url, build_justel_url
from src.utils.dataclasses import Language
from src.utils.logger import get_logger
from src.utils.rate_limiter import RateLimiter

logger = get_logger(__name__)

# Bytes cp1252 leaves unassigned (0x81, 0x8D, 0x8F, 0x90, 0x9D) decode to the
# matching C1 control character, as in latin-1
LATIN1_FALLBACK = 'justel-latin1-fallback'


def _latin1_fallback(error: UnicodeDecodeError):
    return error.object[error.start:error.end].decode('latin-1'), error.end


codecs.register_error(LATIN1_FALLBACK, _latin1_fallback)


# ============================================================================
# ERRORS
# ============================================================================

class FetchError(Exception):
    """A URL could not be fetched after all retry attempts."""

    def __init__(self, url: str, status_code: Optional[int] = None,
                 attempts: int = 1, message: str = ""):
        self.url = url
        self.status_code = status_code
        self.attempts = attempts
        if not message:
            message = f"HTTP {status_code} for {url}" if status_code else f"Request failed for {url}"
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


# ============================================================================
# FETCHER
# ============================================================================

class JustelFetcher:
    """
    HTTP client for Justel.

    - One RateLimiter per process: every request start goes through it
    - Up to `retry_attempts` attempts; attempt n failing waits n * backoff_seconds
    - The last failure is raised as FetchError, never swallowed
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        session: Optional[requests.Session] = None,
        rate_limiter: Optional[RateLimiter] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """
        Initialize fetcher.

        Args:
            config: Scraper settings (default: SCRAPER_CONFIG)
            session: requests session to reuse (created if omitted)
            rate_limiter: Shared limiter (created from config if omitted)
            sleep: Backoff sleep function (default: the limiter's sleep)
        """
        config = config or SCRAPER_CONFIG
        self.base_url = config["base_url"]
        self.timeout = config["timeout"]
        self.retry_attempts = config["retry_attempts"]
        self.backoff_seconds = config["backoff_seconds"]
        self.encoding = config["encoding"]

        self.session = session or requests.Session()
        self.session.headers.update(config["headers"])

        self.rate_limiter = rate_limiter or RateLimiter(min_interval=config["min_interval"])
        self.sleep = sleep or self.rate_limiter.sleep

    def fetch(self, url: str) -> str:
        """
        GET a page and decode it.

        Args:
            url: Absolute URL

        Returns:
            Decoded page text

        Raises:
            FetchError: after the final failed attempt
        """
        for attempt in range(1, self.retry_attempts + 1):
            self.rate_limiter.acquire()
            try:
                response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
                if not response.ok:
                    raise FetchError(url, status_code=response.status_code, attempts=attempt)
                return self.decode(response.content)

            except (FetchError, requests.RequestException) as e:
                if attempt == self.retry_attempts:
                    if isinstance(e, FetchError):
                        raise
                    raise FetchError(url, attempts=attempt, message=f"{e} ({url})") from e

                backoff = attempt * self.backoff_seconds
                logger.warning(
                    f"Retry {attempt}/{self.retry_attempts} for {url} "
                    f"(waiting {backoff:.1f}s): {e}"
                )
                self.sleep(backoff)

        # Unreachable with retry_attempts >= 1
        raise FetchError(url, attempts=self.retry_attempts)

    def decode(self, content: bytes) -> str:
        return content.decode(self.encoding, errors=LATIN1_FALLBACK)

    def fetch_year_index(self, year: int, language: Language = Language.FR) -> str:
        """Fetch the page listing every law promulgated in `year`."""
        url = build_index_url(year, language, base_url=self.base_url)
        logger.info(f"Fetching {language.value.upper()} index for {year}: {url}")
        return self.fetch(url)

    def fetch_law_content(
        self,
        year: int,
        month: str,
        day: str,
        numac: str,
        language: Language = Language.FR,
    ) -> str:
        """Fetch a law's consolidated text page."""
        url = build_justel_url(year, month, day, numac, language, base_url=self.base_url)
        logger.debug(f"Fetching {language.value.upper()} law: {url}")
        return self.fetch(url)

    def close(self):
        self.session.close()

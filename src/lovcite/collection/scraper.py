"""Polite fetching of statute pages from lovdata.no."""

import os
import time
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = "lovcite/0.1 (Norwegian legal citation extraction)"

# Norsk Lovtidend, consolidated statutes, and the legacy variant
LOVDATA_COLLECTIONS = ("NL", "NLO", "LTI")

# Seconds to wait after a failed attempt, multiplied by the attempt number
RETRY_PAUSE = 0.6


def build_session(user_agent: str, max_retries: int) -> requests.Session:
    """Session that retries throttling and server errors with backoff."""
    session = requests.Session()
    adapter = HTTPAdapter(
        max_retries=Retry(
            total=max_retries,
            backoff_factor=2,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "HEAD"],
        )
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "nb-NO,nb;q=0.9,no;q=0.8,en;q=0.5",
    })
    return session


class LovdataScraper:
    """Fetches Lovdata documents, at most one request per delay_seconds."""

    BASE_URL = os.getenv("LOVDATA_BASE_URL", "https://lovdata.no/dokument")

    def __init__(
        self,
        delay_seconds: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        output_dir: str = "data/raw",
        max_retries: int = 3,
    ):
        self.delay_seconds = delay_seconds
        self.max_retries = max_retries
        self.session = build_session(user_agent, max_retries)
        self.output_dir = Path(output_dir)
        self._last_request_time = 0.0

    def _wait_turn(self) -> None:
        elapsed = time.time() - self._last_request_time
        if elapsed < self.delay_seconds:
            time.sleep(self.delay_seconds - elapsed)
        self._last_request_time = time.time()

    def fetch(self, url: str, timeout: int = 30) -> Optional[str]:
        """Return the page body, or None once every attempt has failed."""
        last_error = None
        for attempt in range(1, self.max_retries + 1):
            self._wait_turn()
            try:
                logger.info(f"Fetching: {url} (attempt {attempt})")
                response = self.session.get(url, timeout=timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                last_error = e
                logger.warning(f"Attempt {attempt} failed for {url}: {e}")
                if attempt < self.max_retries:
                    time.sleep(RETRY_PAUSE * attempt)
                continue

            # Lovdata omits the charset on some pages
            if not response.encoding:
                response.encoding = "utf-8"
            return response.text

        logger.error(f"Giving up on {url} after {self.max_retries} attempts: {last_error}")
        return None

    def candidate_urls(self, slug: str) -> List[str]:
        """Lovdata URLs to try for a statute, full-document ("/*") variants first."""
        base = [f"{self.BASE_URL}/{collection}/lov/{slug}" for collection in LOVDATA_COLLECTIONS]
        return [f"{url}/*" for url in base] + base

    def fetch_first_available(self, urls: List[str]) -> Optional[Tuple[str, str]]:
        """Return (url, html) for the first URL that serves an HTML page."""
        for url in urls:
            html = self.fetch(url)
            if html and "<html" in html.lower():
                return url, html
            logger.info(f"No HTML document at {url}")
        return None

    def save_html(self, content: str, filename: str, subdir: str = "") -> Path:
        """Keep a raw copy of a fetched page under output_dir."""
        target = self.output_dir / subdir / filename if subdir else self.output_dir / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.info(f"Saved: {target}")
        return target

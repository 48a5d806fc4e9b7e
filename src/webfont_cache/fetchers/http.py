"""
HTTP Byte Fetcher
=================

Fetches raw font files over HTTP with retries. The blocking ``requests``
call runs in a worker thread so the event loop is never held.
"""

import asyncio
import logging

import requests

from ..core.config import CacheConfig
from ..core.exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


class RequestsByteFetcher:
    """Byte fetcher backed by a shared ``requests.Session``."""

    def __init__(self, config: CacheConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.verify = self.config.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def _get(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.config.request_timeout_seconds)
        except requests.RequestException as e:
            raise UpstreamFetchError(url) from e

        if not response.ok:
            raise UpstreamFetchError(url, response.status_code)
        return response.content

    async def fetch_bytes(self, url: str) -> bytes:
        attempts = self.config.max_retries + 1
        for attempt in range(attempts):
            try:
                return await asyncio.to_thread(self._get, url)
            except UpstreamFetchError as e:
                logger.warning(f"Fetch attempt {attempt + 1}/{attempts} for {url} failed: {e}")
                if attempt == attempts - 1:
                    raise
                await asyncio.sleep(self.config.backoff_seconds * 2**attempt)
        raise UpstreamFetchError(url)

    def close(self) -> None:
        self.session.close()

"""Meteo-France bulletin client: plain GET with a fixed User-Agent."""

import logging
from time import monotonic

import httpx

from metmar.models.errors import FetchFailure

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/4.0 (compatible; MSIE 7.0; Windows NT 6.0)"


class MeteoClient:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
    ):
        self.user_agent = user_agent
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        """Fetch a bulletin document and return its raw body.

        Anything but a 200 response is a FetchFailure, and so is a body that
        is still arriving once ``timeout`` seconds have passed since the
        request started. Failures are not retried.
        """
        headers = {"User-Agent": self.user_agent}
        logger.info("Fetching %s", url)
        deadline = monotonic() + self.timeout
        try:
            with httpx.stream("GET", url, headers=headers, timeout=self.timeout) as resp:
                if resp.status_code != 200:
                    raise FetchFailure(
                        f"got {resp.status_code} {resp.reason_phrase} fetching {url}",
                        resp.status_code,
                    )
                chunks = []
                for chunk in resp.iter_bytes():
                    if monotonic() > deadline:
                        raise FetchFailure(
                            f"timed out after {self.timeout:g}s fetching {url}"
                        )
                    chunks.append(chunk)
        except httpx.RequestError as e:
            raise FetchFailure(f"could not fetch {url}: {e}") from e
        return b"".join(chunks)

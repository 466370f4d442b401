"""Page fetcher that turns a URL into readable text."""
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from core.config import FetchConfig
from core.errors import NetworkError
from core.models import FetchedPage
from utils.text import normalize_whitespace

logger = logging.getLogger(__name__)

# Elements that never carry page content
NON_CONTENT_TAGS = ["script", "style", "nav", "footer", "header", "aside", "iframe", "noscript"]


def extract_page_text(html: str) -> Tuple[str, str]:
    """Strip non-content elements and return (title, body text)."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(NON_CONTENT_TAGS):
        tag.decompose()

    title = soup.title.get_text().strip() if soup.title else ""
    body = soup.body
    if body is None:
        # Without a <body> the head would be read as page content
        head = soup.head or soup.title
        if head is not None:
            head.decompose()
        body = soup
    content = normalize_whitespace(body.get_text(" "))

    return title, content


class PageFetcher:
    """Fetches one page at a time; no retries, no caching."""

    def __init__(self, config: Optional[FetchConfig] = None, client: Optional[httpx.AsyncClient] = None):
        """Initialize the fetcher.

        Args:
            config: Fetch settings (User-Agent, timeout)
            client: Shared HTTP client; a short-lived one is opened per request when omitted
        """
        self.config = config or FetchConfig()
        self.client = client

    async def fetch(self, url: str) -> FetchedPage:
        """Fetch a URL and extract its title and visible text.

        Raises:
            NetworkError: on transport errors, timeouts or non-2xx responses
        """
        logger.debug("GET %s", url)
        try:
            if self.client is not None:
                response = await self._get(self.client, url)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await self._get(client, url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkError(url, f"timed out after {self.config.timeout_seconds}s") from e
        except httpx.HTTPStatusError as e:
            raise NetworkError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise NetworkError(url, str(e) or e.__class__.__name__) from e

        title, content = extract_page_text(response.text)

        return FetchedPage(
            url=url,
            title=title,
            content=content,
            fetched_at=datetime.now(timezone.utc)
        )

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.get(
            url,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout_seconds,
        )

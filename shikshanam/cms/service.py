"""CMS content fetching with caching and retry."""

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from ..config import Settings
from ..retry import with_http_retry
from ..types import CMSContent
from .cache import ContentCache
from .parser import parse_cms_content

ALLOWED_FILE_PATHS: frozenset[str] = frozenset(
    {
        "components/sections/Hero.tsx",
        "components/sections/Schools.tsx",
        "components/sections/MeetGurus.tsx",
        "components/sections/FAQ.tsx",
        "components/sections/Community.tsx",
        "components/sections/Contribute.tsx",
        "components/sections/DownloadAppNew.tsx",
        "components/sections/AlignYourself.tsx",
    }
)

DEFAULT_CONTENT: dict[str, CMSContent] = {
    "components/sections/Hero.tsx": {
        "mainTitle": "Welcome to Ancient Wisdom",
        "subtitle": "Where Technology meets Tradition",
        "question": "What are you looking for?",
        "buttonText": "Explore Now",
        "description": "Discover the timeless wisdom of ancient India through modern technology",
    },
    "components/sections/Schools.tsx": {
        "mainTitle": "Schools of Philosophy",
        "subtitle": "Explore Different Paths to Wisdom",
        "question": "Which school resonates with you?",
        "buttonText": "Learn More",
    },
    "components/sections/MeetGurus.tsx": {
        "mainTitle": "Meet Our Gurus",
        "subtitle": "Learn from Experienced Teachers",
        "question": "Ready to begin your journey?",
        "buttonText": "Start Learning",
    },
}

REQUIRED_FIELDS = ("mainTitle", "subtitle")


def validate_file_path(file_path: Any) -> bool:
    """Only the known section files may be requested."""
    return isinstance(file_path, str) and file_path in ALLOWED_FILE_PATHS


def validate_content(content: Any) -> bool:
    """Content is usable when the title and subtitle are non-empty strings."""
    if not isinstance(content, dict):
        return False
    return all(isinstance(content.get(field), str) and content[field] for field in REQUIRED_FIELDS)


def default_content(file_path: str) -> CMSContent:
    return dict(DEFAULT_CONTENT.get(file_path, {}))


class CMSContentService:
    """Fetches editable section copy from the CMS admin API.

    Failures never propagate to callers: a section with no reachable CMS copy
    simply renders its defaults.
    """

    def __init__(
        self,
        api_url: str,
        cache: ContentCache,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.cache = cache
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "CMSContentService":
        cache = ContentCache(ttl=settings.cms_cache_ttl_seconds, max_size=settings.cms_cache_max_size)
        return cls(
            api_url=settings.cms_api_url,
            cache=cache,
            max_retries=settings.cms_max_retries,
            retry_delay=settings.cms_retry_delay,
            timeout=settings.cms_request_timeout,
        )

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.get(
                url,
                headers={
                    "Content-Type": "application/json",
                    "X-Requested-With": "XMLHttpRequest",
                },
            )

    async def fetch_content(self, file_path: str) -> CMSContent:
        """Fetch and parse CMS content for a section; ``{}`` when unavailable."""
        if not validate_file_path(file_path):
            logger.warning(f"Invalid CMS file path: {file_path!r}")
            return {}

        cached = self.cache.get(file_path)
        if cached is not None:
            logger.debug(f"CMS cache hit for {file_path}")
            return cached

        logger.debug(f"CMS cache miss for {file_path}")
        url = f"{self.api_url}/api/content?filePath={quote(file_path, safe='')}"
        fetch = with_http_retry("CMS", self.max_retries, self.retry_delay)(self._get)

        try:
            response = await fetch(url)
        except (httpx.HTTPError, TimeoutError, ConnectionError) as e:
            logger.warning(f"Error fetching CMS content for {file_path}: {e}")
            return {}

        if response.status_code == 404:
            logger.warning(f"Content not found for {file_path}")
            return {}
        if response.is_error:
            logger.warning(f"CMS returned HTTP {response.status_code} for {file_path}")
            return {}

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Invalid CMS response for {file_path}: {e}")
            return {}

        if isinstance(data, dict) and data.get("success") and data.get("content"):
            parsed = parse_cms_content(data["content"])
            self.cache.set(file_path, parsed)
            return parsed

        return {}

    async def get_content(self, file_path: str) -> CMSContent:
        """Section defaults overlaid with whatever the CMS currently holds."""
        return {**default_content(file_path), **await self.fetch_content(file_path)}

    def invalidate(self, file_path: str) -> None:
        self.cache.delete(file_path)

    def clear_cache(self) -> None:
        self.cache.clear()

    def cleanup_cache(self) -> int:
        return self.cache.cleanup()

    async def health_check(self) -> bool:
        """Check the cache is usable (no upstream call)."""
        try:
            self.cache.cleanup()
        except Exception as e:  # noqa: BLE001
            logger.warning(f"CMS cache health check failed: {e}")
            return False
        else:
            return True

"""Shared test fixtures."""

import os

# Set test environment before the app (and its settings) are imported
os.environ["SHIKSHANAM_GRAPHY_API_KEY"] = "test-key"
os.environ["SHIKSHANAM_GRAPHY_MID"] = "test-mid"
os.environ["SHIKSHANAM_CMS_API_URL"] = "http://cms.test"
os.environ["SHIKSHANAM_CMS_RETRY_DELAY"] = "0"
os.environ["SHIKSHANAM_RATE_LIMIT"] = "1000/minute"
os.environ["SHIKSHANAM_LOG_LEVEL"] = "ERROR"  # Reduce log noise

from collections.abc import AsyncGenerator, Callable  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from shikshanam import api  # noqa: E402
from shikshanam.api import Services, app  # noqa: E402
from shikshanam.cms import CMSContentService, ContentCache, ContentStore  # noqa: E402
from shikshanam.config import settings  # noqa: E402
from shikshanam.graphy import GraphyClient  # noqa: E402
from shikshanam.integration import PackageIntegrationService  # noqa: E402

FIXED_NOW = datetime(2025, 1, 6, 10, 0, tzinfo=UTC)

HERO_CMS_TEXT = """main title: "Welcome to Shikshanam"
subtitle: Where AI meets Ancient India
question: What do you seek?
button text: Start Journey"""


@pytest.fixture
def internal_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {settings.internal_api_token}"}


@pytest.fixture
def sample_learner() -> dict[str, Any]:
    """Learner with course info, as returned by Graphy."""
    return {
        "id": "learner-1",
        "email": "demo@shikshanam.com",
        "name": "Demo User",
        "courseInfo": {
            "enrolledCourses": [
                {"id": "sanskrit_alphabet_001", "title": "Devanagari Alphabet", "progress": 100},
                {"id": "sanskrit_grammar_001", "title": "Sanskrit Grammar I", "progress": 50},
                {"id": "yoga_sutras_001", "title": "Yoga Sutras", "progress": 100, "duration": "10 weeks"},
                {"id": "unmapped_course", "title": "Not in any package", "progress": 10},
            ],
            "progress": {},
        },
    }


@pytest.fixture
def mock_graphy(sample_learner: dict[str, Any]) -> AsyncMock:
    """Graphy client with canned upstream answers."""
    graphy = AsyncMock(spec=GraphyClient)
    graphy.health_check.return_value = True
    graphy.get_learner.return_value = sample_learner
    graphy.get_learner_usage.return_value = {
        "learnerId": "learner-1",
        "productId": "sanskrit_foundations_001",
        "usage": {"totalTime": 3600, "sessions": 4, "lastAccessed": "2025-01-05T09:00:00Z"},
    }
    graphy.get_learner_discussions.return_value = [{"id": "d1", "content": "Namaste"}]
    graphy.get_live_class_attendees.return_value = [{"id": "a1", "name": "Asha"}]
    graphy.create_or_update_learner.return_value = {"id": "learner-1", "email": "new@shikshanam.com"}
    graphy.reset_learner_device.return_value = {"status": "ok"}
    graphy.reset_ios_screenshot_restriction.return_value = {"status": "ok"}
    return graphy


@pytest.fixture
def cms_handler() -> Callable[[httpx.Request], httpx.Response]:
    """CMS admin API serving the Hero section only."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params.get("filePath") == "components/sections/Hero.tsx":
            return httpx.Response(200, json={"success": True, "content": HERO_CMS_TEXT})
        return httpx.Response(404, json={"success": False, "error": "Not found"})

    return handler


@pytest.fixture
def cms_service(cms_handler: Callable[[httpx.Request], httpx.Response]) -> CMSContentService:
    return CMSContentService(
        api_url="http://cms.test",
        cache=ContentCache(ttl=300, max_size=10),
        max_retries=0,
        retry_delay=0,
        transport=httpx.MockTransport(cms_handler),
    )


@pytest.fixture
def services(mock_graphy: AsyncMock, cms_service: CMSContentService) -> Services:
    integration = PackageIntegrationService(
        mock_graphy, seat_picker=lambda: 42, clock=lambda: FIXED_NOW
    )
    return Services(
        graphy=mock_graphy,
        integration=integration,
        cms=cms_service,
        content_store=ContentStore(),
    )


@pytest_asyncio.fixture
async def client(services: Services) -> AsyncGenerator[AsyncClient, None]:
    """Test client fixture - services injected into the api module."""
    api._services = services

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    api._services = None

"""Graphy LMS REST client."""

import json
import re
from datetime import date, datetime
from typing import Any

import httpx
from loguru import logger

from .config import Settings
from .exceptions import ConfigurationError, GraphyAPIError
from .types import GraphyDiscussion, GraphyLearner, GraphyLiveClassAttendee, GraphyUsage

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Loose email check: something@something.tld, no whitespace."""
    return bool(EMAIL_PATTERN.match(email))


def format_date(value: date | datetime) -> str:
    """Format a date the way Graphy expects it (YYYY/MM/DD)."""
    return value.strftime("%Y/%m/%d")


class GraphyClient:
    """Thin async wrapper around the Graphy public API.

    Every call is authenticated with the merchant ID (``mid``) and API key
    (``key``) and returns the decoded JSON body. Non-2xx responses and
    transport failures raise :class:`GraphyAPIError`.
    """

    def __init__(
        self,
        base_url: str,
        mid: str,
        api_key: str | None,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.mid = mid
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GraphyClient":
        return cls(
            base_url=settings.graphy_base_url,
            mid=settings.graphy_mid,
            api_key=settings.graphy_api_key,
            timeout=settings.graphy_timeout,
        )

    async def startup(self) -> None:
        """Open the shared HTTP connection pool."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        if not self.api_key:
            logger.warning("Graphy API key not set; learner endpoints will fail")

    async def shutdown(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def health_check(self) -> bool:
        """Check if the client is configured (no upstream call)."""
        return bool(self.mid and self.api_key)

    @property
    def _auth_params(self) -> dict[str, str]:
        if not self.api_key:
            raise ConfigurationError("Graphy API key is required")
        return {"mid": self.mid, "key": self.api_key}

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: dict[str, str] | None = None,
    ) -> Any:
        if self._client is None:
            await self.startup()
        assert self._client is not None

        headers = None
        if data is not None:
            headers = {"Content-Type": "application/x-www-form-urlencoded"}

        try:
            response = await self._client.request(
                method, path, params=params, data=data, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(f"Graphy {method} {path} failed: {e}")
            raise GraphyAPIError(f"Graphy request failed: {e}") from e

        if response.is_error:
            logger.error(f"Graphy {method} {path} returned {response.status_code}")
            raise GraphyAPIError(
                f"HTTP error! status: {response.status_code}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            raise GraphyAPIError(f"Invalid JSON from Graphy: {e}") from e

    async def get_learner(
        self, learner_id: str, include_course_info: bool = False
    ) -> GraphyLearner:
        """Get learner information by ID."""
        params = {
            **self._auth_params,
            "courseInfo": "true" if include_course_info else "false",
        }
        return await self._request("GET", f"/public/v1/learners/{learner_id}", params=params)

    async def get_learner_usage(
        self, learner_id: str, product_id: str, date: str | None = None
    ) -> GraphyUsage:
        """Get learner usage statistics for a product."""
        params = {**self._auth_params, "productId": product_id}
        if date:
            params["date"] = date
        return await self._request(
            "GET", f"/public/v1/learners/{learner_id}/usage", params=params
        )

    async def get_learner_discussions(
        self,
        learner_id: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[GraphyDiscussion]:
        params = dict(self._auth_params)
        if start_date:
            params["startDate"] = start_date
        if end_date:
            params["endDate"] = end_date
        return await self._request(
            "GET", f"/public/v1/learners/{learner_id}/discussions", params=params
        )

    async def get_live_class_attendees(
        self, live_class_id: str, skip: int = 0, limit: int = 10
    ) -> list[GraphyLiveClassAttendee]:
        params = {
            **self._auth_params,
            "skip": skip,
            "limit": limit,
            "liveClassId": live_class_id,
        }
        return await self._request(
            "GET", "/t/api/public/v3/products/liveclass/attendees", params=params
        )

    async def reset_learner_device(self, email: str) -> Any:
        """Reset learner device registrations."""
        params = {**self._auth_params, "email": email}
        return await self._request("PUT", "/t/api/public/v3/learners/reset-device", params=params)

    async def create_or_update_learner(
        self,
        email: str,
        name: str | None = None,
        password: str | None = None,
        mobile: str | None = None,
        send_email: bool | None = None,
        custom_fields: dict[str, Any] | None = None,
    ) -> GraphyLearner:
        """Create a learner, or update the one registered with this email."""
        form = {**self._auth_params, "email": email}
        if name:
            form["name"] = name
        if password:
            form["password"] = password
        if mobile:
            form["mobile"] = mobile
        if send_email is not None:
            form["sendEmail"] = "true" if send_email else "false"
        if custom_fields:
            form["customFields"] = json.dumps(custom_fields)

        return await self._request("PATCH", "/t/api/public/v3/learners/update", data=form)

    async def reset_ios_screenshot_restriction(self, email: str) -> Any:
        params = {**self._auth_params, "email": email}
        return await self._request(
            "PATCH", "/t/api/public/v3/learners/reset/ios/screenshot", params=params
        )

"""Type definitions for upstream payloads."""

from typing import Any

from typing_extensions import TypedDict


class GraphyCourseInfo(TypedDict, total=False):
    """Course enrollment block returned with a learner."""

    enrolledCourses: list[dict[str, Any]]
    progress: dict[str, int]


class GraphyLearner(TypedDict, total=False):
    """Learner record from the Graphy API."""

    id: str
    email: str
    name: str
    mobile: str
    customFields: dict[str, Any]
    courseInfo: GraphyCourseInfo


class GraphyUsageStats(TypedDict):
    totalTime: int
    sessions: int
    lastAccessed: str


class GraphyUsage(TypedDict, total=False):
    """Learner usage for one product."""

    learnerId: str
    productId: str
    usage: GraphyUsageStats


class GraphyDiscussion(TypedDict, total=False):
    id: str
    content: str
    timestamp: str
    courseId: str


class GraphyLiveClassAttendee(TypedDict, total=False):
    id: str
    name: str
    email: str
    joinTime: str
    duration: int


class HealthStatus(TypedDict):
    """Health status of system components."""

    graphy: bool
    cms_cache: bool


# Parsed CMS content, e.g. {"mainTitle": "...", "subtitle": "..."}
CMSContent = dict[str, str]

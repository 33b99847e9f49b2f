"""Package-level operations on top of the Graphy client."""

import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from loguru import logger

from .exceptions import NotFoundError
from .graphy import GraphyClient
from .models import Course, GraphyProductMapping, Session, UserPackage
from .types import GraphyLearner


def _mapping(sku: str, product_id: str, course_ids: list[str], live_ids: list[str]) -> GraphyProductMapping:
    return GraphyProductMapping(
        sku=sku,
        graphy_product_id=product_id,
        graphy_course_ids=tuple(course_ids),
        live_class_ids=tuple(live_ids),
    )


PACKAGE_TO_GRAPHY_MAPPING: dict[str, GraphyProductMapping] = {
    m.sku: m
    for m in (
        _mapping(
            "sanskrit-foundations",
            "sanskrit_foundations_001",
            ["sanskrit_alphabet_001", "sanskrit_grammar_001", "sanskrit_vocab_001"],
            ["sanskrit_live_001"],
        ),
        _mapping(
            "vedic-philosophy-complete",
            "vedic_philosophy_001",
            ["upanishads_001", "vedanta_001", "mimamsa_001"],
            ["vedic_live_001"],
        ),
        _mapping(
            "yoga-darshan-advanced",
            "yoga_darshan_001",
            ["yoga_sutras_001", "yoga_philosophy_001"],
            ["yoga_live_001"],
        ),
        _mapping(
            "emotional-intelligence-with-samkhya",
            "emotional_intelligence_001",
            ["samkhya_001", "emotional_intelligence_001"],
            ["ei_live_001"],
        ),
        _mapping("isha-upanishad", "isha_upanishad_001", ["isha_upanishad_001"], ["isha_live_001"]),
        _mapping("kashmir-shaivism", "kashmir_shaivism_001", ["kashmir_shaivism_001"], ["kashmir_live_001"]),
        _mapping("nyaya-darshan", "nyaya_darshan_001", ["nyaya_001"], ["nyaya_live_001"]),
        _mapping(
            "prashna-upanishad", "prashna_upanishad_001", ["prashna_upanishad_001"], ["prashna_live_001"]
        ),
        _mapping("samkhya-darshan", "samkhya_darshan_001", ["samkhya_001"], ["samkhya_live_001"]),
        _mapping("tantra-darshan", "tantra_darshan_001", ["tantra_001"], ["tantra_live_001"]),
        _mapping("vaisheshik-darshan", "vaisheshik_darshan_001", ["vaisheshik_001"], ["vaisheshik_live_001"]),
        _mapping("vedanta-essentials", "vedanta_essentials_001", ["vedanta_001"], ["vedanta_live_001"]),
        _mapping("yoga-darshan", "yoga_darshan_basic_001", ["yoga_basics_001"], ["yoga_basic_live_001"]),
    )
}

PACKAGE_NAMES: dict[str, str] = {
    "sanskrit-foundations": "Sanskrit Foundations",
    "vedic-philosophy-complete": "Vedic Philosophy Complete",
    "yoga-darshan-advanced": "Yoga Darshan Advanced",
    "emotional-intelligence-with-samkhya": "Emotional Intelligence with Samkhya",
    "isha-upanishad": "Isha Upanishad",
    "kashmir-shaivism": "Kashmir Shaivism",
    "nyaya-darshan": "Nyaya Darshan",
    "prashna-upanishad": "Prashna Upanishad",
    "samkhya-darshan": "Samkhya Darshan",
    "tantra-darshan": "Tantra Darshan",
    "vaisheshik-darshan": "Vaisheshik Darshan",
    "vedanta-essentials": "Vedanta Essentials",
    "yoga-darshan": "Yoga Darshan",
}

LIVE_SESSION_MAX_SEATS = 100


def package_name(sku: str) -> str:
    return PACKAGE_NAMES.get(sku, sku)


def calculate_progress(courses: list[dict[str, Any]]) -> int:
    """Mean course progress, rounded half up to a whole percent."""
    if not courses:
        return 0
    total = sum(course.get("progress") or 0 for course in courses)
    return int(total / len(courses) + 0.5)


def certificate_status(courses: list[dict[str, Any]]) -> str:
    """``issued`` when every course is complete, ``pending`` when some are."""
    if not courses:
        return "not_available"
    completed = [course.get("progress") == 100 for course in courses]
    if all(completed):
        return "issued"
    return "pending" if any(completed) else "not_available"


def group_courses_by_package(enrolled_courses: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Bucket Graphy courses under every SKU whose mapping lists them."""
    groups: dict[str, list[dict[str, Any]]] = {}
    for course in enrolled_courses:
        for sku, mapping in PACKAGE_TO_GRAPHY_MAPPING.items():
            if course.get("id") in mapping.graphy_course_ids:
                groups.setdefault(sku, []).append(course)
    return groups


class PackageIntegrationService:
    """Maps Shikshanam packages onto Graphy products and learners."""

    def __init__(
        self,
        client: GraphyClient,
        seat_picker: Callable[[], int] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.client = client
        self._seat_picker = seat_picker or (lambda: random.randint(10, 59))  # noqa: S311
        self._clock = clock or (lambda: datetime.now(UTC))

    def get_mapping(self, sku: str) -> GraphyProductMapping:
        mapping = PACKAGE_TO_GRAPHY_MAPPING.get(sku)
        if mapping is None:
            raise NotFoundError(f"Package mapping not found for SKU: {sku}")
        return mapping

    async def create_learner_from_auth(
        self, name: str, email: str, mobile: str | None = None
    ) -> GraphyLearner:
        """Register a freshly authenticated user as a Graphy learner."""
        logger.info("Creating Graphy learner from auth")
        return await self.client.create_or_update_learner(
            email=email,
            name=name,
            mobile=mobile,
            send_email=True,
            custom_fields={
                "source": "shikshanam",
                "registrationDate": self._clock().isoformat(),
                "platform": "web",
            },
        )

    async def get_learner_progress(self, learner_id: str, sku: str) -> dict[str, Any]:
        mapping = self.get_mapping(sku)
        learner = await self.client.get_learner(learner_id, include_course_info=True)
        usage = await self.client.get_learner_usage(learner_id, mapping.graphy_product_id)
        return {
            "learner": learner,
            "usage": usage,
            "packageSku": sku,
            "graphyProductId": mapping.graphy_product_id,
        }

    async def enroll_learner_in_package(self, learner_id: str, sku: str) -> dict[str, Any]:
        """Record an enrollment.

        Graphy exposes no enrollment endpoint, so the enrollment is built
        locally from the package mapping.
        """
        mapping = self.get_mapping(sku)
        logger.info(f"Enrolling learner in {sku}")
        return {
            "learnerId": learner_id,
            "packageSku": sku,
            "graphyProductId": mapping.graphy_product_id,
            "enrolledAt": self._clock().isoformat(),
            "status": "active",
            "courses": list(mapping.graphy_course_ids),
            "liveClasses": list(mapping.live_class_ids),
        }

    async def get_learner_packages(self, learner_id: str) -> list[UserPackage]:
        learner = await self.client.get_learner(learner_id, include_course_info=True)
        enrolled = (learner.get("courseInfo") or {}).get("enrolledCourses") or []

        packages = []
        for sku, courses in group_courses_by_package(enrolled).items():
            packages.append(
                UserPackage(
                    sku=sku,
                    name=package_name(sku),
                    status="active",
                    progress=calculate_progress(courses),
                    available_mentor_hours=0,
                    certificate_status=certificate_status(courses),
                    included_courses=[
                        Course(
                            id=course["id"],
                            title=course.get("title") or course["id"],
                            duration=course.get("duration") or "4 weeks",
                            link=f"/courses/{course['id']}",
                        )
                        for course in courses
                    ],
                )
            )
        return packages

    async def get_live_class_attendees(self, sku: str, live_class_id: str) -> list[Any]:
        return await self.client.get_live_class_attendees(live_class_id, skip=0, limit=100)

    async def get_upcoming_live_sessions(self, sku: str) -> list[Session]:
        """One session per mapped live class, a week apart starting next week."""
        mapping = PACKAGE_TO_GRAPHY_MAPPING.get(sku)
        if mapping is None or not mapping.live_class_ids:
            return []

        now = self._clock()
        return [
            Session(
                id=live_class_id,
                date=(now + timedelta(weeks=index + 1)).isoformat(),
                seat_remaining=self._seat_picker(),
                max_seats=LIVE_SESSION_MAX_SEATS,
                title=f"Live Session {index + 1} - {package_name(sku)}",
            )
            for index, live_class_id in enumerate(mapping.live_class_ids)
        ]

    async def get_learner_usage(self, learner_id: str, sku: str) -> Any:
        mapping = self.get_mapping(sku)
        return await self.client.get_learner_usage(learner_id, mapping.graphy_product_id)

    async def get_learner_discussions(self, learner_id: str, sku: str | None = None) -> list[Any]:
        # Graphy does not filter discussions by product.
        return await self.client.get_learner_discussions(learner_id)

    async def reset_learner_device(self, email: str) -> Any:
        return await self.client.reset_learner_device(email)

    async def reset_ios_screenshot_restriction(self, email: str) -> Any:
        return await self.client.reset_ios_screenshot_restriction(email)

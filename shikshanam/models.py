"""Data models using Pydantic."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(CamelModel):
    """Authenticated user as returned to the client (never with a password)."""

    id: str
    email: str
    name: str
    avatar: str | None = None
    provider: str = "email"


class Course(CamelModel):
    id: str
    title: str
    duration: str = "4 weeks"
    link: str


class FAQ(CamelModel):
    question: str
    answer: str


class Testimonial(CamelModel):
    id: str
    name: str
    rating: int = Field(..., ge=1, le=5)
    content: str
    avatar_url: str | None = None


class Package(CamelModel):
    """Purchasable learning package."""

    sku: str
    name: str
    short_description: str
    long_description: str
    price_inr: int
    original_price_inr: int | None = None
    thumbnail_url: str
    included_courses: list[Course] = []
    live_pass_count: int = 0
    mentor_hours: int = 0
    certificate_included: bool = False
    prerequisites: list[str] = []
    faq: list[FAQ] = []
    testimonials: list[Testimonial] = []

    @property
    def savings(self) -> int:
        if self.original_price_inr is None:
            return 0
        return max(self.original_price_inr - self.price_inr, 0)


class Session(CamelModel):
    """Scheduled live session for a package."""

    id: str
    date: str
    seat_remaining: int
    max_seats: int
    title: str | None = None


CertificateStatus = Literal["not_available", "pending", "issued"]


class UserPackage(CamelModel):
    """Package as seen on a learner's dashboard."""

    sku: str
    name: str
    access_expires_at: str | None = None
    status: Literal["active", "expired"] = "active"
    progress: int = Field(0, ge=0, le=100)
    next_live_session: Session | None = None
    available_mentor_hours: int = 0
    certificate_status: CertificateStatus = "not_available"
    included_courses: list[Course] = []


class GraphyProductMapping(CamelModel):
    """Link between a Shikshanam SKU and its Graphy product."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    sku: str
    graphy_product_id: str
    graphy_course_ids: tuple[str, ...]
    live_class_ids: tuple[str, ...] = ()


# Request bodies. Fields are optional so handlers can answer missing
# values with the documented 400 messages instead of a generic validation error.


class EmailLoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LearnerCreateRequest(CamelModel):
    email: str | None = None
    name: str | None = None
    password: str | None = None
    mobile: str | None = None
    send_email: bool | None = None
    custom_fields: dict[str, Any] | None = None


class LearnerEmailRequest(BaseModel):
    email: str | None = None


class EnrollRequest(CamelModel):
    learner_id: str | None = None


class ContentUpdateRequest(CamelModel):
    """Body shared by content-sync and current-content updates."""

    file_path: str | None = None
    content: str | None = None
    message: str | None = None

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            raise PydanticCustomError(
                "content_not_string", "Content must be a string", {"input": value}
            )
        return value

"""FastAPI application and route handlers."""

import sys
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import fixtures
from .auth import AUTH_COOKIE, REFRESH_COOKIE, authenticate
from .cms import (
    CMSContentService,
    ContentStore,
    default_content,
    format_cms_content,
    parse_cms_content,
    parse_sync_content,
    validate_content,
    validate_file_path,
)
from .config import settings
from .exceptions import (
    AuthenticationError,
    NotFoundError,
    ShikshanamError,
    ValidationError,
)
from .graphy import GraphyClient, is_valid_email
from .integration import PackageIntegrationService
from .middleware import add_request_id, create_token, decode_token, require_internal_token
from .models import (
    ContentUpdateRequest,
    EmailLoginRequest,
    EnrollRequest,
    LearnerCreateRequest,
    LearnerEmailRequest,
)
from .types import HealthStatus


@dataclass
class Services:
    """Long-lived collaborators shared by all requests."""

    graphy: GraphyClient
    integration: PackageIntegrationService
    cms: CMSContentService
    content_store: ContentStore

    async def health_check(self) -> HealthStatus:
        return {
            "graphy": await self._check(self.graphy.health_check, "Graphy"),
            "cms_cache": await self._check(self.cms.health_check, "CMS cache"),
        }

    @staticmethod
    async def _check(check, name: str) -> bool:
        try:
            return await check()
        except Exception as e:  # noqa: BLE001
            logger.error(f"{name} health check failed: {e}")
            return False


_services: Services | None = None


def configure_logging() -> None:
    """Configure logging - should be called at startup, not import time."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.log_level,
        serialize=False,
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            rotation="10 MB",
            retention="7 days",
            compression="zip",
            level=settings.log_level,
        )


def get_limiter() -> Limiter:
    """Get or create rate limiter."""
    return Limiter(
        key_func=get_remote_address,
        storage_uri=settings.redis_url or "memory://",
        default_limits=[settings.rate_limit],
    )


def current_rate_limit() -> str:
    """Per-client limit for the write routes, read on every request."""
    return settings.rate_limit


def create_services() -> Services:
    graphy = GraphyClient.from_settings(settings)
    return Services(
        graphy=graphy,
        integration=PackageIntegrationService(graphy),
        cms=CMSContentService.from_settings(settings),
        content_store=ContentStore(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    global _services
    configure_logging()

    services = create_services()
    await services.graphy.startup()
    _services = services

    logger.info("Application started successfully")

    yield

    await services.graphy.shutdown()
    _services = None
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Shikshanam API",
    version="1.0.0",
    description="Content and learning API for the Shikshanam front end",
    lifespan=lifespan,
)

app.middleware("http")(add_request_id)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

limiter = get_limiter()
app.state.limiter = limiter  # Required by slowapi
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle validation errors with clean messages."""
    error_messages = []

    for error in exc.errors():  # type: ignore[attr-defined]
        field = error["loc"][-1] if error["loc"] else "field"
        message = error.get("msg", f"Invalid {field}")

        match error["type"]:
            case "missing":
                message = f"Required field '{field}' is missing"
            case "json_invalid":
                message = "Invalid JSON format"

        error_messages.append(message)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "; ".join(error_messages),
            "details": error_messages,
        },
    )


app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]


@app.exception_handler(ShikshanamError)
async def shikshanam_exception_handler(request: Request, exc: ShikshanamError) -> JSONResponse:
    """Handle domain-specific errors."""
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, AuthenticationError):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc}")
    else:
        logger.info(f"{exc.__class__.__name__}: {exc}")

    return error_response(status_code, str(exc))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback, answer with a generic 500."""
    logger.opt(exception=exc).error(f"Unexpected error on {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def get_services() -> Services:
    """Get the service container.

    Serverless runs skip the lifespan, so the container is built on first use.
    """
    global _services
    if _services is None:
        logger.info("Creating services outside lifespan")
        _services = create_services()
    return _services


def get_graphy_client(services: Annotated[Services, Depends(get_services)]) -> GraphyClient:
    return services.graphy


def get_integration(
    services: Annotated[Services, Depends(get_services)],
) -> PackageIntegrationService:
    return services.integration


def get_cms_service(services: Annotated[Services, Depends(get_services)]) -> CMSContentService:
    return services.cms


def get_content_store(services: Annotated[Services, Depends(get_services)]) -> ContentStore:
    return services.content_store


Graphy = Annotated[GraphyClient, Depends(get_graphy_client)]
Integration = Annotated[PackageIntegrationService, Depends(get_integration)]
CMS = Annotated[CMSContentService, Depends(get_cms_service)]
Store = Annotated[ContentStore, Depends(get_content_store)]


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


# Service ---------------------------------------------------------------------


@app.get("/health", tags=["health"])
async def health_endpoint(
    response: Response,
    services: Annotated[Services, Depends(get_services)],
    detailed: bool = Query(False, description="Include detailed environment information"),
) -> dict[str, Any]:
    """Check health status of all components.

    Args:
        detailed: If True, includes version and environment information.

    """
    health = await services.health_check()
    all_healthy = all(health.values())

    if not all_healthy:
        response.status_code = 503

    result: dict[str, Any] = {
        "status": "healthy" if all_healthy else "unhealthy",
        "timestamp": now_iso(),
        "services": health,
    }

    if detailed:
        result["version"] = "1.0.0"
        result["environment"] = {
            "environment": settings.environment,
            "graphy_base_url": settings.graphy_base_url,
            "cms_api_url": settings.cms_api_url,
            "rate_limit": settings.rate_limit,
        }

    return result


@app.get("/", tags=["health"])
async def root_endpoint() -> dict[str, str]:
    """API information endpoint."""
    return {
        "name": "Shikshanam API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


# Auth ------------------------------------------------------------------------


@app.post("/api/auth/email", tags=["auth"])
@limiter.limit(current_rate_limit)
async def email_login_endpoint(
    request: Request, response: Response, body: EmailLoginRequest
) -> dict[str, Any]:
    """Demo login against the fixed credential pairs."""
    if not body.email or not body.password:
        raise ValidationError("Email and password are required")

    user = authenticate(body.email, body.password)
    if user is None:
        raise AuthenticationError("Invalid email or password")

    token = create_token(user)
    response.set_cookie(
        AUTH_COOKIE,
        token,
        max_age=settings.jwt_expiration_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    logger.info("User logged in", user_id=user.id)

    return {
        "success": True,
        "user": user.model_dump(by_alias=True),
        "message": "Login successful",
        "token": token,
    }


@app.post("/api/auth/logout", tags=["auth"])
async def logout_endpoint(request: Request, response: Response) -> dict[str, Any]:
    """Clear auth cookies; succeeds whether or not a session exists."""
    token = request.cookies.get(AUTH_COOKIE)
    user_id = decode_token(token) if token else None
    if user_id:
        logger.info("User logged out", user_id=user_id)

    response.delete_cookie(AUTH_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)
    return {"success": True, "message": "Logged out successfully"}


# Content ---------------------------------------------------------------------


@app.get("/api/content/current", tags=["content"])
async def current_content_endpoint(
    store: Store, file_path: str | None = Query(None, alias="filePath")
) -> dict[str, Any]:
    """Content currently shown by a section, in the CMS text format."""
    if not file_path:
        raise ValidationError("filePath parameter is required")

    content = store.get(file_path)
    if content is None:
        raise NotFoundError("Content not found for the specified file path")

    return {
        "success": True,
        "filePath": file_path,
        "content": format_cms_content(content),
        "timestamp": now_iso(),
        "source": "frontend",
    }


@app.post("/api/content/current", tags=["content"])
async def update_current_content_endpoint(store: Store, body: ContentUpdateRequest) -> dict[str, Any]:
    """Merge CMS edits into a section's current content."""
    if not body.file_path or not body.content:
        raise ValidationError("filePath and content are required")

    if not store.merge(body.file_path, parse_sync_content(body.content)):
        logger.info(f"No current content for {body.file_path}; update ignored")

    return {
        "success": True,
        "filePath": body.file_path,
        "message": "Content updated successfully",
        "timestamp": now_iso(),
    }


@app.get("/api/cms/content", tags=["content"])
async def cms_content_endpoint(
    cms: CMS, file_path: str | None = Query(None, alias="filePath")
) -> dict[str, Any]:
    """Section defaults overlaid with the latest CMS copy."""
    if not file_path:
        raise ValidationError("filePath parameter is required")
    if not validate_file_path(file_path):
        raise ValidationError("Invalid file path")

    content = await cms.get_content(file_path)
    return {
        "success": True,
        "filePath": file_path,
        "data": content,
        "complete": validate_content(content),
    }


@app.get(
    "/api/internal/content-sync",
    tags=["internal"],
    dependencies=[Depends(require_internal_token)],
)
async def content_sync_read_endpoint(
    store: Store, file_path: str | None = Query(None, alias="filePath")
) -> dict[str, Any]:
    """Hand the CMS admin the content the front end is serving."""
    if not file_path:
        raise ValidationError("File path is required")

    content = store.get(file_path)
    if content is None:
        content = default_content(file_path)
        if not content:
            raise NotFoundError("Content not found for the specified file path")

    return {
        "success": True,
        "data": {
            "filePath": file_path,
            "content": format_cms_content(content),
            "timestamp": now_iso(),
            "source": "frontend",
        },
    }


@app.post(
    "/api/internal/content-sync",
    tags=["internal"],
    dependencies=[Depends(require_internal_token)],
)
async def content_sync_write_endpoint(
    store: Store, cms: CMS, body: ContentUpdateRequest
) -> dict[str, Any]:
    """Accept content pushed from the CMS admin."""
    if not body.file_path or not body.content:
        raise ValidationError("File path and content are required")
    if not validate_file_path(body.file_path):
        raise ValidationError("Invalid file path")

    message = body.message or "Content updated successfully"
    store.put(body.file_path, parse_cms_content(body.content))
    cms.invalidate(body.file_path)
    logger.info(f"Content synced for {body.file_path}: {message}")

    return {
        "success": True,
        "data": {
            "filePath": body.file_path,
            "content": body.content,
            "message": message,
            "timestamp": now_iso(),
            "source": "cms",
        },
    }


@app.get("/api/homepage", tags=["content"])
async def homepage_endpoint(section_id: str | None = Query(None, alias="sectionId")) -> dict[str, Any]:
    section = fixtures.get_homepage_section(section_id)
    if section is None:
        raise NotFoundError("Section not found")
    return {"success": True, "data": section}


# Packages --------------------------------------------------------------------


@app.get("/api/packages/{sku}", tags=["packages"])
async def package_endpoint(sku: str) -> dict[str, Any]:
    package = fixtures.get_package(sku)
    if package is None:
        raise NotFoundError("Package not found")
    return {"success": True, "package": package.model_dump(by_alias=True)}


@app.get("/api/packages/{sku}/sessions", tags=["packages"])
async def package_sessions_endpoint(sku: str) -> dict[str, Any]:
    sessions = fixtures.get_sessions(sku)
    return {"success": True, "sessions": [s.model_dump(by_alias=True) for s in sessions]}


# Graphy ----------------------------------------------------------------------


def _require_email(email: str | None) -> str:
    if not email:
        raise ValidationError("Email is required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return email


@app.post("/api/graphy/learners/create", tags=["graphy"])
@limiter.limit(current_rate_limit)
async def create_learner_endpoint(
    request: Request, graphy: Graphy, body: LearnerCreateRequest
) -> dict[str, Any]:
    """Create or update a learner in Graphy."""
    email = _require_email(body.email)

    learner = await graphy.create_or_update_learner(
        email=email,
        name=body.name,
        password=body.password,
        mobile=body.mobile,
        send_email=True if body.send_email is None else body.send_email,
        custom_fields=body.custom_fields or {"source": "shikshanam"},
    )
    return {"success": True, "data": learner, "message": "Learner created/updated successfully"}


@app.post("/api/graphy/learners/reset-device", tags=["graphy"])
async def reset_device_endpoint(integration: Integration, body: LearnerEmailRequest) -> dict[str, Any]:
    result = await integration.reset_learner_device(_require_email(body.email))
    return {"success": True, "data": result, "message": "Device registrations reset"}


@app.post("/api/graphy/learners/reset-ios-screenshot", tags=["graphy"])
async def reset_ios_screenshot_endpoint(
    integration: Integration, body: LearnerEmailRequest
) -> dict[str, Any]:
    result = await integration.reset_ios_screenshot_restriction(_require_email(body.email))
    return {"success": True, "data": result, "message": "iOS screenshot restriction reset"}


@app.get("/api/graphy/learners/{learner_id}", tags=["graphy"])
async def learner_endpoint(
    learner_id: str, graphy: Graphy, course_info: bool = Query(False, alias="courseInfo")
) -> Any:
    """Learner record straight from Graphy."""
    return await graphy.get_learner(learner_id, include_course_info=course_info)


@app.get("/api/graphy/learners/{learner_id}/usage", tags=["graphy"])
async def learner_usage_endpoint(
    learner_id: str,
    graphy: Graphy,
    product_id: str | None = Query(None, alias="productId"),
    date: str | None = Query(None),
) -> Any:
    if not product_id:
        raise ValidationError("Product ID is required")
    return await graphy.get_learner_usage(learner_id, product_id, date)


@app.get("/api/graphy/learners/{learner_id}/discussions", tags=["graphy"])
async def learner_discussions_endpoint(
    learner_id: str,
    graphy: Graphy,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
) -> Any:
    return await graphy.get_learner_discussions(learner_id, start_date, end_date)


@app.get("/api/graphy/learners/{learner_id}/packages", tags=["graphy"])
async def learner_packages_endpoint(learner_id: str, integration: Integration) -> dict[str, Any]:
    """Dashboard view of the packages a learner is enrolled in."""
    packages = await integration.get_learner_packages(learner_id)
    return {"success": True, "data": [p.model_dump(by_alias=True) for p in packages]}


@app.post("/api/graphy/packages/{sku}/enroll", tags=["graphy"])
async def enroll_endpoint(sku: str, integration: Integration, body: EnrollRequest) -> dict[str, Any]:
    if not body.learner_id:
        raise ValidationError("Learner ID is required")

    enrollment = await integration.enroll_learner_in_package(body.learner_id, sku)
    return {"success": True, "data": enrollment, "message": "Successfully enrolled in package"}


@app.get("/api/graphy/packages/{sku}/progress", tags=["graphy"])
async def progress_endpoint(
    sku: str, integration: Integration, learner_id: str | None = Query(None, alias="learnerId")
) -> Any:
    if not learner_id:
        raise ValidationError("Learner ID is required")
    return await integration.get_learner_progress(learner_id, sku)


@app.get("/api/graphy/packages/{sku}/sessions", tags=["graphy"])
async def live_sessions_endpoint(sku: str, integration: Integration) -> list[dict[str, Any]]:
    sessions = await integration.get_upcoming_live_sessions(sku)
    return [s.model_dump(by_alias=True) for s in sessions]


@app.get("/api/graphy/packages/{sku}/live-classes/{live_class_id}/attendees", tags=["graphy"])
async def live_class_attendees_endpoint(
    sku: str, live_class_id: str, integration: Integration
) -> dict[str, Any]:
    attendees = await integration.get_live_class_attendees(sku, live_class_id)
    return {"success": True, "data": attendees}


app.openapi_tags = [
    {"name": "auth", "description": "Demo authentication"},
    {"name": "content", "description": "CMS and homepage content"},
    {"name": "internal", "description": "CMS synchronization (internal token)"},
    {"name": "packages", "description": "Package fixtures"},
    {"name": "graphy", "description": "Graphy LMS proxy"},
    {"name": "health", "description": "Health checks"},
]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    return app

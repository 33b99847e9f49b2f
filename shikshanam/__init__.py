"""Shikshanam API - content and learning back end for the Shikshanam site."""

from .api import app, create_app
from .cms import CMSContentService, ContentCache, parse_cms_content
from .graphy import GraphyClient
from .integration import PackageIntegrationService

__version__ = "1.0.0"

__all__ = [
    "CMSContentService",
    "ContentCache",
    "GraphyClient",
    "PackageIntegrationService",
    "app",
    "create_app",
    "parse_cms_content",
]

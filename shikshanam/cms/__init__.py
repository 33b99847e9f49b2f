"""CMS content: caching, parsing, fetching and the live content store."""

from .cache import ContentCache
from .parser import format_cms_content, parse_cms_content, parse_sync_content, sanitize_input
from .service import (
    ALLOWED_FILE_PATHS,
    DEFAULT_CONTENT,
    CMSContentService,
    default_content,
    validate_content,
    validate_file_path,
)
from .store import ContentStore

__all__ = [
    "ALLOWED_FILE_PATHS",
    "DEFAULT_CONTENT",
    "CMSContentService",
    "ContentCache",
    "ContentStore",
    "default_content",
    "format_cms_content",
    "parse_cms_content",
    "parse_sync_content",
    "sanitize_input",
    "validate_content",
    "validate_file_path",
]

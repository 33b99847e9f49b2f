"""Content currently displayed by the front-end sections."""

from collections.abc import Mapping

from ..types import CMSContent

INITIAL_CONTENT: dict[str, CMSContent] = {
    "components/sections/Hero.tsx": {
        "mainTitle": "Welcome to Ancient Wisdom",
        "subtitle": "Where Technology meets Tradition",
        "question": "What are you looking for?",
        "buttonText": "Explore Now",
    },
}


class ContentStore:
    """Process-local map of section file path to its live content."""

    def __init__(self, initial: Mapping[str, CMSContent] | None = None) -> None:
        source = INITIAL_CONTENT if initial is None else initial
        self._content: dict[str, CMSContent] = {path: dict(c) for path, c in source.items()}

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._content

    def get(self, file_path: str) -> CMSContent | None:
        content = self._content.get(file_path)
        return dict(content) if content is not None else None

    def merge(self, file_path: str, updates: Mapping[str, str]) -> bool:
        """Update an existing section in place; unknown sections are left alone."""
        if file_path not in self._content:
            return False
        self._content[file_path].update(updates)
        return True

    def put(self, file_path: str, content: Mapping[str, str]) -> None:
        self._content[file_path] = dict(content)

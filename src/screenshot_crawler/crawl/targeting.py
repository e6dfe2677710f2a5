from __future__ import annotations

from dataclasses import dataclass, field

from .urls import has_excluded_extension, is_same_domain

DEFAULT_EXCLUDED_EXTENSIONS = frozenset({
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".zip", ".rar", ".exe", ".dmg",
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".mp4", ".mp3", ".wav", ".css", ".js",
})


@dataclass(slots=True)
class TargetFilter:
    """Keeps the crawl on the start host and away from non-HTML assets."""

    base_origin: str
    excluded_extensions: frozenset[str] = field(
        default_factory=lambda: DEFAULT_EXCLUDED_EXTENSIONS
    )

    def is_allowed(self, url: str) -> bool:
        if not is_same_domain(url, self.base_origin):
            return False
        return not has_excluded_extension(url, self.excluded_extensions)

    def filter(self, urls: list[str]) -> list[str]:
        return [url for url in urls if self.is_allowed(url)]

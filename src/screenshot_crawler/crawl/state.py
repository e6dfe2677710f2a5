from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class CrawlerRuntimeState:
    """Mutable bookkeeping for a single crawl run."""

    visited_urls: set[str] = field(default_factory=set)
    visited_locations: set[str] = field(default_factory=set)
    screenshots: list[Path] = field(default_factory=list)
    failed_urls: list[str] = field(default_factory=list)

    @property
    def visited_count(self) -> int:
        return len(self.visited_locations)

    def is_visited(self, location: str) -> bool:
        return location in self.visited_locations

    def mark_visited(self, normalized_url: str, location: str) -> None:
        self.visited_urls.add(normalized_url)
        self.visited_locations.add(location)

"""Depth-first, same-domain screenshot crawl."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Sequence, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..core.config import CrawlerConfig
from .links import LinkExtractor
from .screenshot import ScreenshotWriter
from .state import CrawlerRuntimeState
from .targeting import TargetFilter
from .urls import location_of, normalize, origin_of

logger = logging.getLogger(__name__)

MAX_PATH_HISTORY = 5


def extend_history(path_history: Sequence[str], url: str) -> Tuple[str, ...]:
    """Append ``url`` keeping only the most recent entries."""

    return (*path_history, url)[-MAX_PATH_HISTORY:]


@dataclass
class CrawlEngine:
    """Visits pages recursively, one screenshot per new location."""

    link_extractor: LinkExtractor
    screenshot_writer: ScreenshotWriter
    max_depth: int = 5
    delay_ms: int = 1000
    navigation_timeout_ms: int = 30000
    state: CrawlerRuntimeState = field(default_factory=CrawlerRuntimeState)

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> "CrawlEngine":
        return cls(
            link_extractor=LinkExtractor(TargetFilter(origin_of(config.start_url))),
            screenshot_writer=ScreenshotWriter(config.output_dir),
            max_depth=config.max_depth,
            delay_ms=config.delay_ms,
            navigation_timeout_ms=config.navigation_timeout_ms,
        )

    def crawl(
        self,
        page: Any,
        url: str,
        depth: int = 0,
        index: int = 0,
        path_history: Sequence[str] = (),
    ) -> int:
        """Crawl ``url`` and everything reachable from it; return the page index."""

        if depth > self.max_depth:
            logger.debug("Max depth %d reached, skipping %s", self.max_depth, url)
            return index

        normalized_url = normalize(url)
        location = location_of(normalized_url)
        if self.state.is_visited(location):
            logger.debug("Already visited: %s", url)
            return index

        try:
            logger.info("Navigating (depth %d): %s", depth, url)
            if path_history:
                logger.info("Path: %s -> %s", " -> ".join(path_history), url)

            if not self._navigate(page, url):
                self.state.failed_urls.append(url)
                return index

            self.state.mark_visited(normalized_url, location)
            index += 1

            screenshot = self.screenshot_writer.capture(page, url, index, path_history)
            if screenshot is not None:
                self.state.screenshots.append(screenshot)

            if self.delay_ms > 0:
                page.wait_for_timeout(self.delay_ms)

            new_links = self._unvisited(self.link_extractor.extract_links(page))
            logger.info("New links: %d", len(new_links))

            child_history = extend_history(path_history, url)
            for link in new_links:
                index = self.crawl(page, link, depth + 1, index, child_history)

            return index
        except Exception:
            logger.error("Error while processing %s", url, exc_info=True)
            return index

    def _navigate(self, page: Any, url: str) -> bool:
        try:
            response = page.goto(
                url,
                wait_until="networkidle",
                timeout=self.navigation_timeout_ms,
            )
        except PlaywrightTimeoutError:
            logger.warning("Navigation timed out: %s", url)
            return False
        except PlaywrightError as exc:
            logger.warning("Navigation failed: %s (%s)", url, exc)
            return False

        if response is None or not response.ok:
            status = response.status if response is not None else None
            logger.warning("Failed to load %s (status: %s)", url, status)
            return False
        return True

    def _unvisited(self, links: List[str]) -> List[str]:
        return [
            link
            for link in links
            if not self.state.is_visited(location_of(normalize(link)))
        ]

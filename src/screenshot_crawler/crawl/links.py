from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .targeting import TargetFilter

logger = logging.getLogger(__name__)

ANCHOR_HREFS_SCRIPT = """
() => Array.from(
    document.querySelectorAll('a[href]'),
    (anchor) => anchor.getAttribute('href'),
)
"""


class MalformedLinkData(ValueError):
    """Raised when the DOM evaluation returns something other than a list."""


@dataclass(slots=True)
class LinkExtractor:
    """Collects crawlable same-domain links from a rendered Playwright page."""

    target_filter: TargetFilter

    def extract_links(self, page: Any) -> List[str]:
        """Return absolute, allowed link targets in document order.

        Hrefs are read from the live DOM first; if that fails the rendered HTML
        snapshot is parsed instead. Any remaining failure yields no links.
        """

        base_url = self._safe_page_url(page)
        if base_url is None:
            return []

        try:
            hrefs = self.collect_from_page(page)
        except Exception as exc:
            logger.warning("DOM link evaluation failed on %s: %s", base_url, exc)
            try:
                hrefs = self.gather_from_soup(BeautifulSoup(page.content(), "html.parser"))
            except Exception:
                logger.error("Link extraction failed on %s", base_url, exc_info=True)
                return []

        links = self.target_filter.filter(self.resolve_all(base_url, hrefs))
        logger.info("Found %d link(s) on %s", len(links), base_url)
        return links

    def collect_from_page(self, page: Any) -> List[str]:
        raw = page.evaluate(ANCHOR_HREFS_SCRIPT)
        if not isinstance(raw, list):
            raise MalformedLinkData(f"expected a list of hrefs, got {type(raw).__name__}")
        return [href for href in raw if isinstance(href, str)]

    @staticmethod
    def gather_from_soup(soup: BeautifulSoup) -> List[str]:
        hrefs: List[str] = []
        for anchor in soup.find_all("a", href=True):
            href = anchor.get("href")
            if isinstance(href, str):
                hrefs.append(href)
        return hrefs

    @classmethod
    def resolve_all(cls, base_url: str, hrefs: Iterable[str]) -> List[str]:
        resolved: List[str] = []
        for href in hrefs:
            absolute = cls.resolve(base_url, href)
            if absolute:
                resolved.append(absolute)
        return resolved

    @staticmethod
    def resolve(base_url: str, href: Optional[str]) -> Optional[str]:
        if href is None:
            return None
        try:
            return urljoin(base_url, href.strip())
        except ValueError:
            logger.debug("Dropping unresolvable href %r on %s", href, base_url)
            return None

    @staticmethod
    def _safe_page_url(page: Any) -> Optional[str]:
        try:
            return page.url
        except Exception:
            logger.error("Could not read the current page URL", exc_info=True)
            return None


def extract_links(page: Any, base_origin: str) -> List[str]:
    return LinkExtractor(TargetFilter(base_origin)).extract_links(page)

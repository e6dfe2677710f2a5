"""Browser session lifecycle around a single crawl."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from playwright.sync_api import sync_playwright

from ..core.config import CrawlerConfig
from ..core.report import CrawlReport
from .engine import CrawlEngine
from .state import CrawlerRuntimeState

logger = logging.getLogger(__name__)


@dataclass
class ScreenshotSpider:
    """Launches Chromium, runs the crawl engine and always closes the browser."""

    config: CrawlerConfig
    engine: Optional[CrawlEngine] = field(default=None)

    def __post_init__(self) -> None:
        if self.engine is None:
            self.engine = CrawlEngine.from_config(self.config)

    def run(self) -> CrawlReport:
        self._reset_runtime_state()
        output_dir = self.config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        report = CrawlReport(start_url=self.config.start_url, output_dir=output_dir.resolve())

        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(
                headless=self.config.headless,
                args=list(self.config.browser_args),
            )
            started = time.perf_counter()
            try:
                context = browser.new_context(
                    viewport=self.config.viewport,
                    user_agent=self.config.user_agent,
                )
                page = context.new_page()
                report.visited_count = self.engine.crawl(page, self.config.start_url)
            except Exception as exc:
                logger.exception("Crawl aborted")
                report.error = str(exc) or exc.__class__.__name__
                report.visited_count = self.engine.state.visited_count
            finally:
                report.elapsed_seconds = time.perf_counter() - started
                browser.close()

        state = self.engine.state
        report.screenshots = list(state.screenshots)
        report.failed_urls = list(state.failed_urls)
        return report

    def _reset_runtime_state(self) -> None:
        self.engine.state = CrawlerRuntimeState()


def run_crawl(config: CrawlerConfig) -> CrawlReport:
    return ScreenshotSpider(config).run()

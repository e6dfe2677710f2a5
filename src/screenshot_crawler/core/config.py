"""Configuration loading for crawl runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

from dotenv import load_dotenv

DEFAULT_OUTPUT_DIR = "./screenshots"
DEFAULT_MAX_DEPTH = 5
DEFAULT_DELAY_MS = 1000
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_BROWSER_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")


class InvalidStartUrlError(ValueError):
    """Raised when the start URL cannot seed a crawl."""


@dataclass(slots=True)
class CrawlerConfig:
    """Holds runtime options for a single crawl run."""

    start_url: str
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    max_depth: int = DEFAULT_MAX_DEPTH
    delay_ms: int = DEFAULT_DELAY_MS
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1920
    viewport_height: int = 1080
    browser_args: Tuple[str, ...] = DEFAULT_BROWSER_ARGS
    report_path: Optional[Path] = None

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def validate(self) -> None:
        validate_start_url(self.start_url)
        if self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        if self.navigation_timeout_ms <= 0:
            raise ValueError("navigation_timeout_ms must be > 0")


def validate_start_url(url: str) -> None:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidStartUrlError(f"Invalid start URL: {url!r}") from exc

    if parsed.scheme not in {"http", "https"} or not hostname:
        raise InvalidStartUrlError(f"Start URL must be an http(s) URL with a host: {url!r}")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def load_configuration(
    start_url: str,
    output_dir: Optional[str] = None,
    *,
    max_depth: Optional[int] = None,
    delay_ms: Optional[int] = None,
    navigation_timeout_ms: Optional[int] = None,
    headless: Optional[bool] = None,
    report_path: Optional[str] = None,
) -> CrawlerConfig:
    """Builds a ``CrawlerConfig`` from CLI input and environment variables."""

    load_dotenv()  # Loads .env values if present

    directory = output_dir or os.getenv("SCREENSHOT_DIR") or DEFAULT_OUTPUT_DIR

    config = CrawlerConfig(
        start_url=start_url.strip(),
        output_dir=Path(directory),
        max_depth=max_depth if max_depth is not None else _env_int("MAX_DEPTH", DEFAULT_MAX_DEPTH),
        delay_ms=delay_ms if delay_ms is not None else _env_int("CRAWL_DELAY_MS", DEFAULT_DELAY_MS),
        navigation_timeout_ms=(
            navigation_timeout_ms
            if navigation_timeout_ms is not None
            else _env_int("NAVIGATION_TIMEOUT_MS", DEFAULT_NAVIGATION_TIMEOUT_MS)
        ),
        headless=headless if headless is not None else _env_flag("HEADLESS", True),
        user_agent=os.getenv("USER_AGENT") or DEFAULT_USER_AGENT,
        report_path=Path(report_path).resolve() if report_path else None,
    )
    config.validate()
    return config

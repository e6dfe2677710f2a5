"""Full-page screenshot capture with deterministic, traceable filenames.

Filenames have the form ``{index:03d}_{page}{suffix}.png`` where ``page`` is
the sanitized URL path and ``suffix`` is ``_path[a->b->...]`` built from the
navigation history. Downstream tooling parses these names, so the scheme must
stay stable.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence
from urllib.parse import urlparse

from .urls import encode_path

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 200
MAX_SEGMENT_LENGTH = 20
SEGMENT_KEEP = 17

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


def _strip_slashes(path: str) -> str:
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    return path


def _url_path(url: str) -> str:
    return _strip_slashes(encode_path(urlparse(url).path))


def sanitize_filename(value: str) -> str:
    cleaned = _UNSAFE_CHARS.sub("_", value)
    cleaned = _UNDERSCORE_RUNS.sub("_", cleaned)
    return cleaned[:MAX_NAME_LENGTH]


def page_name(url: str) -> str:
    try:
        return _url_path(url) or "root"
    except ValueError:
        return "current"


def history_segment(url: str) -> str:
    try:
        segment = _url_path(url)
    except ValueError:
        return "unknown"
    if len(segment) > MAX_SEGMENT_LENGTH:
        segment = segment[:SEGMENT_KEEP] + "..."
    return segment or "root"


def path_suffix(path_history: Sequence[str]) -> str:
    if not path_history:
        return ""
    return "_path[" + "->".join(history_segment(url) for url in path_history) + "]"


def build_screenshot_filename(url: str, index: int, path_history: Sequence[str] = ()) -> str:
    return f"{index:03d}_{sanitize_filename(page_name(url))}{path_suffix(path_history)}.png"


@dataclass(slots=True)
class ScreenshotWriter:
    """Writes one full-page PNG per visited page into ``output_dir``."""

    output_dir: Path

    def capture(
        self,
        page: Any,
        url: str,
        index: int,
        path_history: Sequence[str] = (),
    ) -> Optional[Path]:
        filepath = self.output_dir / build_screenshot_filename(url, index, path_history)
        logger.info("Capturing screenshot of %s", url)
        try:
            page.wait_for_load_state("networkidle")
            page.screenshot(path=str(filepath), full_page=True)
        except Exception as exc:
            logger.error("Screenshot failed for %s: %s", url, exc)
            return None

        logger.info("Saved screenshot %s", filepath.name)
        return filepath

"""Summary data produced by a crawl run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class CrawlReport:
    """Outcome of one crawl: what was visited, written and skipped."""

    start_url: str = ""
    output_dir: Path = Path(".")
    visited_count: int = 0
    elapsed_seconds: float = 0.0
    screenshots: List[Path] = field(default_factory=list)
    failed_urls: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.error is None

    def to_json(self) -> str:
        data = {
            "start_url": self.start_url,
            "output_dir": str(self.output_dir),
            "visited_count": self.visited_count,
            "elapsed_seconds": round(self.elapsed_seconds, 2),
            "screenshots": [str(path) for path in self.screenshots],
            "failed_urls": list(self.failed_urls),
            "error": self.error,
        }
        return json.dumps(data, indent=4)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "CrawlReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            start_url=raw.get("start_url", ""),
            output_dir=Path(raw.get("output_dir", ".")),
            visited_count=int(raw.get("visited_count", 0)),
            elapsed_seconds=float(raw.get("elapsed_seconds", 0.0)),
            screenshots=[Path(item) for item in raw.get("screenshots", [])],
            failed_urls=list(raw.get("failed_urls", [])),
            error=raw.get("error"),
        )

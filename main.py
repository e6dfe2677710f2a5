#!/usr/bin/env python3
"""Run the screenshot crawler from a source checkout: ``python main.py URL``."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from screenshot_crawler.cli import run_cli  # noqa: E402

if __name__ == "__main__":
    raise SystemExit(run_cli(sys.argv[1:]))

"""Command line interface for the screenshot crawler."""

from __future__ import annotations

import argparse
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError

from .core.config import load_configuration
from .core.log import setup_logging
from .core.report import CrawlReport
from .crawl.runner import ScreenshotSpider


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl a site within one domain and save a full-page screenshot of every page"
    )
    parser.add_argument("url", help="Start URL")
    parser.add_argument("-o", "--output-dir", default=None, help="Screenshot directory (default: ./screenshots)")
    parser.add_argument("--max-depth", type=int, default=None, help="Maximum link depth from the start URL (default: 5)")
    parser.add_argument("--delay", type=int, default=None, help="Wait between pages in milliseconds (default: 1000)")
    parser.add_argument("--timeout", type=int, default=None, help="Navigation timeout in milliseconds (default: 30000)")
    parser.add_argument(
        "--headless",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Run the browser headless (default comes from .env/environment, otherwise on)",
    )
    parser.add_argument("--report", default=None, help="Write a JSON crawl report to this file")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
    return parser


def print_summary(report: CrawlReport) -> None:
    status = "[+] Crawl finished" if report.completed else f"[!] Crawl aborted: {report.error}"
    print(f"\n{status}")
    print(f"    Pages visited   : {report.visited_count}")
    print(f"    Screenshots     : {len(report.screenshots)}")
    print(f"    Failed pages    : {len(report.failed_urls)}")
    print(f"    Elapsed time    : {report.elapsed_seconds:.2f}s")
    print(f"    Output directory: {report.output_dir}")


def run_cli(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_configuration(
            args.url,
            args.output_dir,
            max_depth=args.max_depth,
            delay_ms=args.delay,
            navigation_timeout_ms=args.timeout,
            headless=args.headless,
            report_path=args.report,
        )
    except ValueError as exc:
        print(f"[!] {exc}")
        return 1

    print(f"[*] Starting crawl at {config.start_url}")
    print(f"[*] Screenshots go to {config.output_dir.resolve()}")

    spider = ScreenshotSpider(config)
    try:
        report = spider.run()
    except PlaywrightError as exc:
        print(f"[!] Could not launch the browser: {exc}")
        return 1
    except KeyboardInterrupt:
        print("[!] Interrupted by user")
        return 1

    print_summary(report)

    if config.report_path is not None:
        report.save(config.report_path)
        print(f"[+] Report saved to {config.report_path}")

    return 0 if report.completed else 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()

from pathlib import Path

from tests.helpers.crawler_imports import CrawlEngine, LinkExtractor, ScreenshotWriter, TargetFilter
from tests.helpers.fake_browser import FakePage, FakeSitePage

ROOT = "https://site.test/"


def _engine(output_dir: Path, *, max_depth: int = 5, delay_ms: int = 0) -> CrawlEngine:
    return CrawlEngine(
        link_extractor=LinkExtractor(TargetFilter("https://site.test")),
        screenshot_writer=ScreenshotWriter(output_dir),
        max_depth=max_depth,
        delay_ms=delay_ms,
    )


def _written(output_dir: Path) -> list[str]:
    return sorted(path.name for path in output_dir.iterdir())


def test_each_location_is_visited_once(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["/a", "/b", "/a?ref=nav", "/"]),
        "https://site.test/a": FakeSitePage(hrefs=["/b", "/"]),
        "https://site.test/b": FakeSitePage(hrefs=["/a"]),
    })
    engine = _engine(tmp_path)

    total = engine.crawl(page, ROOT)

    assert total == 3
    assert page.goto_calls == [ROOT, "https://site.test/a", "https://site.test/b"]
    assert engine.state.visited_locations == {
        "https://site.test/",
        "https://site.test/a",
        "https://site.test/b",
    }
    assert _written(tmp_path) == [
        "001_root.png",
        "002_a_path[root].png",
        "003_b_path[root->a].png",
    ]


def test_crawling_a_visited_url_again_is_a_no_op(tmp_path):
    page = FakePage({ROOT: FakeSitePage()})
    engine = _engine(tmp_path)

    first = engine.crawl(page, ROOT)
    second = engine.crawl(page, ROOT + "#again", index=first)

    assert first == second == 1
    assert page.goto_calls == [ROOT]
    assert engine.state.visited_count == 1


def test_fragment_variants_count_as_one_visit(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["/a#sec1", "/a#sec2"]),
        "https://site.test/a": FakeSitePage(),
    })
    engine = _engine(tmp_path)

    total = engine.crawl(page, ROOT)

    assert total == 2
    assert page.goto_calls == [ROOT, "https://site.test/a#sec1"]
    assert engine.state.visited_urls == {ROOT, "https://site.test/a"}


def test_depth_bound_stops_descent(tmp_path):
    site = {ROOT: FakeSitePage(hrefs=["/p1"])}
    for level in range(1, 5):
        site[f"https://site.test/p{level}"] = FakeSitePage(hrefs=[f"/p{level + 1}"])
    page = FakePage(site)
    engine = _engine(tmp_path, max_depth=2)

    total = engine.crawl(page, ROOT)

    assert total == 3
    assert page.goto_calls == [ROOT, "https://site.test/p1", "https://site.test/p2"]


def test_zero_depth_visits_only_start_page(tmp_path):
    page = FakePage({ROOT: FakeSitePage(hrefs=["/a"]), "https://site.test/a": FakeSitePage()})

    assert _engine(tmp_path, max_depth=0).crawl(page, ROOT) == 1
    assert page.goto_calls == [ROOT]


def test_failed_sibling_does_not_stop_traversal(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["/a", "/b", "/c", "/d"]),
        "https://site.test/a": FakeSitePage(),
        "https://site.test/b": FakeSitePage(status=500, hrefs=["/hidden"]),
        "https://site.test/c": FakeSitePage(),
        "https://site.test/d": FakeSitePage(timeout=True),
        "https://site.test/hidden": FakeSitePage(),
    })
    engine = _engine(tmp_path)

    total = engine.crawl(page, ROOT)

    assert total == 3
    assert "https://site.test/hidden" not in page.goto_calls
    assert engine.state.failed_urls == ["https://site.test/b", "https://site.test/d"]
    assert _written(tmp_path) == [
        "001_root.png",
        "002_a_path[root].png",
        "003_c_path[root].png",
    ]


def test_failed_page_can_be_retried_from_another_parent(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["/missing", "/a"]),
        "https://site.test/a": FakeSitePage(hrefs=["/missing"]),
    })
    engine = _engine(tmp_path)

    engine.crawl(page, ROOT)

    assert page.goto_calls.count("https://site.test/missing") == 2
    assert engine.state.visited_count == 2


def test_history_keeps_five_most_recent_urls(tmp_path):
    site = {ROOT: FakeSitePage(hrefs=["/p1"])}
    for level in range(1, 7):
        site[f"https://site.test/p{level}"] = FakeSitePage(hrefs=[f"/p{level + 1}"])
    page = FakePage(site)
    engine = _engine(tmp_path, max_depth=10)

    total = engine.crawl(page, ROOT)

    assert total == 7
    assert page.screenshots[-1] == "007_p6_path[p1->p2->p3->p4->p5].png"
    assert page.screenshots[5] == "006_p5_path[root->p1->p2->p3->p4].png"


def test_screenshot_failure_still_marks_page_visited(tmp_path):
    page = FakePage(
        {ROOT: FakeSitePage(hrefs=["/a"]), "https://site.test/a": FakeSitePage()},
        fail_screenshot=True,
    )
    engine = _engine(tmp_path)

    total = engine.crawl(page, ROOT)

    assert total == 2
    assert engine.state.screenshots == []
    assert engine.state.visited_count == 2


def test_link_extraction_failure_ends_branch(tmp_path):
    page = FakePage(
        {ROOT: FakeSitePage(hrefs=["/a"]), "https://site.test/a": FakeSitePage()},
        fail_evaluate=True,
        fail_content=True,
    )
    engine = _engine(tmp_path)

    assert engine.crawl(page, ROOT) == 1
    assert page.goto_calls == [ROOT]


def test_delay_is_applied_after_each_visit(tmp_path):
    page = FakePage({ROOT: FakeSitePage(hrefs=["/a"]), "https://site.test/a": FakeSitePage()})
    engine = _engine(tmp_path, delay_ms=1000)

    engine.crawl(page, ROOT)

    assert page.waits == [1000, 1000]


def test_navigation_waits_for_network_idle_with_timeout(tmp_path):
    page = FakePage({ROOT: FakeSitePage()})
    engine = _engine(tmp_path)

    engine.crawl(page, ROOT)

    assert page.goto_options == [{"wait_until": "networkidle", "timeout": 30000}]


def test_external_links_are_never_followed(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["https://elsewhere.test/", "https://sub.site.test/", "/docs.pdf"]),
    })
    engine = _engine(tmp_path)

    assert engine.crawl(page, ROOT) == 1
    assert page.goto_calls == [ROOT]


def test_unexpected_error_returns_current_index(tmp_path):
    page = FakePage({ROOT: FakeSitePage(hrefs=["/a"]), "https://site.test/a": FakeSitePage()})

    def broken_wait(_timeout):
        raise RuntimeError("page crashed")

    page.wait_for_timeout = broken_wait
    engine = _engine(tmp_path, delay_ms=500)

    assert engine.crawl(page, ROOT) == 1
    assert engine.state.visited_count == 1


def test_encoded_and_raw_paths_are_one_location(tmp_path):
    page = FakePage({
        ROOT: FakeSitePage(hrefs=["/my page", "/my%20page"]),
        "https://site.test/my page": FakeSitePage(),
        "https://site.test/my%20page": FakeSitePage(),
    })
    engine = _engine(tmp_path)

    total = engine.crawl(page, ROOT)

    assert total == 2
    assert page.goto_calls == [ROOT, "https://site.test/my page"]
    assert engine.state.visited_locations == {ROOT, "https://site.test/my%20page"}

from __future__ import annotations

import unittest

from ph_launch_stats.urls import (
    classify_url,
    discover_post_links,
    extract_slug,
    is_post_url,
    normalize_post_url,
    resolve_url,
)


class TestClassify(unittest.TestCase):
    def test_post_paths(self) -> None:
        for url in (
            "https://www.producthunt.com/posts/my-app",
            "https://www.producthunt.com/posts/my-app/reviews",
            "http://example.com/en/posts/x?ref=1",
        ):
            self.assertEqual(classify_url(url), "post", msg=url)
            self.assertTrue(is_post_url(url))

    def test_listing_paths(self) -> None:
        for url in (
            "https://www.producthunt.com/",
            "https://www.producthunt.com/topics/ai",
            "https://www.producthunt.com/?q=/posts/",
            "https://www.producthunt.com/postsx/abc",
        ):
            self.assertEqual(classify_url(url), "listing", msg=url)


class TestNormalize(unittest.TestCase):
    def test_post_url_drops_query_and_fragment(self) -> None:
        self.assertEqual(
            normalize_post_url("HTTPS://Example.COM/posts/my-app?ref=home#comments"),
            "https://example.com/posts/my-app",
        )

    def test_listing_url_keeps_query(self) -> None:
        self.assertEqual(
            normalize_post_url("https://example.com/?page=2"),
            "https://example.com/?page=2",
        )

    def test_empty_path_becomes_root(self) -> None:
        self.assertEqual(normalize_post_url("https://example.com"), "https://example.com/")

    def test_unparseable_returned_unchanged(self) -> None:
        for raw in ("http://[::1/posts/x", "not a url", ""):
            self.assertEqual(normalize_post_url(raw), raw)

    def test_idempotent(self) -> None:
        for raw in (
            "HTTPS://Example.COM/posts/my-app?ref=home#c",
            "https://example.com",
            "https://example.com/topics/ai?x=1#y",
            "http://[::1/posts/x",
            "relative/posts/x",
        ):
            once = normalize_post_url(raw)
            self.assertEqual(normalize_post_url(once), once, msg=raw)


class TestSlug(unittest.TestCase):
    def test_first_segment_after_posts(self) -> None:
        self.assertEqual(extract_slug("https://example.com/posts/my-app"), "my-app")
        self.assertEqual(extract_slug("https://example.com/posts/my-app/reviews"), "my-app")
        self.assertEqual(extract_slug("https://example.com/posts/my-app?ref=x"), "my-app")

    def test_missing_slug(self) -> None:
        self.assertEqual(extract_slug("https://example.com/"), "")
        self.assertEqual(extract_slug("https://example.com/posts/"), "")
        self.assertEqual(extract_slug(""), "")


class TestResolve(unittest.TestCase):
    def test_relative_href(self) -> None:
        self.assertEqual(
            resolve_url("/r/p/123", "https://example.com/posts/my-app"),
            "https://example.com/r/p/123",
        )

    def test_absolute_href_kept(self) -> None:
        self.assertEqual(
            resolve_url("https://my.app/?ref=ph", "https://example.com/posts/my-app"),
            "https://my.app/?ref=ph",
        )

    def test_empty_or_unresolvable(self) -> None:
        base = "https://example.com/posts/my-app"
        self.assertEqual(resolve_url("", base), "")
        self.assertEqual(resolve_url(None, base), "")
        self.assertEqual(resolve_url("mailto:hi@example.com", base), "")


class TestDiscoverPostLinks(unittest.TestCase):
    def test_filters_and_dedupes(self) -> None:
        links = discover_post_links(
            [
                "/posts/a",
                "/posts/a?ref=x#c",
                "https://EXAMPLE.com/posts/b",
                "https://other.com/posts/c",
                "/topics/ai",
                "javascript:void(0)",
                None,
            ],
            "https://example.com/",
        )
        self.assertEqual(
            links,
            ["https://example.com/posts/a", "https://example.com/posts/b"],
        )


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from ph_launch_stats.config import (
    config_sha256,
    input_from_mapping,
    load_config,
    resolve_api_token,
)
from ph_launch_stats.config_schema import DEFAULT_START_URL
from ph_launch_stats.errors import ConfigError


_VALID_YAML = """\
startUrls:
  - https://www.producthunt.com/
  - url: https://www.producthunt.com/topics/developer-tools
  - https://www.producthunt.com/
maxRequestsPerCrawl: 25
useBrowser: true
productHuntApiToken: ""
maxConcurrency: 4
lookupTimeoutMs: 1500
"""


class TestConfig(unittest.TestCase):
    def _write(self, td: str, text: str) -> Path:
        path = Path(td) / "input.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_load_config_ok(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg = load_config(self._write(td, _VALID_YAML))

        self.assertEqual(
            cfg.start_urls,
            [
                "https://www.producthunt.com/",
                "https://www.producthunt.com/topics/developer-tools",
            ],
        )
        self.assertEqual(cfg.max_requests_per_crawl, 25)
        self.assertTrue(cfg.use_browser)
        self.assertEqual(cfg.backend, "browser")
        self.assertEqual(cfg.max_concurrency, 4)
        self.assertEqual(cfg.lookup_timeout_ms, 1500)
        self.assertEqual(cfg.network_idle_timeout_ms, 5000)

    def test_empty_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg = load_config(self._write(td, ""))

        self.assertEqual(cfg.start_urls, [DEFAULT_START_URL])
        self.assertEqual(cfg.max_requests_per_crawl, 200)
        self.assertFalse(cfg.use_browser)
        self.assertEqual(cfg.backend, "static")

    def test_snake_case_names_accepted(self) -> None:
        cfg = input_from_mapping({"start_urls": ["https://example.com/"], "use_browser": True})
        self.assertEqual(cfg.start_urls, ["https://example.com/"])
        self.assertTrue(cfg.use_browser)

    def test_rejects_invalid_values(self) -> None:
        for bad in (
            {"maxRequestsPerCrawl": 0},
            {"startUrls": []},
            {"startUrls": ["ftp://example.com/"]},
            {"startUrls": ["/posts/relative"]},
            {"unknownOption": 1},
        ):
            with self.assertRaises(ConfigError, msg=str(bad)):
                input_from_mapping(bad)

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            load_config("/nonexistent/input.yaml")

    def test_non_mapping_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(self._write(td, "- a\n- b\n"))

    def test_api_token_is_optional(self) -> None:
        cfg = input_from_mapping({})
        self.assertEqual(resolve_api_token(cfg, environ={}), "")
        self.assertEqual(
            resolve_api_token(cfg, environ={"PRODUCTHUNT_API_TOKEN": " env-token "}),
            "env-token",
        )

        cfg = input_from_mapping({"productHuntApiToken": "input-token"})
        self.assertEqual(
            resolve_api_token(cfg, environ={"PRODUCTHUNT_API_TOKEN": "env-token"}),
            "input-token",
        )

    def test_hash_ignores_token(self) -> None:
        a = input_from_mapping({"productHuntApiToken": "one"})
        b = input_from_mapping({"productHuntApiToken": "two"})
        c = input_from_mapping({"maxRequestsPerCrawl": 5})

        self.assertEqual(config_sha256(a), config_sha256(b))
        self.assertNotEqual(config_sha256(a), config_sha256(c))


if __name__ == "__main__":
    unittest.main()

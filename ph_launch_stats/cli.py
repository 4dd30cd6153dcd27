from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Sequence

from .config import load_config
from .errors import ConfigError, PageAccessError, SinkError
from .extract import extract_post
from .run_log import RunLogger
from .static import SoupPage
from .urls import is_post_url


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ph_launch_stats")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser(
        "run",
        help="Crawl the start URLs and save one record per post page.",
    )
    run.add_argument(
        "--config",
        required=True,
        help="Path to YAML input file.",
    )
    run.add_argument(
        "--out",
        required=True,
        help="Output directory for the run log and exported dataset.",
    )
    run.add_argument(
        "--debug",
        action="store_true",
        help="Include debug events in the run log.",
    )
    run.set_defaults(_handler=_cmd_run)

    extract = subparsers.add_parser(
        "extract",
        help="Extract a record from a saved post page without network access.",
    )
    extract.add_argument(
        "--html",
        required=True,
        help="Path to the saved HTML file.",
    )
    extract.add_argument(
        "--url",
        required=True,
        help="URL the page was fetched from.",
    )
    extract.set_defaults(_handler=_cmd_extract)

    actor = subparsers.add_parser(
        "actor",
        help="Run as an Apify Actor (input, proxy and dataset from the platform).",
    )
    actor.set_defaults(_handler=_cmd_actor)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _cmd_run(args: argparse.Namespace) -> int:
    from .crawl import run_crawl
    from .sink import DatasetSink

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    log_path = out_dir / "run.log"
    dataset_path = out_dir / "dataset.json"
    with RunLogger.open(log_path, overwrite=True, debug=bool(args.debug)) as log:
        log.info(
            "run_command_started",
            config_path=str(args.config),
            out_dir=str(out_dir),
        )

        try:
            cfg = load_config(args.config)
            log.info(
                "config_loaded",
                config_path=str(args.config),
                backend=cfg.backend,
            )

            summary = asyncio.run(
                run_crawl(
                    cfg,
                    sink=DatasetSink(),
                    logger=log,
                    export_path=dataset_path,
                )
            )
        except Exception as e:
            log.exception("run_command_failed", exc=e)
            raise

    print(f"pages={summary.pages}")
    print(f"post_pages={summary.post_pages}")
    print(f"listing_pages={summary.listing_pages}")
    print(f"records={summary.records}")
    print(f"failed_pages={summary.failed_pages}")
    print(f"dataset={dataset_path}")
    print(f"run_log={log_path}")

    return 0


def _cmd_extract(args: argparse.Namespace) -> int:
    html_path = Path(args.html)
    if not html_path.exists():
        raise ConfigError(f"HTML file not found: {html_path}")
    if not is_post_url(args.url):
        raise ConfigError(f"Not a post URL (no /posts/ in path): {args.url}")

    page = SoupPage(html_path.read_bytes(), args.url)
    record = asyncio.run(extract_post(page))

    print(json.dumps(record.to_item(), indent=2, ensure_ascii=False))
    return 0


def _cmd_actor(args: argparse.Namespace) -> int:
    from .actor import run_actor

    asyncio.run(run_actor())
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except (PageAccessError, SinkError) as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1

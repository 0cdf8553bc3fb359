"""CLI entrypoint for building the paragraph index and the clock table."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lit_clock.config import AppConfig  # noqa: E402
from lit_clock.errors import IndexFailure  # noqa: E402
from lit_clock.pipeline import LiteraryClockPipeline  # noqa: E402
from lit_clock.progress import TqdmProgress  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the literary clock database.")
    parser.add_argument(
        "--config",
        type=str,
        default=str(PROJECT_ROOT / "config.yaml"),
        help="Path to YAML config.",
    )
    parser.add_argument("--max-books", type=int, default=None, help="Only index the first N books.")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    config = AppConfig.from_yaml(args.config)
    if args.max_books is not None:
        config.corpus.max_books = args.max_books

    pipeline = LiteraryClockPipeline(config, progress=TqdmProgress())
    try:
        stats = pipeline.build()
    except (IndexFailure, FileNotFoundError) as exc:
        print(f"program failed with error: {exc}", file=sys.stderr)
        return 1
    finally:
        pipeline.close()

    print("Build complete.")
    for key, value in stats.as_dict().items():
        print(f"{key}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Print the literary time for now (or for --at)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lit_clock.config import AppConfig  # noqa: E402
from lit_clock.errors import IndexFailure, InvalidTime  # noqa: E402
from lit_clock.lookup import parse_clock_time  # noqa: E402
from lit_clock.pipeline import LiteraryClockPipeline  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show a book paragraph naming the current time.")
    parser.add_argument(
        "--config",
        type=str,
        default=str(PROJECT_ROOT / "config.yaml"),
        help="Path to YAML config.",
    )
    parser.add_argument("--at", type=str, default=None, help='Clock time to look up, e.g. "7:15 pm".')
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(levelname)s %(message)s")
    config = AppConfig.from_yaml(args.config)
    pipeline = LiteraryClockPipeline(config)
    try:
        now = parse_clock_time(args.at) if args.at else None
        entry = pipeline.current_entry(now)
    except (IndexFailure, InvalidTime) as exc:
        print(f"program failed with error: {exc}", file=sys.stderr)
        return 1
    finally:
        pipeline.close()

    if entry is None:
        print("No paragraph found for this time.")
        return 0

    print(entry.time)
    print(entry.paragraph)
    print(f"--{entry.title}  by {entry.author}")
    print(entry.link)
    print("-" * 66)
    return 0


if __name__ == "__main__":
    sys.exit(main())

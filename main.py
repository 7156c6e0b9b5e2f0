"""
CLI entry point for tiercache.

Usage:
    python main.py demo [--fast 2] [--slow 3] [--threshold 2]
    python main.py stats [--format summary|json|prometheus]
"""

import argparse
import sys

from tiercache.cache import CacheOrchestrator, InMemorySource, VideoData
from tiercache.config import get_settings
from tiercache.exceptions import ConfigurationError
from tiercache.logging_config import setup_logging

DEMO_CATALOG = {
    "video_123": VideoData(video_id="video_123", payload="movie-data"),
    "video_999": VideoData(video_id="video_999", payload="documentary-data"),
}

DEMO_SEQUENCE = ["video_123", "video_123", "video_123", "video_123", "video_999"]


def _build_cache(args) -> CacheOrchestrator:
    return CacheOrchestrator(
        InMemorySource(DEMO_CATALOG),
        fast_capacity=args.fast,
        slow_capacity=args.slow,
        promote_threshold=args.threshold,
    )


def _replay(cache: CacheOrchestrator, verbose: bool) -> None:
    for video_id in DEMO_SEQUENCE:
        value = cache.lookup(video_id)
        if verbose:
            tier = cache.tier_of(video_id) or "-"
            print(f"lookup({video_id}) -> {value!r}  [now in: {tier}]")


def cmd_demo(args):
    """Replay the reference walkthrough and print each lookup."""
    cache = _build_cache(args)
    _replay(cache, verbose=True)
    print(f"statistics -> {cache.report().summary()}")


def cmd_stats(args):
    """Replay the reference walkthrough and print only the report."""
    cache = _build_cache(args)
    _replay(cache, verbose=False)
    if args.format == "json":
        print(cache.report().model_dump_json(indent=2))
    elif args.format == "prometheus":
        print(cache.prometheus_metrics(), end="")
    else:
        print(cache.report().summary())


def main(argv=None):
    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.format)

    parser = argparse.ArgumentParser(
        description="tiercache - multi-level promotion cache"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def _add_sizing(p):
        p.add_argument("--fast", type=int, default=2, help="Fast tier capacity")
        p.add_argument("--slow", type=int, default=3, help="Slow tier capacity")
        p.add_argument("--threshold", type=int, default=2, help="Promotion threshold")

    # demo
    p_demo = subparsers.add_parser("demo", help="Replay the reference walkthrough")
    _add_sizing(p_demo)

    # stats
    p_stats = subparsers.add_parser("stats", help="Print statistics after the walkthrough")
    _add_sizing(p_stats)
    p_stats.add_argument(
        "--format", choices=["summary", "json", "prometheus"], default="summary"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    commands = {
        "demo": cmd_demo,
        "stats": cmd_stats,
    }
    try:
        commands[args.command](args)
    except ConfigurationError as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()

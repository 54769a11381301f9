#!/usr/bin/env python3
"""Open a page and show how an element name resolves against it."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from uiresolve import (
    BrowserManager,
    EngineSettings,
    LocatorStrategy,
    NotFoundError,
    ResolutionEngine,
    configure_logging,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("url", help="Page to open")
    parser.add_argument("name", help="Logical element name, e.g. 'Forgot Password'")
    parser.add_argument(
        "locators",
        nargs="*",
        help="Prefixed locators such as id=login or css=.btn (optional)",
    )
    parser.add_argument("--headed", action="store_true", help="Show the browser")
    parser.add_argument("--timeout", type=float, default=None, help="Per-query timeout (s)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    overrides = {"timeout_s": args.timeout} if args.timeout is not None else {}
    settings = EngineSettings(log_level="DEBUG", **overrides)
    configure_logging(settings.log_level, settings.log_json)

    strategies = [LocatorStrategy.parse(loc) for loc in args.locators]
    browser = BrowserManager(settings)
    browser.start(headless=not args.headed)
    try:
        browser.get_page().goto(args.url)
        engine = ResolutionEngine(browser.session(), settings)
        try:
            handle = engine.resolve(args.name, *strategies)
        except NotFoundError as exc:
            print("\nNot found. Tried:\n  " + "\n  ".join(exc.attempted))
            return 1
        print(f"\nResolved '{args.name}' (visible={handle.is_visible()})")
        print(f"Cached as: {engine.cache_stats().names}")
    finally:
        browser.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())

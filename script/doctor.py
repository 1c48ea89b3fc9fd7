from __future__ import annotations

"""Environment doctor for cocktailnet.

This script performs a few fast checks to reduce onboarding friction:
- Validate that an API key is configured (env var or plist file).
- Validate the API base URL.
- Optionally probe the API with a random-drink request.

Usage:
    python script/doctor.py
    python script/doctor.py --offline --json
"""

import argparse
import json
import logging
import sys
from typing import Sequence

from loguru import logger
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cocktailnet.config import get_settings
from cocktailnet.preflight import (
    CheckResult,
    Status,
    check_api_key,
    check_api_reachable,
    check_base_url,
)

console = Console()
log = logger.bind(module="script.doctor")


class _LoguruInterceptHandler(logging.Handler):
    """Bridge standard-library logging records (httpx) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(exception=record.exc_info).log(level, record.getMessage())


def _configure_logging(level: str) -> None:
    level = (level or "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level, backtrace=False, diagnose=False)

    handler: logging.Handler = _LoguruInterceptHandler()
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    logging.captureWarnings(True)


def _status_text(status: Status) -> Text:
    styles = {"ok": "bold green", "warn": "bold yellow", "fail": "bold red"}
    return Text(status.upper(), style=styles.get(status, "bold"))


def _render_table(results: Sequence[CheckResult]) -> None:
    table = Table(title="cocktailnet doctor", show_lines=False)
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Details")
    for item in results:
        table.add_row(item.name, _status_text(item.status), item.details)
    console.print(table)


def _summarize(results: Sequence[CheckResult]) -> tuple[int, int, int]:
    ok = sum(1 for r in results if r.status == "ok")
    warn = sum(1 for r in results if r.status == "warn")
    fail = sum(1 for r in results if r.status == "fail")
    return ok, warn, fail


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run environment checks for cocktailnet.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the live API probe.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures (non-zero exit code).",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON (useful for CI).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(list(argv) if argv is not None else None)

    try:
        settings = get_settings()
    except Exception as exc:  # pragma: no cover - surfaced to the operator
        console.print(
            "[bold red]Failed to load settings[/] "
            f"reason={exc}. Ensure your environment variables are valid.",
        )
        log.exception("Settings load failed")
        return 1

    _configure_logging(settings.log_level)

    results: list[CheckResult] = [check_api_key(settings), check_base_url(settings)]
    if not args.offline:
        if any(r.status == "fail" for r in results):
            results.append(CheckResult("api_reachable", "warn", "skipped: fix configuration first"))
        else:
            results.append(check_api_reachable(settings))

    if args.json_output:
        payload = [{"name": r.name, "status": r.status, "details": r.details} for r in results]
        console.print_json(json.dumps(payload))
    else:
        _render_table(results)

    ok, warn, fail = _summarize(results)
    log.info("Doctor finished ok={} warn={} fail={}", ok, warn, fail)
    if fail:
        return 1
    if warn and args.strict:
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

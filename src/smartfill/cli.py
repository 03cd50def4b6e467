"""Command line interface for the smartfill engine."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from .core.config import EngineConfig, load_configuration
from .core.errors import SmartfillError
from .core.models import FillOutcome, ScanResult
from .core.report import RunReport
from .detection.watcher import watchers
from .dom.page import DomPage
from .dom.snapshot import capture_page
from .engine import detect, fill


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="smartfill", description="Form field detection and autofill")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subcommands = parser.add_subparsers(dest="command", required=True)

    for name, summary in (("detect", "List the fillable fields of a page"), ("fill", "Write values into a page")):
        command = subcommands.add_parser(name, help=summary)
        source = command.add_mutually_exclusive_group(required=True)
        source.add_argument("--html", type=Path, help="Local HTML file to analyse")
        source.add_argument("--url", help="Page to capture with a headless browser")
        command.add_argument("--report", type=Path, help="Write a JSON report to this path")
        if name == "fill":
            command.add_argument("--values", type=Path, required=True, help="JSON object of field values")
            command.add_argument("--output", type=Path, help="Write the filled HTML to this path")

    return parser.parse_args(argv)


def load_page(args: argparse.Namespace, config: EngineConfig) -> DomPage:
    if args.html is not None:
        print(f"[*] Reading {args.html}")
        return DomPage.from_html(args.html.read_text(encoding="utf-8"), url=args.html.resolve().as_uri())
    print(f"[*] Capturing {args.url}")
    return capture_page(args.url, headless=config.headless)


def print_scan(result: ScanResult) -> None:
    if not result.success:
        print("[!] Detection failed.")
        return
    if not result.forms:
        print(" - No fillable fields found.")
        return
    for index, form in enumerate(result.forms, start=1):
        kind = "synthetic" if form.synthetic else "form"
        print(f"[+] {kind} #{index} ({form.pattern}): {form.field_count} field(s)")
        for item in form.fields:
            options = f" options={item.options}" if item.options else ""
            print(f" - {item.name} [{item.type.value}] label={item.label!r}{options}")


def print_outcome(outcome: FillOutcome) -> None:
    print(f"[+] Filled {outcome.filled} field(s)")
    for error in outcome.errors:
        print(f"[!] {error}")


async def run_detect(args: argparse.Namespace, config: EngineConfig) -> int:
    page = load_page(args, config)
    result = await detect(page, config=config)
    watchers.dispose()
    print_scan(result)
    if args.report is not None:
        RunReport.from_results(page.url, result).save(args.report)
        print(f"[+] Report saved to {args.report}")
    return 0 if result.success else 1


async def run_fill(args: argparse.Namespace, config: EngineConfig) -> int:
    values = json.loads(args.values.read_text(encoding="utf-8"))
    if not isinstance(values, dict):
        print("[!] --values must contain a JSON object.")
        return 2

    page = load_page(args, config)
    result = await detect(page, config=config)
    watchers.dispose()
    print_scan(result)

    outcome = await fill(result.fields, values, config=config)
    print_outcome(outcome)

    if args.output is not None:
        args.output.write_text(page.to_html(), encoding="utf-8")
        print(f"[+] Filled page saved to {args.output}")
    if args.report is not None:
        RunReport.from_results(page.url, result, outcome).save(args.report)
        print(f"[+] Report saved to {args.report}")
    return 0 if outcome.success else 1


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = load_configuration()
    runner = run_detect if args.command == "detect" else run_fill
    try:
        return asyncio.run(runner(args, config))
    except SmartfillError as exc:
        print(f"[!] {exc}")
        return 1


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()

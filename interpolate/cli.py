"""Command line entry point: parse templates and print JSON lines."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from interpolate.catalog import load_catalog
from interpolate.logs import configure_logging
from interpolate.parser import Interpolation, parse_template

LOGGER = structlog.get_logger(__name__)

EXIT_CATALOG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interpolate",
        description="Normalize {placeholder} templates and list their named identifiers.",
    )
    parser.add_argument("templates", nargs="*", help="Templates to parse.")
    parser.add_argument(
        "--catalog",
        type=Path,
        help="YAML message catalog to parse instead of positional templates.",
    )
    parser.add_argument(
        "--fields",
        default="",
        help="Comma-separated field names; adds the slot bindings each template needs.",
    )
    parser.add_argument("--log-level", default="warning", help="Log level (default: warning).")
    return parser


def _record(template: str, *, source: str | None, fields: list[str]) -> dict[str, Any]:
    result = parse_template(template)
    record: dict[str, Any] = {"source": source, **result.asdict()}
    if fields:
        record["bindings"] = Interpolation.from_result(result, source=source).bindings(fields)
    return record


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level, stream=sys.stderr)
    fields = [name.strip() for name in args.fields.split(",") if name.strip()]

    if args.catalog is not None:
        try:
            catalog = load_catalog(args.catalog, use_cache=False)
        except (OSError, ValueError) as exc:
            LOGGER.error("catalog_load_failed", path=str(args.catalog), error=str(exc))
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_CATALOG_ERROR
        items: list[tuple[str | None, str]] = list(catalog.items())
    else:
        items = [(None, template) for template in args.templates]

    for source, template in items:
        print(json.dumps(_record(template, source=source, fields=fields), ensure_ascii=False))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run helper
    raise SystemExit(main())

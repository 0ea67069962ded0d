#!/usr/bin/env python
"""CLI tool for upgrading asset files to the current format version.

Usage::

    # Report what would change
    asset-migrate Assets/Arial.xkfnt Assets/Title.xkfnt --check

    # Upgrade in place, four files at a time
    asset-migrate Assets/*.xkfnt --write --workers 4

    # Pin the target version and read settings from YAML
    asset-migrate Assets/Arial.xkfnt --target 1.5.0-alpha09 --config migrate.yaml
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from asset_migrate.assets import AssetDescriptor, build_default_catalog
from asset_migrate.config import MigrationSettings, load_settings_from_yaml
from asset_migrate.document import (
    DocumentFormatError,
    MappingNode,
    dump_document_file,
    load_document_file,
)
from asset_migrate.migration import MigrationJob, MigrationResult
from asset_migrate.utils.logging_utils import get_logger

LOGGER = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="asset-migrate",
        description="Upgrade asset files to the current format version.",
    )
    parser.add_argument("files", nargs="+", help="Asset files to migrate")
    parser.add_argument(
        "--config",
        help="Path to a YAML settings file",
    )
    parser.add_argument(
        "--asset-type",
        help="YAML tag of the asset type (e.g. '!SpriteFont') for files whose "
        "extension is not recognised",
    )
    parser.add_argument(
        "--target",
        help="Version to migrate to instead of the current format version",
    )
    parser.add_argument(
        "--write",
        action="store_true",
        help="Write migrated documents back over their source files",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: from settings, 1)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if any file needs an upgrade; never writes",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON result per file instead of text lines",
    )
    return parser


def _load_settings(args: argparse.Namespace) -> MigrationSettings:
    settings = load_settings_from_yaml(args.config) if args.config else MigrationSettings()
    updates = {}
    if args.workers is not None:
        updates["workers"] = args.workers
    if args.write:
        updates["write_back"] = True
    if args.check:
        updates["write_back"] = False
    if not updates:
        return settings
    # re-validate so a bad --workers is reported like a bad settings file
    return MigrationSettings(**{**settings.model_dump(), **updates})


def _print_unprocessed(path: Path, as_json: bool, status: str, detail: str) -> None:
    if as_json:
        print(json.dumps({"status": status, "file_path": str(path), "error": detail}))
        return
    print(f"{status:<6}{path}  ->  {detail}")


def _print(result: MigrationResult, as_json: bool, status: str) -> None:
    if as_json:
        print(json.dumps({"status": status, **result.to_dict()}))
        return
    if result.success:
        detail = (
            f"{result.start_version} -> {result.final_version} "
            f"({', '.join(result.applied)})"
            if result.upgraded
            else f"already at {result.final_version}"
        )
    else:
        detail = result.error.report()
    print(f"{status:<6}{result.file_path}  ->  {detail}")


def main(argv: Optional[List[str]] = None) -> int:
    """Migrate the given files and report results; returns the exit status."""
    args = _build_parser().parse_args(argv)
    try:
        settings = _load_settings(args)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return 2
    catalog = build_default_catalog()

    forced = None
    if args.asset_type:
        forced = catalog.for_tag(args.asset_type)
        if forced is None:
            print(f"Unknown asset type {args.asset_type}", file=sys.stderr)
            return 2

    failures = 0
    pending = 0
    batches: Dict[str, Tuple[AssetDescriptor, List[MigrationJob]]] = {}
    for name in args.files:
        path = Path(name)
        try:
            document: MappingNode = load_document_file(path)
        except (
            OSError,
            UnicodeDecodeError,
            yaml.YAMLError,
            DocumentFormatError,
        ) as exc:
            _print_unprocessed(path, args.json, "FAIL", str(exc))
            failures += 1
            continue

        descriptor = forced or catalog.for_path(path) or catalog.for_document(document)
        if descriptor is None:
            _print_unprocessed(path, args.json, "SKIP", "unknown asset type")
            continue
        _, jobs = batches.setdefault(descriptor.tag, (descriptor, []))
        jobs.append(
            MigrationJob(document, descriptor.schema_name, str(path), args.target)
        )

    for descriptor, jobs in batches.values():
        runner = catalog.runner_for(descriptor, settings)
        for job, result in zip(jobs, runner.migrate_many(jobs)):
            if not result.success:
                failures += 1
                _print(result, args.json, "FAIL")
                continue
            if result.upgraded:
                pending += 1
                if settings.write_back:
                    dump_document_file(job.document, job.file_path)
                    LOGGER.info("Wrote %s", job.file_path)
            _print(result, args.json, "OK")

    if failures:
        return 1
    if args.check and pending:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

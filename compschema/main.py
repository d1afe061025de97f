"""
CompSchema - Entry Point

Classifies every data component in a definition dump and writes
component_schema.json + component_enums.json.

Usage:
    python -m compschema.main extract registry.json -o out/
    python -m compschema.main extract registry.json --overrides overrides.json
    python -m compschema.main extract registry.json --workers 8 -v
    python -m compschema.main diff old/component_schema.json new/component_schema.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from compschema.classify.classifier import ClassificationRun, ClassifierConfig, classify_registry
from compschema.errors import CompSchemaError
from compschema.registry.loader import load_registry
from compschema.schema.diff import diff_schemas
from compschema.schema.emitter import emit, load_schema, schema_to_list
from compschema.schema.overrides import MergeResult, load_overrides, merge_overrides

log = logging.getLogger("compschema")


@dataclass
class RunConfig:
    """One extract run, as given on the command line."""
    registry_path: Path
    out_dir: Path = Path(".")
    overrides_path: Path | None = None
    classifier: ClassifierConfig | None = None


@dataclass
class ExtractResult:
    run: ClassificationRun
    merge: MergeResult
    schema_path: Path
    enums_path: Path


def run_extract(config: RunConfig) -> ExtractResult:
    """Load, classify, merge overrides, write. Raises CompSchemaError on fatal errors."""
    registry = load_registry(config.registry_path)
    if registry.version:
        log.info("Registry version %s", registry.version)

    run = classify_registry(registry, config.classifier)
    merge = merge_overrides(schema_to_list(run.entries), load_overrides(config.overrides_path))
    schema_path, enums_path = emit(merge.schema, run.catalog.to_dict(), config.out_dir)
    return ExtractResult(run, merge, schema_path, enums_path)


def _cmd_extract(args: argparse.Namespace) -> None:
    config = RunConfig(
        registry_path=Path(args.registry),
        out_dir=Path(args.output),
        overrides_path=Path(args.overrides) if args.overrides else None,
        classifier=ClassifierConfig(workers=args.workers),
    )
    result = run_extract(config)

    print(result.run.summary.report(enum_count=len(result.run.catalog)))
    if result.merge.overridden or result.merge.added:
        print(result.merge.summary())
    print(f"\n[*] Wrote {result.schema_path}")
    print(f"[*] Wrote {result.enums_path}")


def _cmd_diff(args: argparse.Namespace) -> None:
    diff = diff_schemas(load_schema(args.old), load_schema(args.new))
    print(diff.report())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compschema",
        description="Data component schema extractor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser("extract", help="Classify a definition dump and write the schema")
    extract.add_argument("registry", help="Component definition file (JSON)")
    extract.add_argument("-o", "--output", default=".",
                         help="Output directory (default: current directory)")
    extract.add_argument("--overrides", default=None,
                         help="Hand-crafted schema entries to merge over the extracted ones")
    extract.add_argument("--workers", type=int, default=1,
                         help="Classify on N threads (default: 1)")
    extract.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
                         help="Enable debug logging")
    extract.set_defaults(func=_cmd_extract)

    diff = sub.add_parser("diff", help="Compare two emitted schema files")
    diff.add_argument("old", help="Previous component_schema.json")
    diff.add_argument("new", help="New component_schema.json")
    diff.set_defaults(func=_cmd_diff)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if getattr(args, "workers", 1) < 1:
        log.error("--workers must be at least 1")
        sys.exit(1)

    try:
        args.func(args)
    except CompSchemaError as e:
        log.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Command line interface for qgate."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable

from jsonschema import ValidationError

from .config import Config, dump_default_yaml
from .errors import ConfigError, ReportError
from .logging import configure_logging, get_logger
from .reporting.console import print_summary
from .reporting.json_report import write_json_report
from .reporting.markdown_report import write_markdown_report
from .runner import Runner

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qgate", description="Repository code-quality gate")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also write log records to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Analyze the source tree and write quality reports")
    report.add_argument("--path", default=".", help="Project directory to analyze")
    report.add_argument("--config", default=None, help="Path to qgate.yml config")
    report.add_argument("--format", default="both", choices=["json", "md", "both"], help="Report formats")
    report.add_argument("--out", default=None, help="Output directory")
    report.add_argument("--jobs", default=1, type=int, help="Run file analyzers in parallel")
    report.add_argument("--skip-coverage", action="store_true", help="Do not run the test command")

    gate = subparsers.add_parser("gate", help="Check a persisted report against thresholds")
    gate.add_argument("--report", default=None, help="Path to quality-report.json")
    gate.add_argument("--config", default=None, help="Path to qgate.yml config")

    sizes = subparsers.add_parser("check-sizes", help="Check staged files against size limits")
    sizes.add_argument("--path", default=".", help="Repository directory")
    sizes.add_argument("--config", default=None, help="Path to qgate.yml config")

    dups = subparsers.add_parser("check-duplicates", help="List duplicate functions and repeated patterns")
    dups.add_argument("--path", default=".", help="Project directory to analyze")
    dups.add_argument("--config", default=None, help="Path to qgate.yml config")

    subparsers.add_parser("print-schema", help="Print report JSON schema")
    subparsers.add_parser("example-config", help="Print default configuration")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, log_file=Path(args.log_file) if args.log_file else None)

    if args.command == "print-schema":
        from .reporting.schema import SCHEMA

        json.dump(SCHEMA, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    if args.command == "example-config":
        sys.stdout.write(dump_default_yaml())
        return 0

    try:
        config = Config.load(Path(args.config) if args.config else None)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.command == "report":
        return _report(args, config)
    if args.command == "gate":
        return _gate(args, config)
    if args.command == "check-sizes":
        return _check_sizes(args, config)
    if args.command == "check-duplicates":
        return _check_duplicates(args, config)
    return 3


def _report(args: argparse.Namespace, config: Config) -> int:
    runner = Runner(config, jobs=args.jobs, skip_coverage=args.skip_coverage)
    report, errors = runner.run(Path(args.path).resolve())
    out_dir = Path(args.out or config.report.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    formats = {args.format}
    if args.format == "both":
        formats = {"json", "md"}
    if "json" in formats:
        try:
            write_json_report(report, out_dir / config.report.json_name)
        except ValidationError as exc:
            if not errors:
                errors.append(f"report does not match schema: {exc.message}")
            logger.error("Not writing %s: the generated report is invalid", config.report.json_name)
    if "md" in formats:
        write_markdown_report(report, out_dir / config.report.md_name)
    print_summary(report)
    if errors:
        for err in errors:
            print(err, file=sys.stderr)
        return 2
    return 0


def _gate(args: argparse.Namespace, config: Config) -> int:
    from .gate import run_gate

    report_path = Path(args.report) if args.report else Path(config.report.out_dir) / config.report.json_name
    try:
        return run_gate(report_path, config.gate)
    except ReportError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _check_sizes(args: argparse.Namespace, config: Config) -> int:
    from .staged import check_staged_sizes

    oversized = check_staged_sizes(Path(args.path), config)
    if not oversized:
        print("All staged files are within size limits")
        return 0
    print("The following files exceed size limits:\n")
    for item in oversized:
        print(f"  {item.file}")
        print(f"    Lines: {item.lines}/{item.limit} ({item.kind})")
        print("    Recommendation: Break into smaller components\n")
    print("Please refactor these files before committing.")
    return 1


def _check_duplicates(args: argparse.Namespace, config: Config) -> int:
    from .analyzers.duplicates import DuplicateFunctionDetector, scan_patterns
    from .utils.fs import load_source_files

    paths = config.paths
    files = load_source_files(Path(args.path) / paths.source_root, paths.ignore_dirs, paths.extensions)
    findings = scan_patterns(files)
    duplicates = DuplicateFunctionDetector(config.duplication.min_name_length).analyze(files)
    if not findings and not duplicates:
        print("No significant code duplication found")
        return 0
    print("Code duplication detected:\n")
    for finding in findings:
        print(f"  {finding.name}:")
        print(f"    Total occurrences: {finding.total}/{finding.threshold}")
        for path, count in sorted(finding.files.items()):
            print(f"      {path}: {count} occurrences")
        print("")
    for dup in duplicates:
        print(f"  Function \"{dup.name}\" found in:")
        for path in dup.files:
            print(f"      {path}")
    print("\nConsider refactoring duplicate code into reusable utilities.")
    # Advisory only: duplicate detection never blocks a commit.
    return 0


if __name__ == "__main__":
    sys.exit(main())

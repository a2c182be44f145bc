#!/usr/bin/env python3
"""
Code Fixer - Main Entry Point

Line-oriented lint analyzer that reports debug logging, legacy `var`
declarations, loose equality and missing statement terminators, and
writes back an auto-corrected version of the code.

Usage:
    python -m code_fixer.main analyze src/
    python -m code_fixer.main scan --repo owner/repo --push
    python -m code_fixer.main serve --port 3001
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .analyzer import analyze_code
from .config import FixerConfig
from .models import RepoFile, FileReport
from .pipeline import collect_local_files, analyze_files_sync, scan_repository_sync
from .tools import GitHubTool
from .utils import setup_logging, get_logger, calculate_metrics, format_metrics_report


def load_inputs(target: str, config: FixerConfig) -> List[RepoFile]:
    """Read the files named by an `analyze` target: stdin, a file or a directory."""
    if target == "-":
        return [RepoFile(path="<stdin>", content=sys.stdin.read())]

    path = Path(target)
    if path.is_dir():
        return collect_local_files(path, config)
    if path.is_file():
        return [RepoFile(path=str(path), content=path.read_text(encoding="utf-8"))]

    raise FileNotFoundError(f"No such file or directory: {target}")


def format_report(report: FileReport) -> str:
    """Format one file's result for terminal output."""
    if not report.succeeded:
        return f"{report.file.path}: FAILED ({report.error})"

    lines = [f"{report.file.path}: {report.result.summary}"]
    for issue in report.result.issues:
        lines.append(
            f"  {issue.line}: {issue.type.value} [{issue.category}/{issue.severity.value}] "
            f"{issue.description}"
        )
    return "\n".join(lines)


def cmd_analyze(args):
    """Handle 'analyze' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()
    config = FixerConfig.from_env()

    try:
        files = load_inputs(args.path, config)
        if len(files) == 1:
            reports = [FileReport(file=files[0], result=analyze_code(files[0].content))]
        else:
            reports = analyze_files_sync(files, max_parallel=config.max_parallel)
    except Exception as e:
        logger.exception(f"Analysis failed: {e}")
        sys.exit(1)

    if args.json:
        payload = {r.file.path: r.result.to_dict() for r in reports if r.succeeded}
        print(json.dumps(payload, indent=2))
    else:
        for report in reports:
            print(format_report(report))
        if len(reports) > 1:
            print()
            print(format_metrics_report(calculate_metrics(reports)))

    if args.write and args.path != "-":
        root = Path(args.path)
        for report in reports:
            if not report.changed:
                continue
            target = root / report.file.path if root.is_dir() else root
            target.write_text(report.result.fixed_code, encoding="utf-8")
            logger.info(f"Wrote fixes to {target}")

    sys.exit(1 if any(not r.succeeded for r in reports) else 0)


def cmd_scan(args):
    """Handle 'scan' subcommand."""
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()

    config = FixerConfig.from_env()
    if args.max_files:
        config.max_files = args.max_files
    if args.max_parallel:
        config.max_parallel = args.max_parallel

    try:
        github = GitHubTool(config=config)
        outcome = scan_repository_sync(
            args.repo,
            github,
            config=config,
            push=args.push and not args.dry_run,
        )
    except Exception as e:
        logger.exception(f"Scan failed: {e}")
        sys.exit(1)

    print(f"\n=== {outcome.snapshot.full_name}@{outcome.snapshot.branch} ===")
    print(f"Fetched {len(outcome.snapshot.files)} of {outcome.snapshot.total_files} code files")
    for report in outcome.reports:
        print(format_report(report))
    print()
    print(format_metrics_report(outcome.metrics))

    if args.dry_run:
        print("\n=== Dry Run Results ===")
        print(f"Would push fixes for {len(outcome.changes)} files:")
        for change in outcome.changes:
            print(f"  - {change.path}")
    elif outcome.pull_request:
        print(f"\nCreated PR #{outcome.pull_request.number}: {outcome.pull_request.url}")

    sys.exit(0)


def cmd_serve(args):
    """Handle 'serve' subcommand."""
    import uvicorn

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    config = FixerConfig.from_env()

    uvicorn.run(
        "code_fixer.server:app",
        host=args.host or config.host,
        port=args.port or config.port,
    )


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Line-oriented lint analyzer and auto-fixer"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyze a file, directory or stdin")
    analyze_parser.add_argument(
        "path",
        help="File or directory to analyze, or - for stdin"
    )
    analyze_parser.add_argument(
        "--write",
        action="store_true",
        help="Write fixed code back to files that changed"
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )
    analyze_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Analyze a GitHub repository")
    scan_parser.add_argument(
        "--repo",
        type=str,
        required=True,
        help="Repository URL or owner/repo"
    )
    scan_parser.add_argument(
        "--max-files",
        type=int,
        help="Maximum files to fetch (default: 20)"
    )
    scan_parser.add_argument(
        "--max-parallel",
        type=int,
        help="Maximum parallel analyses (default: 5)"
    )
    scan_parser.add_argument(
        "--push",
        action="store_true",
        help="Open a pull request with the fixes"
    )
    scan_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List files that would be pushed without pushing"
    )
    scan_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument(
        "--host",
        type=str,
        help="Bind address (default: 0.0.0.0)"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Port (default: 3001)"
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    # Route to subcommand
    if args.command == "analyze":
        cmd_analyze(args)
    elif args.command == "scan":
        cmd_scan(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()

"""Command-line interface implementation for SponsorLink diagnostics."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Sequence

from ..config import ProductConfig, ProductManifestError, ProductManifestLoader
from ..descriptors import DescriptorRegistryError
from ..logging import configure_logging
from ..models import SEVERITY_RANK, DiagnosticSeverity
from ..service import CheckResult, SponsorLinkService
from .github_reporting import iter_annotations


def build_report(result: CheckResult) -> dict[str, Any]:
    """Return the JSON document describing a check run."""

    highest = result.highest_severity
    return {
        "metadata": dict(result.metadata),
        "summary": {
            "total_diagnostics": len(result.diagnostics),
            "highest_severity": highest.value if highest else None,
            "counts": result.counts_by_severity(),
        },
        "diagnostics": [reported.to_dict() for reported in result.diagnostics],
    }


def render_table(result: CheckResult) -> str:
    """Render reported diagnostics as a simple text table for terminal output."""

    if not result.diagnostics:
        return "No diagnostics reported."

    headers = ("Severity", "ID", "Project", "Message")
    rows = [headers]
    for reported in result.diagnostics:
        rows.append(
            (
                reported.diagnostic.severity.value,
                reported.diagnostic.id,
                reported.project_path,
                reported.diagnostic.message,
            )
        )

    widths = [max(len(str(row[idx])) for row in rows) for idx in range(len(headers))]

    def format_row(values: tuple[str, str, str, str]) -> str:
        return "  ".join(value.ljust(width) for value, width in zip(values, widths, strict=True))

    lines = [format_row(headers)]
    lines.append("  ".join("=" * width for width in widths))
    for row in rows[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(prog="sponsorlink", description="SponsorLink diagnostics CLI")
    subparsers = parser.add_subparsers(dest="command")

    check_parser = subparsers.add_parser(
        "check", help="Resolve and report sponsor diagnostics for build projects."
    )
    check_parser.add_argument(
        "projects",
        type=Path,
        nargs="+",
        help="Paths to project files whose obj/SponsorLink state should be checked.",
    )
    check_parser.add_argument(
        "--sponsorable",
        default=None,
        help="Account users are asked to sponsor. Requires --product.",
    )
    check_parser.add_argument(
        "--product",
        default=None,
        help="Product integrating SponsorLink. Requires --sponsorable.",
    )
    check_parser.add_argument(
        "--id-prefix",
        default="",
        help="Prefix prepended to diagnostic ids, e.g. 'DL' reports DLSL03.",
    )
    check_parser.add_argument(
        "--manifest",
        dest="manifests",
        action="append",
        default=None,
        type=str,
        help="Path to a YAML/JSON manifest listing sponsorable products to check.",
    )
    check_parser.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Number of projects to analyze concurrently.",
    )
    check_parser.add_argument(
        "--fail-on",
        choices=[severity.value for severity in DiagnosticSeverity],
        default=DiagnosticSeverity.ERROR.value,
        help="Fail the run when diagnostics at or above the provided severity are reported.",
    )
    check_parser.add_argument(
        "--format",
        choices=["table", "json", "github"],
        default="table",
        help="Output format for reported diagnostics.",
    )
    check_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log skipped override files and reporting decisions.",
    )
    check_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )

    return parser


def create_service(products: Sequence[ProductConfig]) -> SponsorLinkService:
    """Create a service checking the given products with a fresh session."""

    return SponsorLinkService(products)


def _resolve_products(args: argparse.Namespace) -> list[ProductConfig]:
    if bool(args.sponsorable) != bool(args.product):
        raise ValueError("--sponsorable and --product must be provided together")

    products = ProductManifestLoader().enabled_products(args.manifests)
    if args.sponsorable:
        products.append(
            ProductConfig(
                sponsorable=args.sponsorable,
                product=args.product,
                id_prefix=args.id_prefix,
            )
        )

    if not products:
        raise ValueError("No products configured; pass --sponsorable/--product or --manifest")
    return products


def _format_result(
    result: CheckResult,
    *,
    fail_on: DiagnosticSeverity,
    output_format: str,
) -> tuple[str, bool]:
    if output_format not in {"table", "json", "github"}:
        raise ValueError("format must be one of 'table', 'json' or 'github'")

    highest = result.highest_severity
    should_fail = False
    if highest is not None:
        should_fail = SEVERITY_RANK[highest] >= SEVERITY_RANK[fail_on]

    if output_format == "json":
        output = json.dumps(build_report(result), indent=2)
    elif output_format == "github":
        output = "\n".join(iter_annotations(build_report(result)))
    else:
        output = render_table(result)

    return output, should_fail


def _handle_check(args: argparse.Namespace) -> int:
    try:
        configure_logging(verbose=args.verbose, log_file=args.log_file)
    except OSError as exc:
        print(f"Error: cannot open log file {args.log_file}: {exc}")
        return 2

    if args.jobs < 1:
        print("Error: --jobs must be at least 1")
        return 2

    try:
        products = _resolve_products(args)
        service = create_service(products)
    except (ValueError, ProductManifestError, DescriptorRegistryError) as exc:
        print(f"Error: {exc}")
        return 2

    projects = [path.resolve() for path in args.projects]
    result = service.check(projects, jobs=args.jobs)

    output, should_fail = _format_result(
        result,
        fail_on=DiagnosticSeverity(args.fail_on),
        output_format=args.format,
    )

    if output:
        print(output)
    return 1 if should_fail else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        return _handle_check(args)

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()

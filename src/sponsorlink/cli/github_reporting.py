"""Helpers for publishing sponsor diagnostics to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
from pathlib import Path
from typing import Iterable, Mapping, MutableMapping, Sequence

SEVERITY_ORDER = ["error", "warning", "info", "hidden"]
ANNOTATION_LEVELS = {
    "error": "error",
    "warning": "warning",
    "info": "notice",
}


def _normalize_counts(raw_counts: Mapping[str, int] | None) -> MutableMapping[str, int]:
    counts: MutableMapping[str, int] = {severity: 0 for severity in SEVERITY_ORDER}
    for severity, value in (raw_counts or {}).items():
        severity_key = str(severity).lower()
        if severity_key in counts:
            counts[severity_key] = int(value)
    return counts


def _escape(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape(value).replace(":", "%3A").replace(",", "%2C")


def format_summary(report: Mapping[str, object]) -> str:
    """Render a Markdown job summary for the provided report."""

    summary: Mapping[str, object] = report.get("summary") or {}
    diagnostics: Sequence[Mapping[str, object]] = report.get("diagnostics") or []

    total = int(summary.get("total_diagnostics", 0))
    highest = summary.get("highest_severity")
    highest_display = str(highest).title() if highest else "None"
    counts = _normalize_counts(summary.get("counts"))

    lines: list[str] = [
        "# SponsorLink Report",
        "",
        f"**Total diagnostics:** {total}",
        f"**Highest severity:** {highest_display}",
        "",
        "| Severity | Diagnostics |",
        "| --- | ---: |",
    ]
    for severity in SEVERITY_ORDER:
        lines.append(f"| {severity.title()} | {counts[severity]} |")

    if diagnostics:
        lines.extend(["", "## Diagnostics", ""])
        for diagnostic in diagnostics:
            severity = str(diagnostic.get("severity", "info")).lower()
            diagnostic_id = str(diagnostic.get("id", "")).strip()
            message = str(diagnostic.get("message", "")).strip()
            help_link = str(diagnostic.get("help_link") or "").strip()
            project = str(diagnostic.get("project_path", "")).strip()

            bullet = f"- **{severity.title()}**"
            if diagnostic_id:
                bullet += f" [`{diagnostic_id}`]({help_link})" if help_link else f" `{diagnostic_id}`"
            if message:
                bullet += f" – {message}"
            if project:
                bullet += f" _(Project: `{project}`)_"
            lines.append(bullet)

    lines.append("")
    return "\n".join(lines)


def iter_annotations(report: Mapping[str, object]) -> Iterable[str]:
    """Generate GitHub Actions workflow commands for the reported diagnostics.

    Hidden diagnostics have no annotation level and are skipped.
    """

    diagnostics: Sequence[Mapping[str, object]] = report.get("diagnostics") or []
    for diagnostic in diagnostics:
        severity = str(diagnostic.get("severity", "info")).lower()
        level = ANNOTATION_LEVELS.get(severity)
        if level is None:
            continue

        diagnostic_id = str(diagnostic.get("id", "")).strip()
        title = str(diagnostic.get("title", "")).strip()
        message = str(diagnostic.get("message", "")).strip()
        help_link = str(diagnostic.get("help_link") or "").strip()
        project = str(diagnostic.get("project_path", "")).strip()

        body = message or title or "SponsorLink diagnostic reported without message."
        if help_link:
            body += f" ({help_link})"

        attributes: list[str] = []
        if project:
            attributes.append(f"file={_escape_property(project)}")
        heading = " - ".join(part for part in (diagnostic_id, title) if part)
        if heading:
            attributes.append(f"title={_escape_property(heading)}")

        attribute_segment = " " + ",".join(attributes) if attributes else ""
        yield f"::{level}{attribute_segment}::{_escape(body)}"


def _load_report(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse report JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Report JSON must be an object.")
    return data


def _write_summary(report: Mapping[str, object], destination: Path | None) -> None:
    if destination is None:
        return

    content = format_summary(report)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish SponsorLink diagnostics as GitHub job summary and annotations."
    )
    parser.add_argument("report", type=Path, help="Path to the JSON report from `sponsorlink check`.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )

    args = parser.parse_args(argv)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    try:
        report = _load_report(args.report)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2

    _write_summary(report, summary_path)

    for command in iter_annotations(report):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()

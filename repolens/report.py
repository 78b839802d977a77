"""Rendering and compaction helpers for heuristic summaries."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List

from .models import ISSUE_TYPES, SEVERITIES, HeuristicSummary, Issue, severity_rank

DEFAULT_EVIDENCE_ISSUES = 200
DEFAULT_EVIDENCE_DUPLICATES = 20
DEFAULT_SNIPPET_LIMIT = 400


def build_evidence(
    summary: HeuristicSummary,
    *,
    max_issues: int = DEFAULT_EVIDENCE_ISSUES,
    max_duplicates: int = DEFAULT_EVIDENCE_DUPLICATES,
    snippet_limit: int = DEFAULT_SNIPPET_LIMIT,
) -> Dict[str, Any]:
    """Return a bounded payload suitable for embedding in a downstream prompt."""
    issues: List[Dict[str, Any]] = []
    for issue in summary.issues[:max_issues]:
        data = issue.to_dict()
        if "snippet" in data:
            data["snippet"] = data["snippet"][:snippet_limit]
        issues.append(data)

    return {
        "stats": summary.stats.to_dict(),
        "duplicates": [cluster.to_dict() for cluster in summary.duplicate_clusters[:max_duplicates]],
        "issues": issues,
    }


def count_by(summary: HeuristicSummary, attribute: str) -> Dict[str, int]:
    """Count issues by ``type`` or ``severity``, in canonical order, omitting zeros."""
    if attribute == "type":
        order = ISSUE_TYPES
    elif attribute == "severity":
        order = tuple(reversed(SEVERITIES))
    else:
        raise ValueError(f"Cannot group issues by {attribute!r}")
    counts = Counter(getattr(issue, attribute) for issue in summary.issues)
    return {key: counts[key] for key in order if counts[key]}


def exceeds_severity(summary: HeuristicSummary, threshold: str) -> bool:
    """Return True when any issue is at or above ``threshold``."""
    floor = severity_rank(threshold)
    return any(severity_rank(issue.severity) >= floor for issue in summary.issues)


def render_text(summary: HeuristicSummary) -> str:
    """Render a plain-text report grouped by file."""
    stats = summary.stats
    lines = [
        f"Analyzed {stats.files_analyzed} files ({stats.bytes_analyzed} bytes)",
    ]

    severity_counts = count_by(summary, "severity")
    if severity_counts:
        parts = ", ".join(f"{count} {severity}" for severity, count in severity_counts.items())
        lines.append(f"Issues: {len(summary.issues)} ({parts})")
    else:
        lines.append("Issues: none")

    by_file: Dict[str, List[Issue]] = {}
    for issue in summary.issues:
        by_file.setdefault(issue.file, []).append(issue)

    for path, issues in by_file.items():
        lines.append("")
        lines.append(path)
        for issue in issues:
            location = f"{issue.line}" if issue.line is not None else "-"
            lines.append(
                f"  {location:>5}  {issue.severity:<8} {issue.type}/{issue.category}: {issue.message}"
            )

    if summary.duplicate_clusters:
        lines.append("")
        lines.append("Duplicate clusters:")
        for cluster in summary.duplicate_clusters:
            first, second = cluster.files
            lines.append(f"  {cluster.similarity:.2f}  {first} <-> {second}")

    return "\n".join(lines) + "\n"


__all__ = ["build_evidence", "count_by", "exceeds_severity", "render_text"]

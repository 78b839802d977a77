"""Core data models shared across repolens components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

IssueType = Literal["SECURITY", "BUGS", "PERFORMANCE", "DUPLICATION", "COMPLEXITY", "STYLE"]
Severity = Literal["info", "minor", "major", "critical"]

SEVERITIES: Tuple[str, ...] = ("info", "minor", "major", "critical")
ISSUE_TYPES: Tuple[str, ...] = (
    "SECURITY",
    "BUGS",
    "PERFORMANCE",
    "DUPLICATION",
    "COMPLEXITY",
    "STYLE",
)


def severity_rank(severity: str) -> int:
    """Return the ordinal of a severity, lowest (``info``) first."""
    try:
        return SEVERITIES.index(severity)
    except ValueError as exc:
        raise ValueError(f"Unknown severity: {severity}") from exc


@dataclass(frozen=True)
class FileBlob:
    """Decoded source file handed to the engine by its caller."""

    path: str
    content: str
    size: int = 0
    language: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FileBlob":
        size = payload.get("size")
        language = payload.get("language")
        return cls(
            path=str(payload["path"]),
            content=str(payload.get("content") or ""),
            size=size if isinstance(size, int) else 0,
            language=language if isinstance(language, str) else None,
        )


@dataclass(frozen=True)
class Issue:
    """Single finding emitted by a scanner, the complexity check or the duplicate pass."""

    type: IssueType
    category: str
    file: str
    severity: Severity
    message: str
    line: Optional[int] = None
    snippet: Optional[str] = None
    impact: Optional[str] = None
    remediation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "category": self.category,
            "file": self.file,
            "severity": self.severity,
            "message": self.message,
        }
        for key in ("line", "snippet", "impact", "remediation"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class DuplicateCluster:
    """Pair of files judged near-identical by shingle similarity."""

    files: Tuple[str, str]
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {"files": list(self.files), "similarity": self.similarity}


@dataclass(frozen=True)
class AnalysisStats:
    """Running totals for a single analysis run."""

    files_analyzed: int = 0
    bytes_analyzed: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "filesAnalyzed": self.files_analyzed,
            "bytesAnalyzed": self.bytes_analyzed,
        }


@dataclass(frozen=True)
class HeuristicSummary:
    """Combined engine output: issues, duplicate clusters and stats."""

    issues: Tuple[Issue, ...] = ()
    duplicate_clusters: Tuple[DuplicateCluster, ...] = ()
    stats: AnalysisStats = field(default_factory=AnalysisStats)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "duplicateClusters": [cluster.to_dict() for cluster in self.duplicate_clusters],
            "stats": self.stats.to_dict(),
        }


__all__ = [
    "AnalysisStats",
    "DuplicateCluster",
    "FileBlob",
    "HeuristicSummary",
    "ISSUE_TYPES",
    "Issue",
    "IssueType",
    "SEVERITIES",
    "Severity",
    "severity_rank",
]

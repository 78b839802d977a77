"""Cross-file near-duplicate detection over shingle sets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, List, Sequence, Tuple

from ..models import DuplicateCluster, Issue
from .tokens import jaccard

DEFAULT_MAX_PAIRS = 8000
SIMILARITY_THRESHOLD = 0.6


@dataclass
class DuplicateReport:
    """Clusters and companion issues produced by one duplicate pass."""

    clusters: List[DuplicateCluster] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    pairs_compared: int = 0


def detect_duplicates(
    entries: Sequence[Tuple[str, AbstractSet[str]]],
    *,
    max_pairs: int = DEFAULT_MAX_PAIRS,
    threshold: float = SIMILARITY_THRESHOLD,
) -> DuplicateReport:
    """Compare every unordered pair of ``(path, shingles)`` entries in insertion order.

    At most ``max_pairs`` comparisons run; the remaining pairs are skipped.
    """
    report = DuplicateReport()
    budget = max(0, max_pairs)

    for i in range(len(entries)):
        if report.pairs_compared >= budget:
            break
        first_path, first_shingles = entries[i]
        for j in range(i + 1, len(entries)):
            if report.pairs_compared >= budget:
                break
            report.pairs_compared += 1
            second_path, second_shingles = entries[j]
            similarity = jaccard(first_shingles, second_shingles)
            if similarity < threshold:
                continue
            rounded = round(similarity, 2)
            report.clusters.append(
                DuplicateCluster(files=(first_path, second_path), similarity=rounded)
            )
            report.issues.append(
                Issue(
                    type="DUPLICATION",
                    category="code-duplication",
                    file=first_path,
                    severity="minor",
                    message=f"Near-duplicate with {second_path} (Jaccard ≈ {similarity:.2f})",
                    impact="Duplicated code increases maintenance burden",
                    remediation="Extract common code into shared functions or modules",
                )
            )

    return report


__all__ = [
    "DEFAULT_MAX_PAIRS",
    "DuplicateReport",
    "SIMILARITY_THRESHOLD",
    "detect_duplicates",
]

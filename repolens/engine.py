"""Heuristic analysis pipeline: per-file checks followed by the duplicate pass."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .analyzers import Scanner, discover_scanners
from .analyzers.complexity import complexity_issues
from .analyzers.duplicates import DEFAULT_MAX_PAIRS, detect_duplicates
from .analyzers.tokens import DEFAULT_SHINGLE_SIZE, shingles, tokenize
from .logging import get_logger
from .models import AnalysisStats, FileBlob, HeuristicSummary, Issue


class HeuristicEngine:
    """Runs complexity checks, pattern scanners and duplicate detection over a file batch.

    The engine keeps no state between calls, so one instance may serve
    concurrent requests.
    """

    def __init__(
        self,
        scanners: Optional[Iterable[Scanner]] = None,
        *,
        max_pairs: int = DEFAULT_MAX_PAIRS,
        shingle_size: int = DEFAULT_SHINGLE_SIZE,
    ) -> None:
        self.scanners: Tuple[Scanner, ...] = (
            tuple(scanners) if scanners is not None else tuple(discover_scanners())
        )
        self.max_pairs = max_pairs
        self.shingle_size = shingle_size
        self.logger = get_logger("engine")

    def analyze(
        self, files: Sequence[FileBlob], *, max_pairs: Optional[int] = None
    ) -> HeuristicSummary:
        """Analyze ``files`` in order and return the combined summary."""
        budget = self.max_pairs if max_pairs is None else max_pairs
        issues: List[Issue] = []
        shingle_sets: List[Tuple[str, Set[str]]] = []
        files_analyzed = 0
        bytes_analyzed = 0

        for blob in files:
            files_analyzed += 1
            bytes_analyzed += blob.size or len(blob.content.encode("utf-8"))

            tokens = tokenize(blob.content)
            file_issues = complexity_issues(tokens, blob.content, blob.path)
            for scanner in self.scanners:
                file_issues.extend(scanner.scan(blob.content, blob.path))
            self.logger.debug(
                "Analyzed %s: %d tokens, %d issues", blob.path, len(tokens), len(file_issues)
            )
            issues.extend(file_issues)
            shingle_sets.append((blob.path, shingles(tokens, self.shingle_size)))

        duplicates = detect_duplicates(shingle_sets, max_pairs=budget)
        total_pairs = len(shingle_sets) * (len(shingle_sets) - 1) // 2
        if duplicates.pairs_compared < total_pairs:
            self.logger.info(
                "Pair budget %d reached; skipped %d of %d file pairs",
                budget,
                total_pairs - duplicates.pairs_compared,
                total_pairs,
            )
        issues.extend(duplicates.issues)

        self.logger.info(
            "Analyzed %d files (%d bytes): %d issues, %d duplicate clusters",
            files_analyzed,
            bytes_analyzed,
            len(issues),
            len(duplicates.clusters),
        )
        return HeuristicSummary(
            issues=tuple(issues),
            duplicate_clusters=tuple(duplicates.clusters),
            stats=AnalysisStats(files_analyzed=files_analyzed, bytes_analyzed=bytes_analyzed),
        )


def analyze_files(
    files: Sequence[FileBlob],
    *,
    max_pairs: Optional[int] = None,
    scanners: Optional[Iterable[Scanner]] = None,
) -> HeuristicSummary:
    """Analyze a batch with a fresh engine using the built-in scanners by default."""
    engine = HeuristicEngine(scanners)
    return engine.analyze(files, max_pairs=max_pairs)


__all__ = ["HeuristicEngine", "analyze_files"]

"""Performance scanner: string building, nested loops and queries inside loops."""

from __future__ import annotations

import re

from .base import PatternDetector, Scanner


class PerformanceScanner(Scanner):
    """Flags loop-shaped code that tends to scale poorly."""

    def __init__(self) -> None:
        super().__init__(
            "performance",
            [
                PatternDetector(
                    type="PERFORMANCE",
                    category="string-concatenation",
                    severity="minor",
                    message="String concatenation in loop",
                    pattern=(
                        r"\b(?:for|while)\s*\(.*\)\s*\{.*\w+\s*\+=\s*[\"'`]"
                        r"|^\s*(?:for|while)\b[^:]*:\s*\w+\s*\+=\s*[\"']"
                    ),
                    flags=re.IGNORECASE,
                    impact="Poor performance due to string immutability",
                    remediation="Use StringBuilder, StringBuffer, or array join",
                ),
                PatternDetector(
                    type="PERFORMANCE",
                    category="nested-loops",
                    severity="minor",
                    message="Nested loops detected",
                    pattern=(
                        r"\b(?:for|while)\s*\(.*\b(?:for|while)\s*\("
                        r"|\bfor\b.*\bin\b.*\bfor\b.*\bin\b"
                    ),
                    flags=re.IGNORECASE,
                    impact="Potential O(n²) or higher complexity",
                    remediation="Consider algorithmic improvements or caching",
                ),
                PatternDetector(
                    type="PERFORMANCE",
                    category="database-query",
                    severity="major",
                    message="Database query in loop (N+1 problem)",
                    pattern=r"\b(?:for|while)\s*\(.*query|query.*\bfor\s*\(",
                    flags=re.IGNORECASE,
                    impact="Excessive database calls leading to poor performance",
                    remediation="Batch queries or use joins to fetch data in single call",
                ),
            ],
        )


__all__ = ["PerformanceScanner"]

"""Base classes for line-oriented detectors and the scanners that group them."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from re import Pattern
from typing import Iterable, List, Optional, Sequence

from ..models import Issue, IssueType, Severity
from .tokens import normalize_newlines

SNIPPET_LIMIT = 180


def make_snippet(line: str, limit: int = SNIPPET_LIMIT) -> str:
    """Return the stripped line, truncated to ``limit`` characters."""
    return line.strip()[:limit]


class Detector(ABC):
    """Contract for a single check applied to one source line at a time."""

    name: str = "detector"

    @abstractmethod
    def check(self, line: str, line_number: int, path: str) -> Iterable[Issue]:
        """Return the issues found on ``line`` (1-based ``line_number``)."""


class PatternDetector(Detector):
    """Flags lines matching a regex, optionally gated by a second pattern.

    ``require`` must also match for the line to be flagged, and ``exclude``
    suppresses the finding when it matches (for example a null guard on the
    same line).
    """

    def __init__(
        self,
        *,
        type: IssueType,
        category: str,
        severity: Severity,
        message: str,
        pattern: str | Pattern[str],
        impact: str,
        remediation: str,
        flags: int = 0,
        require: str | Pattern[str] | None = None,
        exclude: str | Pattern[str] | None = None,
    ) -> None:
        self.type = type
        self.category = category
        self.name = category
        self.severity = severity
        self.message = message
        self.impact = impact
        self.remediation = remediation
        self.pattern = _compile(pattern, flags)
        self.require = _compile(require, flags) if require is not None else None
        self.exclude = _compile(exclude, flags) if exclude is not None else None

    def matches(self, line: str) -> bool:
        if not self.pattern.search(line):
            return False
        if self.require is not None and not self.require.search(line):
            return False
        if self.exclude is not None and self.exclude.search(line):
            return False
        return True

    def check(self, line: str, line_number: int, path: str) -> Iterable[Issue]:
        if not self.matches(line):
            return []
        return [self.build_issue(line, line_number, path)]

    def build_issue(
        self, line: str, line_number: int, path: str, *, snippet: Optional[str] = None
    ) -> Issue:
        return Issue(
            type=self.type,
            category=self.category,
            file=path,
            line=line_number,
            severity=self.severity,
            message=self.message,
            snippet=make_snippet(line) if snippet is None else snippet,
            impact=self.impact,
            remediation=self.remediation,
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"{type(self).__name__}({self.type}/{self.category})"


class Scanner:
    """Named, ordered group of detectors run over every line of a file."""

    def __init__(self, name: str, detectors: Sequence[Detector]) -> None:
        self.name = name
        self.detectors: List[Detector] = list(detectors)

    def scan(self, content: str, path: str) -> List[Issue]:
        """Run every detector over ``content``; results follow line order, then detector order."""
        issues: List[Issue] = []
        for index, line in enumerate(normalize_newlines(content).split("\n")):
            line_number = index + 1
            for detector in self.detectors:
                issues.extend(detector.check(line, line_number, path))
        return issues

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        names = ", ".join(detector.name for detector in self.detectors)
        return f"Scanner({self.name}: {names})"


def _compile(pattern: str | Pattern[str], flags: int) -> Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, flags)


__all__ = ["Detector", "PatternDetector", "SNIPPET_LIMIT", "Scanner", "make_snippet"]

"""Style scanner: long lines, debt markers and placeholder variable names."""

from __future__ import annotations

from typing import Iterable

from ..models import Issue
from .base import PatternDetector, Scanner

MAX_LINE_LENGTH = 140
LONG_LINE_SNIPPET = 180


class LineLengthDetector(PatternDetector):
    """Flags lines longer than ``MAX_LINE_LENGTH`` characters."""

    def __init__(self, limit: int = MAX_LINE_LENGTH) -> None:
        super().__init__(
            type="STYLE",
            category="line-length",
            severity="minor",
            message=f"Line exceeds {limit} characters",
            pattern=r".",
            impact="Reduced code readability",
            remediation="Break long lines into multiple lines",
        )
        self.limit = limit

    def matches(self, line: str) -> bool:
        return len(line) > self.limit

    def check(self, line: str, line_number: int, path: str) -> Iterable[Issue]:
        if not self.matches(line):
            return []
        # The raw line is kept so indentation shows in the excerpt.
        return [self.build_issue(line, line_number, path, snippet=line[:LONG_LINE_SNIPPET])]


class StyleScanner(Scanner):
    """Flags readability and maintainability smells."""

    def __init__(self) -> None:
        super().__init__(
            "style",
            [
                LineLengthDetector(),
                PatternDetector(
                    type="STYLE",
                    category="technical-debt",
                    severity="info",
                    message="TODO/FIXME comment found",
                    pattern=r"TODO|FIXME",
                    impact="Incomplete or temporary code",
                    remediation="Complete the implementation or create proper tickets",
                ),
                PatternDetector(
                    type="STYLE",
                    category="naming",
                    severity="minor",
                    message="Non-descriptive variable name",
                    pattern=r"(?<![\w.])(?:a|b|c|x|y|z|temp|tmp|foo|bar|baz)\s*=(?![=>])",
                    impact="Reduced code maintainability and readability",
                    remediation="Use descriptive, meaningful variable names",
                ),
            ],
        )


__all__ = ["LineLengthDetector", "MAX_LINE_LENGTH", "StyleScanner"]

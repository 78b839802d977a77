"""McCabe-style complexity and brace-nesting estimators."""

from __future__ import annotations

from typing import FrozenSet, List, Sequence

from ..models import Issue

BRANCH_TOKENS: FrozenSet[str] = frozenset(
    {"if", "else", "for", "while", "case", "catch", "?", "&&", "||", "try", "foreach", "switch"}
)

MAJOR_COMPLEXITY_THRESHOLD = 40
MINOR_COMPLEXITY_THRESHOLD = 20
NESTING_THRESHOLD = 5


def approx_complexity(tokens: Sequence[str]) -> int:
    """Count branch keywords/operators plus one for the baseline path."""
    return sum(1 for token in tokens if token in BRANCH_TOKENS) + 1


def count_max_nesting(content: str) -> int:
    """Return the deepest ``{`` nesting observed.

    Braces inside string literals and comments are counted like any other.
    """
    depth = 0
    max_depth = 0
    for char in content:
        if char == "{":
            depth += 1
            if depth > max_depth:
                max_depth = depth
        elif char == "}":
            depth = max(0, depth - 1)
    return max_depth


def complexity_issues(tokens: Sequence[str], content: str, path: str) -> List[Issue]:
    """Emit file-level COMPLEXITY issues for branchy or deeply nested code."""
    issues: List[Issue] = []

    complexity = approx_complexity(tokens)
    if complexity > MAJOR_COMPLEXITY_THRESHOLD:
        issues.append(
            Issue(
                type="COMPLEXITY",
                category="cyclomatic-complexity",
                file=path,
                severity="major",
                message=(
                    f"High cyclomatic complexity ~{complexity} "
                    f"(threshold {MAJOR_COMPLEXITY_THRESHOLD})"
                ),
                impact="Code is difficult to understand, test, and maintain",
                remediation="Break down into smaller functions, reduce conditional complexity",
            )
        )
    elif complexity > MINOR_COMPLEXITY_THRESHOLD:
        issues.append(
            Issue(
                type="COMPLEXITY",
                category="cyclomatic-complexity",
                file=path,
                severity="minor",
                message=(
                    f"Elevated complexity ~{complexity} "
                    f"(threshold {MINOR_COMPLEXITY_THRESHOLD})"
                ),
                impact="Code complexity is getting high",
                remediation="Consider refactoring to reduce complexity",
            )
        )

    nesting = count_max_nesting(content)
    if nesting > NESTING_THRESHOLD:
        issues.append(
            Issue(
                type="COMPLEXITY",
                category="nesting-depth",
                file=path,
                severity="minor",
                message=f"Deep nesting level {nesting} (>{NESTING_THRESHOLD})",
                impact="Code is hard to read and understand",
                remediation="Use early returns, extract methods, or guard clauses",
            )
        )

    return issues


__all__ = [
    "BRANCH_TOKENS",
    "MAJOR_COMPLEXITY_THRESHOLD",
    "MINOR_COMPLEXITY_THRESHOLD",
    "NESTING_THRESHOLD",
    "approx_complexity",
    "complexity_issues",
    "count_max_nesting",
]

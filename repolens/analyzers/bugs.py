"""Bug-risk scanner: null dereferences, leaks, broad catches and off-by-one indexing."""

from __future__ import annotations

import re

from .base import PatternDetector, Scanner

# A comparison against null/None on the same line counts as a guard.
_NULL_GUARD = (
    r"if\s*\(.*\w+\s*(?:===|!==|==|!=)\s*null"
    r"|\bis\s+(?:not\s+)?None\b"
)


class BugScanner(Scanner):
    """Flags constructs that frequently hide runtime failures."""

    def __init__(self) -> None:
        super().__init__(
            "bugs",
            [
                PatternDetector(
                    type="BUGS",
                    category="null-pointer",
                    severity="major",
                    message="Potential null pointer dereference",
                    pattern=r"\w+\.\w+",
                    require=r"\.length|\.size|\.get\(|\.set\(|\.push\(",
                    exclude=_NULL_GUARD,
                    impact="Runtime errors if object is null/undefined",
                    remediation="Add null checks before accessing object properties",
                ),
                PatternDetector(
                    type="BUGS",
                    category="resource-leak",
                    severity="major",
                    message="Potential resource leak",
                    pattern=(
                        r"\bnew\s+(?:FileInputStream|FileOutputStream|BufferedReader"
                        r"|Connection|Statement)\b"
                    ),
                    flags=re.IGNORECASE,
                    exclude=r"^\s*try\s*\(",
                    impact="System resources may not be properly released",
                    remediation="Use try-with-resources or ensure proper cleanup in finally blocks",
                ),
                PatternDetector(
                    type="BUGS",
                    category="error-handling",
                    severity="major",
                    message="Overly broad or empty exception handling",
                    pattern=(
                        r"catch\s*\(\s*(?:final\s+)?(?:Exception|Throwable|Error)\b\s*\w*\s*[),]"
                        r"|catch\s*(?:\([^)]*\))?\s*\{\s*\}"
                        r"|^\s*except\s*:"
                        r"|^\s*except\s+(?:Base)?Exception\b"
                    ),
                    flags=re.IGNORECASE,
                    impact="Important errors may be silently ignored",
                    remediation="Catch specific exceptions and handle them appropriately",
                ),
                PatternDetector(
                    type="BUGS",
                    category="bounds-error",
                    severity="minor",
                    message="Potential array bounds error",
                    pattern=r"\[\s*\w+\s*-\s*1\s*\]|\[\s*(?:\w+\.)?length\s*\]",
                    impact="Index out of bounds exceptions",
                    remediation="Validate array indices before access",
                ),
            ],
        )


__all__ = ["BugScanner"]

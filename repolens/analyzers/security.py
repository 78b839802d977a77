"""Security scanner: credentials, injection, weak crypto and weak randomness."""

from __future__ import annotations

import re

from .base import PatternDetector, Scanner


class SecurityScanner(Scanner):
    """Flags lines that commonly indicate exploitable weaknesses."""

    def __init__(self) -> None:
        super().__init__(
            "security",
            [
                PatternDetector(
                    type="SECURITY",
                    category="hardcoded-credentials",
                    severity="critical",
                    message="Hardcoded credentials detected",
                    pattern=(
                        r"(?:password|passwd)\s*=\s*[\"'][\w]+[\"']"
                        r"|(?:api|secret)[_-]?key\s*=\s*[\"'][\w\-]+[\"']"
                    ),
                    flags=re.IGNORECASE,
                    impact="Credentials could be exposed in version control",
                    remediation="Use environment variables or secure configuration",
                ),
                PatternDetector(
                    type="SECURITY",
                    category="sql-injection",
                    severity="critical",
                    message="Potential SQL injection vulnerability",
                    pattern=(
                        r"SELECT .* FROM .* \+ "
                        r"|\"SELECT .*\" \+"
                        r"|query\s*=\s*[\"'].* \+ "
                    ),
                    flags=re.IGNORECASE,
                    impact="Could allow unauthorized database access",
                    remediation="Use parameterized queries or prepared statements",
                ),
                PatternDetector(
                    type="SECURITY",
                    category="code-injection",
                    severity="critical",
                    message="Potential code injection vulnerability",
                    pattern=(
                        r"\bexec\s*\(|\bsystem\s*\(|\beval\s*\("
                        r"|setTimeout\s*\(\s*[\"'`]|setTimeout\s*\(.*function"
                    ),
                    flags=re.IGNORECASE,
                    impact="Could allow arbitrary code execution",
                    remediation="Validate and sanitize all inputs, avoid dynamic code execution",
                ),
                PatternDetector(
                    type="SECURITY",
                    category="weak-cryptography",
                    severity="major",
                    message="Weak cryptographic algorithm detected",
                    pattern=r"MD5|MD4|SHA-?1|RC4|\bDES\b",
                    flags=re.IGNORECASE,
                    impact="Cryptographic operations may be easily broken",
                    remediation="Use SHA-256, SHA-3, AES, or other modern algorithms",
                ),
                PatternDetector(
                    type="SECURITY",
                    category="weak-randomness",
                    severity="minor",
                    message="Weak random number generation",
                    pattern=r"Math\.random\(\)|\bRandom\(\)|\bnew Random\(",
                    flags=re.IGNORECASE,
                    impact="Predictable random values for security-sensitive operations",
                    remediation="Use cryptographically secure random number generators",
                ),
            ],
        )


__all__ = ["SecurityScanner"]

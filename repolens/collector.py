"""Local directory walking that turns a checkout into a batch of FileBlobs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import CollectorConfig
from .logging import get_logger
from .models import FileBlob

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".next",
    "dist",
    "build",
    "coverage",
}

_LANGUAGE_BY_SUFFIX = {
    ".py": "Python",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".java": "Java",
    ".kt": "Kotlin",
    ".kts": "Kotlin",
    ".go": "Go",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".cc": "C++",
    ".hpp": "C++",
    ".swift": "Swift",
    ".scala": "Scala",
}


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style pattern; ``negate`` re-includes what it matches."""

    pattern: str
    directory_only: bool = False
    anchored: bool = False
    negate: bool = False

    @classmethod
    def parse(cls, line: str) -> IgnoreRule | None:
        """Parse a ``.gitignore`` line or exclude pattern; blanks and comments yield None."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = text.startswith("!")
        if negate:
            text = text[1:]
        directory_only = text.endswith("/")
        text = text.rstrip("/")
        # A slash anywhere but the end ties the pattern to the repository root.
        anchored = "/" in text
        text = text.lstrip("/")
        if not text:
            return None
        return cls(text, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return fnmatchcase(rel_path.rsplit("/", 1)[-1], self.pattern)


class PathFilter:
    """Ordered ignore rules where the last matching rule decides."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self.rules: List[IgnoreRule] = list(rules)

    @classmethod
    def for_root(cls, root: Path, exclude_paths: Sequence[str]) -> PathFilter:
        """Combine the root ``.gitignore`` with configured exclude patterns."""
        lines: List[str] = []
        gitignore = root / ".gitignore"
        if gitignore.is_file():
            lines.extend(gitignore.read_text(encoding="utf-8", errors="replace").splitlines())
        lines.extend(exclude_paths)
        return cls(rule for rule in map(IgnoreRule.parse, lines) if rule is not None)

    def excludes(self, rel_path: str, is_dir: bool) -> bool:
        excluded = False
        for rule in self.rules:
            if rule.matches(rel_path, is_dir):
                excluded = not rule.negate
        return excluded


def _iter_files(root: Path, path_filter: PathFilter) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if path_filter.excludes(rel_path, True):
                continue
            kept_dirs.append(name)
        # Sorting in place keeps the walk, and therefore pair order, deterministic.
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if path_filter.excludes(rel_path, False):
                continue
            yield current_dir / filename


def detect_language(path: Path) -> str | None:
    return _LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


def _decode(data: bytes) -> str | None:
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


class FileCollector:
    """Reads source files under a directory into an in-memory batch.

    Only files with an allowed extension are read. A file is skipped when it
    is larger than the per-file cap or the remaining byte budget, and
    collection stops once the budget or the file limit is used up.
    """

    def __init__(self, config: CollectorConfig | None = None) -> None:
        self.config = config or CollectorConfig()
        self.logger = get_logger("collector")

    def collect(self, root: str | Path) -> List[FileBlob]:
        """Return the FileBlobs for ``root`` in sorted walk order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Repository path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {root}")

        config = self.config
        path_filter = PathFilter.for_root(root_path, config.exclude_paths)
        allowed = {f".{ext.lower().lstrip('.')}" for ext in config.include_extensions}

        files: List[FileBlob] = []
        budget = config.max_total_bytes
        for path in _iter_files(root_path, path_filter):
            if budget <= 0:
                self.logger.debug("Byte budget exhausted; stopping collection")
                break
            if config.max_files is not None and len(files) >= config.max_files:
                self.logger.debug("File limit %d reached; stopping collection", config.max_files)
                break
            if path.suffix.lower() not in allowed:
                continue

            rel_path = path.relative_to(root_path).as_posix()
            try:
                size = path.stat().st_size
                if size > min(budget, config.max_file_bytes):
                    self.logger.debug("Skipping %s (%d bytes over limit)", rel_path, size)
                    continue
                raw = path.read_bytes()
            except OSError as exc:
                self.logger.debug("Skipping %s (unreadable: %s)", rel_path, exc)
                continue

            content = _decode(raw)
            if content is None:
                self.logger.debug("Skipping %s (binary or not UTF-8)", rel_path)
                continue

            files.append(
                FileBlob(
                    path=rel_path,
                    content=content,
                    size=size,
                    language=detect_language(path),
                )
            )
            budget -= size

        self.logger.debug("Collected %d files from %s", len(files), root_path)
        return files


__all__ = ["FileCollector", "IgnoreRule", "PathFilter", "detect_language"]

"""Tests for repolens.collector."""

from __future__ import annotations

from pathlib import Path

import pytest

from repolens.collector import FileCollector, IgnoreRule, PathFilter
from repolens.config import CollectorConfig


def _write(path: Path, content: str | bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def test_collect_reads_source_files_with_language(repo_builder) -> None:
    repo_builder.write(
        {
            "src/app.py": "print('hi')\n",
            "web/index.ts": "export const x = 1;\n",
            "docs/overview.md": "# Overview\n",
            ".venv/lib/site.py": "print('nope')\n",
            "node_modules/pkg/index.js": "module.exports = {};\n",
        }
    )

    files = repo_builder.collect()
    by_path = {blob.path: blob for blob in files}

    assert set(by_path) == {"src/app.py", "web/index.ts"}
    assert by_path["src/app.py"].language == "Python"
    assert by_path["web/index.ts"].language == "TypeScript"
    assert by_path["src/app.py"].content == "print('hi')\n"
    assert by_path["src/app.py"].size == len("print('hi')\n")


def test_collect_walks_in_sorted_order(repo_builder) -> None:
    repo_builder.write({"b.py": "b\n", "a.py": "a\n", "pkg/z.py": "z\n", "pkg/m.py": "m\n"})

    paths = [blob.path for blob in repo_builder.collect()]

    assert paths == ["a.py", "b.py", "pkg/m.py", "pkg/z.py"]


def test_collect_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        FileCollector().collect(missing)
    assert str(missing) in str(excinfo.value)


def test_collect_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "single.py"
    _write(target, "x\n")
    with pytest.raises(NotADirectoryError):
        FileCollector().collect(target)


def test_collect_respects_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / ".gitignore", "generated/\n*_pb2.py\n!keep_pb2.py\n")
    _write(repo_root / "src" / "main.py", "print('ok')\n")
    _write(repo_root / "generated" / "client.py", "print('gen')\n")
    _write(repo_root / "proto" / "api_pb2.py", "print('gen')\n")
    _write(repo_root / "proto" / "keep_pb2.py", "print('keep')\n")

    paths = {blob.path for blob in FileCollector().collect(repo_root)}

    assert paths == {"src/main.py", "proto/keep_pb2.py"}


def test_collect_respects_configured_excludes_and_extensions(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "src" / "main.go", "package main\n")
    _write(repo_root / "src" / "util.py", "pass\n")
    _write(repo_root / "vendor" / "lib.go", "package lib\n")

    config = CollectorConfig(include_extensions=["go"], exclude_paths=["vendor/"])
    paths = [blob.path for blob in FileCollector(config).collect(repo_root)]

    assert paths == ["src/main.go"]


def test_collect_skips_files_over_per_file_cap(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "big.py", "#" * 300)
    _write(repo_root / "small.py", "#" * 50)

    config = CollectorConfig(max_file_bytes=200)
    paths = [blob.path for blob in FileCollector(config).collect(repo_root)]

    assert paths == ["small.py"]


def test_collect_stops_spending_total_budget(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    for name in ("a.py", "b.py", "c.py"):
        _write(repo_root / name, "#" * 100)

    config = CollectorConfig(max_file_bytes=200, max_total_bytes=250)
    paths = [blob.path for blob in FileCollector(config).collect(repo_root)]

    assert paths == ["a.py", "b.py"]


def test_collect_honours_file_limit(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    for name in ("a.py", "b.py", "c.py"):
        _write(repo_root / name, "pass\n")

    paths = [blob.path for blob in FileCollector(CollectorConfig(max_files=2)).collect(repo_root)]

    assert paths == ["a.py", "b.py"]


def test_collect_skips_binary_and_undecodable_files(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "ok.py", "pass\n")
    _write(repo_root / "nul.py", b"abc\x00def")
    _write(repo_root / "latin.py", "caf\xe9".encode("latin-1"))

    paths = [blob.path for blob in FileCollector().collect(repo_root)]

    assert paths == ["ok.py"]


def test_collect_skips_dangling_symlinks(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "a.py", "pass\n")
    try:
        (repo_root / "b.py").symlink_to(repo_root / "missing.py")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported on this platform")

    paths = [blob.path for blob in FileCollector().collect(repo_root)]

    assert paths == ["a.py"]


def test_collect_skips_unreadable_files(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "a.py", "pass\n")
    _write(repo_root / "locked.py", "secret\n")
    original_read_bytes = Path.read_bytes

    def _read_bytes(self: Path) -> bytes:
        if self.name == "locked.py":
            raise PermissionError(13, "Permission denied", str(self))
        return original_read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", _read_bytes)

    paths = [blob.path for blob in FileCollector().collect(repo_root)]

    assert paths == ["a.py"]


def test_ignore_rule_anchoring() -> None:
    anchored = IgnoreRule.parse("/build")
    assert anchored is not None
    assert anchored.matches("build", True)
    assert not anchored.matches("src/build", True)

    floating = IgnoreRule.parse("*.min.js")
    assert floating is not None
    assert floating.matches("static/app.min.js", False)
    assert IgnoreRule.parse("   ") is None
    assert IgnoreRule.parse("# comment") is None


def test_ignore_rule_directory_only_skips_files() -> None:
    rule = IgnoreRule.parse("logs/")
    assert rule is not None
    assert rule.matches("app/logs", True)
    assert not rule.matches("app/logs", False)


def test_path_filter_last_matching_rule_wins() -> None:
    rules = [IgnoreRule.parse(line) for line in ("*.py", "!keep.py")]
    path_filter = PathFilter(rule for rule in rules if rule is not None)

    assert path_filter.excludes("pkg/drop.py", False)
    assert not path_filter.excludes("pkg/keep.py", False)
    assert not path_filter.excludes("pkg/notes.md", False)

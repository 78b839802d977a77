"""Tests for cross-file duplicate detection."""

from __future__ import annotations

from repolens.analyzers.duplicates import detect_duplicates
from repolens.analyzers.tokens import shingles, tokenize


def _body(prefix: str = "tok", count: int = 200) -> str:
    return " ".join(f"{prefix}{index}" for index in range(count))


def _entry(path: str, content: str) -> tuple[str, set[str]]:
    return path, shingles(tokenize(content))


def test_identical_files_form_one_cluster() -> None:
    entries = [_entry("a.py", _body()), _entry("b.py", _body())]

    report = detect_duplicates(entries)

    assert report.pairs_compared == 1
    assert len(report.clusters) == 1
    cluster = report.clusters[0]
    assert cluster.files == ("a.py", "b.py")
    assert cluster.similarity == 1.0

    assert len(report.issues) == 1
    issue = report.issues[0]
    assert issue.type == "DUPLICATION"
    assert issue.category == "code-duplication"
    assert issue.file == "a.py"
    assert issue.severity == "minor"
    assert "b.py" in issue.message
    assert "1.00" in issue.message


def test_unrelated_files_are_not_clustered() -> None:
    entries = [_entry("a.py", _body("alpha")), _entry("b.py", _body("beta"))]
    report = detect_duplicates(entries)
    assert report.clusters == []
    assert report.issues == []


def test_short_files_never_match() -> None:
    entries = [_entry("a.py", "x y z"), _entry("b.py", "x y z")]
    assert detect_duplicates(entries).clusters == []


def test_similarity_is_rounded_to_two_decimals() -> None:
    shared = {f"s{index}" for index in range(7)}
    entries = [("a.py", shared | {"only-a"}), ("b.py", shared | {"only-b", "extra-b"})]

    report = detect_duplicates(entries)

    # 7 shared of 10 total
    assert report.clusters[0].similarity == 0.7


def test_pair_budget_stops_comparisons_without_error() -> None:
    entries = [_entry(f"f{index}.py", _body()) for index in range(6)]

    report = detect_duplicates(entries, max_pairs=10)

    assert report.pairs_compared == 10
    assert len(report.clusters) == 10
    assert report.clusters[-1].files == ("f2.py", "f3.py")


def test_zero_budget_compares_nothing() -> None:
    entries = [_entry("a.py", _body()), _entry("b.py", _body())]
    report = detect_duplicates(entries, max_pairs=0)
    assert report.pairs_compared == 0
    assert report.clusters == []


def test_pairs_follow_insertion_order() -> None:
    entries = [_entry(name, _body()) for name in ("z.py", "a.py", "m.py")]
    report = detect_duplicates(entries)
    assert [cluster.files for cluster in report.clusters] == [
        ("z.py", "a.py"),
        ("z.py", "m.py"),
        ("a.py", "m.py"),
    ]

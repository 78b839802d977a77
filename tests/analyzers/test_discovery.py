"""Tests for scanner discovery utilities."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from repolens.analyzers import Scanner, discover_scanners
from repolens.analyzers.security import SecurityScanner
from repolens.analyzers.style import StyleScanner


class DummyScanner(Scanner):
    """Test scanner used for plugin discovery validation."""

    def __init__(self) -> None:
        super().__init__("dummy", [])


class DummyEntryPoints(list):
    def select(self, **kwargs):
        if kwargs.get("group") == "repolens.scanners":
            return self
        return []


def _install_entry_points(monkeypatch, *entries) -> None:
    monkeypatch.setattr(
        "repolens.analyzers.metadata.entry_points",
        lambda: DummyEntryPoints(entries),
        raising=False,
    )


def test_discover_scanners_returns_builtins_in_order() -> None:
    scanners = discover_scanners()
    assert [scanner.name for scanner in scanners][:4] == ["security", "bugs", "performance", "style"]


def test_discover_scanners_respects_enabled_filter() -> None:
    scanners = discover_scanners(["Style", "security"])
    assert [type(scanner) for scanner in scanners] == [SecurityScanner, StyleScanner]


def test_discover_scanners_with_empty_filter_returns_nothing() -> None:
    assert discover_scanners([]) == []


def test_discover_scanners_loads_entry_points(monkeypatch) -> None:
    _install_entry_points(monkeypatch, SimpleNamespace(name="dummy", load=lambda: DummyScanner))

    scanners = discover_scanners(["dummy"])
    assert len(scanners) == 1
    assert isinstance(scanners[0], DummyScanner)


def test_discover_scanners_rejects_non_scanner_plugins(monkeypatch) -> None:
    _install_entry_points(monkeypatch, SimpleNamespace(name="broken", load=lambda: object))

    with pytest.raises(TypeError):
        discover_scanners(["broken"])


def test_discover_scanners_wraps_plugin_import_errors(monkeypatch) -> None:
    def _fail():
        raise ImportError("missing dependency")

    _install_entry_points(monkeypatch, SimpleNamespace(name="fragile", load=_fail))

    with pytest.raises(RuntimeError, match="fragile"):
        discover_scanners()


def test_discover_scanners_raises_for_unknown_name() -> None:
    with pytest.raises(ValueError):
        discover_scanners(["does-not-exist"])


def test_discover_scanners_skips_unselected_plugins(monkeypatch) -> None:
    def _fail():
        raise ImportError("missing dependency")

    _install_entry_points(monkeypatch, SimpleNamespace(name="fragile", load=_fail))

    scanners = discover_scanners(["security"])
    assert [type(scanner) for scanner in scanners] == [SecurityScanner]


def test_builtin_names_take_precedence_over_plugins(monkeypatch) -> None:
    _install_entry_points(monkeypatch, SimpleNamespace(name="Style", load=lambda: DummyScanner))

    scanners = discover_scanners(["style"])
    assert [type(scanner) for scanner in scanners] == [StyleScanner]


def test_discover_scanners_accepts_scanner_instances(monkeypatch) -> None:
    plugin = DummyScanner()
    _install_entry_points(monkeypatch, SimpleNamespace(name="dummy", load=lambda: plugin))

    scanners = discover_scanners()
    assert scanners[-1] is plugin
    assert len(scanners) == 5

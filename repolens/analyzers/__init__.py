"""Scanner implementations and plugin discovery utilities."""

from __future__ import annotations

from functools import partial
from importlib import metadata
from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Tuple

from .base import Detector, PatternDetector, Scanner
from .bugs import BugScanner
from .performance import PerformanceScanner
from .security import SecurityScanner
from .style import StyleScanner

_ENTRY_POINT_GROUP = "repolens.scanners"

_BUILTIN_FACTORIES: dict[str, Callable[[], Scanner]] = {
    "security": SecurityScanner,
    "bugs": BugScanner,
    "performance": PerformanceScanner,
    "style": StyleScanner,
}

BUILTIN_SCANNERS: tuple[str, ...] = tuple(_BUILTIN_FACTORIES)


def discover_scanners(enabled: Sequence[str] | None = None) -> List[Scanner]:
    """Return instantiated scanners in registry order.

    Built-ins come first, then ``repolens.scanners`` entry points; a plugin
    reusing a built-in name is ignored. With ``enabled`` only the named
    scanners are built, and an unknown name raises ``ValueError``. Plugins
    are imported only when selected.
    """
    registry: Dict[str, Callable[[], Scanner]] = {}
    for name, factory in _registered_factories():
        registry.setdefault(name.lower(), factory)

    if enabled is None:
        selected = list(registry)
    else:
        wanted = {name.lower() for name in enabled}
        unknown = sorted(wanted.difference(registry))
        if unknown:
            raise ValueError(f"Unknown scanners requested: {', '.join(unknown)}")
        selected = [name for name in registry if name in wanted]

    return [registry[name]() for name in selected]


def _registered_factories() -> Iterator[Tuple[str, Callable[[], Scanner]]]:
    yield from _BUILTIN_FACTORIES.items()
    for entry in _iter_entry_points():
        yield entry.name, partial(_load_plugin, entry)


def _load_plugin(entry: metadata.EntryPoint) -> Scanner:
    try:
        loaded = entry.load()
    except Exception as exc:
        raise RuntimeError(f"Failed to load scanner entry point '{entry.name}': {exc}") from exc

    scanner = loaded() if callable(loaded) and not isinstance(loaded, Scanner) else loaded
    if not isinstance(scanner, Scanner):
        raise TypeError(f"Scanner entry point '{entry.name}' must provide a Scanner or a factory for one")
    return scanner


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BUILTIN_SCANNERS",
    "BugScanner",
    "Detector",
    "PatternDetector",
    "PerformanceScanner",
    "Scanner",
    "SecurityScanner",
    "StyleScanner",
    "discover_scanners",
]

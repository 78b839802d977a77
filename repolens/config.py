"""Configuration loading for repolens (.repolens.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analyzers.duplicates import DEFAULT_MAX_PAIRS

CONFIG_FILENAME = ".repolens.yml"

DEFAULT_INCLUDE_EXTENSIONS: tuple[str, ...] = (
    "ts",
    "tsx",
    "js",
    "jsx",
    "java",
    "kt",
    "kts",
    "py",
    "go",
    "rb",
    "php",
    "cs",
    "cpp",
    "cc",
    "c",
    "scala",
    "rs",
    "swift",
)
DEFAULT_MAX_FILE_BYTES = 200_000
DEFAULT_MAX_TOTAL_BYTES = 800_000


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnalysisConfig:
    """Engine settings: duplicate-pair budget and enabled scanners."""

    max_pairs: int = DEFAULT_MAX_PAIRS
    scanners: Optional[List[str]] = None


@dataclass
class CollectorConfig:
    """Which files are read from disk and how many bytes may be analyzed."""

    include_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES
    max_files: Optional[int] = None


@dataclass
class ServiceConfig:
    """Bind address for ``repolens serve``."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class RepoLensConfig:
    """Represents the settings defined in .repolens.yml."""

    root: Path
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    collect: CollectorConfig = field(default_factory=CollectorConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)


def load_config(config_path: Path) -> RepoLensConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RepoLensConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        max_pairs = _as_int(analysis_data.get("max_pairs"))
        if max_pairs is not None:
            if max_pairs < 0:
                raise ConfigError("analysis.max_pairs must not be negative")
            analysis.max_pairs = max_pairs
        if "scanners" in analysis_data:
            analysis.scanners = _as_str_list(analysis_data.get("scanners"))

    collect = CollectorConfig()
    collect_data = _as_dict(data.get("collect"))
    if collect_data:
        if "include_extensions" in collect_data:
            collect.include_extensions = [
                ext.lower().lstrip(".")
                for ext in _as_str_list(collect_data.get("include_extensions"))
            ]
        collect.exclude_paths = _as_str_list(collect_data.get("exclude_paths"))
        collect.max_file_bytes = _positive_int(
            collect_data.get("max_file_bytes"), "collect.max_file_bytes", collect.max_file_bytes
        )
        collect.max_total_bytes = _positive_int(
            collect_data.get("max_total_bytes"), "collect.max_total_bytes", collect.max_total_bytes
        )
        max_files = collect_data.get("max_files")
        if max_files is not None:
            collect.max_files = _positive_int(max_files, "collect.max_files", 0)

    service = ServiceConfig()
    service_data = _as_dict(data.get("service"))
    if service_data:
        service.host = _as_str(service_data.get("host")) or service.host
        service.port = _positive_int(service_data.get("port"), "service.port", service.port)

    return RepoLensConfig(root=root, analysis=analysis, collect=collect, service=service)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _positive_int(value: Any, key: str, default: int) -> int:
    if value is None:
        return default
    parsed = _as_int(value)
    if parsed is None or parsed <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return parsed


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "CollectorConfig",
    "ConfigError",
    "RepoLensConfig",
    "ServiceConfig",
    "load_config",
]

"""Heuristic static analysis for source repositories."""

from .engine import HeuristicEngine, analyze_files
from .models import AnalysisStats, DuplicateCluster, FileBlob, HeuristicSummary, Issue

__version__ = "0.1.0"

__all__ = [
    "AnalysisStats",
    "DuplicateCluster",
    "FileBlob",
    "HeuristicEngine",
    "HeuristicSummary",
    "Issue",
    "analyze_files",
]

"""Business logic services for the Audio Evaluation Results Viewer."""

from .data_manager import DataManager, ResultsParseError, normalize_results, parse_results_text
from .path_resolver import PathResolver
from .filter_engine import FilterEngine, PageView
from .aggregator import SummaryStats, compute_stats
from .render_engine import RenderEngine
from .export_manager import ExportManager

__all__ = [
    "DataManager",
    "ResultsParseError",
    "normalize_results",
    "parse_results_text",
    "PathResolver",
    "FilterEngine",
    "PageView",
    "SummaryStats",
    "compute_stats",
    "RenderEngine",
    "ExportManager",
]

"""Data models for the Audio Evaluation Results Viewer."""

from .sample import Sample
from .metrics_summary import MetricsSummary
from .application_state import ApplicationState, ViewState

__all__ = ["Sample", "MetricsSummary", "ApplicationState", "ViewState"]

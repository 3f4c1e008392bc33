"""
Application state model for the Audio Evaluation Results Viewer.

Holds the canonical samples of the currently loaded file together with the
view settings (filters, pagination, audio URL resolution) of one session.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import config
from .metrics_summary import MetricsSummary
from .sample import Sample


@dataclass
class ViewState:
    """
    User-adjustable view settings.
    
    Attributes:
        only_wrong: Show only samples graded incorrect
        query: Free-text search query
        page: Current page number (1-based)
        page_size: Number of samples per page
        url_mode: Audio URL strategy ("basename" or "replace")
        base_url: Base URL used in basename mode
        replace_from: Substring replaced in replace mode
        replace_to: Replacement used in replace mode
    """
    
    only_wrong: bool = False
    query: str = ""
    page: int = 1
    page_size: int = config.DEFAULT_PAGE_SIZE
    url_mode: str = config.DEFAULT_URL_MODE
    base_url: str = field(default_factory=config.infer_base_url)
    replace_from: str = config.DEFAULT_REPLACE_FROM
    replace_to: str = field(default_factory=config.infer_base_url)
    
    def reset_filters(self):
        """Clear search and only-wrong filter and return to the first page."""
        self.only_wrong = False
        self.query = ""
        self.page = 1


@dataclass
class ApplicationState:
    """
    Per-session state container.
    
    Attributes:
        samples: Canonical samples of the loaded file
        metrics: Metrics summary reported by the loaded file
        view: Current view settings
        source_name: Name of the loaded file or URL
        load_error: Error message of a failed auto-load, if any
    """
    
    samples: List[Sample] = field(default_factory=list)
    metrics: MetricsSummary = field(default_factory=MetricsSummary)
    view: ViewState = field(default_factory=ViewState)
    source_name: str = ""
    load_error: Optional[str] = None
    
    def has_samples(self) -> bool:
        return bool(self.samples)
    
    def get_wrong_count(self) -> int:
        """Count samples graded incorrect."""
        return sum(1 for sample in self.samples if not sample.correct)
    
    def get_total_loaded(self) -> int:
        """Get total number of loaded samples."""
        return len(self.samples)

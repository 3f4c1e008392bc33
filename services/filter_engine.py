"""
FilterEngine for search, only-wrong filtering and pagination.

Every view is derived from the canonical sample list; nothing here mutates it.
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence

from models import Sample, ViewState
from utils.performance import monitor_performance
from utils.text_cleaning import strip_thinking


@dataclass
class PageView:
    """
    One page of the filtered sample list.

    Attributes:
        rows: Samples visible on the page
        page: Page number actually shown (1-based)
        total_pages: Number of pages, at least 1
        filtered_count: Number of samples passing the filters
        start: Index of the first visible sample within the filtered list
        end: Index one past the last visible sample
    """

    rows: List[Sample] = field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    filtered_count: int = 0
    start: int = 0
    end: int = 0


def matches_query(sample: Sample, query: str) -> bool:
    """
    Case-insensitive substring match of a lowercased query.

    The prompt is matched as recorded; prediction and label are matched after
    their reasoning spans are stripped.
    """
    prompt = sample.prompt if isinstance(sample.prompt, str) else ""
    return (
        query in prompt.lower()
        or query in strip_thinking(sample.prediction).lower()
        or query in strip_thinking(sample.label).lower()
    )


@monitor_performance("filter_samples")
def filter_samples(samples: Sequence[Sample], only_wrong: bool = False, query: str = "") -> List[Sample]:
    """
    Filter samples, preserving their original relative order.

    Args:
        samples: Canonical samples
        only_wrong: Keep only samples graded incorrect
        query: Search text; blank means no search

    Returns:
        New list of the samples that pass both filters
    """
    result = list(samples)
    if only_wrong:
        result = [s for s in result if not s.correct]

    needle = (query or "").strip().lower()
    if needle:
        result = [s for s in result if matches_query(s, needle)]

    return result


def total_pages(count: int, page_size: int) -> int:
    """Number of pages needed for ``count`` items, never less than 1."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    """Keep a page number within ``[1, pages]``."""
    return min(max(1, page), max(1, pages))


def paginate(items: Sequence, page: int, page_size: int) -> list:
    """
    Slice out one page.

    Args:
        items: Filtered items
        page: 1-based page number
        page_size: Items per page (>= 1)

    Returns:
        Items ``[(page-1)*page_size, min(len, page*page_size))``
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    start = max(0, (page - 1) * page_size)
    end = min(len(items), start + page_size)
    return list(items[start:end])


class FilterEngine:
    """Builds the visible page for a given view state."""

    def build_view(self, samples: Sequence[Sample], view: ViewState) -> PageView:
        """
        Apply filters and pagination from the view state.

        Args:
            samples: Canonical samples
            view: Current view settings

        Returns:
            PageView for ``view.page``
        """
        filtered = filter_samples(samples, view.only_wrong, view.query)
        pages = total_pages(len(filtered), view.page_size)
        start = max(0, (view.page - 1) * view.page_size)
        rows = paginate(filtered, view.page, view.page_size)

        return PageView(
            rows=rows,
            page=view.page,
            total_pages=pages,
            filtered_count=len(filtered),
            start=start,
            end=start + len(rows)
        )

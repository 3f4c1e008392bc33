"""
Aggregator for overall accuracy.

Statistics are always computed over the full, unfiltered sample list.
"""

from dataclasses import dataclass
from typing import Sequence

from models import Sample


@dataclass
class SummaryStats:
    """
    Overall result counts.

    Attributes:
        count: Number of samples
        correct_count: Number of samples graded correct
        accuracy: correct_count / count, or 0.0 when there are no samples
    """

    count: int = 0
    correct_count: int = 0
    accuracy: float = 0.0


def compute_stats(samples: Sequence[Sample]) -> SummaryStats:
    """Count samples and correct samples and derive the accuracy."""
    count = len(samples)
    correct_count = sum(1 for s in samples if s.correct)
    accuracy = correct_count / count if count else 0.0
    return SummaryStats(count=count, correct_count=correct_count, accuracy=accuracy)


def format_accuracy(accuracy: float) -> str:
    """Format an accuracy ratio as a percentage, e.g. 0.5 -> '50.00%'."""
    return f"{accuracy * 100:.2f}%"

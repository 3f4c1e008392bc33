"""
Metrics summary model.

Holds the aggregate fields a wrapped results file reports next to its
``results`` list.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class MetricsSummary:
    """
    File-level metrics as reported by the evaluation run.
    
    Attributes:
        metric: Metric label (e.g. "accuracy")
        accuracy_by_sample: Precomputed accuracy over samples
        avg_accuracy_by_category: Mean of the per-category accuracies
        categories_accuracy: Mapping of category name to accuracy
        config: Opaque run configuration, displayed but not interpreted
    """
    
    metric: str = ""
    accuracy_by_sample: Optional[Any] = None
    avg_accuracy_by_category: Optional[Any] = None
    categories_accuracy: Optional[Dict[str, Any]] = None
    config: Optional[Any] = None
    
    def get_model_name(self) -> Optional[Any]:
        """Return ``config.model`` when the config is a mapping that has one."""
        if isinstance(self.config, dict):
            return self.config.get("model")
        return None

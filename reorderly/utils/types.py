"""
Type definitions for Reorderly.

Provides the product record and type aliases shared by the pipeline.
"""

from dataclasses import dataclass
from typing import TypedDict, Union, Optional, List
from pathlib import Path


# ==============================================================================
# Path Types
# ==============================================================================

PathLike = Union[str, Path]


# ==============================================================================
# Data Types
# ==============================================================================

@dataclass(frozen=True)
class Product:
    """One synthetic product.

    ``reorder`` is the label of the business rule and never changes after
    generation. ``prediction_score`` and ``prediction`` stay ``None`` until
    a training cycle has scored the product.
    """
    id: int
    name: str
    current_inventory: int
    avg_sales_per_week: int
    days_to_replenish: int
    reorder: int
    prediction_score: Optional[float] = None
    prediction: Optional[int] = None

    @property
    def is_scored(self) -> bool:
        return self.prediction_score is not None

    @property
    def prediction_text(self) -> Optional[str]:
        if self.prediction is None:
            return None
        return "Reorder" if self.prediction else "No Reorder"


class ProductRow(TypedDict):
    """Product row as exported to CSV."""
    id: int
    name: str
    currentInventory: int
    avgSalesPerWeek: int
    daysToReplenish: int
    serverReorder: int
    prediction: Optional[int]
    predictionScore: Optional[float]


class DashboardStats(TypedDict):
    """Counters shown above the products table."""
    total: int
    server_reorders: int
    model_reorders: int
    model_accuracy: str


# ==============================================================================
# Model Types
# ==============================================================================

class ReorderNetConfig(TypedDict, total=False):
    """Reorder classifier configuration."""
    hidden_units: List[int]
    learning_rate: float
    epochs: int
    batch_size: int
    train_fraction: float
    decision_threshold: float
    random_state: Optional[int]


__all__ = [
    'PathLike',
    'Product',
    'ProductRow',
    'DashboardStats',
    'ReorderNetConfig',
]

# reorderly/models/evaluate.py
from typing import Optional
import numpy as np

from reorderly.utils.helpers import format_accuracy, safe_divide
from reorderly.utils.types import DashboardStats, Product


def accuracy(y_true, y_pred) -> float:
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    if len(y_true) == 0:
        return float('nan')
    return float((y_true == y_pred).mean())


def confusion_counts(y_true, y_pred) -> dict:
    y_true = np.asarray(y_true, dtype=int)
    y_pred = np.asarray(y_pred, dtype=int)
    return {
        'tp': int(((y_true == 1) & (y_pred == 1)).sum()),
        'tn': int(((y_true == 0) & (y_pred == 0)).sum()),
        'fp': int(((y_true == 0) & (y_pred == 1)).sum()),
        'fn': int(((y_true == 1) & (y_pred == 0)).sum()),
    }


def rule_agreement(products: list[Product]) -> Optional[float]:
    """Share of scored products where the model agrees with the business rule."""
    scored = [p for p in products if p.is_scored]
    if not scored:
        return None
    agree = sum(1 for p in scored if p.prediction == p.reorder)
    return safe_divide(agree, len(scored))


def summarize(products: list[Product], val_accuracy: Optional[float] = None) -> DashboardStats:
    return {
        'total': len(products),
        'server_reorders': sum(p.reorder for p in products),
        'model_reorders': sum(1 for p in products if p.prediction),
        'model_accuracy': format_accuracy(val_accuracy),
    }

from dataclasses import dataclass
import math
import numpy as np
import pandas as pd

from reorderly.utils.logger import logger
from reorderly.utils.types import Product

FEATURE_COLS = ['current_inventory', 'avg_sales_per_week', 'days_to_replenish']
LABEL_COL = 'reorder'


def products_to_frame(products: list[Product]) -> pd.DataFrame:
    columns = ['id', 'name'] + FEATURE_COLS + [LABEL_COL, 'prediction_score', 'prediction']
    rows = [
        (p.id, p.name, p.current_inventory, p.avg_sales_per_week, p.days_to_replenish,
         p.reorder, p.prediction_score, p.prediction)
        for p in products
    ]
    return pd.DataFrame(rows, columns=columns)


def build_features(products: list[Product]) -> tuple[np.ndarray, np.ndarray]:
    """Feature matrix (n, 3) and label matrix (n, 1), both float32 and writable, in input order."""
    df = products_to_frame(products)
    X = df[FEATURE_COLS].to_numpy(dtype=np.float32, copy=True).reshape(-1, len(FEATURE_COLS))
    y = df[[LABEL_COL]].to_numpy(dtype=np.float32, copy=True).reshape(-1, 1)
    logger.info(f'Built features: X={X.shape}, y={y.shape}')
    return X, y


@dataclass(frozen=True)
class MinMaxNormalizer:
    """Per-column min/max scaling into [0, 1].

    A constant column (max == min) maps to 0 for every row instead of
    dividing by zero.
    """
    x_min: np.ndarray
    x_max: np.ndarray

    @classmethod
    def fit(cls, X: np.ndarray) -> 'MinMaxNormalizer':
        if len(X) == 0:
            raise ValueError('Cannot fit normalizer on an empty matrix')
        return cls(x_min=X.min(axis=0), x_max=X.max(axis=0))

    def transform(self, X: np.ndarray) -> np.ndarray:
        span = self.x_max - self.x_min
        shifted = X - self.x_min
        out = np.zeros_like(shifted, dtype=np.float32)
        np.divide(shifted, span, out=out, where=span != 0)
        return out


def train_validation_split(n: int, train_fraction: float = 0.8) -> int:
    """Positional split index: rows [0, split) train, [split, n) validate."""
    if not 0.0 < train_fraction <= 1.0:
        raise ValueError(f'train_fraction must be in (0, 1], got {train_fraction}')
    return int(math.floor(n * train_fraction))

"""
Interactive session state: the current products, the single fitted model
and the Idle/Training guard used by the dashboard and the CLI.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from reorderly.utils.exceptions import (
    EmptyDatasetException,
    TrainingFailedException,
    TrainingInProgressException,
)
from reorderly.utils.logger import logger
from reorderly.utils.types import DashboardStats, PathLike, Product, ReorderNetConfig
from reorderly.etl.create_synthetic import generate
from reorderly.etl.export import export_csv, to_csv_text
from reorderly.models.evaluate import summarize
from reorderly.models.predict import train_and_score
from reorderly.models.train import ModelHandle


class TrainingState(str, Enum):
    """Training guard states."""
    IDLE = "idle"
    TRAINING = "training"


@dataclass
class TrainingResult:
    """Outcome of one training cycle."""
    success: bool
    val_accuracy: Optional[float] = None
    error: Optional[str] = None
    duration_seconds: float = 0.0


class ReorderSession:
    """
    Holds one products list and at most one fitted model.

    Transitions: IDLE -> TRAINING when a cycle starts, TRAINING -> IDLE when
    it finishes or fails. Triggers arriving while TRAINING are rejected.
    """

    def __init__(self, count: Optional[int] = None, model_cfg: Optional[ReorderNetConfig] = None):
        self.count = count
        self.products: list[Product] = generate(count)
        self.val_accuracy: Optional[float] = None
        self.state = TrainingState.IDLE
        self.model_cfg = model_cfg
        self._handle: Optional[ModelHandle] = None
        self._lock = threading.Lock()

    @property
    def handle(self) -> Optional[ModelHandle]:
        return self._handle

    @property
    def is_training(self) -> bool:
        return self.state is TrainingState.TRAINING

    @property
    def can_train(self) -> bool:
        return not self.is_training and len(self.products) > 0

    def stats(self) -> DashboardStats:
        return summarize(self.products, self.val_accuracy)

    def regenerate(self, count: Optional[int] = None) -> list[Product]:
        """Replace all products with a fresh unscored set. The fitted model is kept.

        Without ``count`` the session's last count is reused.
        """
        with self._lock:
            if self.is_training:
                raise TrainingInProgressException()
            if count is not None:
                self.count = count
            self.products = generate(self.count)
        logger.info(f'Regenerated {len(self.products)} products')
        return self.products

    def _begin_training(self) -> None:
        with self._lock:
            if self.is_training:
                raise TrainingInProgressException()
            self.state = TrainingState.TRAINING

    def train_and_predict(self) -> TrainingResult:
        """
        Runs one training cycle over the current products.

        On success products, model and accuracy are replaced together. On
        failure none of them change and the error message is returned.

        Raises:
            TrainingInProgressException: If a cycle is already running.
        """
        if not self.products:
            err = EmptyDatasetException()
            logger.warning(err.message)
            return TrainingResult(success=False, error=err.message)

        self._begin_training()
        start = time.perf_counter()
        try:
            scored, val_accuracy, handle = train_and_score(
                self.products, previous=self._handle, cfg=self.model_cfg
            )
        except Exception as e:
            err = TrainingFailedException(f'Error training/predicting: {e}', original_error=e)
            logger.exception(err.message)
            return TrainingResult(
                success=False,
                error=err.message,
                duration_seconds=time.perf_counter() - start,
            )
        else:
            self._handle = handle
            self.products = scored
            self.val_accuracy = val_accuracy
            duration = time.perf_counter() - start
            logger.info(f'Training cycle finished in {duration:.2f}s')
            return TrainingResult(success=True, val_accuracy=val_accuracy, duration_seconds=duration)
        finally:
            self.state = TrainingState.IDLE

    def to_csv(self) -> str:
        return to_csv_text(self.products)

    def export(self, path: PathLike) -> Path:
        return export_csv(self.products, path)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.release()
            self._handle = None

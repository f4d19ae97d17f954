"""
Training of the reorder classifier.

Pipeline:
1. Validate products and build the (n, 3) feature / (n, 1) label matrices
2. Fit min/max normalization once on the full feature matrix
3. Split positionally: first ``floor(n * train_fraction)`` rows train,
   the rest validate
4. Fit ReorderNet with Adam + binary cross-entropy on shuffled minibatches
5. Keep the validation accuracy of the last epoch
"""

import math
from typing import Optional

import numpy as np
import torch
import torch.nn as nn
from torch.utils.data import DataLoader, TensorDataset

from reorderly.utils.config import reorder_net_config
from reorderly.utils.exceptions import ModelReleasedException
from reorderly.utils.logger import logger
from reorderly.utils.types import Product, ReorderNetConfig
from reorderly.etl.feature_builder import MinMaxNormalizer, build_features, train_validation_split
from reorderly.etl.validate import ValidationError, validate_products
from reorderly.models.network import ReorderNet


class ModelHandle:
    """Owns one fitted model together with its normalization parameters.

    The caller keeps exactly one handle and calls ``release()`` on the old
    one when a new cycle replaces it.
    """

    def __init__(self, model: ReorderNet, normalizer: MinMaxNormalizer,
                 val_accuracy: Optional[float], history: dict, threshold: float = 0.5):
        self._model = model
        self.normalizer = normalizer
        self.val_accuracy = val_accuracy
        self.history = history
        self.threshold = threshold

    @property
    def released(self) -> bool:
        return self._model is None

    @property
    def model(self) -> ReorderNet:
        if self._model is None:
            raise ModelReleasedException()
        return self._model

    @property
    def x_min(self) -> np.ndarray:
        return self.normalizer.x_min

    @property
    def x_max(self) -> np.ndarray:
        return self.normalizer.x_max

    def predict_scores(self, X: np.ndarray) -> np.ndarray:
        """Scores in [0, 1] for raw (unnormalized) feature rows."""
        model = self.model
        model.eval()
        inputs = outputs = None
        try:
            with torch.no_grad():
                inputs = torch.from_numpy(self.normalizer.transform(X))
                outputs = model(inputs)
                return outputs.reshape(-1).numpy().astype(np.float64)
        finally:
            del inputs, outputs

    def release(self) -> None:
        if self._model is not None:
            logger.debug('Releasing fitted model')
        self._model = None

    def __enter__(self) -> 'ModelHandle':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


def binary_accuracy(pred: torch.Tensor, target: torch.Tensor, threshold: float = 0.5) -> float:
    return ((pred > threshold).float() == target).float().mean().item()


def fit_model(products: list[Product], cfg: Optional[ReorderNetConfig] = None) -> ModelHandle:
    """
    Fits a fresh ReorderNet on the products.

    Feature/label matrices, their normalized copies, the split tensors and
    the loader are deleted on every exit path; on failure the new model is
    dropped as well.

    Raises:
        EmptyDatasetException: If there are no products.
        ValidationError: If products are malformed or the training block is empty.
        FloatingPointError: If the training loss diverges.
    """
    params = {**reorder_net_config(), **(cfg or {})}
    validate_products(products)

    X, y = build_features(products)
    normalizer = MinMaxNormalizer.fit(X)
    n = len(X)
    split = train_validation_split(n, params['train_fraction'])
    if split == 0:
        raise ValidationError(f'Not enough products to train: {n} (training block is empty)')
    logger.info(f'Train/validation split: {split}/{n - split}')

    seed = params.get('random_state')
    loader_gen = torch.Generator()
    with torch.random.fork_rng(devices=[]):
        if seed is not None:
            torch.manual_seed(seed)
            loader_gen.manual_seed(seed)
        model = ReorderNet(hidden_units=params['hidden_units'])

    threshold = params['decision_threshold']
    optimizer = torch.optim.Adam(model.parameters(), lr=params['learning_rate'])
    criterion = nn.BCELoss()
    history = {'loss': [], 'accuracy': [], 'val_loss': [], 'val_accuracy': []}

    x_all = y_all = x_train = y_train = x_val = y_val = None
    dataset = loader = None
    xb = yb = pred = loss = val_pred = None
    try:
        x_all = torch.from_numpy(normalizer.transform(X))
        y_all = torch.from_numpy(y)
        x_train, y_train = x_all[:split], y_all[:split]
        x_val, y_val = x_all[split:], y_all[split:]

        dataset = TensorDataset(x_train, y_train)
        loader = DataLoader(dataset, batch_size=params['batch_size'], shuffle=True, generator=loader_gen)

        for epoch in range(params['epochs']):
            model.train()
            total_loss, correct = 0.0, 0.0
            for xb, yb in loader:
                pred = model(xb)
                loss = criterion(pred, yb)
                optimizer.zero_grad()
                loss.backward()
                optimizer.step()
                total_loss += loss.item() * len(xb)
                correct += ((pred.detach() > threshold).float() == yb).sum().item()

            epoch_loss = total_loss / split
            if not math.isfinite(epoch_loss):
                raise FloatingPointError(f'Training loss diverged at epoch {epoch + 1}')
            history['loss'].append(epoch_loss)
            history['accuracy'].append(correct / split)

            if len(x_val) > 0:
                model.eval()
                with torch.no_grad():
                    val_pred = model(x_val)
                    history['val_loss'].append(criterion(val_pred, y_val).item())
                    history['val_accuracy'].append(binary_accuracy(val_pred, y_val, threshold))

            if (epoch + 1) % 10 == 0:
                logger.info(f'  epoch {epoch + 1}/{params["epochs"]} loss={epoch_loss:.4f}')
    except Exception:
        model = optimizer = None
        raise
    finally:
        del X, y, x_all, y_all, x_train, y_train, x_val, y_val
        del dataset, loader, xb, yb, pred, loss, val_pred

    val_accuracy = history['val_accuracy'][-1] if history['val_accuracy'] else None
    if val_accuracy is None:
        logger.warning('No validation block, validation accuracy unavailable')
    else:
        logger.info(f'Validation accuracy: {val_accuracy:.4f}')
    return ModelHandle(model, normalizer, val_accuracy, history, threshold)

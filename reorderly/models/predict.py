from dataclasses import replace
from typing import Optional

from reorderly.utils.logger import logger
from reorderly.utils.types import Product, ReorderNetConfig
from reorderly.etl.feature_builder import build_features
from reorderly.models.train import ModelHandle, fit_model


def score_products(handle: ModelHandle, products: list[Product]) -> list[Product]:
    """New products carrying this model's score; earlier predictions are dropped."""
    X, _ = build_features(products)
    scores = handle.predict_scores(X)
    return [
        replace(p, prediction_score=float(s), prediction=1 if s > handle.threshold else 0)
        for p, s in zip(products, scores)
    ]


def train_and_score(products: list[Product], previous: Optional[ModelHandle] = None,
                    cfg: Optional[ReorderNetConfig] = None):
    """
    One training cycle: fit a new model and score every product with it.

    ``previous`` is released only once the new model has been fitted and
    has scored all products, so a failure leaves it usable.

    Returns:
        (scored_products, val_accuracy, handle)
    """
    logger.info(f'Training cycle on {len(products)} products')
    handle = fit_model(products, cfg)
    try:
        scored = score_products(handle, products)
    except Exception:
        handle.release()
        raise

    if previous is not None and previous is not handle:
        previous.release()
    logger.info(f'Model predicted reorders: {sum(p.prediction for p in scored)}')
    return scored, handle.val_accuracy, handle

"""
Reorder classifier: training, scoring and the interactive session.
"""

from .train import ModelHandle, fit_model
from .predict import score_products, train_and_score
from .session import ReorderSession, TrainingResult, TrainingState

__all__ = [
    'ModelHandle',
    'fit_model',
    'score_products',
    'train_and_score',
    'ReorderSession',
    'TrainingResult',
    'TrainingState',
]

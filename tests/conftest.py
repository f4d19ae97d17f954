"""
Shared fixtures for Reorderly tests.

Provides:
- Generated products
- A fast training configuration
- A trained model handle shared per module
"""

import os
import sys
import pytest
from pathlib import Path

# Project root on PYTHONPATH
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ.setdefault('LOG_LEVEL', 'WARNING')


@pytest.fixture
def products():
    """The default 150 mock products."""
    from reorderly.etl.create_synthetic import generate
    return generate(150)


@pytest.fixture
def fast_cfg():
    """Short training run for tests that don't care about model quality."""
    return {'epochs': 5}


@pytest.fixture(scope="module")
def trained():
    """One full default training cycle: (products, scored, val_accuracy, handle)."""
    from reorderly.etl.create_synthetic import generate
    from reorderly.models.predict import train_and_score

    items = generate(150)
    scored, val_accuracy, handle = train_and_score(items)
    yield items, scored, val_accuracy, handle
    handle.release()

"""
Tests for product generation, validation and feature building.
"""
import math
import pytest
import numpy as np
import pandas as pd

from reorderly.etl.create_synthetic import NAMES, generate, generate_frame, reorder_rule
from reorderly.etl.feature_builder import (
    FEATURE_COLS,
    MinMaxNormalizer,
    build_features,
    products_to_frame,
    train_validation_split,
)
from reorderly.etl.validate import (
    ValidationError,
    validate_feature_frame,
    validate_products,
    validate_required_columns,
)
from reorderly.utils.exceptions import EmptyDatasetException
from reorderly.utils.types import Product


class TestGenerate:
    """Tests for generate."""

    def test_count_and_ids(self):
        """150 products with ids 1..150 in order."""
        items = generate(150)
        assert len(items) == 150
        assert [p.id for p in items] == list(range(1, 151))

    def test_zero_count_is_empty(self):
        assert generate(0) == []

    def test_negative_count_raises_error(self):
        with pytest.raises(ValueError, match="non-negative"):
            generate(-1)

    def test_deterministic(self):
        """Two calls give identical sequences."""
        assert generate(150) == generate(150)

    def test_prefix_stable(self):
        """Product i does not depend on count."""
        assert generate(150)[:20] == generate(20)

    def test_first_product_values(self):
        """|sin(11)|*120 -> 120, |cos(7)|*400 -> 302, lead 2 days."""
        p = generate(1)[0]
        assert p.name == "Soda Pack 1"
        assert p.avg_sales_per_week == 120
        assert p.current_inventory == 302
        assert p.days_to_replenish == 2
        assert p.reorder == 0

    def test_name_cycles_through_catalog(self):
        items = generate(40)
        assert items[19].name == f"{NAMES[0]} 20"
        assert items[20].name == f"{NAMES[1]} 21"

    def test_value_ranges(self, products):
        for p in products:
            assert 0 <= p.current_inventory <= 400
            assert 1 <= p.avg_sales_per_week <= 120
            assert 1 <= p.days_to_replenish <= 21
            assert p.reorder in (0, 1)

    def test_lead_time_formula(self, products):
        for p in products:
            assert p.days_to_replenish == 1 + (p.id % 21)

    def test_reorder_label_matches_rule(self, products):
        """Label recomputed independently from the three numeric fields."""
        for p in products:
            expected = p.avg_sales_per_week * (p.days_to_replenish / 7) * 1.25
            assert p.reorder == (1 if p.current_inventory < expected else 0)

    def test_both_classes_present(self, products):
        labels = {p.reorder for p in products}
        assert labels == {0, 1}

    def test_generated_products_unscored(self, products):
        assert all(p.prediction_score is None and p.prediction is None for p in products)
        assert all(p.prediction_text is None for p in products)

    def test_generate_frame(self):
        df = generate_frame(10)
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 10
        assert list(df['id']) == list(range(1, 11))


class TestReorderRule:
    """Tests for reorder_rule."""

    def test_below_threshold(self):
        # 70/wk over 7 days = 70, * 1.25 = 87.5
        assert reorder_rule(87, 70, 7) == 1

    def test_at_or_above_threshold(self):
        assert reorder_rule(88, 70, 7) == 0

    def test_custom_safety_factor(self):
        assert reorder_rule(80, 70, 7, safety_factor=1.0) == 0


class TestBuildFeatures:
    """Tests for build_features."""

    def test_shapes_and_dtype(self, products):
        X, y = build_features(products)
        assert X.shape == (150, 3)
        assert y.shape == (150, 1)
        assert X.dtype == np.float32
        assert y.dtype == np.float32

    def test_matrices_writable(self, products):
        """torch.from_numpy needs writable arrays."""
        X, y = build_features(products)
        assert X.flags.writeable
        assert y.flags.writeable

    def test_column_order_and_rows(self, products):
        X, y = build_features(products)
        p = products[4]
        assert list(X[4]) == [p.current_inventory, p.avg_sales_per_week, p.days_to_replenish]
        assert y[4, 0] == p.reorder

    def test_frame_columns(self, products):
        df = products_to_frame(products)
        for col in ['id', 'name'] + FEATURE_COLS + ['reorder']:
            assert col in df.columns


class TestMinMaxNormalizer:
    """Tests for MinMaxNormalizer."""

    def test_scales_into_unit_range(self, products):
        X, _ = build_features(products)
        norm = MinMaxNormalizer.fit(X)
        out = norm.transform(X)
        assert out.min() >= 0.0
        assert out.max() <= 1.0
        np.testing.assert_allclose(out.min(axis=0), [0, 0, 0])
        np.testing.assert_allclose(out.max(axis=0), [1, 1, 1])

    def test_constant_column_is_zero(self):
        """max == min gives 0 instead of NaN/inf."""
        X = np.array([[1, 5, 3], [2, 5, 3], [3, 5, 3]], dtype=np.float32)
        out = MinMaxNormalizer.fit(X).transform(X)
        assert np.all(out[:, 1] == 0)
        assert np.all(out[:, 2] == 0)
        assert np.all(np.isfinite(out))
        np.testing.assert_allclose(out[:, 0], [0.0, 0.5, 1.0])

    def test_fit_once_apply_twice(self):
        """Parameters from the first matrix are reused on the second."""
        norm = MinMaxNormalizer.fit(np.array([[0, 0, 0], [10, 10, 10]], dtype=np.float32))
        out = norm.transform(np.array([[5, 20, -10]], dtype=np.float32))
        np.testing.assert_allclose(out, [[0.5, 2.0, -1.0]])

    def test_empty_matrix_raises_error(self):
        with pytest.raises(ValueError):
            MinMaxNormalizer.fit(np.zeros((0, 3), dtype=np.float32))


class TestTrainValidationSplit:
    """Tests for train_validation_split."""

    def test_default_split_150(self):
        assert train_validation_split(150) == 120

    def test_floor(self):
        assert train_validation_split(7) == 5
        assert train_validation_split(1) == 0

    def test_full_fraction(self):
        assert train_validation_split(10, 1.0) == 10

    @pytest.mark.parametrize("fraction", [0.0, -0.5, 1.5])
    def test_invalid_fraction_raises_error(self, fraction):
        with pytest.raises(ValueError):
            train_validation_split(10, fraction)


class TestValidate:
    """Tests for product validation."""

    def test_valid_products(self, products):
        assert validate_products(products) is products

    def test_empty_products_raises_error(self):
        with pytest.raises(EmptyDatasetException, match="No products available"):
            validate_products([])

    def test_missing_columns_raises_error(self):
        df = pd.DataFrame({'id': [1]})
        with pytest.raises(ValidationError, match="Missing required columns"):
            validate_required_columns(df, ['id', 'reorder'])

    def test_negative_inventory_raises_error(self):
        bad = [Product(1, "A", -1, 10, 3, 1)]
        with pytest.raises(ValidationError, match="current_inventory"):
            validate_products(bad)

    def test_zero_lead_time_raises_error(self):
        bad = [Product(1, "A", 5, 10, 0, 1)]
        with pytest.raises(ValidationError, match="days_to_replenish"):
            validate_products(bad)

    def test_non_binary_label_raises_error(self):
        bad = [Product(1, "A", 5, 10, 3, 2)]
        with pytest.raises(ValidationError, match="binary"):
            validate_products(bad)

    def test_duplicate_ids_raise_error(self):
        bad = [Product(1, "A", 5, 10, 3, 1), Product(1, "B", 5, 10, 3, 0)]
        with pytest.raises(ValidationError, match="duplicate"):
            validate_products(bad)

    def test_non_numeric_column_raises_error(self):
        df = products_to_frame(generate(3))
        df['avg_sales_per_week'] = ['x', 1, 2]
        with pytest.raises(ValidationError, match="non-numeric"):
            validate_feature_frame(df)

    def test_empty_frame_raises_error(self):
        with pytest.raises(EmptyDatasetException):
            validate_feature_frame(products_to_frame([]))

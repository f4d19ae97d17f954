"""
Validation of product tables before training or export.

Generated products are valid by construction; these checks guard the
boundary where products come back from a CSV file or a caller-built list.
"""

import pandas as pd
from reorderly.utils.exceptions import EmptyDatasetException
from reorderly.utils.logger import logger
from reorderly.utils.types import Product
from reorderly.etl.feature_builder import FEATURE_COLS, LABEL_COL, products_to_frame


class ValidationError(Exception):
    """Raised when product data is malformed."""
    pass


def validate_required_columns(df: pd.DataFrame, required: list[str]) -> None:
    """
    Checks that all required columns are present.

    Raises:
        ValidationError: If any column is missing.
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValidationError(
            f"Missing required columns: {', '.join(missing)}. "
            f"Available columns: {', '.join(map(str, df.columns))}"
        )


def validate_numeric_column(df: pd.DataFrame, col: str, min_value: float = 0.0) -> None:
    """
    Checks that a column is fully numeric and not below ``min_value``.

    Raises:
        ValidationError: On non-numeric, missing or out-of-range values.
    """
    values = pd.to_numeric(df[col], errors='coerce')
    nan_count = int(values.isna().sum())
    if nan_count > 0:
        raise ValidationError(f"Column '{col}' contains {nan_count} missing or non-numeric values")
    below = int((values < min_value).sum())
    if below > 0:
        raise ValidationError(f"Column '{col}' contains {below} values below {min_value}")


def validate_label_column(df: pd.DataFrame, col: str = LABEL_COL) -> None:
    invalid = ~df[col].isin([0, 1])
    if invalid.any():
        raise ValidationError(f"Column '{col}' must be binary, found {int(invalid.sum())} other values")


def validate_feature_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validates a products frame before features are built from it.

    Raises:
        EmptyDatasetException: If the frame has no rows.
        ValidationError: If columns are missing or values are malformed.
    """
    if len(df) == 0:
        raise EmptyDatasetException()
    validate_required_columns(df, ['id'] + FEATURE_COLS + [LABEL_COL])
    for col in FEATURE_COLS:
        validate_numeric_column(df, col, min_value=0)
    validate_numeric_column(df, 'days_to_replenish', min_value=1)
    validate_label_column(df)
    if df['id'].duplicated().any():
        raise ValidationError("Column 'id' contains duplicate values")
    logger.info(f'Products ready for training ({len(df)} rows)')
    return df


def validate_products(products: list[Product]) -> list[Product]:
    if not products:
        raise EmptyDatasetException()
    validate_feature_frame(products_to_frame(products))
    return products

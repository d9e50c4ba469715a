"""Build datasets and attribute lists from Polars DataFrames."""

from __future__ import annotations

from collections.abc import Sequence

import polars as pl
from loguru import logger

from c45tree.attributes import AttributeList, DiscreteAttribute
from c45tree.dataset import Dataset
from c45tree.exceptions import AttributeNotFoundError, DuplicateAttributesError
from c45tree.records import Record
from c45tree.tree.nodes import DecisionTree

# ---------------------------------------------------------------------------
# Public interface -- Loading
# ---------------------------------------------------------------------------


def attribute_list_from_frame(
    df: pl.DataFrame,
    class_column: str,
    *,
    features: Sequence[str] | None = None,
) -> AttributeList:
    """Describe the columns of a DataFrame as discrete attributes.

    Each attribute's values are the column's distinct non-null values rendered
    as strings, in first-seen order.

    Args:
        df (pl.DataFrame): The source DataFrame.
        class_column (str): Name of the label column.
        features (Sequence[str] | None): Feature columns to use, in order. When
            `None`, every column except `class_column`.

    Returns:
        AttributeList: The feature attributes and the class attribute.

    Raises:
        AttributeNotFoundError: If `class_column` or a requested feature is missing.
        DuplicateAttributesError: If a feature is listed twice or equals `class_column`.
    """
    feature_columns = _resolve_feature_columns(df, class_column, features)
    return AttributeList(
        [_discrete_attribute(df[name]) for name in feature_columns],
        class_attribute=_discrete_attribute(df[class_column]),
    )


def dataset_from_frame(
    df: pl.DataFrame,
    class_column: str,
    *,
    features: Sequence[str] | None = None,
    promote_numeric: bool = True,
) -> Dataset:
    """Build a dataset with one record per DataFrame row.

    Rows with a null class value are dropped. Every value is stored as a
    string; with `promote_numeric`, attributes whose values all parse as
    numbers then become numeric attributes holding floats.

    Args:
        df (pl.DataFrame): The source DataFrame.
        class_column (str): Name of the label column.
        features (Sequence[str] | None): Feature columns to use, in order. When
            `None`, every column except `class_column`.
        promote_numeric (bool): Whether to promote all-numeric columns to
            numeric attributes. Defaults to True. Numeric attributes cannot be
            split on, so pass False to treat numeric codes as categories.

    Returns:
        Dataset: The records and their attribute list.

    Raises:
        AttributeNotFoundError: If `class_column` or a requested feature is missing.
        DuplicateAttributesError: If a feature is listed twice or equals `class_column`.
        ValueError: If a feature column contains null values.
    """
    feature_columns = _resolve_feature_columns(df, class_column, features)
    df_clean = df.drop_nulls(subset=[class_column])
    dropped = len(df) - len(df_clean)
    if dropped:
        logger.warning("Dropped rows with a null class value", class_column=class_column, dropped=dropped)

    null_columns = [name for name in feature_columns if df_clean[name].null_count() > 0]
    if null_columns:
        raise ValueError(f"Feature columns contain null values: {null_columns}. Remove or impute nulls first.")

    attributes = attribute_list_from_frame(df_clean, class_column, features=feature_columns)
    string_frame = df_clean.select([pl.col(name).cast(pl.String) for name in [*feature_columns, class_column]])
    records = [
        Record({name: row[name] for name in feature_columns}, class_value=row[class_column])
        for row in string_frame.iter_rows(named=True)
    ]
    dataset = Dataset(attributes, records)
    if promote_numeric:
        dataset.promote_numeric_attributes()
    logger.debug("Dataset loaded", size=len(dataset), attributes=dataset.attributes.names)
    return dataset


def predict_frame(tree: DecisionTree, df: pl.DataFrame) -> pl.Series:
    """Predict the class value of every DataFrame row.

    Values are cast to strings to match the representation used by
    `dataset_from_frame`.

    Args:
        tree (DecisionTree): A grown tree.
        df (pl.DataFrame): Rows to classify; must contain every attribute the
            tree splits on.

    Returns:
        pl.Series: String predictions named after the tree's class attribute.
    """
    string_frame = df.select([pl.col(name).cast(pl.String) for name in df.columns])
    predictions = tree.predict_many(string_frame.iter_rows(named=True))
    return pl.Series(tree.attributes.class_attribute.name, predictions, dtype=pl.String)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _resolve_feature_columns(df: pl.DataFrame, class_column: str, features: Sequence[str] | None) -> list[str]:
    """Validate the requested columns and return the feature column names.

    Args:
        df (pl.DataFrame): The source DataFrame.
        class_column (str): Name of the label column.
        features (Sequence[str] | None): Requested feature columns, or `None`.

    Returns:
        list[str]: Feature column names in order.

    Raises:
        AttributeNotFoundError: If any requested column is missing.
        DuplicateAttributesError: If a feature is listed twice.
    """
    feature_columns = list(features) if features is not None else [col for col in df.columns if col != class_column]
    missing_columns = [col for col in [*feature_columns, class_column] if col not in df.columns]
    if missing_columns:
        raise AttributeNotFoundError(missing_columns, df.columns)
    if len(set(feature_columns)) != len(feature_columns):
        raise DuplicateAttributesError(feature_columns)
    return feature_columns


def _discrete_attribute(series: pl.Series) -> DiscreteAttribute:
    values = series.drop_nulls().cast(pl.String).unique(maintain_order=True).to_list()
    return DiscreteAttribute(series.name, tuple(values))

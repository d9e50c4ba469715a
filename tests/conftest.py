"""Shared dataset fixtures for the c45tree test suite."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from c45tree.attributes import AttributeList, DiscreteAttribute
from c45tree.dataset import Dataset
from c45tree.records import Record

WEATHER_FEATURES: list[str] = ["outlook", "temperature", "humidity", "windy"]

WEATHER_ROWS: list[tuple[str, ...]] = [
    ("sunny", "hot", "high", "false", "no"),
    ("sunny", "hot", "high", "true", "no"),
    ("overcast", "hot", "high", "false", "yes"),
    ("rainy", "mild", "high", "false", "yes"),
    ("rainy", "cool", "normal", "false", "yes"),
    ("rainy", "cool", "normal", "true", "no"),
    ("overcast", "cool", "normal", "true", "yes"),
    ("sunny", "mild", "high", "false", "no"),
    ("sunny", "cool", "normal", "false", "yes"),
    ("rainy", "mild", "normal", "false", "yes"),
    ("sunny", "mild", "normal", "true", "yes"),
    ("overcast", "mild", "high", "true", "yes"),
    ("overcast", "hot", "normal", "false", "yes"),
    ("rainy", "mild", "high", "true", "no"),
]

# `unbalanced` isolates one record and wins on gain ratio, but its raw gain
# is below the mean gain of the two attributes.
GAIN_PRUNED_FEATURES: list[str] = ["unbalanced", "balanced"]

GAIN_PRUNED_ROWS: list[tuple[str, ...]] = [
    ("a", "y", "n"),
    ("b", "x", "p"),
    ("b", "x", "p"),
    ("b", "x", "p"),
    ("b", "x", "n"),
    ("b", "y", "p"),
    ("b", "y", "n"),
    ("b", "y", "n"),
]


def make_dataset(
    rows: Sequence[tuple[str, ...]],
    feature_names: Sequence[str],
    class_name: str = "label",
) -> Dataset:
    """Build a dataset from rows whose last element is the class value.

    Args:
        rows (Sequence[tuple[str, ...]]): Feature values followed by the class value.
        feature_names (Sequence[str]): Names of the feature columns, in order.
        class_name (str): Name of the class attribute.

    Returns:
        Dataset: One record per row.
    """
    features = [
        DiscreteAttribute(name, tuple(dict.fromkeys(row[index] for row in rows)))
        for index, name in enumerate(feature_names)
    ]
    class_attribute = DiscreteAttribute(class_name, tuple(dict.fromkeys(row[-1] for row in rows)))
    records = [Record(dict(zip(feature_names, row[:-1], strict=True)), class_value=row[-1]) for row in rows]
    return Dataset(AttributeList(features, class_attribute=class_attribute), records)


@pytest.fixture
def weather_dataset() -> Dataset:
    """Return the 14-record play-tennis dataset.

    Returns:
        Dataset: Four discrete features and the `play` class.
    """
    return make_dataset(WEATHER_ROWS, WEATHER_FEATURES, class_name="play")


@pytest.fixture
def binary_dataset() -> Dataset:
    """Return four records with one binary feature `A` that fully determines class `C`.

    Returns:
        Dataset: Records (x, p), (x, p), (y, n), (y, n).
    """
    rows = [("x", "p"), ("x", "p"), ("y", "n"), ("y", "n")]
    return make_dataset(rows, ["A"], class_name="C")


@pytest.fixture
def gain_pruned_dataset() -> Dataset:
    """Return eight records whose gain-ratio winner fails the mean-gain test.

    Returns:
        Dataset: Features `unbalanced` and `balanced`, class values `p`/`n`.
    """
    return make_dataset(GAIN_PRUNED_ROWS, GAIN_PRUNED_FEATURES)


@pytest.fixture
def dataset_factory() -> Callable[..., Dataset]:
    """Return `make_dataset` so tests can build ad-hoc datasets.

    Returns:
        Callable[..., Dataset]: Builds a dataset from rows, feature names and a class name.
    """
    return make_dataset

"""Recursive gain-ratio tree growing with size and gain pruning."""

from __future__ import annotations

from loguru import logger

from c45tree.attributes import NumericAttribute, Value
from c45tree.config import GrowthConfig
from c45tree.dataset import Dataset
from c45tree.exceptions import EmptyDatasetError, MalformedRecordError, UnsupportedSplitError
from c45tree.logging import SPLIT_LEVEL
from c45tree.tree.nodes import DecisionTree, InternalNode, LeafNode, Node

# ---------------------------------------------------------------------------
# Public interface -- Tree growing
# ---------------------------------------------------------------------------


def build_decision_tree(dataset: Dataset, config: GrowthConfig | None = None) -> DecisionTree:
    """Grow a decision tree over a labeled dataset.

    Args:
        dataset (Dataset): Training records and their attribute list. Not mutated.
        config (GrowthConfig | None): Pruning thresholds. When `None`, a
            `GrowthConfig()` is created, which picks up environment overrides.

    Returns:
        DecisionTree: The grown tree.

    Raises:
        EmptyDatasetError: If the dataset holds no records.
        UnsupportedSplitError: If a feature attribute is numeric.
        MalformedRecordError: If any record at any depth disagrees with its
            attribute list. No partial tree is returned.
    """
    config = config if config is not None else GrowthConfig()
    if dataset.is_empty():
        raise EmptyDatasetError("Cannot grow a decision tree from an empty dataset")
    for attribute in dataset.attributes:
        if isinstance(attribute, NumericAttribute):
            raise UnsupportedSplitError(attribute.name)

    total_size = len(dataset)
    logger.info(
        "Growing decision tree",
        size=total_size,
        attributes=dataset.attributes.names,
        size_threshold=config.size_threshold,
        gain_ratio_prune_threshold=config.gain_ratio_prune_threshold,
    )
    root = grow(dataset.copy(), total_size, config)
    tree = DecisionTree(root=root, attributes=dataset.attributes.clone(), config=config)
    logger.info("Decision tree grown", depth=tree.depth, leaf_count=tree.leaf_count)
    return tree


def grow(dataset: Dataset, total_size: int, config: GrowthConfig) -> Node:
    """Grow the subtree for one dataset.

    Stops with a leaf when the records share one class, when no feature
    attributes remain, when the dataset is smaller than
    `config.size_threshold * total_size`, or when no attribute survives
    gain-ratio selection. Otherwise splits on the selected attribute and
    recurses into every partition.

    Args:
        dataset (Dataset): Records for this subtree. Not mutated; partitions
            are independent copies.
        total_size (int): Size of the root dataset, for size pruning.
        config (GrowthConfig): Pruning thresholds.

    Returns:
        Node: A `LeafNode` or an `InternalNode`.

    Raises:
        EmptyDatasetError: If the dataset holds no records.
        MalformedRecordError: If any record disagrees with the attribute list.
    """
    if dataset.is_empty():
        raise EmptyDatasetError("Cannot grow a subtree from an empty dataset")
    _check_dimensions(dataset)

    common_class_value = dataset.common_class_value()
    if common_class_value is not None:
        logger.debug("Leaf: pure class", prediction=common_class_value, size=len(dataset))
        return _make_leaf(dataset, common_class_value)

    majority = _majority(dataset)
    if dataset.attributes.is_empty():
        logger.debug("Leaf: no attributes left", prediction=majority, size=len(dataset))
        return _make_leaf(dataset, majority)

    if len(dataset) < config.size_threshold * total_size:
        logger.debug("Leaf: size-pruned", prediction=majority, size=len(dataset), total_size=total_size)
        return _make_leaf(dataset, majority)

    best_attribute = dataset.best_attribute_by_gain_ratio(config.gain_ratio_prune_threshold)
    if best_attribute is None:
        logger.debug("Leaf: no acceptable split", prediction=majority, size=len(dataset))
        return _make_leaf(dataset, majority)

    partitions = dataset.split_by_attribute(best_attribute)
    logger.log(
        SPLIT_LEVEL,
        "Split on {attribute}",
        attribute=best_attribute.name,
        size=len(dataset),
        branches=[str(value) for value in partitions],
    )
    branches: dict[Value, Node] = {}
    for value, partition in partitions.items():
        if partition.is_empty():
            branches[value] = LeafNode(prediction=majority)
        else:
            branches[value] = grow(partition, total_size, config)
    return InternalNode(attribute=best_attribute, branches=branches, majority=majority, samples=len(dataset))


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _check_dimensions(dataset: Dataset) -> None:
    """Raise `MalformedRecordError` if any record disagrees with the attribute list.

    Args:
        dataset (Dataset): The dataset to check.

    Raises:
        MalformedRecordError: Listing every offending record.
    """
    malformed = dataset.find_malformed_records()
    if malformed:
        expected_size = len(dataset.attributes) + 1
        for record in malformed:
            logger.error("Malformed record", record=repr(record), expected_size=expected_size, size=record.size)
        raise MalformedRecordError(malformed, expected_size=expected_size)


def _majority(dataset: Dataset) -> str:
    majority = dataset.majority_class_value()
    if majority is None:
        raise EmptyDatasetError("Cannot compute the majority class of an empty dataset")
    return majority


def _make_leaf(dataset: Dataset, prediction: str) -> LeafNode:
    return LeafNode(prediction=prediction, samples=len(dataset), class_counts=dataset.class_frequencies())

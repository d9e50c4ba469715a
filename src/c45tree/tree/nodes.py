"""Immutable decision tree nodes and the tree wrapper returned to callers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from c45tree.attributes import Attribute, AttributeList, Value
from c45tree.config import GrowthConfig
from c45tree.exceptions import AttributeNotFoundError

# ---------------------------------------------------------------------------
# Public interface -- Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeafNode:
    """Terminal node holding the predicted class value.

    Attributes:
        prediction (str): Class value predicted for records reaching this leaf.
        samples (int): Number of training records that reached this leaf. 0 for
            a branch whose partition was empty.
        class_counts (Mapping[str, int]): Training class frequencies at this leaf.
    """

    prediction: str
    samples: int = 0
    class_counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "class_counts", MappingProxyType(dict(self.class_counts)))

    @property
    def confidence(self) -> float:
        """Fraction of training records at this leaf that carry `prediction`.

        0.0 when no training record reached the leaf.
        """
        if self.samples == 0:
            return 0.0
        return self.class_counts.get(self.prediction, 0) / self.samples


@dataclass(frozen=True)
class InternalNode:
    """Node splitting on one discrete attribute, with one child per observed value.

    Attributes:
        attribute (Attribute): The splitting attribute.
        branches (Mapping[Value, Node]): Child node per attribute value, in
            first-seen order.
        majority (str): Majority class value of the training records at this
            node; predicted for attribute values no branch covers.
        samples (int): Number of training records that reached this node.
    """

    attribute: Attribute
    branches: Mapping[Value, Node]
    majority: str
    samples: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "branches", MappingProxyType(dict(self.branches)))


type Node = LeafNode | InternalNode


def node_depth(node: Node) -> int:
    """Return the number of edges on the longest path from `node` to a leaf.

    Args:
        node (Node): The subtree root.

    Returns:
        int: 0 for a leaf.
    """
    match node:
        case LeafNode():
            return 0
        case InternalNode(branches=branches):
            return 1 + max((node_depth(child) for child in branches.values()), default=0)


def node_leaf_count(node: Node) -> int:
    """Return the number of leaves below `node`.

    Args:
        node (Node): The subtree root.

    Returns:
        int: 1 for a leaf.
    """
    match node:
        case LeafNode():
            return 1
        case InternalNode(branches=branches):
            return sum(node_leaf_count(child) for child in branches.values())


# ---------------------------------------------------------------------------
# Public interface -- Tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DecisionTree:
    """A grown decision tree.

    Attributes:
        root (Node): The root node.
        attributes (AttributeList): Attribute list of the training dataset.
        config (GrowthConfig): Thresholds the tree was grown with.

    Examples:
        >>> tree = build_decision_tree(dataset)  # doctest: +SKIP
        >>> tree.predict({"outlook": "sunny", "windy": "false"})  # doctest: +SKIP
        'yes'
    """

    root: Node
    attributes: AttributeList
    config: GrowthConfig

    @property
    def depth(self) -> int:
        """Longest root-to-leaf path, in edges."""
        return node_depth(self.root)

    @property
    def leaf_count(self) -> int:
        """Number of leaf nodes."""
        return node_leaf_count(self.root)

    def predict(self, values: Mapping[str, Value]) -> str:
        """Predict the class value of one record.

        Values are matched against branch values exactly, so they must use the
        representation of the training data (strings for discrete attributes).

        Args:
            values (Mapping[str, Value]): Feature values keyed by attribute name.
                Only the attributes on the traversed path are required.

        Returns:
            str: The predicted class value. When a value has no branch, the
                majority class of the node where traversal stopped.

        Raises:
            AttributeNotFoundError: If a splitting attribute on the path is missing
                from `values`.
        """
        node = self.root
        while True:
            match node:
                case LeafNode(prediction=prediction):
                    return prediction
                case InternalNode(attribute=attribute, branches=branches, majority=majority):
                    if attribute.name not in values:
                        raise AttributeNotFoundError([attribute.name], list(values))
                    child = branches.get(values[attribute.name])
                    if child is None:
                        return majority
                    node = child

    def predict_many(self, rows: Iterable[Mapping[str, Value]]) -> list[str]:
        """Predict the class value of several records.

        Args:
            rows (Iterable[Mapping[str, Value]]): Feature values per record.

        Returns:
            list[str]: One prediction per row, in order.
        """
        return [self.predict(row) for row in rows]

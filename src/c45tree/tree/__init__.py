"""Decision tree sub-package: nodes, growing, and rule extraction."""

from __future__ import annotations

from c45tree.tree.growing import build_decision_tree, grow
from c45tree.tree.nodes import DecisionTree, InternalNode, LeafNode, Node
from c45tree.tree.rules import ClassificationRule, Predicate, extract_rules

__all__ = [
    "ClassificationRule",
    "DecisionTree",
    "InternalNode",
    "LeafNode",
    "Node",
    "Predicate",
    "build_decision_tree",
    "extract_rules",
    "grow",
]

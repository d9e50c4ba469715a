"""c45tree: gain-ratio decision tree induction over labeled tabular data."""

from loguru import logger

from c45tree.attributes import AttributeList, DiscreteAttribute, NumericAttribute
from c45tree.config import GrowthConfig
from c45tree.dataset import Dataset
from c45tree.logging import PACKAGE_NAME, enable_logging
from c45tree.records import Record
from c45tree.tree import DecisionTree, build_decision_tree, extract_rules

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the c45tree module by default

__all__ = [
    "AttributeList",
    "Dataset",
    "DecisionTree",
    "DiscreteAttribute",
    "GrowthConfig",
    "NumericAttribute",
    "Record",
    "build_decision_tree",
    "enable_logging",
    "extract_rules",
]

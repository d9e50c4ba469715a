"""Pydantic rule models and rule extraction from a grown decision tree."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from c45tree.tree.nodes import DecisionTree, InternalNode, LeafNode, Node

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single equality condition on one discrete attribute.

    Attributes:
        variable (str): Attribute name the condition applies to, e.g. `"outlook"`.
        operator (Literal["=="]): Comparison operator; branches of a discrete
            split always test equality.
        value (str | float): The branch value.

    Examples:
        >>> p = Predicate(variable="outlook", value="sunny")
        >>> str(p)
        'outlook == sunny'
        >>> p.eval("sunny")
        True
    """

    variable: str = Field(description="Attribute name the condition applies to, e.g. 'outlook'.")
    operator: Literal["=="] = Field(default="==", description="Comparison operator.")
    value: str | float = Field(description="Attribute value selecting this branch.")

    def __str__(self) -> str:
        """Return a human-readable representation of this predicate.

        Returns:
            str: The predicate as `"<variable> == <value>"`.
        """
        return f"{self.variable} {self.operator} {self.value}"

    def eval(self, x: str | float) -> bool:
        """Evaluate this predicate against an attribute value.

        Args:
            x (str | float): The attribute value to test.

        Returns:
            bool: `True` if `x` equals the branch value.
        """
        return x == self.value


class ClassificationRule(BaseModel):
    """A decision rule extracted from one leaf of the tree.

    Attributes:
        predicates (list[Predicate]): Conditions along the path from the root
            to this leaf. Empty for a single-leaf tree.
        prediction (str): Predicted class value.
        samples (int): Number of training records that reached the leaf. 0 for
            a branch whose partition was empty.
        confidence (float): Fraction of those records carrying `prediction`.

    Examples:
        >>> rule = ClassificationRule(
        ...     predicates=[Predicate(variable="outlook", value="overcast")],
        ...     prediction="yes",
        ...     samples=4,
        ...     confidence=1.0,
        ... )
        >>> str(rule)
        'IF outlook == overcast THEN yes'
    """

    predicates: list[Predicate] = Field(description="Conditions along the root-to-leaf path.")
    prediction: str = Field(description="Predicted class value for records reaching this leaf.")
    samples: int = Field(ge=0, description="Number of training records that reached this leaf.")
    confidence: float = Field(ge=0.0, le=1.0, description="Fraction of leaf records carrying the prediction.")

    def __str__(self) -> str:
        """Return the rule as an IF/THEN sentence.

        Returns:
            str: e.g. `"IF outlook == sunny AND humidity == high THEN no"`.
        """
        if not self.predicates:
            return f"THEN {self.prediction}"
        conditions = " AND ".join(str(predicate) for predicate in self.predicates)
        return f"IF {conditions} THEN {self.prediction}"


# ---------------------------------------------------------------------------
# Public interface -- Rule extraction
# ---------------------------------------------------------------------------


def extract_rules(tree: DecisionTree) -> list[ClassificationRule]:
    """Extract one rule per leaf, in depth-first branch order.

    Args:
        tree (DecisionTree): A grown tree.

    Returns:
        list[ClassificationRule]: The rules; their count equals `tree.leaf_count`.
    """
    rules: list[ClassificationRule] = []
    _walk_tree(tree.root, path_predicates=[], rules=rules)
    return rules


def _walk_tree(node: Node, *, path_predicates: list[Predicate], rules: list[ClassificationRule]) -> None:
    """Recursively walk a node and append the rules of its leaves.

    Args:
        node (Node): The current node.
        path_predicates (list[Predicate]): Predicates from the root to `node`.
        rules (list[ClassificationRule]): Accumulator; leaf rules are appended in place.
    """
    match node:
        case LeafNode():
            rules.append(
                ClassificationRule(
                    predicates=path_predicates,
                    prediction=node.prediction,
                    samples=node.samples,
                    confidence=round(node.confidence, 4),
                )
            )
        case InternalNode(attribute=attribute, branches=branches):
            for value, child in branches.items():
                predicate = Predicate(variable=attribute.name, value=value)
                _walk_tree(child, path_predicates=[*path_predicates, predicate], rules=rules)

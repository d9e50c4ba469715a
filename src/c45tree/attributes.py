"""Attribute descriptors and the attribute list shared by a dataset's records."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from c45tree.exceptions import AttributeNotFoundError, DuplicateAttributesError

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type Value = str | float


# ---------------------------------------------------------------------------
# Public interface -- Attribute variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NumericAttribute:
    """A column with an ordered, continuous domain.

    Attributes:
        name (str): Column name.
    """

    name: str

    def __str__(self) -> str:
        """Return the column name.

        Returns:
            str: The attribute name.
        """
        return self.name


@dataclass(frozen=True)
class DiscreteAttribute:
    """A column with a finite set of category values.

    Two discrete attributes with the same name are equal even when their value
    sets differ, so a column keeps its identity as partitions shrink.

    Attributes:
        name (str): Column name.
        values (tuple[str, ...]): Values observed for the column, in first-seen order.

    Examples:
        >>> outlook = DiscreteAttribute("outlook", ("sunny", "rainy"))
        >>> outlook == DiscreteAttribute("outlook")
        True
        >>> DiscreteAttribute("age", ("31", "47.5")).has_only_numbers()
        True
    """

    name: str
    values: tuple[str, ...] = field(default=(), compare=False)

    def __str__(self) -> str:
        """Return the column name.

        Returns:
            str: The attribute name.
        """
        return self.name

    def has_only_numbers(self) -> bool:
        """Return `True` if every observed value parses as a finite number.

        An attribute with no observed values is not considered numeric.

        Returns:
            bool: Whether the attribute can be promoted to a `NumericAttribute`.
        """
        return bool(self.values) and all(is_number(value) for value in self.values)

    def to_numeric(self) -> NumericAttribute:
        """Return the numeric counterpart of this attribute.

        Returns:
            NumericAttribute: An attribute with the same name.
        """
        return NumericAttribute(self.name)


type Attribute = DiscreteAttribute | NumericAttribute


def is_number(value: Value) -> bool:
    """Return `True` if `value` is, or parses as, a finite float.

    Args:
        value (Value): The value to test.

    Returns:
        bool: Whether `float(value)` succeeds and is finite.
    """
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# Public interface -- Attribute list
# ---------------------------------------------------------------------------


class AttributeList:
    """Ordered feature attributes plus the designated class attribute.

    The class attribute is the label being predicted. It is held apart from
    the features, so it is never a split candidate and is never removed.
    `len()` and iteration cover the feature attributes only.

    Examples:
        >>> attributes = AttributeList(
        ...     [DiscreteAttribute("outlook", ("sunny", "rainy"))],
        ...     class_attribute=DiscreteAttribute("play", ("yes", "no")),
        ... )
        >>> len(attributes)
        1
        >>> attributes.names
        ['outlook']
    """

    def __init__(self, features: Iterable[Attribute], class_attribute: DiscreteAttribute) -> None:
        """Initialize the attribute list.

        Args:
            features (Iterable[Attribute]): Feature attributes in column order.
            class_attribute (DiscreteAttribute): The label attribute.

        Raises:
            DuplicateAttributesError: If a name appears twice, including a
                feature that shares the class attribute's name.
        """
        self._features: list[Attribute] = list(features)
        self.class_attribute = class_attribute
        all_names = [*self.names, class_attribute.name]
        if len(set(all_names)) != len(all_names):
            raise DuplicateAttributesError(all_names)

    @property
    def names(self) -> list[str]:
        """Feature attribute names in column order."""
        return [attribute.name for attribute in self._features]

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Attribute]:
        return iter(list(self._features))

    def __contains__(self, item: object) -> bool:
        name = item.name if isinstance(item, (DiscreteAttribute, NumericAttribute)) else item
        return name in self.names

    def __repr__(self) -> str:
        return f"AttributeList(features={self.names!r}, class_attribute={self.class_attribute.name!r})"

    def is_empty(self) -> bool:
        """Return `True` when no feature attributes remain.

        Returns:
            bool: Whether the feature list is empty.
        """
        return not self._features

    def index(self, name: str) -> int:
        """Return the position of a feature attribute.

        Args:
            name (str): Attribute name.

        Returns:
            int: Zero-based position in column order.

        Raises:
            AttributeNotFoundError: If no feature has that name.
        """
        try:
            return self.names.index(name)
        except ValueError:
            raise AttributeNotFoundError([name], self.names) from None

    def get(self, name: str) -> Attribute:
        """Return the feature attribute with the given name.

        Args:
            name (str): Attribute name.

        Returns:
            Attribute: The matching attribute.

        Raises:
            AttributeNotFoundError: If no feature has that name.
        """
        return self._features[self.index(name)]

    def remove(self, attribute: Attribute) -> None:
        """Remove a feature attribute in place.

        Args:
            attribute (Attribute): The attribute to drop, matched by name.

        Raises:
            AttributeNotFoundError: If the attribute is not a feature of this list.
        """
        del self._features[self.index(attribute.name)]

    def replace(self, attribute: Attribute) -> None:
        """Swap the feature with the same name for `attribute`, keeping its position.

        Args:
            attribute (Attribute): The replacement attribute.

        Raises:
            AttributeNotFoundError: If no feature has that name.
        """
        self._features[self.index(attribute.name)] = attribute

    def clone(self) -> AttributeList:
        """Return an independent copy.

        Attributes are immutable, so only the list itself is copied.

        Returns:
            AttributeList: A list that can be mutated without affecting this one.
        """
        return AttributeList(self._features, class_attribute=self.class_attribute)

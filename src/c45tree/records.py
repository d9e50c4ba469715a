"""Labeled records: one feature value per attribute plus a class value."""

from __future__ import annotations

from collections.abc import Mapping

from c45tree.attributes import Attribute, Value
from c45tree.exceptions import AttributeNotFoundError


class Record:
    """One labeled tuple of a dataset.

    Feature values are keyed by attribute name in column order. `size`
    counts the features plus the class value, which is what a dataset checks
    against its attribute list.

    Examples:
        >>> record = Record({"outlook": "sunny", "windy": "false"}, class_value="no")
        >>> record.size
        3
        >>> record.value_of("outlook")
        'sunny'
    """

    __slots__ = ("_values", "class_value")

    def __init__(self, values: Mapping[str, Value], class_value: str) -> None:
        """Initialize the record.

        Args:
            values (Mapping[str, Value]): Feature values keyed by attribute name.
            class_value (str): The label of this record.
        """
        self._values: dict[str, Value] = dict(values)
        self.class_value = class_value

    @property
    def values(self) -> dict[str, Value]:
        """A copy of the feature values keyed by attribute name."""
        return dict(self._values)

    @property
    def size(self) -> int:
        """Number of values held, features plus the class value."""
        return len(self._values) + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.class_value == other.class_value and list(self._values.items()) == list(other._values.items())

    def __repr__(self) -> str:
        return f"Record({self._values!r}, class_value={self.class_value!r})"

    def value_of(self, attribute: Attribute | str) -> Value:
        """Return the value held for an attribute.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            Value: The stored value.

        Raises:
            AttributeNotFoundError: If the record has no value for the attribute.
        """
        name = attribute if isinstance(attribute, str) else attribute.name
        try:
            return self._values[name]
        except KeyError:
            raise AttributeNotFoundError([name], list(self._values)) from None

    def remove(self, attribute: Attribute | str) -> None:
        """Drop the value held for an attribute, if any.

        Args:
            attribute (Attribute | str): The attribute or its name.
        """
        name = attribute if isinstance(attribute, str) else attribute.name
        self._values.pop(name, None)

    def promote(self, name: str) -> None:
        """Convert the value held for `name` to a float in place.

        Args:
            name (str): Attribute name whose value parses as a number.

        Raises:
            AttributeNotFoundError: If the record has no value for the attribute.
        """
        self._values[name] = float(self.value_of(name))

    def copy(self) -> Record:
        """Return an independent copy of this record.

        Values are immutable scalars, so copying the mapping is a deep copy.

        Returns:
            Record: A record that can be mutated without affecting this one.
        """
        return Record(self._values, class_value=self.class_value)

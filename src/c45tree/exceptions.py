"""Custom exceptions for decision tree induction.

This module defines the errors raised while building a tree:

- TreeInductionError: Base class for every c45tree error. Catch this to
  handle any induction failure.
- MalformedRecordError: Raised when records disagree with the attribute list
  dimensionality. Aborts the whole build.
- EmptyDatasetError: Raised when entropy or a build is requested on a dataset
  without records.
- UnsupportedSplitError: Raised when partitioning on a numeric attribute is
  requested.
- AttributeNotFoundError: Raised when an attribute name is not part of an
  attribute list.
- DuplicateAttributesError: Raised when an attribute list would contain the
  same name twice.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from c45tree.records import Record


class TreeInductionError(Exception):
    """Base exception for all decision tree induction errors."""


class MalformedRecordError(TreeInductionError, ValueError):
    """Raised when one or more records do not match the attribute list dimensionality.

    Attributes:
        records (list[Record]): The offending records.
        expected_size (int): Number of values (features + class) each record should hold.

    Examples:
        >>> err = MalformedRecordError(records=[], expected_size=3)
        >>> err.expected_size
        3
    """

    records: list[Record]
    expected_size: int

    def __init__(self, records: Sequence[Record], expected_size: int) -> None:
        """Initialize MalformedRecordError.

        Args:
            records (Sequence[Record]): Records whose size differs from `expected_size`.
            expected_size (int): Expected number of values per record.
        """
        sizes = sorted({record.size for record in records})
        super().__init__(
            f"{len(records)} record(s) do not match the attribute list: expected {expected_size} values, got {sizes}"
        )
        self.records = list(records)
        self.expected_size = expected_size


class EmptyDatasetError(TreeInductionError, ValueError):
    """Raised when an operation needs at least one record but the dataset is empty."""


class UnsupportedSplitError(TreeInductionError, NotImplementedError):
    """Raised when a dataset is asked to partition on a numeric attribute.

    Attributes:
        attribute_name (str): Name of the attribute that cannot be split on.
    """

    attribute_name: str

    def __init__(self, attribute_name: str) -> None:
        """Initialize UnsupportedSplitError.

        Args:
            attribute_name (str): Name of the numeric attribute.
        """
        super().__init__(f"Splitting on numeric attribute '{attribute_name}' is not supported")
        self.attribute_name = attribute_name


class AttributeNotFoundError(TreeInductionError, KeyError):
    """Raised when requested attributes are not part of an attribute list.

    Attributes:
        missing_attributes (list[str]): Attribute names that were not found.
        available_attributes (list[str]): Attribute names that are present.

    Examples:
        >>> err = AttributeNotFoundError(
        ...     missing_attributes=["humidity"],
        ...     available_attributes=["outlook", "windy"],
        ... )
        >>> err.missing_attributes
        ['humidity']
    """

    missing_attributes: list[str]
    available_attributes: list[str]

    def __init__(self, missing_attributes: list[str], available_attributes: list[str]) -> None:
        """Initialize AttributeNotFoundError.

        Args:
            missing_attributes (list[str]): Attribute names that were not found.
            available_attributes (list[str]): Attribute names that are present.
        """
        super().__init__(f"Attributes not found: {sorted(missing_attributes)}")
        self.missing_attributes = missing_attributes
        self.available_attributes = available_attributes

    def __str__(self) -> str:
        """Return the plain message instead of KeyError's quoted repr.

        Returns:
            str: The error message.
        """
        return str(self.args[0])


class DuplicateAttributesError(TreeInductionError, ValueError):
    """Raised when duplicate attribute names are provided.

    Attributes:
        attribute_names (list[str]): The name list that contains duplicates.
        duplicate_attributes (list[str]): The names that are duplicated (each listed once).

    Examples:
        >>> err = DuplicateAttributesError(attribute_names=["a", "a", "b"])
        >>> err.duplicate_attributes
        ['a']
    """

    attribute_names: list[str]
    duplicate_attributes: list[str]

    def __init__(self, attribute_names: list[str]) -> None:
        """Initialize DuplicateAttributesError.

        Args:
            attribute_names (list[str]): The name list containing duplicates.
        """
        super().__init__("Duplicate attribute names are not allowed")
        self.attribute_names = attribute_names
        seen: set[str] = set()
        self.duplicate_attributes = []
        for name in attribute_names:
            if name in seen and name not in self.duplicate_attributes:
                self.duplicate_attributes.append(name)
            seen.add(name)

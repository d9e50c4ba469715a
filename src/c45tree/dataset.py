"""Datasets of labeled records: entropy, information gain, gain ratio and partitioning."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from typing import NamedTuple

import numpy as np
from loguru import logger

from c45tree.attributes import Attribute, AttributeList, DiscreteAttribute, NumericAttribute, Value
from c45tree.exceptions import EmptyDatasetError, UnsupportedSplitError
from c45tree.records import Record

# ---------------------------------------------------------------------------
# Public interface -- Scores
# ---------------------------------------------------------------------------


class AttributeScore(NamedTuple):
    """Split quality of one attribute over a dataset.

    Attributes:
        attribute (Attribute): The scored attribute.
        gain (float): Information gain of splitting on the attribute.
        split_info (float): Entropy of the partition sizes.
        gain_ratio (float): `gain / split_info`, or 0.0 when `split_info` is 0.
    """

    attribute: Attribute
    gain: float
    split_info: float
    gain_ratio: float


# ---------------------------------------------------------------------------
# Public interface -- Dataset
# ---------------------------------------------------------------------------


class Dataset:
    """A multiset of records sharing one attribute list.

    Each dataset owns its attribute list and its records. Partitions created
    by `split_by_attribute` receive a cloned attribute list and copied
    records, so mutating a child never affects its parent or siblings.
    Field-wise identical records are kept as separate entries and each one
    counts towards class frequencies.

    Examples:
        >>> attributes = AttributeList(
        ...     [DiscreteAttribute("outlook", ("sunny", "rainy"))],
        ...     class_attribute=DiscreteAttribute("play", ("yes", "no")),
        ... )
        >>> dataset = Dataset(attributes, [
        ...     Record({"outlook": "sunny"}, class_value="yes"),
        ...     Record({"outlook": "rainy"}, class_value="no"),
        ... ])
        >>> dataset.info()
        1.0
        >>> dataset.gain_ratio("outlook")
        1.0
    """

    def __init__(self, attributes: AttributeList, records: Iterable[Record] = ()) -> None:
        """Initialize the dataset.

        Args:
            attributes (AttributeList): The attribute list the records conform to.
                The dataset takes ownership of it.
            records (Iterable[Record]): Initial records. Defaults to none.
        """
        self._attributes = attributes
        self._records: list[Record] = list(records)

    # ------------------------------------------------------------------
    # Collection protocol
    # ------------------------------------------------------------------

    @property
    def attributes(self) -> AttributeList:
        """The attribute list owned by this dataset."""
        return self._attributes

    @property
    def records(self) -> list[Record]:
        """A shallow copy of the record list."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(list(self._records))

    def __repr__(self) -> str:
        return f"Dataset(size={len(self)}, attributes={self._attributes!r})"

    def is_empty(self) -> bool:
        """Return `True` when the dataset holds no records.

        Returns:
            bool: Whether the dataset is empty.
        """
        return not self._records

    def add(self, record: Record) -> None:
        """Append a record.

        Args:
            record (Record): The record to add. The dataset takes ownership of it.
        """
        self._records.append(record)

    def copy(self) -> Dataset:
        """Return a deep copy with its own attribute list and records.

        Returns:
            Dataset: An independent dataset with the same content.
        """
        return Dataset(self._attributes.clone(), [record.copy() for record in self._records])

    def find_malformed_records(self) -> list[Record]:
        """Return records whose size disagrees with the attribute list.

        A record is well formed when it holds one value per feature attribute
        plus its class value.

        Returns:
            list[Record]: The offending records, in dataset order.
        """
        expected_size = len(self._attributes) + 1
        return [record for record in self._records if record.size != expected_size]

    # ------------------------------------------------------------------
    # Class distribution
    # ------------------------------------------------------------------

    def class_frequencies(self) -> Counter[str]:
        """Count records per class value.

        Returns:
            Counter[str]: Frequencies keyed by class value, in first-seen order.
        """
        return Counter(record.class_value for record in self._records)

    def class_values(self) -> list[str]:
        """Return the distinct class values in first-seen order.

        Returns:
            list[str]: The class values present in the dataset.
        """
        return list(self.class_frequencies())

    def common_class_value(self) -> str | None:
        """Return the class value shared by every record.

        Returns:
            str | None: The shared class value, or `None` when records disagree
                or the dataset is empty.
        """
        class_values = self.class_values()
        return class_values[0] if len(class_values) == 1 else None

    def majority_class_value(self) -> str | None:
        """Return the most frequent class value.

        Ties go to the class value that appears first in the dataset: a later
        value only wins with a strictly greater count.

        Returns:
            str | None: The majority class value, or `None` for an empty dataset.
        """
        majority_value: str | None = None
        highest_count = 0
        for class_value, count in self.class_frequencies().items():
            if count > highest_count:
                majority_value = class_value
                highest_count = count
        return majority_value

    def observed_values(self, attribute: Attribute | str) -> list[Value]:
        """Return the distinct values of an attribute in first-seen order.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            list[Value]: The values present in the dataset.
        """
        return list(dict.fromkeys(record.value_of(attribute) for record in self._records))

    # ------------------------------------------------------------------
    # Information measures
    # ------------------------------------------------------------------

    def info(self) -> float:
        """Return the entropy of the class distribution in bits.

        Returns:
            float: `-sum(p * log2(p))` over the observed class values.

        Raises:
            EmptyDatasetError: If the dataset holds no records.
        """
        if self.is_empty():
            raise EmptyDatasetError("Cannot compute the entropy of an empty dataset")
        return _entropy(self.class_frequencies().values())

    def gain(self, attribute: Attribute | str) -> float:
        """Return the information gain of splitting on `attribute`.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            float: Entropy reduction, never negative.
        """
        return self._score(self._resolve(attribute)).gain

    def split_info(self, attribute: Attribute | str) -> float:
        """Return the entropy of the partition sizes produced by `attribute`.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            float: Split information in bits; 0.0 for a single-valued attribute.
        """
        return self._score(self._resolve(attribute)).split_info

    def gain_ratio(self, attribute: Attribute | str) -> float:
        """Return information gain divided by split information.

        A single-valued attribute has zero split information and carries no
        partition information; its gain ratio is 0.0.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            float: The gain ratio, always finite.
        """
        return self._score(self._resolve(attribute)).gain_ratio

    def score_attributes(self) -> list[AttributeScore]:
        """Score every feature attribute.

        Returns:
            list[AttributeScore]: One score per feature, in attribute list order.

        Raises:
            EmptyDatasetError: If the dataset holds no records.
            UnsupportedSplitError: If a feature attribute is numeric.
        """
        return [self._score(attribute) for attribute in self._attributes]

    def best_attribute_by_gain_ratio(self, threshold: float) -> Attribute | None:
        """Select the split attribute with the highest gain ratio.

        The candidate is the first attribute, in list order, whose gain ratio
        is positive and strictly greater than every earlier one. It is then
        rejected when its raw information gain is below `threshold` times the
        mean raw gain over all feature attributes. A gain equal to that
        bound, up to floating-point rounding, is accepted.

        Args:
            threshold (float): Required ratio of the candidate's gain to the mean gain.

        Returns:
            Attribute | None: The selected attribute, or `None` when there are
                no features, no attribute has a positive gain ratio, or the
                candidate is gain-pruned.
        """
        scores = self.score_attributes()
        if not scores:
            return None

        best_score: AttributeScore | None = None
        for score in scores:
            if score.gain_ratio > (best_score.gain_ratio if best_score is not None else 0.0):
                best_score = score
        if best_score is None:
            logger.debug("No attribute has a positive gain ratio", size=len(self))
            return None

        mean_gain = sum(score.gain for score in scores) / len(scores)
        required_gain = threshold * mean_gain
        # Equal gains can average to one ulp above each gain
        gain_pruned = best_score.gain < required_gain and not np.isclose(
            best_score.gain, required_gain, rtol=1e-9, atol=1e-12
        )
        if gain_pruned:
            logger.debug(
                "Best attribute gain-pruned",
                attribute=best_score.attribute.name,
                gain=best_score.gain,
                mean_gain=mean_gain,
                threshold=threshold,
            )
            return None

        logger.debug(
            "Best attribute selected",
            attribute=best_score.attribute.name,
            gain_ratio=best_score.gain_ratio,
            gain=best_score.gain,
            mean_gain=mean_gain,
        )
        return best_score.attribute

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------

    def split_by_attribute(self, attribute: Attribute | str) -> dict[Value, Dataset]:
        """Partition the records by their value of `attribute`.

        One child dataset is created per value observed in this dataset, in
        first-seen order. Every child receives a cloned attribute list and
        copies of its records, with `attribute` removed from both.

        Args:
            attribute (Attribute | str): The attribute or its name.

        Returns:
            dict[Value, Dataset]: Child datasets keyed by attribute value.

        Raises:
            AttributeNotFoundError: If the attribute is not a feature of this dataset.
            UnsupportedSplitError: If the attribute is numeric.
        """
        split_attribute = self._resolve(attribute)
        match split_attribute:
            case DiscreteAttribute():
                partitions = self._split_by_discrete_attribute(split_attribute)
            case NumericAttribute(name=name):
                raise UnsupportedSplitError(name)
        for child in partitions.values():
            child._remove_attribute(split_attribute)
        return partitions

    # ------------------------------------------------------------------
    # Attribute promotion
    # ------------------------------------------------------------------

    def promote_numeric_attributes(self) -> list[str]:
        """Replace discrete attributes whose values are all numbers with numeric ones.

        The matching record values are converted to `float`.

        Returns:
            list[str]: Names of the promoted attributes, in column order.
        """
        promoted: list[str] = []
        for attribute in self._attributes:
            if not isinstance(attribute, DiscreteAttribute):
                continue
            observed = DiscreteAttribute(attribute.name, tuple(str(v) for v in self.observed_values(attribute)))
            if not observed.has_only_numbers():
                continue
            self._attributes.replace(attribute.to_numeric())
            for record in self._records:
                record.promote(attribute.name)
            promoted.append(attribute.name)
        if promoted:
            logger.debug("Promoted attributes to numeric", attributes=promoted)
        return promoted

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _resolve(self, attribute: Attribute | str) -> Attribute:
        name = attribute if isinstance(attribute, str) else attribute.name
        return self._attributes.get(name)

    def _score(self, attribute: Attribute) -> AttributeScore:
        """Score one attribute from a single partition pass.

        Args:
            attribute (Attribute): A feature attribute of this dataset.

        Returns:
            AttributeScore: Gain, split information and gain ratio.
        """
        total_size = len(self)
        partitions = self.split_by_attribute(attribute)
        remainder = sum(len(child) / total_size * child.info() for child in partitions.values() if child)
        gain = max(0.0, self.info() - remainder)
        split_info = _entropy(len(child) for child in partitions.values() if child)
        gain_ratio = gain / split_info if split_info > 0.0 else 0.0
        return AttributeScore(attribute=attribute, gain=gain, split_info=split_info, gain_ratio=gain_ratio)

    def _split_by_discrete_attribute(self, attribute: DiscreteAttribute) -> dict[Value, Dataset]:
        partitions = {value: Dataset(self._attributes.clone()) for value in self.observed_values(attribute)}
        for record in self._records:
            partitions[record.value_of(attribute)].add(record.copy())
        return partitions

    def _remove_attribute(self, attribute: Attribute) -> None:
        self._attributes.remove(attribute)
        for record in self._records:
            record.remove(attribute)


def _entropy(counts: Iterable[int]) -> float:
    """Return the entropy in bits of a distribution given by positive counts.

    Args:
        counts (Iterable[int]): Positive frequencies.

    Returns:
        float: `-sum(p * log2(p))`, 0.0 for a single count.
    """
    frequencies = np.fromiter(counts, dtype=np.float64)
    if frequencies.size == 0:
        return 0.0
    probabilities = frequencies / frequencies.sum()
    return max(0.0, -float(np.sum(probabilities * np.log2(probabilities))))

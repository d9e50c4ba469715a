"""Tests for Dataset: entropy, gain, gain ratio, partitioning and class statistics."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable

import pytest
from pytest_check import check

from c45tree.attributes import AttributeList, DiscreteAttribute, NumericAttribute
from c45tree.dataset import AttributeScore, Dataset
from c45tree.exceptions import AttributeNotFoundError, EmptyDatasetError, UnsupportedSplitError
from c45tree.records import Record


class TestInfo:
    """Tests for `Dataset.info`: class-distribution entropy in bits."""

    def test_balanced_binary_classes_have_one_bit(self, binary_dataset: Dataset) -> None:
        """Two equally frequent class values should give exactly 1.0 bit."""
        # Act
        entropy = binary_dataset.info()

        # Assert
        assert entropy == pytest.approx(1.0)

    def test_pure_dataset_has_zero_entropy(self, dataset_factory: Callable[..., Dataset]) -> None:
        """A single class value should give 0.0, not -0.0 or NaN."""
        # Arrange
        dataset = dataset_factory([("x", "p"), ("y", "p")], ["A"])

        # Act
        entropy = dataset.info()

        # Assert
        with check:
            assert entropy == 0.0
        with check:
            assert math.copysign(1.0, entropy) == 1.0

    def test_weather_entropy_matches_reference_value(self, weather_dataset: Dataset) -> None:
        """Nine `yes` and five `no` records should give about 0.940 bits."""
        # Act
        entropy = weather_dataset.info()

        # Assert
        assert entropy == pytest.approx(0.9403, abs=1e-4)

    def test_empty_dataset_raises_empty_dataset_error(self, binary_dataset: Dataset) -> None:
        """Entropy of an empty dataset is undefined and must fail loudly."""
        # Arrange
        empty = Dataset(binary_dataset.attributes.clone())

        # Act / Assert
        with pytest.raises(EmptyDatasetError):
            empty.info()


class TestGainAndGainRatio:
    """Tests for `gain`, `split_info`, `gain_ratio` and `score_attributes`."""

    def test_perfect_binary_split_scores(self, binary_dataset: Dataset) -> None:
        """Splitting four records into two pure halves should give gain, split info and ratio of 1.0."""
        # Act
        gain = binary_dataset.gain("A")
        split_info = binary_dataset.split_info("A")
        gain_ratio = binary_dataset.gain_ratio("A")

        # Assert
        with check:
            assert gain == pytest.approx(1.0)
        with check:
            assert split_info == pytest.approx(1.0)
        with check:
            assert gain_ratio == pytest.approx(1.0)

    def test_uncorrelated_attribute_has_zero_gain(self, dataset_factory: Callable[..., Dataset]) -> None:
        """An attribute that leaves per-partition entropy unchanged should have zero gain."""
        # Arrange
        dataset = dataset_factory([("x", "p"), ("x", "n"), ("y", "p"), ("y", "n")], ["A"])

        # Act
        gain = dataset.gain("A")

        # Assert
        assert gain == pytest.approx(0.0)

    def test_single_valued_attribute_has_zero_gain_ratio(self, dataset_factory: Callable[..., Dataset]) -> None:
        """Zero split information should yield a gain ratio of exactly 0.0, never NaN or infinity."""
        # Arrange
        dataset = dataset_factory([("x", "p"), ("x", "n"), ("x", "n")], ["A"])

        # Act
        split_info = dataset.split_info("A")
        gain_ratio = dataset.gain_ratio("A")

        # Assert
        with check:
            assert split_info == 0.0
        with check:
            assert gain_ratio == 0.0
        with check:
            assert math.isfinite(gain_ratio)

    @pytest.mark.parametrize(
        ("attribute", "expected_gain", "expected_gain_ratio"),
        [
            ("outlook", 0.2467, 0.1564),
            ("temperature", 0.0292, 0.0188),
            ("humidity", 0.1518, 0.1518),
            ("windy", 0.0481, 0.0488),
        ],
    )
    def test_weather_scores_match_reference_values(
        self,
        weather_dataset: Dataset,
        attribute: str,
        expected_gain: float,
        expected_gain_ratio: float,
    ) -> None:
        """Gain and gain ratio on the play-tennis data should match the textbook values.

        Args:
            weather_dataset (Dataset): The play-tennis dataset.
            attribute (str): Attribute to score.
            expected_gain (float): Reference information gain.
            expected_gain_ratio (float): Reference gain ratio.
        """
        # Act
        gain = weather_dataset.gain(attribute)
        gain_ratio = weather_dataset.gain_ratio(attribute)

        # Assert
        with check:
            assert gain == pytest.approx(expected_gain, abs=1e-3)
        with check:
            assert gain_ratio == pytest.approx(expected_gain_ratio, abs=1e-3)

    def test_gain_is_never_negative(self, weather_dataset: Dataset) -> None:
        """Every attribute with more than one observed value should have non-negative gain."""
        # Act
        scores = weather_dataset.score_attributes()

        # Assert
        for score in scores:
            with check:
                assert score.gain >= 0.0, f"{score.attribute.name} has negative gain"

    def test_score_attributes_follows_attribute_order(self, weather_dataset: Dataset) -> None:
        """Scores should be returned one per feature, in attribute list order."""
        # Act
        scores = weather_dataset.score_attributes()

        # Assert
        with check:
            assert [score.attribute.name for score in scores] == weather_dataset.attributes.names
        with check:
            assert all(isinstance(score, AttributeScore) for score in scores)

    def test_unknown_attribute_raises_attribute_not_found(self, binary_dataset: Dataset) -> None:
        """Scoring a name that is not a feature should raise AttributeNotFoundError."""
        # Act / Assert
        with pytest.raises(AttributeNotFoundError):
            binary_dataset.gain("missing")

    def test_class_attribute_is_not_a_split_candidate(self, binary_dataset: Dataset) -> None:
        """The class attribute name should not resolve as a feature."""
        # Act / Assert
        with pytest.raises(AttributeNotFoundError):
            binary_dataset.gain_ratio("C")


class TestBestAttributeByGainRatio:
    """Tests for `best_attribute_by_gain_ratio`: selection and gain pruning."""

    def test_selects_highest_gain_ratio(self, weather_dataset: Dataset) -> None:
        """`outlook` has the highest gain ratio on the play-tennis data and should be selected."""
        # Act
        best = weather_dataset.best_attribute_by_gain_ratio(1.0)

        # Assert
        assert best == DiscreteAttribute("outlook")

    def test_gain_pruning_rejects_winner_below_mean_gain(self, gain_pruned_dataset: Dataset) -> None:
        """The gain-ratio winner should be rejected when its raw gain is below the mean gain."""
        # Arrange
        unbalanced_ratio = gain_pruned_dataset.gain_ratio("unbalanced")
        balanced_ratio = gain_pruned_dataset.gain_ratio("balanced")
        unbalanced_gain = gain_pruned_dataset.gain("unbalanced")
        balanced_gain = gain_pruned_dataset.gain("balanced")

        # Act
        best = gain_pruned_dataset.best_attribute_by_gain_ratio(1.0)

        # Assert
        with check:
            assert unbalanced_ratio > balanced_ratio, "precondition: unbalanced wins on gain ratio"
        with check:
            assert unbalanced_gain < (unbalanced_gain + balanced_gain) / 2, "precondition: gain below mean"
        with check:
            assert best is None

    @pytest.mark.parametrize("column_count", [3, 5, 6, 7])
    def test_gain_equal_to_mean_gain_is_accepted(
        self, dataset_factory: Callable[..., Dataset], column_count: int
    ) -> None:
        """Identical columns share one gain; averaging them must not gain-prune the winner.

        Args:
            dataset_factory (Callable[..., Dataset]): Builds a dataset from rows.
            column_count (int): Number of identical feature columns.
        """
        # Arrange
        feature_names = [f"f{index}" for index in range(column_count)]
        rows = [(*["a"] * column_count, "p"), (*["a"] * column_count, "p"), (*["b"] * column_count, "n")]
        dataset = dataset_factory(rows, feature_names)

        # Act
        best = dataset.best_attribute_by_gain_ratio(1.0)

        # Assert
        assert best == DiscreteAttribute("f0")

    def test_lower_threshold_accepts_gain_ratio_winner(self, gain_pruned_dataset: Dataset) -> None:
        """A threshold of 0.5 should accept the winner that 1.0 rejects."""
        # Act
        best = gain_pruned_dataset.best_attribute_by_gain_ratio(0.5)

        # Assert
        assert best == DiscreteAttribute("unbalanced")

    def test_threshold_above_one_prunes_single_attribute(self, binary_dataset: Dataset) -> None:
        """With one attribute the mean gain equals its gain, so any threshold above 1 prunes it."""
        # Act
        best = binary_dataset.best_attribute_by_gain_ratio(2.0)

        # Assert
        assert best is None

    def test_no_features_returns_none(self, binary_dataset: Dataset) -> None:
        """An empty feature list should return None."""
        # Arrange
        partitions = binary_dataset.split_by_attribute("A")
        child = partitions["x"]

        # Act
        best = child.best_attribute_by_gain_ratio(1.0)

        # Assert
        assert best is None

    def test_all_zero_gain_ratios_return_none(self, dataset_factory: Callable[..., Dataset]) -> None:
        """When no attribute has a positive gain ratio there is no split."""
        # Arrange
        dataset = dataset_factory([("x", "k", "p"), ("x", "k", "n")], ["A", "B"])

        # Act
        best = dataset.best_attribute_by_gain_ratio(0.0)

        # Assert
        assert best is None

    def test_ties_go_to_first_attribute_in_list_order(self, dataset_factory: Callable[..., Dataset]) -> None:
        """Two identical attributes should resolve to the one declared first."""
        # Arrange
        rows = [("x", "x", "p"), ("x", "x", "p"), ("y", "y", "n"), ("y", "y", "n")]
        dataset = dataset_factory(rows, ["second_name_first", "A"])

        # Act
        best = dataset.best_attribute_by_gain_ratio(1.0)

        # Assert
        assert best is not None and best.name == "second_name_first"

    def test_selection_is_idempotent(self, weather_dataset: Dataset, gain_pruned_dataset: Dataset) -> None:
        """Repeated calls on an unmodified dataset should return the same decision."""
        # Act
        weather_first = weather_dataset.best_attribute_by_gain_ratio(1.0)
        weather_second = weather_dataset.best_attribute_by_gain_ratio(1.0)
        pruned_first = gain_pruned_dataset.best_attribute_by_gain_ratio(1.0)
        pruned_second = gain_pruned_dataset.best_attribute_by_gain_ratio(1.0)

        # Assert
        with check:
            assert weather_first == weather_second
        with check:
            assert pruned_first is None and pruned_second is None
        with check:
            assert len(weather_dataset) == 14
        with check:
            assert "outlook" in weather_dataset.attributes


class TestSplitByAttribute:
    """Tests for `split_by_attribute`: exhaustive, disjoint, independent partitions."""

    def test_partitions_keyed_by_observed_values_in_first_seen_order(self, weather_dataset: Dataset) -> None:
        """Partition keys should be the observed values in the order they first appear."""
        # Act
        partitions = weather_dataset.split_by_attribute("outlook")

        # Assert
        assert list(partitions) == ["sunny", "overcast", "rainy"]

    def test_partitions_are_exhaustive_and_disjoint(self, weather_dataset: Dataset) -> None:
        """Re-attaching the split value to every child record should rebuild the original multiset."""
        # Arrange
        original = Counter(
            (tuple(record.values.items()), record.class_value) for record in weather_dataset
        )

        # Act
        partitions = weather_dataset.split_by_attribute("outlook")

        # Assert
        rebuilt: Counter[tuple[tuple[tuple[str, str | float], ...], str]] = Counter()
        for value, child in partitions.items():
            for record in child:
                restored = {"outlook": value, **record.values}
                ordered = tuple((name, restored[name]) for name in weather_dataset.attributes.names)
                rebuilt[(ordered, record.class_value)] += 1
        with check:
            assert sum(len(child) for child in partitions.values()) == len(weather_dataset)
        with check:
            assert rebuilt == original

    def test_split_attribute_removed_from_children_only(self, weather_dataset: Dataset) -> None:
        """Children lose the split attribute; the parent keeps it."""
        # Act
        partitions = weather_dataset.split_by_attribute("outlook")

        # Assert
        for child in partitions.values():
            with check:
                assert "outlook" not in child.attributes
            with check:
                assert all(record.size == len(child.attributes) + 1 for record in child)
        with check:
            assert "outlook" in weather_dataset.attributes
        with check:
            assert all(record.size == 5 for record in weather_dataset)

    def test_children_do_not_alias_parent_or_siblings(self, weather_dataset: Dataset) -> None:
        """Mutating one child must not affect the parent or a sibling."""
        # Arrange
        partitions = weather_dataset.split_by_attribute("outlook")
        sunny, rainy = partitions["sunny"], partitions["rainy"]

        # Act
        sunny.attributes.remove(DiscreteAttribute("humidity"))
        for record in sunny:
            record.remove("humidity")

        # Assert
        with check:
            assert "humidity" in rainy.attributes
        with check:
            assert "humidity" in weather_dataset.attributes
        with check:
            assert all(record.size == 5 for record in weather_dataset)

    def test_numeric_attribute_raises_unsupported_split(self) -> None:
        """Partitioning on a numeric attribute should fail explicitly."""
        # Arrange
        attributes = AttributeList([NumericAttribute("age")], class_attribute=DiscreteAttribute("label"))
        dataset = Dataset(attributes, [Record({"age": 31.0}, class_value="p")])

        # Act / Assert
        with pytest.raises(UnsupportedSplitError) as exc_info:
            dataset.split_by_attribute("age")
        with check:
            assert exc_info.value.attribute_name == "age"
        with check:
            assert isinstance(exc_info.value, NotImplementedError)


class TestClassStatistics:
    """Tests for common/majority class values and class frequencies."""

    def test_common_class_value_when_pure(self, dataset_factory: Callable[..., Dataset]) -> None:
        """A dataset with one class value should report it."""
        # Arrange
        dataset = dataset_factory([("x", "p"), ("y", "p")], ["A"])

        # Act / Assert
        assert dataset.common_class_value() == "p"

    def test_common_class_value_none_when_mixed(self, binary_dataset: Dataset) -> None:
        """Mixed class values should give None."""
        # Act / Assert
        assert binary_dataset.common_class_value() is None

    def test_majority_class_value(self, weather_dataset: Dataset) -> None:
        """Nine `yes` against five `no` should give `yes`."""
        # Act / Assert
        assert weather_dataset.majority_class_value() == "yes"

    def test_majority_tie_goes_to_first_seen(self, dataset_factory: Callable[..., Dataset]) -> None:
        """With equal counts the class value seen first should win."""
        # Arrange
        dataset = dataset_factory([("x", "n"), ("x", "p"), ("y", "p"), ("y", "n")], ["A"])

        # Act / Assert
        assert dataset.majority_class_value() == "n"

    def test_empty_dataset_has_no_majority(self, binary_dataset: Dataset) -> None:
        """An empty dataset should report no majority and no common class."""
        # Arrange
        empty = Dataset(binary_dataset.attributes.clone())

        # Act / Assert
        with check:
            assert empty.majority_class_value() is None
        with check:
            assert empty.common_class_value() is None

    def test_duplicate_records_all_count(self, dataset_factory: Callable[..., Dataset]) -> None:
        """Field-wise identical records should each count towards class frequencies."""
        # Arrange
        dataset = dataset_factory([("x", "p"), ("x", "p"), ("y", "n")], ["A"])

        # Act
        frequencies = dataset.class_frequencies()

        # Assert
        with check:
            assert len(dataset) == 3
        with check:
            assert frequencies == Counter({"p": 2, "n": 1})
        with check:
            assert dataset.info() == pytest.approx(0.9183, abs=1e-4)


class TestPromoteNumericAttributes:
    """Tests for `promote_numeric_attributes`."""

    def test_numeric_columns_are_promoted(self, dataset_factory: Callable[..., Dataset]) -> None:
        """Attributes whose values all parse as numbers become numeric, with float record values."""
        # Arrange
        dataset = dataset_factory([("31", "x", "p"), ("47.5", "y", "n")], ["age", "group"])

        # Act
        promoted = dataset.promote_numeric_attributes()

        # Assert
        with check:
            assert promoted == ["age"]
        with check:
            assert isinstance(dataset.attributes.get("age"), NumericAttribute)
        with check:
            assert isinstance(dataset.attributes.get("group"), DiscreteAttribute)
        with check:
            assert [record.value_of("age") for record in dataset] == [31.0, 47.5]
        with check:
            assert dataset.attributes.names == ["age", "group"]

    def test_mixed_columns_stay_discrete(self, dataset_factory: Callable[..., Dataset]) -> None:
        """A column with any non-numeric value should not be promoted."""
        # Arrange
        dataset = dataset_factory([("31", "p"), ("unknown", "n")], ["age"])

        # Act
        promoted = dataset.promote_numeric_attributes()

        # Assert
        with check:
            assert promoted == []
        with check:
            assert isinstance(dataset.attributes.get("age"), DiscreteAttribute)


class TestMalformedRecords:
    """Tests for `find_malformed_records`."""

    def test_reports_records_with_wrong_size(self, binary_dataset: Dataset) -> None:
        """Records missing or carrying extra values should be reported."""
        # Arrange
        short = Record({}, class_value="p")
        long = Record({"A": "x", "B": "z"}, class_value="n")
        binary_dataset.add(short)
        binary_dataset.add(long)

        # Act
        malformed = binary_dataset.find_malformed_records()

        # Assert
        assert malformed == [short, long]

    def test_well_formed_dataset_reports_nothing(self, weather_dataset: Dataset) -> None:
        """A conforming dataset should report no records."""
        # Act / Assert
        assert weather_dataset.find_malformed_records() == []


class TestCopy:
    """Tests for `Dataset.copy`."""

    def test_copy_is_independent(self, binary_dataset: Dataset) -> None:
        """Mutating the copy should leave the original untouched."""
        # Arrange
        duplicate = binary_dataset.copy()

        # Act
        duplicate.attributes.remove(DiscreteAttribute("A"))
        for record in duplicate:
            record.remove("A")
        duplicate.add(Record({}, class_value="p"))

        # Assert
        with check:
            assert len(binary_dataset) == 4
        with check:
            assert "A" in binary_dataset.attributes
        with check:
            assert all(record.size == 2 for record in binary_dataset)

"""Growth configuration for decision tree induction."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SIZE_THRESHOLD: float = 0.1
DEFAULT_GAIN_RATIO_PRUNE_THRESHOLD: float = 1.0


class GrowthConfig(BaseSettings):
    """Pruning thresholds threaded through every recursive growth step.

    Values can be overridden from the environment, e.g.
    `C45TREE_SIZE_THRESHOLD=0.05`.

    Attributes:
        size_threshold (float): Fraction of the root dataset size below which
            a partition becomes a leaf.
        gain_ratio_prune_threshold (float): Multiple of the mean information
            gain that the selected attribute's own gain must reach for the
            split to be accepted.

    Examples:
        >>> config = GrowthConfig(size_threshold=0.05)
        >>> config.gain_ratio_prune_threshold
        1.0
    """

    model_config = SettingsConfigDict(env_prefix="C45TREE_", frozen=True, extra="ignore")

    size_threshold: float = Field(
        default=DEFAULT_SIZE_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Fraction of the root dataset size below which a partition becomes a leaf.",
    )
    gain_ratio_prune_threshold: float = Field(
        default=DEFAULT_GAIN_RATIO_PRUNE_THRESHOLD,
        ge=0.0,
        description="Multiple of the mean information gain the chosen attribute's gain must reach.",
    )

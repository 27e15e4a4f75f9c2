"""
Rebalancing policy configuration.
"""

from dataclasses import dataclass

from rebalancer.core.constants import BALANCED_THRESHOLD_PCT, TARGET_SUM_TOLERANCE
from rebalancer.core.utils.validation import validate_tolerance


@dataclass(frozen=True)
class RebalancePolicy:
    """Overridable tolerances used by the validator and metrics calculator.

    Attributes:
        target_sum_tolerance: Allowed distance of Σtarget from 1.0
        balanced_threshold_pct: Largest absolute drift, in percentage points,
            still classified as balanced
    """

    target_sum_tolerance: float = TARGET_SUM_TOLERANCE
    balanced_threshold_pct: float = BALANCED_THRESHOLD_PCT

    def __post_init__(self) -> None:
        """Validate tolerances after initialization."""
        object.__setattr__(
            self,
            "target_sum_tolerance",
            validate_tolerance(self.target_sum_tolerance, "target_sum_tolerance"),
        )
        object.__setattr__(
            self,
            "balanced_threshold_pct",
            validate_tolerance(self.balanced_threshold_pct, "balanced_threshold_pct"),
        )

    def to_dict(self) -> dict[str, float]:
        """Convert policy to dictionary."""
        return {
            "target_sum_tolerance": self.target_sum_tolerance,
            "balanced_threshold_pct": self.balanced_threshold_pct,
        }


DEFAULT_POLICY = RebalancePolicy()

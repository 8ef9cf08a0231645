"""Optimizer settings loader for tuning the allocator from YAML."""
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from src.catalog.exceptions import UnknownStrategyError

# Depth bound for the backtracking search. Bounds combinatorial blow-up;
# not derived from input size.
MAX_SEARCH_DEPTH = 10

# Strategy evaluation order. Earlier strategies win ties on people served.
STRATEGY_SERVING_SIZE = "serving_size"
STRATEGY_EFFICIENCY = "efficiency"
STRATEGY_COMBINED_SCORING = "combined_scoring"
STRATEGY_BACKTRACKING = "backtracking"

DEFAULT_STRATEGY_ORDER = [
    STRATEGY_SERVING_SIZE,
    STRATEGY_EFFICIENCY,
    STRATEGY_COMBINED_SCORING,
    STRATEGY_BACKTRACKING,
]


@dataclass
class ScoringWeights:
    """Weights for the combined-scoring strategy."""

    serving_weight: float = 3.0
    efficiency_weight: float = 10.0
    scarcity_bonus: float = 5.0
    scarcity_ratio: float = 2.0  # requirement is "scarce" when stock <= ratio * required
    diversity_base: float = 10.0
    diversity_decay: float = 2.0  # bonus lost per batch already produced


@dataclass
class OptimizerSettings:
    """Allocator configuration. Defaults match config/optimizer.yaml."""

    max_search_depth: int = MAX_SEARCH_DEPTH
    strategies: List[str] = field(default_factory=lambda: list(DEFAULT_STRATEGY_ORDER))
    scoring: ScoringWeights = field(default_factory=ScoringWeights)

    def __post_init__(self):
        if not isinstance(self.max_search_depth, int) or self.max_search_depth < 0:
            raise ValueError(
                f"max_search_depth must be a non-negative integer; got {self.max_search_depth}"
            )
        if not self.strategies:
            raise ValueError("At least one strategy must be enabled")
        for name in self.strategies:
            if name not in DEFAULT_STRATEGY_ORDER:
                raise UnknownStrategyError(name)


class OptimizerSettingsLoader:
    """Loader for optimizer settings from YAML."""

    def __init__(self, yaml_path: str):
        """Initialize settings loader from YAML file.

        Args:
            yaml_path: Path to YAML file containing optimizer settings
        """
        self.yaml_path = Path(yaml_path)

    def load(self) -> OptimizerSettings:
        """Load optimizer settings from YAML file.

        Missing sections or keys fall back to defaults.

        Returns:
            OptimizerSettings object

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If a value is out of range or a strategy is unknown
        """
        with open(self.yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return settings_from_dict(data)


def settings_from_dict(data: Optional[dict]) -> OptimizerSettings:
    """Build OptimizerSettings from a parsed YAML/JSON mapping."""
    data = data or {}
    search = data.get("search") or {}
    scoring = data.get("scoring") or {}

    defaults = ScoringWeights()
    weights = ScoringWeights(
        serving_weight=float(scoring.get("serving_weight", defaults.serving_weight)),
        efficiency_weight=float(scoring.get("efficiency_weight", defaults.efficiency_weight)),
        scarcity_bonus=float(scoring.get("scarcity_bonus", defaults.scarcity_bonus)),
        scarcity_ratio=float(scoring.get("scarcity_ratio", defaults.scarcity_ratio)),
        diversity_base=float(scoring.get("diversity_base", defaults.diversity_base)),
        diversity_decay=float(scoring.get("diversity_decay", defaults.diversity_decay)),
    )

    strategies = data.get("strategies")
    if strategies is None:
        strategies = list(DEFAULT_STRATEGY_ORDER)

    return OptimizerSettings(
        max_search_depth=int(search.get("max_depth", MAX_SEARCH_DEPTH)),
        strategies=[str(s) for s in strategies],
        scoring=weights,
    )

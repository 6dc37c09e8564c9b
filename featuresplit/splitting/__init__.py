"""Splitting module turning features into single-scenario sub-features.

The engine walks the scenarios of a feature; a strategy decides how
Scenario Outlines are handled (kept whole, or one sub-feature per example
row).
"""

from featuresplit.splitting.engine import SplitEngine, create_strategy, split_feature
from featuresplit.splitting.protocols import OutlineStrategy, SplitContext
from featuresplit.splitting.strategies import ExampleRowStrategy, KeepOutlineStrategy

__all__ = [
    "OutlineStrategy",
    "SplitContext",
    "SplitEngine",
    "KeepOutlineStrategy",
    "ExampleRowStrategy",
    "create_strategy",
    "split_feature",
]

"""Split engine that turns one feature into single-scenario sub-features."""

from __future__ import annotations

from featuresplit.logging_config import logger
from featuresplit.models import Feature, Scenario, ScenarioOutline, SubFeature
from featuresplit.splitting.protocols import OutlineStrategy, SplitContext
from featuresplit.splitting.strategies import ExampleRowStrategy, KeepOutlineStrategy
from featuresplit.tags import TagMatcher


class SplitEngine:
    """Engine for splitting features.

    Walks the scenarios of a feature in document order and produces one
    SubFeature per Scenario. Outlines are handed to the configured strategy.
    """

    def __init__(self, strategy: OutlineStrategy) -> None:
        """Initialize the engine.

        Args:
            strategy: Strategy deciding how Scenario Outlines are split
        """
        self._strategy = strategy

    def split(self, feature: Feature, context: SplitContext) -> list[SubFeature]:
        """Split a feature into sub-features.

        Args:
            feature: The parsed feature
            context: Split context built from the same feature

        Returns:
            List of SubFeature objects in document order
        """
        sub_features: list[SubFeature] = []

        for scenario in feature.scenarios:
            if isinstance(scenario, ScenarioOutline):
                sub_features.extend(self._split_outline(scenario, context))
            elif isinstance(scenario, Scenario):
                sub_features.append(
                    context.sub_feature(scenario, context.inherited_tags(scenario))
                )
            else:
                raise TypeError(f"Unexpected feature child: {type(scenario).__name__}")

        return sub_features

    def _split_outline(
        self,
        outline: ScenarioOutline,
        context: SplitContext,
    ) -> list[SubFeature]:
        """Split an outline, skipping outlines without example rows."""
        if outline.row_count == 0:
            logger.warning(f"Missing examples for Scenario Outline: {outline.name}")
            return []
        return self._strategy.split_outline(outline, context)


def create_strategy(split_examples: bool) -> OutlineStrategy:
    """Return the outline strategy for the split policy flag."""
    if split_examples:
        return ExampleRowStrategy()
    return KeepOutlineStrategy()


def split_feature(
    feature: Feature,
    split_examples: bool = False,
    matcher: TagMatcher | None = None,
    source_name: str = "",
) -> list[SubFeature]:
    """Split a feature with the default engine setup.

    Args:
        feature: The parsed feature
        split_examples: Emit one sub-feature per example row of each outline
        matcher: Active tag matcher (match-all when omitted)
        source_name: Base name of the source file

    Returns:
        List of SubFeature objects in document order
    """
    matcher = matcher or TagMatcher.from_expression("")
    engine = SplitEngine(create_strategy(split_examples))
    context = SplitContext.for_feature(feature, matcher, source_name)
    return engine.split(feature, context)

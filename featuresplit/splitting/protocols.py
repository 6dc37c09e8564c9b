"""Protocols and data structures for the splitting system."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from featuresplit.models import (
    Feature,
    Scenario,
    ScenarioOutline,
    SubFeature,
    Tag,
    merge_tags,
)
from featuresplit.tags import TagMatcher


@dataclass(frozen=True)
class SplitContext:
    """Context for splitting one feature.

    Carries the feature template and the active tag matcher through the
    walk over the feature's scenarios.
    """

    template: Feature
    """Feature with only its Background child kept."""

    matcher: TagMatcher
    """Matcher of the active tag expression."""

    source_name: str = ""
    """Base name of the source file (without suffix)."""

    @classmethod
    def for_feature(
        cls,
        feature: Feature,
        matcher: TagMatcher,
        source_name: str = "",
    ) -> SplitContext:
        """Create a context whose template is derived from the feature."""
        return cls(
            template=feature.as_template(),
            matcher=matcher,
            source_name=source_name,
        )

    @property
    def feature_tags(self) -> tuple[Tag, ...]:
        """Tags declared on the feature itself."""
        return self.template.tags

    def inherited_tags(self, scenario: Scenario | ScenarioOutline) -> tuple[Tag, ...]:
        """Scenario tags merged with the feature tags."""
        return merge_tags(scenario.tags, self.feature_tags)

    def sub_feature(
        self,
        scenario: Scenario | ScenarioOutline,
        tags: tuple[Tag, ...],
    ) -> SubFeature:
        """Build a sub-feature of the template holding a single scenario."""
        return SubFeature(
            feature=self.template,
            scenario=scenario,
            tags=tags,
            source_name=self.source_name,
        )


class OutlineStrategy(Protocol):
    """Protocol for turning a Scenario Outline into sub-features.

    Implementations decide whether an outline stays whole or is exploded
    into one sub-feature per example row, and which tags the results carry.
    """

    def split_outline(
        self,
        outline: ScenarioOutline,
        context: SplitContext,
    ) -> list[SubFeature]:
        """Produce the sub-features for one outline.

        Args:
            outline: An outline with at least one example row
            context: Current split context

        Returns:
            Sub-features in example block order, then row order
        """
        ...

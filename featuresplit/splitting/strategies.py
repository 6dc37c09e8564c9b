"""Outline split strategy implementations."""

from __future__ import annotations

from dataclasses import dataclass, replace

from featuresplit.logging_config import logger
from featuresplit.models import ExampleBlock, ScenarioOutline, SubFeature, merge_tags
from featuresplit.splitting.protocols import SplitContext
from featuresplit.tags import all_literal_tags_present


@dataclass
class KeepOutlineStrategy:
    """Default strategy: keep every outline whole.

    The outline is emitted once with all of its Examples tables. Tags of an
    Examples table are added to the outline only when the scenario tags plus
    that table's tags contain every ``and``-joined literal of the tag
    expression (see ``all_literal_tags_present``). Feature tags do not take
    part in that check.
    """

    def split_outline(
        self,
        outline: ScenarioOutline,
        context: SplitContext,
    ) -> list[SubFeature]:
        """Emit the outline as a single sub-feature."""
        tags = context.inherited_tags(outline)
        expression = context.matcher.expression

        for block in outline.examples:
            combined = [tag.name for tag in (*outline.tags, *block.tags)]
            if all_literal_tags_present(expression, combined):
                logger.debug(
                    f"Examples tags {[tag.name for tag in block.tags]} merged into '{outline.name}'"
                )
                tags = merge_tags(tags, block.tags)

        return [context.sub_feature(outline, tags)]


@dataclass
class ExampleRowStrategy:
    """Strategy that emits one sub-feature per example row.

    When any Examples table of the outline is tagged, every row carries the
    tags of its own table. Otherwise rows only carry the scenario and feature
    tags.
    """

    def split_outline(
        self,
        outline: ScenarioOutline,
        context: SplitContext,
    ) -> list[SubFeature]:
        """Explode the outline into single-row sub-features."""
        inherited = context.inherited_tags(outline)
        tagged = outline.has_tagged_examples

        sub_features: list[SubFeature] = []
        for block in outline.examples:
            tags = merge_tags(inherited, block.tags) if tagged else inherited
            for row in block.rows:
                single_row = self._single_row_outline(outline, block, row)
                sub_features.append(context.sub_feature(single_row, tags))
        return sub_features

    def _single_row_outline(
        self,
        outline: ScenarioOutline,
        block: ExampleBlock,
        row: tuple[str, ...],
    ) -> ScenarioOutline:
        """Copy of the outline with one Examples table holding one row."""
        return replace(outline, examples=(block.with_rows((row,)),))

"""Document model for parsed feature files.

All nodes are frozen dataclasses holding tuples, so a SubFeature built from
a parsed Feature shares no mutable state with any other SubFeature.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Union

from featuresplit.config import DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Tag:
    """A tag such as ``@smoke``."""

    name: str


@dataclass(frozen=True)
class DataTable:
    """Table argument attached to a step."""

    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class DocString:
    """Literal multi-line text argument attached to a step."""

    content: str
    delimiter: str = '"""'
    media_type: str | None = None


StepArgument = Union[DataTable, DocString]


@dataclass(frozen=True)
class Step:
    """A single step.

    The keyword keeps the trailing space reported by the parser
    (e.g. ``"Given "``), so ``keyword + text`` is the original step line.
    """

    keyword: str
    text: str
    argument: StepArgument | None = None


@dataclass(frozen=True)
class ExampleBlock:
    """An Examples table bound to a Scenario Outline."""

    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    tags: tuple[Tag, ...] = ()
    keyword: str = "Examples"
    name: str = ""

    @property
    def row_count(self) -> int:
        """Number of data rows (the header is not counted)."""
        return len(self.rows)

    def with_rows(self, rows: tuple[tuple[str, ...], ...]) -> ExampleBlock:
        """Return a copy of this block holding only the given rows."""
        return replace(self, rows=rows)


@dataclass(frozen=True)
class Background:
    """Steps shared by every scenario of a feature."""

    steps: tuple[Step, ...] = ()
    keyword: str = "Background"
    name: str = ""


@dataclass(frozen=True)
class Scenario:
    """A concrete scenario."""

    name: str
    steps: tuple[Step, ...] = ()
    tags: tuple[Tag, ...] = ()
    keyword: str = "Scenario"


@dataclass(frozen=True)
class ScenarioOutline:
    """A parameterized scenario with one or more Examples tables."""

    name: str
    steps: tuple[Step, ...] = ()
    tags: tuple[Tag, ...] = ()
    examples: tuple[ExampleBlock, ...] = ()
    keyword: str = "Scenario Outline"

    @property
    def row_count(self) -> int:
        """Total number of data rows across all Examples tables."""
        return sum(block.row_count for block in self.examples)

    @property
    def has_tagged_examples(self) -> bool:
        """True if at least one Examples table carries tags."""
        return any(block.tags for block in self.examples)


ScenarioLike = Union[Background, Scenario, ScenarioOutline]


@dataclass(frozen=True)
class Feature:
    """A parsed feature file."""

    name: str
    children: tuple[ScenarioLike, ...] = ()
    tags: tuple[Tag, ...] = ()
    keyword: str = "Feature"
    language: str = DEFAULT_LANGUAGE
    skipped_rules: tuple[str, ...] = ()
    """Names of Rule blocks whose scenarios were not taken over."""

    @property
    def background(self) -> Background | None:
        """The Background child, if the feature has one."""
        for child in self.children:
            if isinstance(child, Background):
                return child
        return None

    @property
    def scenarios(self) -> tuple[Scenario | ScenarioOutline, ...]:
        """Non-Background children in document order."""
        return tuple(
            child for child in self.children if not isinstance(child, Background)
        )

    def as_template(self) -> Feature:
        """Return this feature with only its Background child kept."""
        background = self.background
        return replace(
            self, children=(background,) if background else (), skipped_rules=()
        )


@dataclass(frozen=True)
class SubFeature:
    """A feature reduced to a single scenario.

    Attributes:
        feature: Feature template (tags, name, Background) without scenarios
        scenario: The one scenario or outline this sub-feature runs
        tags: Resolved tag set of the scenario, inherited tags included
        source_name: Base name of the file the scenario came from
    """

    feature: Feature
    scenario: Scenario | ScenarioOutline
    tags: tuple[Tag, ...] = ()
    source_name: str = field(default="", compare=False)

    @property
    def tag_names(self) -> tuple[str, ...]:
        """Names of the resolved tags."""
        return tuple(tag.name for tag in self.tags)

    @property
    def background(self) -> Background | None:
        return self.feature.background

    @property
    def children(self) -> tuple[ScenarioLike, ...]:
        """Background (if any) followed by the scenario."""
        background = self.background
        if background is None:
            return (self.scenario,)
        return (background, self.scenario)


def merge_tags(*groups: tuple[Tag, ...]) -> tuple[Tag, ...]:
    """Return the ordered union of tag groups.

    Duplicates are compared by exact name; the first occurrence wins.
    """
    seen: set[str] = set()
    merged: list[Tag] = []
    for group in groups:
        for tag in group:
            if tag.name not in seen:
                seen.add(tag.name)
                merged.append(tag)
    return tuple(merged)

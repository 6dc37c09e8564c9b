"""Tests for outline split strategies."""

from featuresplit.models import ExampleBlock, Feature, ScenarioOutline, Step, Tag
from featuresplit.splitting import ExampleRowStrategy, KeepOutlineStrategy, SplitContext
from featuresplit.tags import TagMatcher


def tags(*names: str) -> tuple[Tag, ...]:
    return tuple(Tag(name) for name in names)


def make_outline(*blocks: ExampleBlock, tag_names: tuple[str, ...] = ()) -> ScenarioOutline:
    return ScenarioOutline(
        name="Add",
        tags=tags(*tag_names),
        steps=(Step("When ", "I add <a> and <b>"),),
        examples=blocks,
    )


def make_context(expression: str = "", feature_tags: tuple[str, ...] = ()) -> SplitContext:
    feature = Feature(name="Calculator", tags=tags(*feature_tags))
    return SplitContext.for_feature(feature, TagMatcher.from_expression(expression))


class TestKeepOutlineStrategy:
    """Tests for KeepOutlineStrategy."""

    def test_keeps_all_example_blocks(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a", "b"), rows=(("1", "2"),)),
            ExampleBlock(header=("a", "b"), rows=(("3", "4"), ("5", "6"))),
        )

        result = KeepOutlineStrategy().split_outline(outline, make_context())

        assert len(result) == 1
        assert result[0].scenario == outline

    def test_tags_are_scenario_and_feature_tags(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),), tags=tags("@e")),
            tag_names=("@o",),
        )

        result = KeepOutlineStrategy().split_outline(
            outline, make_context(feature_tags=("@f",))
        )

        assert result[0].tag_names == ("@o", "@f")

    def test_example_tags_merged_when_literal_tags_present(self) -> None:
        """Examples tags join when scenario plus block tags hold every and-part."""
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),), tags=tags("@fast")),
            ExampleBlock(header=("a",), rows=(("2",),), tags=tags("@slow")),
            tag_names=("@math",),
        )

        result = KeepOutlineStrategy().split_outline(
            outline, make_context("@math and @fast")
        )

        assert result[0].tag_names == ("@math", "@fast")

    def test_example_tags_not_merged_for_blank_expression(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),), tags=tags("@fast")),
        )

        result = KeepOutlineStrategy().split_outline(outline, make_context(""))

        assert result[0].tag_names == ()

    def test_feature_tags_do_not_count_for_the_literal_check(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),), tags=tags("@fast")),
        )

        result = KeepOutlineStrategy().split_outline(
            outline, make_context("@f and @fast", feature_tags=("@f",))
        )

        assert result[0].tag_names == ("@f",)

    def test_or_expression_does_not_merge(self) -> None:
        """The literal check does not evaluate 'or'."""
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),), tags=tags("@fast")),
        )

        result = KeepOutlineStrategy().split_outline(
            outline, make_context("@fast or @slow")
        )

        assert result[0].tag_names == ()


class TestExampleRowStrategy:
    """Tests for ExampleRowStrategy."""

    def test_untagged_rows_share_the_same_tags(self) -> None:
        """Rows (1,2) and (3,4) become two single-row outlines with equal tags."""
        outline = make_outline(
            ExampleBlock(header=("a", "b"), rows=(("1", "2"), ("3", "4"))),
            tag_names=("@o",),
        )

        result = ExampleRowStrategy().split_outline(
            outline, make_context(feature_tags=("@f",))
        )

        assert len(result) == 2
        assert [sub.scenario.examples[0].rows for sub in result] == [
            (("1", "2"),),
            (("3", "4"),),
        ]
        assert result[0].tag_names == result[1].tag_names == ("@o", "@f")
        for sub in result:
            assert len(sub.scenario.examples) == 1
            assert sub.scenario.examples[0].header == ("a", "b")

    def test_untagged_blocks_are_flattened(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),)),
            ExampleBlock(header=("a",), rows=(("2",), ("3",))),
        )

        result = ExampleRowStrategy().split_outline(outline, make_context())

        assert [sub.scenario.examples[0].rows[0] for sub in result] == [
            ("1",),
            ("2",),
            ("3",),
        ]

    def test_rows_keep_their_own_header(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",),)),
            ExampleBlock(header=("b",), rows=(("2",),)),
        )

        result = ExampleRowStrategy().split_outline(outline, make_context())

        assert [sub.scenario.examples[0].header for sub in result] == [("a",), ("b",)]

    def test_tag_row_coupling(self) -> None:
        """Only rows of the tagged block carry its tags."""
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(("1",), ("2",))),
            ExampleBlock(header=("a",), rows=(("3",), ("4",)), tags=tags("@b2")),
            tag_names=("@o",),
        )

        result = ExampleRowStrategy().split_outline(
            outline, make_context(feature_tags=("@f",))
        )

        assert [sub.tag_names for sub in result] == [
            ("@o", "@f"),
            ("@o", "@f"),
            ("@o", "@f", "@b2"),
            ("@o", "@f", "@b2"),
        ]

    def test_tagged_rows_keep_their_block(self) -> None:
        tagged = ExampleBlock(
            header=("a",), rows=(("1",),), tags=tags("@x"), name="Tagged"
        )
        outline = make_outline(tagged)

        result = ExampleRowStrategy().split_outline(outline, make_context())

        assert result[0].scenario.examples == (tagged,)

    def test_empty_block_contributes_nothing(self) -> None:
        outline = make_outline(
            ExampleBlock(header=("a",), rows=(), tags=tags("@empty")),
            ExampleBlock(header=("a",), rows=(("1",),)),
        )

        result = ExampleRowStrategy().split_outline(outline, make_context())

        assert len(result) == 1
        assert result[0].tag_names == ()

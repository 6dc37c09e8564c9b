"""Tests for the gherkin-official parser adapter."""

import textwrap
from pathlib import Path

import pytest

from featuresplit.errors import FeatureParseError
from featuresplit.models import (
    Background,
    DataTable,
    DocString,
    Scenario,
    ScenarioOutline,
)
from featuresplit.parsers import parse_feature_file, parse_feature_text


def parse(text: str, language: str = "en"):
    return parse_feature_text(textwrap.dedent(text).lstrip(), language=language)


class TestParseFeatureText:
    """Tests for parse_feature_text."""

    def test_feature_tags_and_name(self) -> None:
        feature = parse(
            """
            @smoke @login
            Feature: Login
              Scenario: Works
                Given a user
            """
        )

        assert feature is not None
        assert feature.name == "Login"
        assert feature.keyword == "Feature"
        assert feature.language == "en"
        assert [tag.name for tag in feature.tags] == ["@smoke", "@login"]

    def test_children_keep_document_order(self) -> None:
        feature = parse(
            """
            Feature: Order
              Background:
                Given a setup
              Scenario: First
                Given one
              Scenario Outline: Second
                Given <n>
                Examples:
                  | n |
                  | 1 |
            """
        )

        assert [type(child) for child in feature.children] == [
            Background,
            Scenario,
            ScenarioOutline,
        ]
        assert feature.background.steps[0].text == "a setup"

    def test_step_keyword_keeps_trailing_space(self) -> None:
        feature = parse(
            """
            Feature: Steps
              Scenario: S
                Given a user
                And a password
            """
        )

        steps = feature.scenarios[0].steps
        assert steps[0].keyword == "Given "
        assert steps[1].keyword == "And "
        assert steps[0].keyword + steps[0].text == "Given a user"

    def test_data_table_argument(self) -> None:
        feature = parse(
            """
            Feature: Tables
              Scenario: S
                Given the users:
                  | name  | role  |
                  | alice | admin |
            """
        )

        argument = feature.scenarios[0].steps[0].argument
        assert isinstance(argument, DataTable)
        assert argument.rows == (("name", "role"), ("alice", "admin"))

    def test_doc_string_argument(self) -> None:
        feature = parse(
            '''
            Feature: Docs
              Scenario: S
                Given the payload:
                  """json
                  {"a": 1}
                  """
            '''
        )

        argument = feature.scenarios[0].steps[0].argument
        assert isinstance(argument, DocString)
        assert argument.content == '{"a": 1}'
        assert argument.media_type == "json"
        assert argument.delimiter == '"""'

    def test_examples_tables(self) -> None:
        feature = parse(
            """
            Feature: Outlines
              @outline
              Scenario Outline: Add
                Given <a> and <b>
                Examples:
                  | a | b |
                  | 1 | 2 |
                  | 3 | 4 |
                @fast
                Examples: Named
                  | a | b |
                  | 5 | 6 |
            """
        )

        outline = feature.scenarios[0]
        assert isinstance(outline, ScenarioOutline)
        assert [tag.name for tag in outline.tags] == ["@outline"]
        first, second = outline.examples
        assert first.header == ("a", "b")
        assert first.rows == (("1", "2"), ("3", "4"))
        assert first.tags == ()
        assert second.name == "Named"
        assert [tag.name for tag in second.tags] == ["@fast"]

    def test_outline_without_examples_is_still_an_outline(self) -> None:
        feature = parse(
            """
            Feature: Empty
              Scenario Outline: Nothing
                Given <x>
            """
        )

        outline = feature.scenarios[0]
        assert isinstance(outline, ScenarioOutline)
        assert outline.row_count == 0

    def test_empty_document_returns_none(self) -> None:
        assert parse_feature_text("# just a comment\n") is None

    def test_language_hint(self) -> None:
        feature = parse(
            """
            Functionaliteit: Inloggen
              Scenario: Werkt
                Gegeven een gebruiker
            """,
            language="nl",
        )

        assert feature.language == "nl"
        assert feature.keyword == "Functionaliteit"
        assert feature.scenarios[0].steps[0].keyword == "Gegeven "

    def test_language_header_wins_over_hint(self) -> None:
        feature = parse(
            """
            # language: fr
            Fonctionnalité: Connexion
              Scénario: Marche
                Soit un utilisateur
            """
        )

        assert feature.language == "fr"

    def test_rule_blocks_are_skipped(self) -> None:
        feature = parse(
            """
            Feature: Rules
              Scenario: Top level
                Given one
              Rule: Grouped
                Scenario: Inside rule
                  Given two
            """
        )

        assert [scenario.name for scenario in feature.scenarios] == ["Top level"]
        assert feature.skipped_rules == ("Grouped",)

    def test_malformed_document_raises(self) -> None:
        with pytest.raises(FeatureParseError):
            parse_feature_text("Feature: Broken\n  @wip\n  Given a step without a scenario\n")

    def test_unknown_language_raises(self) -> None:
        with pytest.raises(FeatureParseError, match="Language not supported: xx-unknown"):
            parse_feature_text("Feature: X\n", language="xx-unknown")

    def test_unknown_language_names_the_path(self) -> None:
        with pytest.raises(FeatureParseError) as exc_info:
            parse_feature_text("Feature: X\n", language="xx-unknown", path=Path("a.feature"))

        assert exc_info.value.path == Path("a.feature")


class TestParseFeatureFile:
    """Tests for parse_feature_file."""

    def test_parse_fixture(self, fixtures_dir: Path) -> None:
        feature = parse_feature_file(fixtures_dir / "login.feature")

        assert feature.name == "Login"
        assert [scenario.name for scenario in feature.scenarios] == [
            "Successful login",
            "Locked account",
        ]

    def test_error_names_the_file(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.feature"
        path.write_text("Feature: A\n  @wip\n  Given a step\n", encoding="utf-8")

        with pytest.raises(FeatureParseError) as exc_info:
            parse_feature_file(path)

        assert exc_info.value.path == path
        assert "broken.feature" in str(exc_info.value)

    def test_missing_file_raises_os_error(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            parse_feature_file(tmp_path / "missing.feature")

"""Gherkin parsing using gherkin-official.

The parser returns a dict-based AST; this module converts it into the
immutable document model right away so nothing downstream touches raw
dicts.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gherkin.dialect import Dialect
from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_matcher import TokenMatcher
from gherkin.token_scanner import TokenScanner

from featuresplit.config import DEFAULT_LANGUAGE
from featuresplit.errors import FeatureParseError
from featuresplit.logging_config import logger
from featuresplit.models import (
    Background,
    DataTable,
    DocString,
    ExampleBlock,
    Feature,
    Scenario,
    ScenarioLike,
    ScenarioOutline,
    Step,
    Tag,
)


def parse_feature_text(
    text: str,
    language: str = DEFAULT_LANGUAGE,
    path: Path | None = None,
) -> Feature | None:
    """Parse Gherkin text into a Feature.

    Args:
        text: The feature file content
        language: Dialect hint; a ``# language:`` header in the text wins
        path: Source path, only used in error messages

    Returns:
        The parsed Feature, or None if the document has no Feature

    Raises:
        FeatureParseError: If the text is not valid Gherkin or the language
            hint names no known dialect
    """
    if Dialect.for_name(language) is None:
        raise FeatureParseError(path, f"Language not supported: {language}")

    try:
        document = Parser().parse(TokenScanner(text), TokenMatcher(language))
    except ParserError as e:
        raise FeatureParseError(path, str(e)) from e

    feature = document.get("feature")
    if not feature:
        return None
    return _convert_feature(feature)


def parse_feature_file(path: Path, language: str = DEFAULT_LANGUAGE) -> Feature | None:
    """Read and parse a feature file.

    Raises:
        OSError: If the file cannot be read
        FeatureParseError: If the file is not valid Gherkin
    """
    text = path.read_text(encoding="utf-8")
    return parse_feature_text(text, language=language, path=path)


def _convert_feature(node: dict[str, Any]) -> Feature:
    language = node.get("language") or DEFAULT_LANGUAGE
    dialect = Dialect.for_name(language)
    outline_keywords = set(dialect.scenario_outline_keywords) if dialect else set()

    children: list[ScenarioLike] = []
    skipped_rules: list[str] = []
    for child in node.get("children", []):
        if "background" in child:
            children.append(_convert_background(child["background"]))
        elif "scenario" in child:
            children.append(_convert_scenario(child["scenario"], outline_keywords))
        elif "rule" in child:
            rule_name = child["rule"].get("name", "")
            logger.warning(f"Rule '{rule_name}' is not split; its scenarios are skipped")
            skipped_rules.append(rule_name)

    return Feature(
        keyword=node.get("keyword", "Feature"),
        name=node.get("name", ""),
        language=language,
        tags=_convert_tags(node.get("tags", [])),
        children=tuple(children),
        skipped_rules=tuple(skipped_rules),
    )


def _convert_background(node: dict[str, Any]) -> Background:
    return Background(
        keyword=node.get("keyword", "Background"),
        name=node.get("name", ""),
        steps=_convert_steps(node.get("steps", [])),
    )


def _convert_scenario(
    node: dict[str, Any],
    outline_keywords: set[str],
) -> Scenario | ScenarioOutline:
    """Convert a scenario node.

    gherkin-official reports outlines as scenarios with examples; the
    keyword decides for outlines that have no Examples section at all.
    """
    keyword = node.get("keyword", "Scenario")
    examples = node.get("examples", [])
    if examples or keyword in outline_keywords:
        return ScenarioOutline(
            keyword=keyword,
            name=node.get("name", ""),
            tags=_convert_tags(node.get("tags", [])),
            steps=_convert_steps(node.get("steps", [])),
            examples=tuple(_convert_examples(block) for block in examples),
        )
    return Scenario(
        keyword=keyword,
        name=node.get("name", ""),
        tags=_convert_tags(node.get("tags", [])),
        steps=_convert_steps(node.get("steps", [])),
    )


def _convert_examples(node: dict[str, Any]) -> ExampleBlock:
    header = node.get("tableHeader")
    return ExampleBlock(
        keyword=node.get("keyword", "Examples"),
        name=node.get("name", ""),
        tags=_convert_tags(node.get("tags", [])),
        header=_convert_row(header) if header else (),
        rows=tuple(_convert_row(row) for row in node.get("tableBody", [])),
    )


def _convert_steps(nodes: list[dict[str, Any]]) -> tuple[Step, ...]:
    return tuple(
        Step(
            keyword=node["keyword"],
            text=node.get("text", ""),
            argument=_convert_argument(node),
        )
        for node in nodes
    )


def _convert_argument(node: dict[str, Any]) -> DataTable | DocString | None:
    if "dataTable" in node:
        return DataTable(
            rows=tuple(_convert_row(row) for row in node["dataTable"].get("rows", []))
        )
    if "docString" in node:
        doc_string = node["docString"]
        return DocString(
            content=doc_string.get("content", ""),
            delimiter=doc_string.get("delimiter", '"""'),
            media_type=doc_string.get("mediaType") or None,
        )
    return None


def _convert_row(node: dict[str, Any]) -> tuple[str, ...]:
    return tuple(cell.get("value", "") for cell in node.get("cells", []))


def _convert_tags(nodes: list[dict[str, Any]]) -> tuple[Tag, ...]:
    return tuple(Tag(name=node["name"]) for node in nodes)

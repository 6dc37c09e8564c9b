"""Gherkin writer for split feature files."""

from pathlib import Path

from featuresplit.config import DEFAULT_LANGUAGE, FEATURE_SUFFIX
from featuresplit.errors import SerializationError
from featuresplit.models import (
    Background,
    DataTable,
    DocString,
    ExampleBlock,
    ScenarioOutline,
    Step,
    SubFeature,
    Tag,
)

LINE_DELIMITER = "\n"


def _escape_cell(value: str) -> str:
    """Escape a table cell so the parser reads back the same value."""
    return value.replace("\\", "\\\\").replace("|", "\\|").replace("\n", "\\n")


def _table_row(cells: tuple[str, ...]) -> str:
    return "|" + "".join(f"{_escape_cell(cell)}|" for cell in cells)


def _title(keyword: str, name: str) -> str:
    return f"{keyword}: {name}".rstrip()


def _tag_lines(tags: tuple[Tag, ...], skip: set[str]) -> list[str]:
    """One line per tag, leaving out tags that are already in effect."""
    return [tag.name for tag in tags if tag.name not in skip]


def _render_argument(step: Step) -> list[str]:
    argument = step.argument
    if argument is None:
        return []
    if isinstance(argument, DataTable):
        return [_table_row(row) for row in argument.rows]
    if isinstance(argument, DocString):
        delimiter = argument.delimiter
        # The parser unescapes \"\"\" (or \`\`\`) inside the content
        escaped = "\\" + "\\".join(delimiter)
        content = argument.content.replace(delimiter, escaped)
        return [f"{delimiter}{argument.media_type or ''}", content, delimiter]
    raise SerializationError(
        f"Unsupported argument type '{type(argument).__name__}' on step '{step.keyword}{step.text}'"
    )


def _render_steps(steps: tuple[Step, ...]) -> list[str]:
    lines: list[str] = []
    for step in steps:
        lines.append(f"{step.keyword}{step.text}")
        lines.extend(_render_argument(step))
    return lines


def _render_examples(block: ExampleBlock, in_effect: set[str]) -> list[str]:
    lines = _tag_lines(block.tags, in_effect)
    lines.append(_title(block.keyword, block.name))
    lines.append(_table_row(block.header))
    lines.extend(_table_row(row) for row in block.rows)
    return lines


def render_lines(sub_feature: SubFeature) -> list[str]:
    """Render a sub-feature as a list of Gherkin lines.

    Tags are written at the outermost level that carries them: feature tags
    on the feature, resolved scenario tags not already on the feature on the
    scenario, and remaining Examples tags on their Examples table.

    Raises:
        SerializationError: If a step argument has an unsupported type
    """
    feature = sub_feature.feature
    lines: list[str] = []

    if feature.language != DEFAULT_LANGUAGE:
        lines.append(f"# language: {feature.language}")

    lines.extend(tag.name for tag in feature.tags)
    lines.append(_title(feature.keyword, feature.name))
    in_effect = {tag.name for tag in feature.tags}

    for child in sub_feature.children:
        if isinstance(child, Background):
            lines.append(_title(child.keyword, child.name))
            lines.extend(_render_steps(child.steps))
            continue

        lines.extend(_tag_lines(sub_feature.tags, in_effect))
        lines.append(_title(child.keyword, child.name))
        lines.extend(_render_steps(child.steps))

        if isinstance(child, ScenarioOutline):
            scenario_tags = in_effect | set(sub_feature.tag_names)
            for block in child.examples:
                lines.extend(_render_examples(block, scenario_tags))

    return lines


def render_feature(sub_feature: SubFeature) -> str:
    """Render a sub-feature as Gherkin text.

    Args:
        sub_feature: The sub-feature to render

    Returns:
        Feature file content with Unix line endings and a trailing newline

    Raises:
        SerializationError: If a step argument has an unsupported type
    """
    return LINE_DELIMITER.join(render_lines(sub_feature)) + LINE_DELIMITER


def output_file_name(source_name: str, sequence: int) -> str:
    """Name of the n-th generated file, e.g. ``login_3.feature``."""
    return f"{source_name}_{sequence}{FEATURE_SUFFIX}"


def write_text(content: str, output_file: Path) -> Path:
    """Write rendered feature text with Unix line endings."""
    with open(output_file, "w", encoding="utf-8", newline="\n") as f:
        f.write(content)

    return output_file


def write_feature(sub_feature: SubFeature, output_file: Path) -> Path:
    """Render a sub-feature and write it to a file.

    The text is rendered completely before the file is opened, so a
    SerializationError never leaves a truncated file behind.

    Returns:
        Path to the written file
    """
    return write_text(render_feature(sub_feature), output_file)

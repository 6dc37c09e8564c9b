"""
Step definitions for splitting feature files.
"""

from behave import given, then, when  # type: ignore[import-untyped]

from featuresplit.config import SplitOptions
from featuresplit.orchestrator import perform_setup


# === Source files ===


@given('the feature file "{name}":')  # type: ignore[misc]
def step_given_feature_file(context, name):
    """Write a source feature file from the doc string."""
    path = context.source_dir / f"{name}.feature"
    path.write_text(context.text + "\n", encoding="utf-8")


# === Running ===


def _run(context, **options):
    context.report = perform_setup(
        SplitOptions(
            source_spec_directory=str(context.source_dir),
            tmp_spec_directory=str(context.output_dir),
            **options,
        )
    )


@when("I split the feature files")  # type: ignore[misc]
def step_when_split(context):
    _run(context)


@when('I split the feature files with tag expression "{expression}"')  # type: ignore[misc]
def step_when_split_with_tags(context, expression):
    _run(context, tag_expression=expression)


@when("I split the feature files with one file per example row")  # type: ignore[misc]
def step_when_split_examples(context):
    _run(context, split_scenario_outline_multiple_examples=True)


# === Results ===


@then('the files "{names}" are written')  # type: ignore[misc]
def step_then_files_written(context, names):
    expected = [name.strip() for name in names.split(",")]
    actual = sorted(path.name for path in context.output_dir.iterdir())
    assert actual == sorted(expected), f"Expected {expected}, got {actual}"


@then('"{name}" contains:')  # type: ignore[misc]
def step_then_file_contains(context, name):
    content = (context.output_dir / name).read_text(encoding="utf-8")
    assert content == context.text + "\n", f"Unexpected content:\n{content}"


@then("no files are written")  # type: ignore[misc]
def step_then_no_files(context):
    assert list(context.output_dir.iterdir()) == []


@then("the run reports that nothing matched")  # type: ignore[misc]
def step_then_no_match(context):
    assert context.report.no_match
    assert context.report.ok

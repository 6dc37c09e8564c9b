"""
featuresplit - split Gherkin feature files into one file per scenario.

Each top-level Scenario (or, optionally, each Scenario Outline example row)
becomes its own feature file, keeping the Background and the inherited
tags, so test runners can schedule every scenario independently.

Example usage:

    from featuresplit import SplitOptions, perform_setup

    report = perform_setup(
        SplitOptions(
            source_spec_directory="features",
            tmp_spec_directory="tmp/features",
            tag_expression="@smoke and not @slow",
        )
    )
    print(report.written)
"""

__version__ = "0.1.0"

from featuresplit.config import SplitOptions  # noqa: E402
from featuresplit.orchestrator import (  # noqa: E402
    FileOutcome,
    FileStatus,
    SplitReport,
    compile_features,
    perform_setup,
)

__all__ = [
    "SplitOptions",
    "SplitReport",
    "FileOutcome",
    "FileStatus",
    "compile_features",
    "perform_setup",
]

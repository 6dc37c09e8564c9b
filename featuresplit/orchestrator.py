"""Orchestration of a split run over a directory of feature files."""

from __future__ import annotations

import glob
import itertools
import os
import shutil
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from featuresplit.config import FEATURE_SUFFIX, SplitOptions
from featuresplit.errors import ConfigurationError, FeatureParseError, SerializationError
from featuresplit.filtering import filter_sub_features
from featuresplit.logging_config import logger
from featuresplit.parsers.gherkin_parser import parse_feature_file
from featuresplit.splitting import split_feature
from featuresplit.storage.feature_writer import output_file_name, render_feature, write_text
from featuresplit.tags import TagMatcher


class FileStatus(str, Enum):
    """Outcome of processing one source file."""

    WRITTEN = "written"
    NO_SCENARIOS = "no_scenarios"
    READ_FAILED = "read_failed"
    PARSE_FAILED = "parse_failed"
    PARTIAL = "partial"


@dataclass
class FileOutcome:
    """What happened to one source file."""

    source: Path
    status: FileStatus
    written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    split_count: int = 0
    matched_count: int = 0

    @property
    def failed(self) -> bool:
        """True if the file, or any of its sub-features, could not be processed."""
        return self.status in (
            FileStatus.READ_FAILED,
            FileStatus.PARSE_FAILED,
            FileStatus.PARTIAL,
        )


@dataclass
class SplitReport:
    """Aggregated outcome of a split run."""

    tag_expression: str = ""
    outcomes: list[FileOutcome] = field(default_factory=list)
    no_match: bool = False

    @property
    def written(self) -> list[Path]:
        """All generated files, in the order they were written."""
        return [path for outcome in self.outcomes for path in outcome.written]

    @property
    def failed(self) -> list[FileOutcome]:
        """Outcomes of files that failed completely or partially."""
        return [outcome for outcome in self.outcomes if outcome.failed]

    @property
    def ok(self) -> bool:
        """True if no file failed."""
        return not self.failed


def resolve_sources(options: SplitOptions) -> list[Path]:
    """Resolve the source feature files of a run.

    With ``ff`` set, exactly ``<source>/<ff>.feature`` is returned, whether
    or not it exists (a missing file is reported as a read failure).
    Otherwise all ``*.feature`` files of the source directory, sorted by
    path. The source directory may itself be a glob pattern.

    Raises:
        ConfigurationError: If a plain source directory does not exist
    """
    source = options.source_spec_directory or ""
    if options.ff:
        return [Path(source) / f"{options.ff}{FEATURE_SUFFIX}"]

    is_pattern = any(char in source for char in "*?[")
    if not is_pattern and not Path(source).is_dir():
        raise ConfigurationError(f"Source directory does not exist: {source}")

    pattern = os.path.join(source, f"*{FEATURE_SUFFIX}")
    return sorted(Path(path) for path in glob.glob(pattern, recursive=True))


def plan_run(options: SplitOptions) -> tuple[TagMatcher, list[Path]]:
    """Check the tag expression and resolve the source files of a run.

    Nothing on disk is changed, so configuration errors surface before the
    output directory is touched.

    Raises:
        ConfigurationError: If the tag expression or source directory is invalid
    """
    return TagMatcher.from_expression(options.tag_expression), resolve_sources(options)


def compile_features(
    options: SplitOptions,
    plan: tuple[TagMatcher, list[Path]] | None = None,
) -> SplitReport:
    """Split, filter and write every source feature file.

    Failures are contained per file (read and parse errors) or per
    sub-feature (serialization and write errors) and recorded in the report.
    Output files are numbered with a counter shared by all source files.

    Args:
        options: Options of the run; the output directory must exist
        plan: Result of plan_run for the same options (computed when omitted)

    Returns:
        SplitReport with one outcome per source file

    Raises:
        ConfigurationError: If the tag expression or source directory is invalid
    """
    matcher, sources = plan or plan_run(options)
    report = SplitReport(tag_expression=matcher.expression)
    sequence = itertools.count(1)
    matched_any = False

    logger.info(f"Splitting {len(sources)} feature file(s) into {options.output_dir}")
    for source in sources:
        outcome = _process_file(source, options, matcher, sequence)
        report.outcomes.append(outcome)
        matched_any = matched_any or outcome.matched_count > 0

    if not matched_any and not matcher.is_match_all:
        report.no_match = True
        logger.info(f"No Feature File found for the Tag Expression: {matcher.expression}")

    return report


def perform_setup(options: SplitOptions) -> SplitReport:
    """Prepare the output directory, then split the source files.

    The options are checked first. With ``clean_tmp_spec_directory`` the
    output directory is then removed completely before it is recreated and
    any file is written.

    Raises:
        ConfigurationError: If the options are invalid or the output directory
            cannot be prepared
    """
    plan = plan_run(options)

    output_dir = options.output_dir
    try:
        if options.clean_tmp_spec_directory and output_dir.exists():
            logger.debug(f"Removing {output_dir}")
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Cannot prepare output directory '{output_dir}': {e}") from e

    return compile_features(options, plan)


def _process_file(
    source: Path,
    options: SplitOptions,
    matcher: TagMatcher,
    sequence: Iterator[int],
) -> FileOutcome:
    """Read, parse, split, filter and write one source file."""
    with logger.indent_block(f"Processing {source}"):
        try:
            feature = parse_feature_file(source, language=options.lang)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {source}: {e}")
            return FileOutcome(source=source, status=FileStatus.READ_FAILED, errors=[str(e)])
        except FeatureParseError as e:
            logger.error(f"Cannot parse {e}")
            return FileOutcome(source=source, status=FileStatus.PARSE_FAILED, errors=[str(e)])

        if feature is None:
            logger.warning(f"No Feature in {source}")
            return FileOutcome(source=source, status=FileStatus.NO_SCENARIOS)

        sub_features = split_feature(
            feature,
            split_examples=options.split_scenario_outline_multiple_examples,
            matcher=matcher,
            source_name=source.stem,
        )
        matched = filter_sub_features(sub_features, matcher)
        logger.debug(f"{len(sub_features)} scenario(s), {len(matched)} matching")

        outcome = FileOutcome(
            source=source,
            status=FileStatus.NO_SCENARIOS,
            split_count=len(sub_features),
            matched_count=len(matched),
        )
        for rule in feature.skipped_rules:
            outcome.errors.append(f"Rule '{rule}' is not split; its scenarios were skipped")
        for sub_feature in matched:
            try:
                content = render_feature(sub_feature)
            except SerializationError as e:
                logger.error(f"Cannot render '{sub_feature.scenario.name}': {e}")
                outcome.errors.append(str(e))
                continue

            file_name = output_file_name(sub_feature.source_name, next(sequence))
            output_file = options.output_dir / file_name
            try:
                outcome.written.append(write_text(content, output_file))
            except OSError as e:
                logger.error(f"Cannot write {output_file}: {e}")
                outcome.errors.append(str(e))
                continue
            logger.debug(f"Wrote {output_file.name}")

        if outcome.errors:
            outcome.status = FileStatus.PARTIAL
        elif outcome.written:
            outcome.status = FileStatus.WRITTEN
        return outcome

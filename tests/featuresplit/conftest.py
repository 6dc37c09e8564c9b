"""Shared test fixtures for featuresplit tests."""

import logging
import textwrap
from pathlib import Path

import pytest

from featuresplit.logging_config import LOGGER_NAME, GlobalIndent

# Shared fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset log indentation and handlers installed by the CLI between tests."""
    GlobalIndent.reset()
    yield
    GlobalIndent.reset()
    logging.getLogger(LOGGER_NAME).handlers = []


@pytest.fixture
def feature_dir(tmp_path: Path):
    """Factory fixture writing feature files into a fresh source directory.

    Usage:
        def test_example(feature_dir):
            source = feature_dir({"login": "Feature: Login ..."})
            # source / "login.feature" exists
    """

    def _create(files: dict[str, str]) -> Path:
        source = tmp_path / "features"
        source.mkdir(exist_ok=True)
        for name, text in files.items():
            (source / f"{name}.feature").write_text(
                textwrap.dedent(text).lstrip(), encoding="utf-8"
            )
        return source

    return _create

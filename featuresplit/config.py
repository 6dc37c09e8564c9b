"""Configuration for a featuresplit invocation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Self

import yaml
from gherkin.dialect import Dialect
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from featuresplit.errors import ConfigurationError

# File suffix of Gherkin documents, both for discovery and for output
FEATURE_SUFFIX = ".feature"

# Dialect used when neither the options nor the document name one
DEFAULT_LANGUAGE = "en"


def validate_language(lang: str) -> None:
    """Validate that the parser knows the given dialect.

    Args:
        lang: Gherkin dialect code (e.g. "en", "fr", "nl")

    Raises:
        ConfigurationError: If the dialect is unknown
    """
    if Dialect.for_name(lang) is None:
        raise ConfigurationError(
            f"Unknown Gherkin language: '{lang}'. Expected a dialect code such as 'en' or 'nl'"
        )


class SplitOptions(BaseModel):
    """Options of one split run.

    Field aliases accept the camelCase option names used by existing
    runner configurations (``sourceSpecDirectory``, ``tagExpression``, ...).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source_spec_directory: str | None = Field(None, alias="sourceSpecDirectory")
    tmp_spec_directory: str | None = Field(None, alias="tmpSpecDirectory")
    tag_expression: str = Field("", alias="tagExpression")
    ff: str | None = None
    lang: str = DEFAULT_LANGUAGE
    clean_tmp_spec_directory: bool = Field(False, alias="cleanTmpSpecDirectory")
    split_scenario_outline_multiple_examples: bool = Field(
        False, alias="splitScenarioOutLineMultipleExamples"
    )
    strict: bool = False

    @model_validator(mode="after")
    def _check_required(self) -> Self:
        if not self.source_spec_directory or not self.source_spec_directory.strip():
            raise ConfigurationError("Features paths are not defined")
        if not self.tmp_spec_directory or not self.tmp_spec_directory.strip():
            raise ConfigurationError("Output dir path is not defined")
        validate_language(self.lang)
        return self

    @property
    def output_dir(self) -> Path:
        """Directory receiving the generated feature files."""
        return Path(self.tmp_spec_directory or "")

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Self:
        """Create options from a plain mapping.

        Unset (None) values are dropped so defaults apply.

        Raises:
            ConfigurationError: If the mapping does not describe valid options
        """
        cleaned = {key: value for key, value in data.items() if value is not None}
        try:
            return cls.model_validate(cleaned)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid options: {e}") from e

    @classmethod
    def from_yaml_file(cls, path: str | Path, **overrides: Any) -> Self:
        """Load options from a YAML file.

        Args:
            path: YAML file with a mapping of option names to values
            **overrides: Values that take precedence over the file (None is ignored)

        Raises:
            ConfigurationError: If the file is missing, malformed or invalid
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config file '{path}': {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file '{path}' must contain a mapping of option names"
            )

        merged = dict(data)
        for key, value in overrides.items():
            if value is None:
                continue
            # Overrides use field names; drop a camelCase alias for the same field
            alias = cls.model_fields[key].alias
            if alias:
                merged.pop(alias, None)
            merged[key] = value
        return cls.from_mapping(merged)

"""Exception types raised while splitting feature files."""

from __future__ import annotations

from pathlib import Path


class FeatureSplitError(Exception):
    """Base class for all featuresplit errors."""


class ConfigurationError(FeatureSplitError):
    """Raised when the invocation options are unusable.

    Configuration errors are fatal for the whole invocation and are raised
    before any source file is read.
    """


class TagExpressionSyntaxError(ConfigurationError):
    """Raised when the tag expression cannot be parsed."""

    def __init__(self, expression: str, reason: str) -> None:
        self.expression = expression
        super().__init__(f"Invalid tag expression '{expression}': {reason}")


class FeatureParseError(FeatureSplitError):
    """Raised when a feature file cannot be parsed."""

    def __init__(self, path: Path | None, message: str) -> None:
        """Initialize the error.

        Args:
            path: The source file that failed to parse (None for raw text)
            message: The parser's description of the problem
        """
        self.path = path
        msg = message
        if path is not None:
            msg = f"{path}: {message}"
        super().__init__(msg)


class SerializationError(FeatureSplitError):
    """Raised when a sub-feature cannot be rendered back to Gherkin text.

    Rendering never drops content it does not understand; an unknown step
    argument type ends up here instead of in a truncated output file.
    """

"""Parsers turning Gherkin text into the featuresplit document model."""

from featuresplit.parsers.gherkin_parser import parse_feature_file, parse_feature_text

__all__ = [
    "parse_feature_file",
    "parse_feature_text",
]

"""Rendering and writing of split feature files."""

from featuresplit.storage.feature_writer import (
    output_file_name,
    render_feature,
    write_text,
    write_feature,
)

__all__ = [
    "output_file_name",
    "render_feature",
    "write_text",
    "write_feature",
]

"""
Behave environment configuration

Each scenario gets fresh source and output directories under a temporary
root that is removed after the scenario.
"""

import os
import shutil
import sys
import tempfile
from pathlib import Path

# Add project root to Python path so we can import the featuresplit package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def before_scenario(context, scenario):
    """Create empty source and output directories"""
    context.workdir = Path(tempfile.mkdtemp(prefix="featuresplit-"))
    context.source_dir = context.workdir / "features"
    context.output_dir = context.workdir / "tmp"
    context.source_dir.mkdir()
    context.options = {}
    context.report = None


def after_scenario(context, scenario):
    """Remove the scenario's directories"""
    shutil.rmtree(context.workdir, ignore_errors=True)

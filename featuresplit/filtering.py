"""Tag based filtering of sub-features."""

from __future__ import annotations

from collections.abc import Iterable

from featuresplit.models import SubFeature
from featuresplit.tags import TagMatcher


def filter_sub_features(
    sub_features: Iterable[SubFeature],
    matcher: TagMatcher,
) -> list[SubFeature]:
    """Keep the sub-features whose resolved tags satisfy the matcher.

    Order is preserved. A match-all matcher keeps everything.
    """
    return [sub for sub in sub_features if matcher.matches(sub.tag_names)]

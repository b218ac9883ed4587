from collections import Counter
from typing import Mapping


def sort_topics(counts: Mapping[str, int], limit: int | None = None) -> dict[str, int]:
    """Order a tag -> count table by count, descending; equal counts keep input order."""
    return dict(Counter(counts).most_common(limit))


def merge_topics(
    topics_a: Mapping[str, int] | None = None,
    topics_b: Mapping[str, int] | None = None,
) -> dict[str, int]:
    """Union two tag tables, summing shared tags, sorted by count descending."""
    merged: Counter[str] = Counter()
    for table in (topics_a or {}, topics_b or {}):
        for topic, count in table.items():
            merged[topic] += count
    return dict(merged.most_common())

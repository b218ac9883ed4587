from cp_lens.analyzers.calendar import merge_calendars
from cp_lens.analyzers.combined import compose_report, get_combined_analytics, resolve_outcomes
from cp_lens.analyzers.topics import merge_topics, sort_topics

__all__ = [
    "compose_report",
    "get_combined_analytics",
    "merge_calendars",
    "merge_topics",
    "resolve_outcomes",
    "sort_topics",
]

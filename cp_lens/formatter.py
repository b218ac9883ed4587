from datetime import date, timedelta

from cp_lens.models import ContestSummary, PlatformAnalytics, UnifiedReport


def _longest_streak(calendar: dict[str, int]) -> int:
    """Longest run of consecutive active days in a YYYY-MM-DD calendar."""
    days = sorted(date.fromisoformat(d) for d, count in calendar.items() if count > 0)
    best = run = 0
    previous: date | None = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def _contest_lines(title: str, contest: ContestSummary | None) -> list[str]:
    if contest is None:
        return []
    lines = [f"### {title}\n"]
    rating = contest.rating if contest.rating is not None else "N/A"
    lines.append(f"- **Rating**: {rating}")
    if contest.global_ranking is not None:
        lines.append(f"- **Global ranking**: {contest.global_ranking:,}")
    lines.append(f"- **Contests attended**: {contest.attended_contests}")
    if contest.recent_contests:
        lines.append("\n| Contest | Rank | Rating |")
        lines.append("|---|---|---|")
        for c in contest.recent_contests:
            change = f"{c.old_rating} → {c.new_rating}" if c.old_rating is not None else f"{c.new_rating}"
            lines.append(f"| {c.name} | {c.rank if c.rank is not None else '-'} | {change} |")
    lines.append("")
    return lines


def format_report(report: UnifiedReport) -> str:
    """Format a UnifiedReport into a Markdown report string."""
    summary = report.summary
    metrics = report.combined_metrics
    profiles = report.profiles

    sections = [f"# Competitive Programming Report\n\n*Generated {summary.last_updated:%Y-%m-%d %H:%M} UTC*\n"]

    sections.append("## Overview\n")
    sections.append(f"- **Platforms**: {', '.join(summary.platforms_covered)}")
    sections.append(f"- **Total solved**: {metrics.combined_total}")
    if profiles.leetcode:
        d = profiles.leetcode.difficulty_breakdown
        sections.append(
            f"- **LeetCode @{profiles.leetcode.username}**: {metrics.total_solved_leetcode} solved "
            f"(easy {d.easy} / medium {d.medium} / hard {d.hard})"
        )
    if profiles.codeforces:
        p = profiles.codeforces.profile
        rating = f", rating {p.rating} (max {p.max_rating})" if p.rating is not None else ""
        sections.append(
            f"- **Codeforces @{profiles.codeforces.handle}**: {metrics.total_solved_codeforces} solved, "
            f"{p.rank}{rating}"
        )
    sections.append("")

    calendar = report.activity_calendar
    if calendar:
        busiest = max(calendar, key=calendar.get)
        sections.append("## Activity\n")
        sections.append(f"- **Active days**: {sum(1 for c in calendar.values() if c > 0)}")
        sections.append(f"- **Submissions**: {sum(calendar.values())}")
        sections.append(f"- **Busiest day**: {busiest} ({calendar[busiest]})")
        sections.append(f"- **Longest streak**: {_longest_streak(calendar)} days")
        sections.append(f"- **Range**: {next(iter(calendar))} → {next(reversed(calendar))}")
        sections.append("")

    if report.topic_analysis:
        sections.append("## Topics\n")
        sections.append(f"**Top skills**: {', '.join(summary.top_skills)}\n")
        sections.append("| Topic | Solved |")
        sections.append("|---|---|")
        for topic, count in list(report.topic_analysis.items())[:15]:
            sections.append(f"| {topic} | {count} |")
        sections.append("")

    contest_lines = _contest_lines("LeetCode", report.contest_data.leetcode)
    contest_lines += _contest_lines("Codeforces", report.contest_data.codeforces)
    if contest_lines:
        sections.append("## Contests\n")
        sections.extend(contest_lines)

    return "\n".join(sections)


def format_platform(analytics: PlatformAnalytics) -> str:
    """Short Markdown summary for a single platform's analytics."""
    lines = [f"# {analytics.platform.title()} @{analytics.identifier}\n"]
    lines.append(f"- **Total solved**: {analytics.total_solved}")
    lines.append(f"- **Active days**: {len(analytics.calendar)}")
    if analytics.topics:
        top = ", ".join(f"{t} ({c})" for t, c in list(analytics.topics.items())[:10])
        lines.append(f"- **Top topics**: {top}")
    lines.append("")
    lines.extend(_contest_lines("Contests", analytics.contest))
    return "\n".join(lines)

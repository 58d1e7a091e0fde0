"""Achievements and badges earned by a year's stats."""

from typing import Callable, NamedTuple

from .models import AggregatedStats, DerivedStats, Insight


class InsightRule(NamedTuple):
    type: str
    title: str
    predicate: Callable[[AggregatedStats, DerivedStats], bool]
    describe: Callable[[AggregatedStats, DerivedStats], str]


def _hours(stats: AggregatedStats, *hours: int) -> int:
    return sum(stats.hourly_activity.get(h, 0) for h in hours)


# Evaluated in this order; every matching rule fires.
INSIGHT_RULES = (
    InsightRule(
        "achievement", "🏆 Code Maestro",
        lambda s, d: s.total_lines_added + s.total_lines_removed > 10000,
        lambda s, d: f"You modified over {s.total_lines_added + s.total_lines_removed:,} lines of code!",
    ),
    InsightRule(
        "achievement", "🔥 Power User",
        lambda s, d: s.total_sessions > 50,
        lambda s, d: f"You had {s.total_sessions} coding sessions this year!",
    ),
    InsightRule(
        "achievement", "💬 Conversationalist",
        lambda s, d: s.total_messages > 100,
        lambda s, d: f"You sent {s.total_messages} messages to Claude!",
    ),
    InsightRule(
        "achievement", "📝 File Wizard",
        lambda s, d: s.total_files_modified > 50,
        lambda s, d: f"You modified {s.total_files_modified} files!",
    ),
    InsightRule(
        "achievement", "⏱️ Time Master",
        lambda s, d: s.total_duration > 60,
        lambda s, d: f"You spent {s.total_duration // 60} hours coding with Claude!",
    ),
    InsightRule(
        "achievement", "⚡ On Fire",
        lambda s, d: d.longest_streak >= 3,
        lambda s, d: f"Your longest streak was {d.longest_streak} days!",
    ),
    InsightRule(
        "badge", "🌙 Night Owl",
        lambda s, d: _hours(s, 23, 0) > 5,
        lambda s, d: "You love coding after midnight!",
    ),
    InsightRule(
        "badge", "🌅 Early Bird",
        lambda s, d: _hours(s, 6, 7) > 5,
        lambda s, d: "You start coding with the sunrise!",
    ),
    InsightRule(
        "achievement", "🛠️ Tool Master",
        lambda s, d: len(s.tool_usage) > 5,
        lambda s, d: f"You used {len(s.tool_usage)} different tools!",
    ),
    InsightRule(
        "achievement", "🧠 Deep Thinker",
        lambda s, d: s.total_thinking_blocks > 20,
        lambda s, d: f"Claude had {s.total_thinking_blocks} thinking sessions for you!",
    ),
)


def evaluate_insights(stats: AggregatedStats, derived: DerivedStats, rules=INSIGHT_RULES) -> list:
    """Return the insights whose rule matches, in rule order.

    Only call with the final, fully aggregated stats.
    """
    return [
        Insight(type=rule.type, title=rule.title, description=rule.describe(stats, derived))
        for rule in rules
        if rule.predicate(stats, derived)
    ]

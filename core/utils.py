from datetime import date, timedelta
from typing import List, Union

DateLike = Union[str, date]


def today_iso() -> str:
    """Current calendar date in the local time zone, as YYYY-MM-DD."""
    return date.today().isoformat()


def to_date(value: DateLike) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def last_n_days(today: DateLike, n: int) -> List[str]:
    """
    The trailing ``n`` calendar days ending at ``today`` (inclusive), oldest first.

    示例:
        >>> last_n_days("2026-01-03", 3)
        ['2026-01-01', '2026-01-02', '2026-01-03']
    """
    end = to_date(today)
    return [(end - timedelta(days=offset)).isoformat() for offset in range(n - 1, -1, -1)]


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))

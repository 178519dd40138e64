"""
todostore - Search Query Language
=================================
Turns a raw search string into a SearchFilter and applies it.

Tokens are whitespace separated and read left to right; a later directive
of the same kind overwrites an earlier one:

    status:done     only completed todos
    status:all      any completion status
    due:>DATE       due strictly after DATE
    due:<DATE       due strictly before DATE
    due:DATE        both bounds set to DATE
    anything else   title substring (the last such token wins)

An empty query shows incomplete todos only.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from .schema import SearchFilter, Todo, as_local

NOW_KEYWORDS = ("today", "now", "今日")
TOMORROW_KEYWORDS = ("tomorrow",)

# "stauts:done" is the historical spelling and stays an alias
DONE_TOKENS = ("status:done", "stauts:done")
ALL_TOKENS = ("status:all",)
DUE_PREFIX = "due:"

SLASH_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%dT%H:%M",
    "%Y/%m/%dT%H:%M:%S",
)


def _parse_calendar(text: str) -> Optional[datetime]:
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    for fmt in SLASH_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def guess_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Interpret a date word or calendar string; None when it makes no sense"""
    now = as_local(now) if now else datetime.now().astimezone()

    if text in NOW_KEYWORDS:
        return now
    if text in TOMORROW_KEYWORDS:
        return now + timedelta(days=1)

    try:
        return as_local(_parse_calendar(text))
    except (ValueError, OverflowError):
        # Calendar edge dates cannot be shifted into the local timezone
        return None


def parse_search_query(query: str, now: Optional[datetime] = None) -> SearchFilter:
    """Build a SearchFilter from a raw query string"""
    text_token: Optional[str] = None
    completion_filter: Optional[bool] = False
    due_date_from: Optional[datetime] = None
    due_date_to: Optional[datetime] = None

    for part in query.split():
        if part in DONE_TOKENS:
            completion_filter = True
        elif part in ALL_TOKENS:
            completion_filter = None
        elif part.startswith(DUE_PREFIX):
            value = part[len(DUE_PREFIX):]
            if value.startswith(">"):
                due_date_from = guess_date(value[1:], now)
            elif value.startswith("<"):
                due_date_to = guess_date(value[1:], now)
            else:
                due_date_from = due_date_to = guess_date(value, now)
        else:
            text_token = part

    return SearchFilter(
        text_token=text_token,
        completion_filter=completion_filter,
        due_date_from=due_date_from,
        due_date_to=due_date_to
    )


def filter_records(search_filter: SearchFilter, records: Iterable[Todo]) -> List[Todo]:
    """Records passing every active predicate, in their original order"""
    return [record for record in records if search_filter.matches(record)]

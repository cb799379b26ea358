"""Period arithmetic: work out the period that follows a draw."""

from datetime import datetime, timedelta

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"
TIMESTAMP_WIDTH = 14
TIMESTAMP_STEP = timedelta(minutes=1)
FALLBACK_SUFFIX = "_next"


def is_timestamp_period(period: str) -> bool:
    """A 14-digit code that parses as YYYYMMDDHHMMSS."""
    if len(period) != TIMESTAMP_WIDTH or not period.isdigit():
        return False
    try:
        datetime.strptime(period, TIMESTAMP_FORMAT)
    except ValueError:
        return False
    return True


def next_timestamp_period(period: str, step: timedelta = TIMESTAMP_STEP) -> str:
    return (datetime.strptime(period, TIMESTAMP_FORMAT) + step).strftime(TIMESTAMP_FORMAT)


def next_sequential_period(period: str) -> str:
    """Increment as an integer, keeping the zero-padded width."""
    return str(int(period) + 1).zfill(len(period))


def next_period(period: str) -> str:
    """Next period after `period`.

    Timestamp codes advance one minute, other digit strings count up by one,
    anything else gets a marked suffix instead of failing.
    """
    if is_timestamp_period(period):
        return next_timestamp_period(period)
    if period.isascii() and period.isdigit():
        return next_sequential_period(period)
    return f"{period}{FALLBACK_SUFFIX}"

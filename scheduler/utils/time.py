from datetime import timedelta, timezone as dt_tz


def to_utc_iso(dt):
    return dt.astimezone(dt_tz.utc).isoformat()


def elapsed_seconds(since, now):
    """Seconds from `since` to `now`; 0 if never reviewed or clock went backwards."""
    if since is None:
        return 0.0
    return max((now - since).total_seconds(), 0.0)


def after_seconds(start, seconds):
    return start + timedelta(seconds=seconds)

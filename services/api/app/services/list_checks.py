"""Checkbox state for generated shopping lists.

One flat name -> bool map per list instance, stored as a Redis hash keyed by
the list kind and its window ("weekly" + "2026-10-18", "monthly" + "2026-10").
Names are matched case-insensitively so a change in first-seen casing keeps
the check.
"""

from app.infra.redis_client import get_sync_redis, redis_key

LIST_KINDS = ("weekly", "monthly")


def checks_key(kind: str, list_key: str) -> str:
    return redis_key("checks", kind, list_key)


def get_checks(kind: str, list_key: str) -> dict[str, bool]:
    r = get_sync_redis()
    raw = r.hgetall(checks_key(kind, list_key))
    return {name: value == "1" for name, value in raw.items()}


def set_check(kind: str, list_key: str, name: str, checked: bool) -> dict[str, bool]:
    r = get_sync_redis()
    r.hset(checks_key(kind, list_key), name.lower(), "1" if checked else "0")
    return get_checks(kind, list_key)


def clear_checks(kind: str, list_key: str) -> None:
    r = get_sync_redis()
    r.delete(checks_key(kind, list_key))

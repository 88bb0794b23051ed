"""Date candidate selection for the ``modified`` field."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from dateutil import parser as date_parser

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _parse_candidate(candidate: Any) -> datetime | None:
    if isinstance(candidate, datetime):
        parsed = candidate
    elif isinstance(candidate, str) and candidate.strip():
        try:
            parsed = date_parser.parse(candidate)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    # A zero timestamp is indistinguishable from "unset" in most indexes
    if parsed == _EPOCH:
        return None
    return parsed


def to_iso(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:mm:ss.sssZ`` in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Current wall-clock time in the catalog's timestamp format."""
    return to_iso(datetime.now(UTC))


def select_valid_date(candidates: Iterable[Any]) -> str | None:
    """Return the first candidate that parses as a date.

    Candidates are tried in the given order, so the caller expresses
    priority through ordering (e.g. ``[updated, published]``). This is
    *not* a min/max: a later, earlier-dated candidate never wins over a
    parseable earlier one.

    Args:
        candidates: Date strings, ``datetime`` objects or ``None``.

    Returns:
        The first parseable candidate as an ISO-8601 UTC string with
        milliseconds, or ``None`` when no candidate parses.
    """
    for candidate in candidates:
        parsed = _parse_candidate(candidate)
        if parsed is not None:
            return to_iso(parsed)
    return None

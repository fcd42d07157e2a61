from __future__ import annotations


def parse_time_of_day(raw: str) -> float:
    """Convert ``HH:MM:SS`` into minutes since service-day midnight.

    Hours may exceed 23 for post-midnight service (GTFS time semantics), so
    ``"25:10:30"`` is ``1510.5``.
    """

    parts = raw.strip().split(":")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time of day: {raw!r}")

    hh, mm, ss = (int(p) for p in parts)
    if mm > 59 or ss > 59:
        raise ValueError(f"Invalid time of day: {raw!r}")
    return hh * 60 + mm + ss / 60.0


def format_time_of_day(minutes: float) -> str:
    if minutes < 0:
        raise ValueError(f"Negative time of day: {minutes}")

    # Round to the nearest second so parse/format round-trips exactly.
    total_s = int(round(minutes * 60.0))
    hh, rest = divmod(total_s, 3600)
    mm, ss = divmod(rest, 60)
    return f"{hh:02d}:{mm:02d}:{ss:02d}"


def time_delta_min(start: str, end: str) -> float:
    """Minutes between two times of day (negative when ``end`` is earlier)."""

    return parse_time_of_day(end) - parse_time_of_day(start)

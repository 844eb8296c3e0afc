"""
Level engine — experience points and titles from the whole work history.

XP rules:
  lifetime earnings   → 1 XP per 100 yen (floored)
  class blocks taught → 50 XP each
  work days           → 50 XP each  (pay > 0 or at least one block)

Level curve: reaching level L requires 14 * (L - 1) ** 2.2 XP (floored).
  Level 1:        0
  Level 2:       14
  Level 70: ~155,000
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

from app.services.badges import EVENT_NEW_YEAR_2026, Badge
from app.services.calculator import compute_daily_total
from app.services.snapshot import PayrollSettings, WorkEntryData, is_empty_entry

CURVE_COEFFICIENT = 14
CURVE_EXPONENT = 2.2

XP_PER_100_YEN = 1
XP_PER_CLASS = 50
XP_PER_WORK_DAY = 50

# (level threshold, title id), ascending
TITLES: list[tuple[int, str]] = [
    (10, "rookie"),
    (20, "rolePlayer"),
    (30, "starter"),
    (40, "allStar"),
    (50, "franchisePlayer"),
    (60, "superStar"),
    (70, "hallOfFamer"),
]

# event badge key → title it unlocks
EVENT_TITLES: dict[str, str] = {
    EVENT_NEW_YEAR_2026: "gasho2026",
}


@dataclass
class LevelData:
    level: int
    xp: int
    xp_for_next_level: int
    progress_percent: int
    lifetime_earnings: int
    lifetime_class_count: int
    lifetime_work_day_count: int


# ---------------------------------------------------------------------------
# Curve
# ---------------------------------------------------------------------------

def xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach `level`."""
    if level <= 1:
        return 0
    return int(CURVE_COEFFICIENT * (level - 1) ** CURVE_EXPONENT)


def level_from_xp(xp: int) -> int:
    """
    Largest level whose threshold is <= xp.

    The fractional-power inverse is only an estimate near level boundaries,
    so the result is checked against the forward curve.
    """
    if xp <= 0:
        return 1
    level = int((xp / CURVE_COEFFICIENT) ** (1 / CURVE_EXPONENT)) + 1
    while level > 1 and xp_for_level(level) > xp:
        level -= 1
    while xp_for_level(level + 1) <= xp:
        level += 1
    return level


def progress_percent(xp: int, level: int) -> int:
    base = xp_for_level(level)
    span = xp_for_level(level + 1) - base
    if span <= 0:
        return 0
    return max(0, min(100, (xp - base) * 100 // span))


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def calculate_level_data(
    all_entries: Mapping[date, WorkEntryData], settings: PayrollSettings
) -> LevelData:
    earnings = 0
    classes = 0
    work_days = 0

    for entry in all_entries.values():
        if is_empty_entry(entry):
            continue
        pay = compute_daily_total(entry, settings)
        earnings += pay
        classes += len(entry.selected_blocks)
        if pay > 0 or entry.selected_blocks:
            work_days += 1

    xp = (
        earnings // 100 * XP_PER_100_YEN
        + classes * XP_PER_CLASS
        + work_days * XP_PER_WORK_DAY
    )
    level = level_from_xp(xp)

    return LevelData(
        level=level,
        xp=xp,
        xp_for_next_level=xp_for_level(level + 1),
        progress_percent=progress_percent(xp, level),
        lifetime_earnings=earnings,
        lifetime_class_count=classes,
        lifetime_work_day_count=work_days,
    )


# ---------------------------------------------------------------------------
# Titles
# ---------------------------------------------------------------------------

def eligible_titles(level: int, event_badges: Iterable[Badge] = ()) -> list[str]:
    """Titles the current level and event badges qualify for."""
    titles = [title for threshold, title in TITLES if level >= threshold]
    for badge in event_badges:
        title = EVENT_TITLES.get(badge.key)
        if title and title not in titles:
            titles.append(title)
    return titles


def merge_unlocked_titles(unlocked: Iterable[str], eligible: Iterable[str]) -> list[str]:
    """
    Union of already unlocked and newly eligible titles, in unlock order.
    Never drops a title, even if the recomputed level went down.
    """
    merged = list(dict.fromkeys(unlocked))
    for title in eligible:
        if title not in merged:
            merged.append(title)
    return merged

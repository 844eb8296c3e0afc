"""
Badge engine — derived achievements, recomputed on every query.

Rules
-----
  1. STREAK (per pay period, one badge per run)
     Work dates inside the period are split into runs of consecutive
     calendar days. Each run earns one badge sized by its length:
       >= 5 days → gold,  4 → silver,  3 → bronze,  < 3 → nothing
     Two separate 3-day runs in one period earn two bronze badges.

  2. EARNINGS (per pay period, at most one badge)
     Period total pay:
       >= 160,000 → platinum
       >= 130,000 → gold
       >= 100,000 → silver
       >=  70,000 → bronze

  3. EVENT (whole history)
     Work on a listed event date unlocks that event's badge.

Badges are never persisted. Ids are deterministic: "{key}-{index}" where
index is the badge's position in the returned list.

Public API
----------
get_streak_badges(entries, period_start, period_end)     -> list[Badge]
get_earnings_badge(period_total)                         -> Badge | None
get_event_badges(all_entries)                            -> list[Badge]
get_period_badges(all_entries, settings, reference)      -> list[Badge]
calculate_lifetime_badge_totals(all_entries, settings)   -> LifetimeBadgeTotals
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Iterable, Mapping, Optional

from app.services.calculator import compute_daily_total
from app.services.periods import PeriodRange, add_months, get_period_range, iter_periods
from app.services.snapshot import PayrollSettings, WorkEntryData, is_empty_entry


class BadgeCategory(str, enum.Enum):
    streak = "streak"
    earnings = "earnings"
    event = "event"


class BadgeTier(str, enum.Enum):
    bronze = "bronze"
    silver = "silver"
    gold = "gold"
    platinum = "platinum"


@dataclass(frozen=True)
class Badge:
    id: str
    key: str
    category: str
    tier: str
    label_key: str
    description_key: str
    icon: str


@dataclass(frozen=True)
class EventDefinition:
    key: str
    dates: tuple[date, ...]
    tier: str
    label_key: str
    description_key: str
    icon: str


@dataclass
class LifetimeBadgeTotals:
    streak_count: int
    earnings_count: int
    event_count: int


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

# (minimum run length, tier), longest first
STREAK_TIERS: list[tuple[int, BadgeTier]] = [
    (5, BadgeTier.gold),
    (4, BadgeTier.silver),
    (3, BadgeTier.bronze),
]

# (minimum period total, tier), highest first
EARNINGS_TIERS: list[tuple[int, BadgeTier]] = [
    (160_000, BadgeTier.platinum),
    (130_000, BadgeTier.gold),
    (100_000, BadgeTier.silver),
    (70_000, BadgeTier.bronze),
]

EVENT_NEW_YEAR_2026 = "event-newyear-2026"

EVENTS: list[EventDefinition] = [
    EventDefinition(
        key=EVENT_NEW_YEAR_2026,
        dates=(date(2026, 1, 4), date(2026, 1, 5)),
        tier=BadgeTier.gold.value,
        label_key="badges.eventNewYear2026",
        description_key="badges.eventNewYear2026Desc",
        icon="gift",
    ),
]


def _streak_badge(tier: BadgeTier) -> Badge:
    key = f"streak-{tier.value}"
    return Badge(
        id=key,
        key=key,
        category=BadgeCategory.streak.value,
        tier=tier.value,
        label_key=f"badges.streak{tier.value.capitalize()}",
        description_key="badges.streakDesc",
        icon="flame",
    )


def _earnings_badge(tier: BadgeTier) -> Badge:
    key = f"earn-{tier.value}"
    name = tier.value.capitalize()
    return Badge(
        id=key,
        key=key,
        category=BadgeCategory.earnings.value,
        tier=tier.value,
        label_key=f"badges.earn{name}",
        description_key=f"badges.earn{name}Desc",
        icon="trophy",
    )


def _number(badges: list[Badge]) -> list[Badge]:
    return [replace(b, id=f"{b.key}-{i}") for i, b in enumerate(badges)]


def _active(entries: Iterable[WorkEntryData]) -> list[WorkEntryData]:
    return [e for e in entries if not is_empty_entry(e)]


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

def _streak_runs(days: list[date]) -> list[int]:
    """Lengths of the runs of consecutive days in a sorted, distinct list."""
    if not days:
        return []
    runs: list[int] = []
    current = 1
    for prev, nxt in zip(days, days[1:]):
        if nxt - prev == timedelta(days=1):
            current += 1
        else:
            runs.append(current)
            current = 1
    runs.append(current)
    return runs


def _streak_tier(length: int) -> Optional[BadgeTier]:
    for minimum, tier in STREAK_TIERS:
        if length >= minimum:
            return tier
    return None


def _raw_streak_badges(
    entries: Iterable[WorkEntryData], period_start: date, period_end: date
) -> list[Badge]:
    days = sorted({
        e.date for e in _active(entries)
        if period_start <= e.date <= period_end
    })
    badges = []
    for length in _streak_runs(days):
        tier = _streak_tier(length)
        if tier is not None:
            badges.append(_streak_badge(tier))
    return badges


def get_streak_badges(
    entries: Iterable[WorkEntryData], period_start: date, period_end: date
) -> list[Badge]:
    """One badge per qualifying run of consecutive work days in the window."""
    return _number(_raw_streak_badges(entries, period_start, period_end))


# ---------------------------------------------------------------------------
# Earnings
# ---------------------------------------------------------------------------

def get_earnings_badge(period_total: int) -> Optional[Badge]:
    """Highest earnings tier reached by a period total, if any."""
    for minimum, tier in EARNINGS_TIERS:
        if period_total >= minimum:
            return _number([_earnings_badge(tier)])[0]
    return None


def period_total(
    entries: Iterable[WorkEntryData], settings: PayrollSettings, period: PeriodRange
) -> int:
    return sum(
        compute_daily_total(e, settings)
        for e in _active(entries)
        if e.date in period
    )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

def get_event_badges(all_entries: Mapping[date, WorkEntryData]) -> list[Badge]:
    """Event badges unlocked anywhere in the history."""
    worked = {e.date for e in _active(all_entries.values())}
    badges = [
        Badge(
            id=ev.key,
            key=ev.key,
            category=BadgeCategory.event.value,
            tier=ev.tier,
            label_key=ev.label_key,
            description_key=ev.description_key,
            icon=ev.icon,
        )
        for ev in EVENTS
        if worked.intersection(ev.dates)
    ]
    return _number(badges)


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def get_period_badges(
    all_entries: Mapping[date, WorkEntryData],
    settings: PayrollSettings,
    reference: date,
) -> list[Badge]:
    """Badge shelf for the period containing `reference`: streaks, earnings, events."""
    period = get_period_range(reference, settings.closing_day)
    entries = list(all_entries.values())

    badges = _raw_streak_badges(entries, period.start, period.end)
    earnings = get_earnings_badge(period_total(entries, settings, period))
    if earnings is not None:
        badges.append(earnings)
    badges.extend(get_event_badges(all_entries))
    return _number(badges)


def calculate_lifetime_badge_totals(
    all_entries: Mapping[date, WorkEntryData],
    settings: PayrollSettings,
    today: Optional[date] = None,
) -> LifetimeBadgeTotals:
    """
    Count every badge ever earned by replaying each pay period from the
    first entry through one month past `today`.
    """
    entries = _active(all_entries.values())
    event_count = 1 if get_event_badges(all_entries) else 0
    if not entries:
        return LifetimeBadgeTotals(streak_count=0, earnings_count=0, event_count=event_count)

    first = min(e.date for e in entries)
    horizon = add_months(today or date.today(), 1)

    streak_count = 0
    earnings_count = 0
    for period in iter_periods(first, max(first, horizon), settings.closing_day):
        in_period = [e for e in entries if e.date in period]
        if not in_period:
            continue
        streak_count += len(_raw_streak_badges(in_period, period.start, period.end))
        if get_earnings_badge(period_total(in_period, settings, period)) is not None:
            earnings_count += 1

    return LifetimeBadgeTotals(
        streak_count=streak_count,
        earnings_count=earnings_count,
        event_count=event_count,
    )

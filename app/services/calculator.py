"""
Wage calculator — one day's expected pay.

Policy (applied in this order, all amounts in integer yen)
-----------------------------------------------------------
  1. Block pay
     Each class block is a 90-minute slot billed at 1.5 x an hourly figure:
       leader block      → 2000 x 1.5
       sub-leader block  → 1500 x 1.5
       regular block     → standard rate x 1.5
     standard rate = teaching_hourly_rate, adjusted by the help-shift rule:
       home = primary campus, working elsewhere → -100
       home elsewhere, working at the primary   → +100

  2. Administrative pay
     support_minutes
       + 5 min per block (intra-block break)
       + 10 min per pair of consecutive blocks (B→C is lunch: 0)
     paid at hourly_rate, floored.

  3. Location allowance
     800 at the primary campus, 400 elsewhere, only when the day has
     blocks or support minutes.

  4. Manual allowance, verbatim.

  5. Transport (when has_transport)
     entry override → per-campus rate → settings.transport_cost

Public API
----------
compute_daily_total(entry, settings)   -> int
daily_breakdown(entry, settings)       -> DailyBreakdown
administrative_minutes(entry)          -> int
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.services.snapshot import (
    Location,
    PayrollSettings,
    PRIMARY_CAMPUS,
    WorkEntryData,
    block_position,
    sort_blocks,
)


LEADER_BASE_RATE = 2000
SUB_LEADER_BASE_RATE = 1500
HELP_SHIFT_ADJUSTMENT = 100

INTRA_BLOCK_BREAK_MINUTES = 5
INTER_BLOCK_BREAK_MINUTES = 10
# (B, C) is the lunch break and is unpaid.
UNPAID_BREAK_PAIRS = {("B", "C")}

PRIMARY_LOCATION_ALLOWANCE = 800
OTHER_LOCATION_ALLOWANCE = 400


@dataclass
class DailyBreakdown:
    block_pay: int
    administrative_minutes: int
    administrative_pay: int
    location_allowance: int
    allowance: int
    transport: int

    @property
    def total(self) -> int:
        return (
            self.block_pay
            + self.administrative_pay
            + self.location_allowance
            + self.allowance
            + self.transport
        )


# ---------------------------------------------------------------------------
# Block pay
# ---------------------------------------------------------------------------

def work_campus(entry: WorkEntryData, settings: PayrollSettings) -> str:
    return entry.campus or settings.default_campus


def standard_block_rate(entry: WorkEntryData, settings: PayrollSettings) -> int:
    """Hourly teaching rate after the help-shift adjustment."""
    rate = settings.teaching_hourly_rate
    home = settings.default_campus
    work = work_campus(entry, settings)

    if home == PRIMARY_CAMPUS and work != PRIMARY_CAMPUS:
        rate -= HELP_SHIFT_ADJUSTMENT
    elif home != PRIMARY_CAMPUS and work == PRIMARY_CAMPUS:
        rate += HELP_SHIFT_ADJUSTMENT
    return rate


def block_rate(block: str, entry: WorkEntryData, standard_rate: int) -> int:
    """Hourly figure a block is billed against (before the 1.5 slot factor)."""
    if block in entry.leader_blocks:
        return LEADER_BASE_RATE
    if block in entry.sub_leader_blocks:
        return SUB_LEADER_BASE_RATE
    return standard_rate


def _block_pay(entry: WorkEntryData, settings: PayrollSettings) -> int:
    standard_rate = standard_block_rate(entry, settings)
    hourly_sum = sum(block_rate(b, entry, standard_rate) for b in entry.selected_blocks)
    # x1.5 kept exact in integers; the only fractional part is a half yen.
    return hourly_sum * 3 // 2


# ---------------------------------------------------------------------------
# Administrative pay
# ---------------------------------------------------------------------------

def _inter_block_minutes(blocks: list[str]) -> int:
    ordered = sort_blocks(blocks)
    minutes = 0
    for current, nxt in zip(ordered, ordered[1:]):
        if block_position(nxt) - block_position(current) != 1:
            continue
        if (current, nxt) in UNPAID_BREAK_PAIRS:
            continue
        minutes += INTER_BLOCK_BREAK_MINUTES
    return minutes


def administrative_minutes(entry: WorkEntryData) -> int:
    """Manual support minutes plus the breaks imputed from the blocks taught."""
    return (
        entry.support_minutes
        + len(entry.selected_blocks) * INTRA_BLOCK_BREAK_MINUTES
        + _inter_block_minutes(entry.selected_blocks)
    )


# ---------------------------------------------------------------------------
# Allowances
# ---------------------------------------------------------------------------

def _location_allowance(entry: WorkEntryData) -> int:
    if not entry.selected_blocks and entry.support_minutes <= 0:
        return 0
    if entry.location == Location.hiraoka:
        return PRIMARY_LOCATION_ALLOWANCE
    return OTHER_LOCATION_ALLOWANCE


def transport_amount(entry: WorkEntryData, settings: PayrollSettings) -> int:
    if not entry.has_transport:
        return 0
    if entry.transport_cost is not None:
        return entry.transport_cost
    campus_rate: Optional[int] = settings.campus_transport_rates.get(
        work_campus(entry, settings)
    )
    if campus_rate is not None:
        return campus_rate
    return settings.transport_cost


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def daily_breakdown(entry: WorkEntryData, settings: PayrollSettings) -> DailyBreakdown:
    minutes = administrative_minutes(entry)
    return DailyBreakdown(
        block_pay=_block_pay(entry, settings),
        administrative_minutes=minutes,
        administrative_pay=minutes * settings.hourly_rate // 60,
        location_allowance=_location_allowance(entry),
        allowance=entry.allowance_amount,
        transport=transport_amount(entry, settings),
    )


def compute_daily_total(entry: WorkEntryData, settings: PayrollSettings) -> int:
    """Expected pay for one day, in whole yen."""
    return daily_breakdown(entry, settings).total

"""
Snapshot types consumed by the payroll core.

The store hands the core a complete copy of the entry map and the settings
record as plain dataclasses (no ORM, no Pydantic). Every calculation in
calculator / periods / badges / level is a pure function of these.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class WorkBlock(str, enum.Enum):
    """Fixed daily class slots, in chronological order."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"


BLOCK_ORDER: list[str] = [b.value for b in WorkBlock]


class Campus(str, enum.Enum):
    hiraoka = "hiraoka"
    shin_sapporo = "shin_sapporo"
    tsukisamu = "tsukisamu"
    maruyama = "maruyama"
    hokudaimae = "hokudaimae"


# The campus that pays the higher location allowance and anchors the
# +/-100 help-shift adjustment.
PRIMARY_CAMPUS = Campus.hiraoka


class Location(str, enum.Enum):
    hiraoka = "hiraoka"
    other = "other"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CAMPUS_TRANSPORT_RATES: dict[str, int] = {
    Campus.hiraoka.value: 1620,
    Campus.shin_sapporo.value: 1140,
    Campus.tsukisamu.value: 500,
    Campus.maruyama.value: 500,
    Campus.hokudaimae.value: 500,
}


def _default_campus_rates() -> dict[str, int]:
    return dict(DEFAULT_CAMPUS_TRANSPORT_RATES)


def _default_unlocked_titles() -> list[str]:
    return ["rookie"]


# ---------------------------------------------------------------------------
# Snapshot records
# ---------------------------------------------------------------------------

@dataclass
class WorkEntryData:
    """One calendar day's recorded work."""
    id: str
    date: date
    selected_blocks: list[str] = field(default_factory=list)
    support_minutes: int = 0
    allowance_amount: int = 0
    location: str = Location.hiraoka.value
    campus: Optional[str] = None        # None → the user's home campus
    has_transport: bool = False
    transport_cost: Optional[int] = None  # per-entry override
    leader_blocks: list[str] = field(default_factory=list)
    sub_leader_blocks: list[str] = field(default_factory=list)


@dataclass
class ProfileData:
    """Cosmetic profile state. Has no effect on pay."""
    name: str = "Guest tutor"
    avatar_id: str = "default"
    theme_color: Optional[str] = None
    active_title: Optional[str] = "rookie"
    unlocked_titles: list[str] = field(default_factory=_default_unlocked_titles)


@dataclass
class PayrollSettings:
    teaching_hourly_rate: int = 1380
    hourly_rate: int = 1075
    transport_cost: int = 500
    campus_transport_rates: dict[str, int] = field(default_factory=_default_campus_rates)
    default_campus: str = PRIMARY_CAMPUS.value
    closing_day: int = 15
    payment_month_lag: int = 0
    annual_limit: int = 1_030_000
    profile: ProfileData = field(default_factory=ProfileData)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def is_empty_entry(entry: WorkEntryData) -> bool:
    """
    An entry with nothing recorded is equivalent to no entry at all.
    The store prunes such records; aggregates skip them.
    """
    return (
        not entry.selected_blocks
        and entry.support_minutes == 0
        and entry.allowance_amount == 0
        and not entry.has_transport
    )


def location_for_campus(campus: Optional[str]) -> str:
    """Location type implied by a campus. Unknown campuses count as "other"."""
    if campus == PRIMARY_CAMPUS:
        return Location.hiraoka.value
    return Location.other.value


def block_position(block: str) -> int:
    """Index of a block in the fixed alphabet; unknown labels sort last."""
    try:
        return BLOCK_ORDER.index(block)
    except ValueError:
        return len(BLOCK_ORDER)


def sort_blocks(blocks) -> list[str]:
    """De-duplicate and order blocks by their chronological position."""
    return sorted(set(blocks), key=block_position)

"""Type definitions for petcare data structures.

ARCHITECTURE DECISION: TypedDict for caller-facing contracts, dataclasses for
engine values.
===========================================================================

1. **TypedDict for mappings that cross the library boundary**:
   - Raw inputs owned by the caller: TreatmentRecordData, PetData
   - Configuration objects: EngineSettings
   - Results handed to presentation layers: CategorySummary, PetSummary,
     HealthAlert, HealthReport

2. **Frozen dataclasses for values the engines create and compare**:
   - TreatmentSlot (engines/schedule_tables.py)
   - TreatmentRecord, PetContext (data_builders.py)
   - SlotEvaluation (engines/status_engine.py)

IMPORTANT: This file must NOT import engine modules at runtime to avoid
circular dependencies. Engine types are referenced under TYPE_CHECKING only.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of caller input
happens in data_builders.py.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, NotRequired, TypedDict

if TYPE_CHECKING:
    from .data_builders import ValidationError
    from .engines.status_engine import SlotEvaluation

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

SlotId = str  # Schedule-table slot id, e.g. "pup_poly_1"
RecordId = str  # Caller-owned record identifier
DateInput = str | date | datetime  # Anything dt_parse_date accepts


# =============================================================================
# Caller Inputs
# =============================================================================


class TreatmentRecordData(TypedDict):
    """Raw treatment record as stored by the calling system."""

    kind: str  # One of const.RECORD_KINDS
    applied_at: DateInput
    title: NotRequired[str]
    subtype: NotRequired[str | None]
    next_due_at: NotRequired[DateInput | None]
    weight_value: NotRequired[float | None]
    record_id: NotRequired[RecordId | None]
    created_at: NotRequired[DateInput | None]


class PetData(TypedDict):
    """Raw pet context."""

    species: str
    birth_date: DateInput
    pet_id: NotRequired[str | None]
    last_weight_value: NotRequired[float | None]
    last_weight_update: NotRequired[DateInput | None]


# =============================================================================
# Configuration
# =============================================================================


class EngineSettings(TypedDict):
    """Tunable heuristics for matching and status evaluation.

    Built by data_builders.build_engine_settings(), which fills every key
    from const.DEFAULT_* when not overridden.
    """

    deworming_buffer_weeks: float
    vaccine_buffer_weeks: float
    deworming_anticipation_days: int
    vaccine_anticipation_days: int
    recurring_due_soon_days: int
    external_due_soon_days: int
    external_default_duration_days: int


# =============================================================================
# Results
# =============================================================================


class CategorySummary(TypedDict):
    """Category-level judgment (one card per category)."""

    category: str  # const.FAMILY_*
    status: str  # const.SLOT_STATUS_* or const.CATEGORY_STATUS_NOT_APPLICABLE
    action: str  # const.ACTION_*
    slot_id: SlotId | None
    label: str | None
    due_date: date | None
    weight_fresh: bool


class PetSummary(TypedDict):
    """Pet-level rollup over the visible slot evaluations."""

    status_counts: dict[str, int]
    overdue_count: int
    due_now_count: int
    upcoming_count: int
    is_up_to_date: bool
    has_rabies_coverage: bool
    rabies_expires: date | None


class HealthAlert(TypedDict):
    """Semantic alert; presentation layers turn it into text."""

    alert_id: str
    kind: str  # const.ALERT_KIND_*
    severity: str  # const.ALERT_SEVERITY_*
    status: str  # slot status or weight status
    category: str | None
    action: str
    slot_id: SlotId | None
    date: date


class HealthReport(TypedDict):
    """Full pipeline result returned by health_report.build_health_report()."""

    species: str | None  # Canonical species, None when unsupported
    is_supported: bool
    today: date
    evaluations: list[SlotEvaluation]
    visible: list[SlotEvaluation]
    categories: dict[str, CategorySummary]
    summary: PetSummary
    weight_fresh: bool
    alerts: list[HealthAlert]
    errors: list[ValidationError]

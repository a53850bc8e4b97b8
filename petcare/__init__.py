"""petcare: preventive-care scheduling for dogs and cats.

Given a pet (species, birth date, last weight), its treatment history and a
date, petcare tells which vaccines and dewormings are done, due, upcoming or
overdue, and what the owner should do next.

Entry points:
    - build_health_report: full pipeline (statuses, categories, alerts)
    - evaluate_schedule: slot statuses only
"""

from .data_builders import (
    PetContext,
    TreatmentRecord,
    ValidationError,
    build_engine_settings,
    build_pet_context,
    build_treatment_record,
    build_treatment_records,
    shift_history,
    sort_treatment_records,
)
from .engines import (
    AggregationEngine,
    AlertEngine,
    SlotEvaluation,
    SlotMatcher,
    StatusEngine,
    TreatmentSlot,
    WeightEngine,
    get_schedule,
)
from .health_report import build_health_report, evaluate_schedule

__all__ = [
    "AggregationEngine",
    "AlertEngine",
    "PetContext",
    "SlotEvaluation",
    "SlotMatcher",
    "StatusEngine",
    "TreatmentRecord",
    "TreatmentSlot",
    "ValidationError",
    "WeightEngine",
    "build_engine_settings",
    "build_health_report",
    "build_pet_context",
    "build_treatment_record",
    "build_treatment_records",
    "evaluate_schedule",
    "get_schedule",
    "shift_history",
    "sort_treatment_records",
]

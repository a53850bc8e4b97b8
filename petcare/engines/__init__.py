"""Engine modules for petcare.

Contains specialized computation engines:
- schedule_tables: Per-species preventive-care slots
- slot_matcher: Record-to-slot matching precedence
- status_engine: Slot status state machine and next-dose rules
- weight_engine: Weight freshness gate
- aggregation_engine: Family, category and pet-level rollups
- alert_engine: Semantic health alerts
"""

# Use relative imports within package to avoid mypy module resolution issues
from .aggregation_engine import AggregationEngine
from .alert_engine import AlertEngine
from .schedule_tables import (
    CAT_SCHEDULE,
    DOG_SCHEDULE,
    TreatmentSlot,
    get_schedule,
    get_slot,
    is_supported_species,
    normalize_species,
)
from .slot_matcher import SlotMatcher
from .status_engine import SlotEvaluation, StatusEngine
from .weight_engine import WeightEngine

__all__ = [
    "CAT_SCHEDULE",
    "DOG_SCHEDULE",
    "AggregationEngine",
    "AlertEngine",
    "SlotEvaluation",
    "SlotMatcher",
    "StatusEngine",
    "TreatmentSlot",
    "WeightEngine",
    "get_schedule",
    "get_slot",
    "is_supported_species",
    "normalize_species",
]

"""Test helpers for petcare tests.

    from tests.helpers import SCENARIO_TODAY, by_slot_id, evaluation
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from petcare.data_builders import TreatmentRecord
from petcare.engines.schedule_tables import get_slot
from petcare.engines.status_engine import SlotEvaluation

# Evaluation date shared by the scenario tests
SCENARIO_TODAY = date(2026, 1, 26)


def by_slot_id(evaluations: Iterable[SlotEvaluation]) -> dict[str, SlotEvaluation]:
    """Index evaluations by slot id."""
    return {ev.slot_id: ev for ev in evaluations}


def evaluation(
    slot_id: str,
    status: str,
    due_date: date | None = None,
    record: TreatmentRecord | None = None,
    species: str = "dog",
) -> SlotEvaluation:
    """Build a SlotEvaluation for a real schedule slot with a chosen status."""
    slot = get_slot(species, slot_id)
    assert slot is not None, f"unknown {species} slot {slot_id}"
    return SlotEvaluation(
        slot=slot, status=status, matched_record=record, due_date=due_date
    )

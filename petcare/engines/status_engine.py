"""Status Engine - classifies every schedule slot for a given day.

For each slot the engine combines the matched candidate records with an
explicit `today` and returns exactly one status:

    pending → due_soon → current_due → overdue      (date-driven)
    completed                                       (satisfied, or renewed)
    missed_replaced                                 (one-time gap made moot)

Three evaluation paths:
- External parasiticides: validity depends on the product in the title
- Recurring slots: latest record of the category, at any age, + renewal
  interval
- One-time slots: buffered age window, supersession, then the calendar

ARCHITECTURE: Pure logic. The engine is configured once with EngineSettings
(like a RecurrenceEngine with its ScheduleConfig) and keeps no other state;
every method is a function of its arguments.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import const
from ..data_builders import build_engine_settings
from ..utils.dt_utils import dt_add_days, dt_add_months, dt_add_weeks, dt_days_between
from .schedule_tables import superseding_slots
from .slot_matcher import SlotMatcher, normalize_text

if TYPE_CHECKING:
    from datetime import date

    from ..data_builders import TreatmentRecord
    from ..type_defs import EngineSettings
    from .schedule_tables import TreatmentSlot


# =============================================================================
# EVALUATION DATA STRUCTURE
# =============================================================================


@dataclass(frozen=True)
class SlotEvaluation:
    """Status of one slot at one instant.

    Attributes:
        slot: The schedule slot evaluated
        status: One of const.SLOT_STATUSES
        matched_record: Record satisfying the slot, or the later record that
                        replaced it (missed_replaced)
        due_date: When the slot is/was due, or when a completed slot renews
        replaced_by: For missed_replaced, the superseding slot id when the
                     later record belongs to it
    """

    slot: TreatmentSlot
    status: str
    matched_record: TreatmentRecord | None = None
    due_date: date | None = None
    replaced_by: str | None = None

    @property
    def slot_id(self) -> str:
        """Shortcut for the slot id."""
        return self.slot.slot_id


# =============================================================================
# STATUS ENGINE
# =============================================================================


class StatusEngine:
    """State machine turning records + today into slot statuses."""

    def __init__(self, settings: EngineSettings | None = None) -> None:
        """Initialize the engine.

        Args:
            settings: Complete EngineSettings. Defaults are built from const
                      when omitted.
        """
        self._settings: EngineSettings = settings or build_engine_settings()

    @property
    def settings(self) -> EngineSettings:
        """Settings this engine was configured with."""
        return self._settings

    # =========================================================================
    # SETTINGS-DERIVED HELPERS
    # =========================================================================

    def buffer_weeks(self, slot: TreatmentSlot) -> float:
        """Early/late administration tolerance for a slot."""
        if SlotMatcher.is_deworming_slot(slot):
            return self._settings[const.CONF_DEWORMING_BUFFER_WEEKS]
        return self._settings[const.CONF_VACCINE_BUFFER_WEEKS]

    def anticipation_days(self, slot: TreatmentSlot) -> int:
        """How many days before its window a slot turns due_soon.

        Deworming bands are only a couple of weeks apart, so a short
        horizon keeps consecutive bands from showing up at once.
        """
        if SlotMatcher.is_deworming_slot(slot):
            return self._settings[const.CONF_DEWORMING_ANTICIPATION_DAYS]
        return self._settings[const.CONF_VACCINE_ANTICIPATION_DAYS]

    def external_duration_days(self, title: str | None) -> int:
        """Return how long an external parasiticide protects, in days.

        Examples:
            "Bravecto 20-40kg" → 90
            "Simparica" → 35
            "Collar Seresto" → 240
            "Pipeta" → 30 (default)
        """
        normalized = normalize_text(title)
        for keywords, days in const.EXTERNAL_PRODUCT_DURATIONS:
            if any(keyword in normalized for keyword in keywords):
                return days
        return self._settings[const.CONF_EXTERNAL_DEFAULT_DURATION_DAYS]

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def evaluate_slot(
        self,
        slot: TreatmentSlot,
        birth_date: date,
        records: Iterable[TreatmentRecord],
        today: date,
        schedule: Sequence[TreatmentSlot] | None = None,
    ) -> SlotEvaluation:
        """Classify one slot.

        Args:
            slot: Slot to evaluate
            birth_date: Pet's birth date
            records: All valid records of the pet (any order)
            today: Evaluation date
            schedule: Full species schedule, used to find slots that
                      supersede this one. Optional.

        Returns:
            SlotEvaluation with exactly one status.
        """
        records = list(records)

        if slot.is_recurring and not SlotMatcher.is_external_slot(slot):
            history = SlotMatcher.find_category_records(slot, records)
            if history:
                return self._evaluate_renewal(slot, history[0], today)
            # No history: fall through to the window so adults get "start now"
            return self._evaluate_window(slot, birth_date, today)

        candidates = SlotMatcher.find_candidates(
            slot, records, birth_date, self.buffer_weeks(slot)
        )

        if SlotMatcher.is_external_slot(slot):
            return self._evaluate_external(slot, birth_date, candidates, today)

        return self._evaluate_one_time(
            slot, birth_date, records, candidates, today, schedule or ()
        )

    def evaluate_schedule(
        self,
        schedule: Sequence[TreatmentSlot],
        birth_date: date,
        records: Iterable[TreatmentRecord],
        today: date,
    ) -> list[SlotEvaluation]:
        """Classify every slot of a schedule, preserving schedule order."""
        records = list(records)
        evaluations = [
            self.evaluate_slot(slot, birth_date, records, today, schedule)
            for slot in schedule
        ]
        const.LOGGER.debug(
            "Evaluated %d slots for birth_date=%s today=%s",
            len(evaluations),
            birth_date,
            today,
        )
        return evaluations

    # =========================================================================
    # EXTERNAL PARASITICIDES
    # =========================================================================

    def _evaluate_external(
        self,
        slot: TreatmentSlot,
        birth_date: date,
        candidates: list[TreatmentRecord],
        today: date,
    ) -> SlotEvaluation:
        """Product-driven validity instead of an age window."""
        window_start = dt_add_weeks(birth_date, slot.min_age_weeks)

        if not candidates:
            status = (
                const.SLOT_STATUS_OVERDUE
                if today >= window_start
                else const.SLOT_STATUS_PENDING
            )
            return SlotEvaluation(slot=slot, status=status, due_date=window_start)

        latest = candidates[0]
        next_due = latest.next_due_at or dt_add_days(
            latest.applied_at, self.external_duration_days(latest.title)
        )
        status = self._renewal_status(
            next_due, today, self._settings[const.CONF_EXTERNAL_DUE_SOON_DAYS]
        )
        return SlotEvaluation(
            slot=slot, status=status, matched_record=latest, due_date=next_due
        )

    # =========================================================================
    # RECURRING SLOTS
    # =========================================================================

    def _evaluate_renewal(
        self,
        slot: TreatmentSlot,
        latest: TreatmentRecord,
        today: date,
    ) -> SlotEvaluation:
        """Latest application + renewal interval decides the status."""
        next_due = latest.next_due_at or dt_add_months(
            latest.applied_at, slot.renewal_months or const.RENEWAL_MONTHS_ANNUAL
        )
        status = self._renewal_status(
            next_due, today, self._settings[const.CONF_RECURRING_DUE_SOON_DAYS]
        )
        return SlotEvaluation(
            slot=slot, status=status, matched_record=latest, due_date=next_due
        )

    @staticmethod
    def _renewal_status(next_due: date, today: date, due_soon_days: int) -> str:
        """Status of a renewable protection expiring on `next_due`."""
        if today > next_due:
            return const.SLOT_STATUS_OVERDUE
        if dt_days_between(today, next_due) <= due_soon_days:
            return const.SLOT_STATUS_DUE_SOON
        return const.SLOT_STATUS_COMPLETED

    # =========================================================================
    # ONE-TIME SLOTS
    # =========================================================================

    def _evaluate_one_time(
        self,
        slot: TreatmentSlot,
        birth_date: date,
        records: list[TreatmentRecord],
        candidates: list[TreatmentRecord],
        today: date,
        schedule: Sequence[TreatmentSlot],
    ) -> SlotEvaluation:
        """Window match, then supersession, then the calendar."""
        buffer = self.buffer_weeks(slot)
        buffered_start = dt_add_weeks(birth_date, slot.min_age_weeks - buffer)
        buffered_end = dt_add_weeks(birth_date, slot.max_age_weeks + buffer)

        for record in candidates:
            if buffered_start <= record.applied_at <= buffered_end:
                return SlotEvaluation(
                    slot=slot,
                    status=const.SLOT_STATUS_COMPLETED,
                    matched_record=record,
                    due_date=self.calculate_next_due_date(slot, record.applied_at),
                )

        if today > buffered_end:
            replacement = self._find_replacement(
                slot, birth_date, records, candidates, buffered_end, schedule
            )
            if replacement is not None:
                record, replaced_by = replacement
                return SlotEvaluation(
                    slot=slot,
                    status=const.SLOT_STATUS_MISSED_REPLACED,
                    matched_record=record,
                    replaced_by=replaced_by,
                )

        return self._evaluate_window(slot, birth_date, today)

    def _find_replacement(
        self,
        slot: TreatmentSlot,
        birth_date: date,
        records: list[TreatmentRecord],
        candidates: list[TreatmentRecord],
        buffered_end: date,
        schedule: Sequence[TreatmentSlot],
    ) -> tuple[TreatmentRecord, str | None] | None:
        """Find the newest record, dated after the window, of this family.

        Heuristic: a later dose of the same lineage means the pet moved on to
        a subsequent dose or booster, so the gap is no longer actionable.
        Records matching a superseding slot (e.g. the annual booster) count
        too, and are reported with that slot's id.
        """
        for record in candidates:
            if record.applied_at > buffered_end:
                return record, None

        for successor in superseding_slots(schedule, slot.slot_id):
            later = [
                record
                for record in SlotMatcher.find_candidates(
                    successor, records, birth_date, self.buffer_weeks(successor)
                )
                if record.applied_at > buffered_end
            ]
            if later:
                return later[0], successor.slot_id

        return None

    def _evaluate_window(
        self,
        slot: TreatmentSlot,
        birth_date: date,
        today: date,
    ) -> SlotEvaluation:
        """Classify an unmatched slot against its unbuffered age window."""
        window_start = dt_add_weeks(birth_date, slot.min_age_weeks)
        window_end = dt_add_weeks(birth_date, slot.max_age_weeks)

        if today > window_end:
            status = const.SLOT_STATUS_OVERDUE
        elif today >= window_start:
            status = const.SLOT_STATUS_CURRENT_DUE
        elif dt_days_between(today, window_start) <= self.anticipation_days(slot):
            status = const.SLOT_STATUS_DUE_SOON
        else:
            status = const.SLOT_STATUS_PENDING

        due_date = window_start
        if slot.is_recurring and status == const.SLOT_STATUS_CURRENT_DUE:
            # Never treated: start now
            due_date = today

        return SlotEvaluation(slot=slot, status=status, due_date=due_date)

    # =========================================================================
    # NEXT DOSE / PRIMARY SELECTION
    # =========================================================================

    @staticmethod
    def calculate_next_due_date(
        slot: TreatmentSlot,
        applied_at: date,
    ) -> date | None:
        """Suggest when the treatment given for `slot` should be repeated.

        Rules:
        - Recurring slots renew after their renewal interval
        - Rabies is always annual
        - Early series doses (max age < 20 weeks) get a booster in 21 days
        - Anything else has no suggested follow-up
        """
        if slot.renewal_months:
            return dt_add_months(applied_at, slot.renewal_months)
        if SlotMatcher.slot_family(slot) == const.FAMILY_VACCINE_RABIES:
            return dt_add_months(applied_at, const.RENEWAL_MONTHS_ANNUAL)
        if (
            not slot.is_recurring
            and slot.max_age_weeks < const.SERIES_BOOSTER_MAX_AGE_WEEKS
            and not SlotMatcher.is_deworming_slot(slot)
        ):
            return dt_add_days(applied_at, const.SERIES_BOOSTER_INTERVAL_DAYS)
        return None

    @staticmethod
    def primary_evaluation(
        evaluations: Iterable[SlotEvaluation],
    ) -> SlotEvaluation | None:
        """Pick the evaluation that represents a group of slots.

        Priority: overdue > current_due/due_soon (equal urgency) > completed.
        Within a priority level the slot with the latest min_age_weeks wins:
        resolving the most recent requirement subsumes earlier missed doses.
        """
        ranked = sorted(
            evaluations, key=lambda ev: ev.slot.min_age_weeks, reverse=True
        )
        for wanted in (
            {const.SLOT_STATUS_OVERDUE},
            const.SLOT_STATUSES_ACTIONABLE,
            {const.SLOT_STATUS_COMPLETED},
        ):
            for evaluation in ranked:
                if evaluation.status in wanted:
                    return evaluation
        return None

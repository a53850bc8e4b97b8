"""Tests for StatusEngine - pure logic, explicit `today` everywhere.

Test Categories:
- Reference scenarios (puppy window, lapsed rabies, external products)
- One-time slots (buffered match, calendar window, supersession)
- Recurring slots (renewal, next_due_at override, no history)
- External parasiticides (product durations)
- Suggested next dose and primary slot selection
- Totality, idempotence and monotonicity
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, timedelta

import pytest

from petcare import const
from petcare.data_builders import TreatmentRecord, build_engine_settings
from petcare.engines.aggregation_engine import AggregationEngine
from petcare.engines.schedule_tables import (
    CAT_SCHEDULE,
    DOG_SCHEDULE,
    TreatmentSlot,
    get_schedule,
)
from petcare.engines.status_engine import StatusEngine
from tests.helpers import SCENARIO_TODAY, by_slot_id, evaluation

PUPPY_BIRTH = date(2025, 1, 1)
ADULT_BIRTH = date(2022, 6, 1)

# =============================================================================
# TEST: REFERENCE SCENARIOS
# =============================================================================


class TestScenarios:
    """End-to-end slot statuses for the reference cases."""

    def test_puppy_first_polyvalent_due_now(
        self, engine: StatusEngine, today: date
    ) -> None:
        """Dog born 43 days ago, no records: first polyvalent dose is due."""
        birth = today - timedelta(days=43)

        result = by_slot_id(
            engine.evaluate_schedule(get_schedule("dog"), birth, [], today)
        )

        assert result["pup_poly_1"].status == const.SLOT_STATUS_CURRENT_DUE
        assert result["pup_poly_1"].due_date == birth + timedelta(days=42)

    @pytest.mark.parametrize("age_days", [730, 3 * 365])
    def test_lapsed_annual_rabies_overdue(
        self,
        engine: StatusEngine,
        today: date,
        make_record: Callable[..., TreatmentRecord],
        age_days: int,
    ) -> None:
        """Rabies applied 400 days ago without next_due_at is overdue."""
        birth = today - timedelta(days=age_days)
        rabies = make_record(
            "vaccine", today - timedelta(days=400), title="Antirrábica"
        )

        result = by_slot_id(
            engine.evaluate_schedule(get_schedule("dog"), birth, [rabies], today)
        )

        assert result["adult_annual_rabies"].status == const.SLOT_STATUS_OVERDUE
        assert result["adult_annual_rabies"].matched_record == rabies
        # The puppy dose was skipped, but the later booster makes it moot
        assert result["pup_rabies"].status == const.SLOT_STATUS_MISSED_REPLACED

    def test_bravecto_still_protecting(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """Bravecto lasts 90 days: 50 days after application it is valid."""
        record = make_record("deworming", "2025-12-07", title="Bravecto")
        today = date(2026, 1, 26)

        result = by_slot_id(
            engine.evaluate_schedule(
                get_schedule("dog"), date(2024, 1, 1), [record], today
            )
        )

        assert result["pup_external"].status == const.SLOT_STATUS_COMPLETED
        assert result["pup_external"].due_date == date(2026, 3, 7)

    def test_generic_pipeta_expired(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """A generic pipeta lasts 30 days: 50 days later it is overdue."""
        record = make_record("deworming", "2025-12-07", title="Pipeta")
        today = date(2026, 1, 26)

        result = by_slot_id(
            engine.evaluate_schedule(
                get_schedule("dog"), date(2024, 1, 1), [record], today
            )
        )

        assert result["pup_external"].status == const.SLOT_STATUS_OVERDUE
        assert result["pup_external"].due_date == date(2026, 1, 6)


# =============================================================================
# TEST: ONE-TIME SLOTS
# =============================================================================


class TestOneTimeSlots:
    """Buffered window matching and the age calendar."""

    def test_series_dose_completed_with_booster_date(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """A first polyvalent dose suggests a booster 21 days later."""
        record = make_record("vaccine", "2025-02-19", title="Polivalente")

        result = engine.evaluate_slot(
            dog_slot("pup_poly_1"), PUPPY_BIRTH, [record], date(2025, 3, 1)
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.matched_record == record
        assert result.due_date == date(2025, 3, 12)

    def test_deworming_band_has_no_follow_up_date(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """Deworming bands are completed without a suggested next dose."""
        record = make_record("deworming", "2025-01-18", title="Desparasitación")

        result = engine.evaluate_slot(
            dog_slot("pup_deworm_1"), PUPPY_BIRTH, [record], date(2025, 1, 20)
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date is None

    def test_puppy_rabies_protects_one_year(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """A completed puppy rabies dose is due again in 12 months."""
        record = make_record("vaccine", "2025-04-20", title="Rabia")

        result = engine.evaluate_slot(
            dog_slot("pup_rabies"), PUPPY_BIRTH, [record], date(2025, 6, 1)
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2026, 4, 20)

    def test_early_dose_fills_earlier_band(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """A dose at day 37 completes band 2 but is too early for band 3."""
        record = make_record("deworming", "2025-02-07", title="Desparasitación")

        result = by_slot_id(
            engine.evaluate_schedule(
                get_schedule("dog"), PUPPY_BIRTH, [record], date(2025, 2, 10)
            )
        )

        assert result["pup_deworm_2"].status == const.SLOT_STATUS_COMPLETED
        assert result["pup_deworm_3"].status == const.SLOT_STATUS_DUE_SOON
        assert result["pup_deworm_3"].matched_record is None

    @pytest.mark.parametrize(
        ("today", "status"),
        [
            (date(2025, 2, 1), const.SLOT_STATUS_PENDING),
            (date(2025, 2, 20), const.SLOT_STATUS_DUE_SOON),
            (date(2025, 3, 12), const.SLOT_STATUS_CURRENT_DUE),
            (date(2025, 4, 2), const.SLOT_STATUS_CURRENT_DUE),
            (date(2025, 4, 3), const.SLOT_STATUS_OVERDUE),
        ],
    )
    def test_calendar_window(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        today: date,
        status: str,
    ) -> None:
        """pup_poly_2 (10-13 weeks) walks through the calendar statuses."""
        result = engine.evaluate_slot(dog_slot("pup_poly_2"), PUPPY_BIRTH, [], today)

        assert result.status == status
        assert result.due_date == date(2025, 3, 12)

    def test_zero_buffer_setting_rejects_early_dose(
        self,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """Buffer weeks are tunable through EngineSettings."""
        engine = StatusEngine(
            build_engine_settings({const.CONF_VACCINE_BUFFER_WEEKS: 0})
        )
        record = make_record("vaccine", "2025-02-06", title="Polivalente")

        result = engine.evaluate_slot(
            dog_slot("pup_poly_1"), PUPPY_BIRTH, [record], date(2025, 2, 20)
        )

        assert result.status == const.SLOT_STATUS_CURRENT_DUE
        assert result.matched_record is None


# =============================================================================
# TEST: SUPERSESSION
# =============================================================================


class TestSupersession:
    """missed_replaced flips back to overdue when the later record goes."""

    def test_later_dose_replaces_missed_puppy_dose(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """An adult booster makes a skipped puppy dose moot."""
        birth = date(2023, 1, 1)
        booster = make_record("vaccine", "2025-06-01", title="Polivalente anual")
        slot = dog_slot("pup_poly_1")

        replaced = engine.evaluate_slot(
            slot, birth, [booster], today, DOG_SCHEDULE
        )
        without = engine.evaluate_slot(slot, birth, [], today, DOG_SCHEDULE)

        assert replaced.status == const.SLOT_STATUS_MISSED_REPLACED
        assert replaced.matched_record == booster
        assert without.status == const.SLOT_STATUS_OVERDUE

    def test_superseding_slot_reported(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """A record of the superseding slot names that slot in replaced_by."""
        first = TreatmentSlot(
            slot_id="serie_a",
            label="Serie A",
            age_label="",
            min_age_weeks=6,
            max_age_weeks=9,
            category_tags=("alfa",),
        )
        booster = TreatmentSlot(
            slot_id="serie_b",
            label="Serie B",
            age_label="",
            min_age_weeks=52,
            max_age_weeks=1000,
            category_tags=("beta",),
            is_recurring=True,
            supersedes=("serie_a",),
            renewal_months=12,
        )
        record = make_record("vaccine", "2024-06-01", title="Beta")
        birth = date(2023, 1, 1)

        replaced = engine.evaluate_slot(
            first, birth, [record], today, [first, booster]
        )
        standalone = engine.evaluate_slot(first, birth, [record], today)

        assert replaced.status == const.SLOT_STATUS_MISSED_REPLACED
        assert replaced.replaced_by == "serie_b"
        assert standalone.status == const.SLOT_STATUS_OVERDUE


# =============================================================================
# TEST: RECURRING SLOTS
# =============================================================================


class TestRecurringSlots:
    """Latest application + renewal interval."""

    def test_adult_without_history_starts_now(
        self, engine: StatusEngine, today: date
    ) -> None:
        """Never-treated adults are due today for every recurring slot."""
        result = by_slot_id(
            engine.evaluate_schedule(get_schedule("dog"), ADULT_BIRTH, [], today)
        )

        for slot_id in (
            "adult_annual_poly",
            "adult_annual_rabies",
            "adult_deworm_trimestral",
        ):
            assert result[slot_id].status == const.SLOT_STATUS_CURRENT_DUE
            assert result[slot_id].due_date == today

    @pytest.mark.parametrize(
        ("applied_at", "status", "due_date"),
        [
            ("2025-10-01", const.SLOT_STATUS_OVERDUE, date(2026, 1, 1)),
            ("2025-11-15", const.SLOT_STATUS_DUE_SOON, date(2026, 2, 15)),
            ("2025-12-30", const.SLOT_STATUS_COMPLETED, date(2026, 3, 30)),
        ],
    )
    def test_quarterly_deworming_renewal(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
        applied_at: str,
        status: str,
        due_date: date,
    ) -> None:
        """Adult deworming renews every three months."""
        record = make_record("deworming", applied_at, title="Desparasitación")

        result = engine.evaluate_slot(
            dog_slot("adult_deworm_trimestral"), ADULT_BIRTH, [record], today
        )

        assert result.status == status
        assert result.due_date == due_date

    def test_latest_record_wins(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """Renewal counts from the newest application."""
        records = [
            make_record("vaccine", "2024-01-10", title="Rabia"),
            make_record("vaccine", "2025-03-01", title="Rabia"),
        ]

        result = engine.evaluate_slot(
            dog_slot("adult_annual_rabies"), ADULT_BIRTH, records, today
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2026, 3, 1)

    @pytest.mark.parametrize(
        ("applied_at", "next_due_at", "status"),
        [
            ("2024-06-01", "2027-01-01", const.SLOT_STATUS_COMPLETED),
            ("2025-12-01", "2026-01-01", const.SLOT_STATUS_OVERDUE),
        ],
    )
    def test_next_due_at_overrides_interval(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
        applied_at: str,
        next_due_at: str,
        status: str,
    ) -> None:
        """An explicit next_due_at on the record replaces the computed date."""
        record = make_record(
            "vaccine", applied_at, title="Rabia", next_due_at=next_due_at
        )

        result = engine.evaluate_slot(
            dog_slot("adult_annual_rabies"), ADULT_BIRTH, [record], today
        )

        assert result.status == status
        assert result.due_date == date.fromisoformat(next_due_at)

    def test_puppy_series_dose_starts_annual_clock(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """The annual booster is due a year after the last puppy dose."""
        record = make_record("vaccine", "2025-04-23", title="Séxtuple")

        result = engine.evaluate_slot(
            dog_slot("adult_annual_poly"), PUPPY_BIRTH, [record], date(2026, 1, 7)
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.matched_record == record
        assert result.due_date == date(2026, 4, 23)

    def test_late_puppy_deworming_counts_for_quarterly_slot(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """Deworming at 24 weeks keeps the 27-week-old puppy covered."""
        record = make_record("deworming", "2025-06-18", title="Desparasitación")
        today = date(2025, 7, 9)
        evaluations = engine.evaluate_schedule(
            get_schedule("dog"), PUPPY_BIRTH, [record], today
        )

        result = by_slot_id(evaluations)["adult_deworm_trimestral"]
        card = AggregationEngine.category_summary(
            const.FAMILY_DEWORMING_INTERNAL, evaluations, True
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2025, 9, 18)
        assert card["status"] == const.SLOT_STATUS_COMPLETED
        assert card["action"] == const.ACTION_NONE

    def test_puppy_rabies_and_annual_rabies_agree(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
    ) -> None:
        """Coverage from a puppy dose never shows the annual dose as due."""
        record = make_record("vaccine", "2025-04-23", title="Antirrábica")
        evaluations = engine.evaluate_schedule(
            get_schedule("dog"), PUPPY_BIRTH, [record], date(2026, 1, 7)
        )

        result = by_slot_id(evaluations)
        summary = AggregationEngine.pet_summary(evaluations, date(2026, 1, 7))

        assert result["pup_rabies"].status == const.SLOT_STATUS_COMPLETED
        assert result["adult_annual_rabies"].status == const.SLOT_STATUS_COMPLETED
        assert result["adult_annual_rabies"].due_date == date(2026, 4, 23)
        assert summary["has_rabies_coverage"]


# =============================================================================
# TEST: EXTERNAL PARASITICIDES
# =============================================================================


class TestExternalSlot:
    """Product-driven validity."""

    @pytest.mark.parametrize(
        ("title", "days"),
        [
            ("Bravecto 20-40kg", 90),
            ("Pipeta antiparasitaria 3 meses", 90),
            ("Simparica", 35),
            ("NexGard Spectra", 30),
            ("Collar Seresto", 240),
            ("Pipeta Advantix", 30),
            (None, 30),
        ],
    )
    def test_product_durations(
        self, engine: StatusEngine, title: str | None, days: int
    ) -> None:
        """Durations come from keywords in the title."""
        assert engine.external_duration_days(title) == days

    def test_default_duration_is_configurable(
        self,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """Unknown products use the configured default duration."""
        engine = StatusEngine(
            build_engine_settings({const.CONF_EXTERNAL_DEFAULT_DURATION_DAYS: 60})
        )
        record = make_record("deworming", "2025-12-07", title="Pipeta")

        result = engine.evaluate_slot(
            dog_slot("pup_external"), ADULT_BIRTH, [record], today
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2026, 2, 5)

    def test_expiring_soon(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """Within a week of expiry the product is due_soon."""
        record = make_record("deworming", "2026-01-01", title="Pipeta")

        result = engine.evaluate_slot(
            dog_slot("pup_external"), ADULT_BIRTH, [record], today
        )

        assert result.status == const.SLOT_STATUS_DUE_SOON
        assert result.due_date == date(2026, 1, 31)

    def test_explicit_subtype_with_brand_title(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """A brand unknown to the keyword table still counts via subtype."""
        record = make_record(
            "deworming", "2026-01-10", title="Advocate", subtype="external"
        )

        result = engine.evaluate_slot(
            dog_slot("pup_external"), ADULT_BIRTH, [record], today
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2026, 2, 9)

    def test_record_next_due_at_wins(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """The vet's own next date beats the product table."""
        record = make_record(
            "deworming", "2025-12-07", title="Pipeta", next_due_at="2026-03-01"
        )

        result = engine.evaluate_slot(
            dog_slot("pup_external"), ADULT_BIRTH, [record], today
        )

        assert result.status == const.SLOT_STATUS_COMPLETED
        assert result.due_date == date(2026, 3, 1)

    def test_no_record_young_puppy_pending(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        today: date,
    ) -> None:
        """Before 8 weeks there is nothing to apply yet."""
        birth = today - timedelta(weeks=4)

        result = engine.evaluate_slot(dog_slot("pup_external"), birth, [], today)

        assert result.status == const.SLOT_STATUS_PENDING
        assert result.due_date == birth + timedelta(weeks=8)

    def test_no_record_adult_overdue(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        today: date,
    ) -> None:
        """An adult with no flea/tick history is overdue."""
        result = engine.evaluate_slot(
            dog_slot("pup_external"), ADULT_BIRTH, [], today
        )

        assert result.status == const.SLOT_STATUS_OVERDUE


# =============================================================================
# TEST: NEXT DOSE / PRIMARY SELECTION
# =============================================================================


class TestNextDueDate:
    """calculate_next_due_date rules."""

    @pytest.mark.parametrize(
        ("slot_id", "expected"),
        [
            ("pup_poly_1", date(2025, 5, 22)),
            ("pup_poly_3", date(2025, 5, 22)),
            ("pup_rabies", date(2026, 5, 1)),
            ("adult_annual_poly", date(2026, 5, 1)),
            ("adult_deworm_trimestral", date(2025, 8, 1)),
            ("pup_deworm_5m", None),
            ("pup_external", None),
        ],
    )
    def test_rules(
        self,
        dog_slot: Callable[[str], TreatmentSlot],
        slot_id: str,
        expected: date | None,
    ) -> None:
        """Each slot kind gets its own follow-up rule."""
        assert (
            StatusEngine.calculate_next_due_date(dog_slot(slot_id), date(2025, 5, 1))
            == expected
        )


class TestPrimaryEvaluation:
    """primary_evaluation tie-break."""

    def test_overdue_outranks_actionable(self) -> None:
        """Any overdue slot beats a current_due one."""
        evaluations = [
            evaluation("pup_poly_1", const.SLOT_STATUS_OVERDUE),
            evaluation("pup_poly_3", const.SLOT_STATUS_CURRENT_DUE),
        ]
        primary = StatusEngine.primary_evaluation(evaluations)
        assert primary is not None
        assert primary.slot_id == "pup_poly_1"

    def test_latest_overdue_wins(self) -> None:
        """Among overdue slots the most recent requirement is primary."""
        evaluations = [
            evaluation("pup_poly_1", const.SLOT_STATUS_OVERDUE),
            evaluation("pup_poly_2", const.SLOT_STATUS_OVERDUE),
        ]
        primary = StatusEngine.primary_evaluation(evaluations)
        assert primary is not None
        assert primary.slot_id == "pup_poly_2"

    def test_actionable_statuses_rank_equally(self) -> None:
        """due_soon and current_due tie; the later slot wins."""
        evaluations = [
            evaluation("pup_poly_2", const.SLOT_STATUS_CURRENT_DUE),
            evaluation("pup_poly_3", const.SLOT_STATUS_DUE_SOON),
        ]
        primary = StatusEngine.primary_evaluation(evaluations)
        assert primary is not None
        assert primary.slot_id == "pup_poly_3"

    def test_completed_fallback(self) -> None:
        """With nothing due, the latest completed slot represents the group."""
        evaluations = [
            evaluation("pup_poly_1", const.SLOT_STATUS_COMPLETED),
            evaluation("pup_poly_2", const.SLOT_STATUS_COMPLETED),
            evaluation("pup_poly_3", const.SLOT_STATUS_PENDING),
        ]
        primary = StatusEngine.primary_evaluation(evaluations)
        assert primary is not None
        assert primary.slot_id == "pup_poly_2"

    def test_nothing_due(self) -> None:
        """Only pending slots: no primary."""
        evaluations = [evaluation("pup_poly_1", const.SLOT_STATUS_PENDING)]
        assert StatusEngine.primary_evaluation(evaluations) is None


# =============================================================================
# TEST: PROPERTIES
# =============================================================================


class TestProperties:
    """Totality, idempotence and monotonicity."""

    @pytest.mark.parametrize("schedule", [DOG_SCHEDULE, CAT_SCHEDULE])
    @pytest.mark.parametrize("days_old", [0, 20, 45, 100, 200, 400, 1500])
    def test_exactly_one_status_per_slot(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
        schedule: tuple[TreatmentSlot, ...],
        days_old: int,
    ) -> None:
        """Every slot gets one known status, in schedule order."""
        birth = SCENARIO_TODAY - timedelta(days=days_old)
        records = [
            make_record("vaccine", SCENARIO_TODAY - timedelta(days=10), title="Rabia"),
            make_record(
                "deworming", SCENARIO_TODAY - timedelta(days=5), title="Pipeta"
            ),
        ]

        result = engine.evaluate_schedule(schedule, birth, records, SCENARIO_TODAY)

        assert [ev.slot_id for ev in result] == [slot.slot_id for slot in schedule]
        assert all(ev.status in const.SLOT_STATUSES for ev in result)

    def test_idempotent(
        self,
        engine: StatusEngine,
        make_record: Callable[..., TreatmentRecord],
        today: date,
    ) -> None:
        """Same inputs, same outputs."""
        records = [make_record("vaccine", "2025-06-01", title="Polivalente")]
        schedule = get_schedule("dog")

        first = engine.evaluate_schedule(schedule, ADULT_BIRTH, records, today)
        second = engine.evaluate_schedule(schedule, ADULT_BIRTH, records, today)

        assert first == second

    @pytest.mark.parametrize("slot_id", ["pup_poly_1", "pup_deworm_3", "pup_rabies"])
    def test_calendar_statuses_never_reverse(
        self,
        engine: StatusEngine,
        dog_slot: Callable[[str], TreatmentSlot],
        slot_id: str,
    ) -> None:
        """With no records, pending → due_soon → current_due → overdue."""
        rank = {
            const.SLOT_STATUS_PENDING: 0,
            const.SLOT_STATUS_DUE_SOON: 1,
            const.SLOT_STATUS_CURRENT_DUE: 2,
            const.SLOT_STATUS_OVERDUE: 3,
        }
        slot = dog_slot(slot_id)

        seen = [
            rank[
                engine.evaluate_slot(
                    slot, PUPPY_BIRTH, [], PUPPY_BIRTH + timedelta(days=day)
                ).status
            ]
            for day in range(0, 250)
        ]

        assert seen == sorted(seen)
        assert seen[0] == 0
        assert seen[-1] == 3

    def test_default_settings(self, engine: StatusEngine) -> None:
        """An engine built without settings uses the const defaults."""
        assert engine.settings == build_engine_settings()
        assert (
            engine.settings[const.CONF_VACCINE_ANTICIPATION_DAYS]
            == const.DEFAULT_VACCINE_ANTICIPATION_DAYS
        )

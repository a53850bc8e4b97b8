"""Weight Engine - decides whether the last recorded weight can dose a drug.

Young animals grow fast, so a weight goes stale sooner the younger the pet:

    age < 60 days     → valid for 7 days
    age < 6 months    → valid for 15 days
    otherwise         → valid for 30 days

The gate never changes a slot status. It only decides whether the next
recommended action is "update weight first" or the treatment itself.

ARCHITECTURE: Pure logic, static methods only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_age, dt_days_between

if TYPE_CHECKING:
    from datetime import date

    from ..data_builders import TreatmentRecord


class WeightEngine:
    """Pure logic for weight freshness."""

    @staticmethod
    def freshness_window_days(birth_date: date, today: date) -> int:
        """Return how many days a weight stays valid at the pet's age."""
        age = dt_age(birth_date, today)
        if age["days"] < const.WEIGHT_VERY_YOUNG_AGE_DAYS:
            return const.WEIGHT_FRESHNESS_VERY_YOUNG_DAYS
        if age["months"] < const.WEIGHT_YOUNG_AGE_MONTHS:
            return const.WEIGHT_FRESHNESS_YOUNG_DAYS
        return const.WEIGHT_FRESHNESS_ADULT_DAYS

    @staticmethod
    def days_since_weight(
        last_weight_update: date | None,
        today: date,
    ) -> int | None:
        """Days elapsed since the last weighing, or None if never weighed."""
        if last_weight_update is None:
            return None
        return dt_days_between(last_weight_update, today)

    @staticmethod
    def is_weight_fresh(
        birth_date: date,
        last_weight_update: date | None,
        today: date,
    ) -> bool:
        """Return True if the last weight is recent enough to dose.

        Args:
            birth_date: Pet's birth date
            last_weight_update: Date of the last weighing, or None
            today: Evaluation date

        Returns:
            False when no weight was ever recorded, regardless of age.
        """
        elapsed = WeightEngine.days_since_weight(last_weight_update, today)
        if elapsed is None:
            return False
        return elapsed <= WeightEngine.freshness_window_days(birth_date, today)

    @staticmethod
    def weight_status(
        birth_date: date,
        last_weight_update: date | None,
        today: date,
    ) -> str:
        """Classify the weight for alerting.

        Returns:
            const.WEIGHT_STATUS_MISSING: never weighed
            const.WEIGHT_STATUS_STALE: past the freshness window
            const.WEIGHT_STATUS_UPCOMING: at most 3 days of freshness left
            const.WEIGHT_STATUS_FRESH: otherwise
        """
        elapsed = WeightEngine.days_since_weight(last_weight_update, today)
        if elapsed is None:
            return const.WEIGHT_STATUS_MISSING

        window = WeightEngine.freshness_window_days(birth_date, today)
        if elapsed > window:
            return const.WEIGHT_STATUS_STALE
        if window - elapsed <= const.WEIGHT_UPCOMING_NOTICE_DAYS:
            return const.WEIGHT_STATUS_UPCOMING
        return const.WEIGHT_STATUS_FRESH

    @staticmethod
    def last_weight_from_records(
        records: Iterable[TreatmentRecord],
    ) -> tuple[date | None, float | None]:
        """Return (date, value) of the newest weight record, if any.

        Weight records without a value are not weighings and are skipped.
        """
        latest: TreatmentRecord | None = None
        for record in records:
            if record.kind != const.RECORD_KIND_WEIGHT or record.weight_value is None:
                continue
            if latest is None or record.applied_at > latest.applied_at:
                latest = record
        if latest is None:
            return None, None
        return latest.applied_at, latest.weight_value

"""Alert Engine - semantic health alerts for a pet.

Alerts never carry display text. They name what happened (kind, status,
category, slot) and how urgent it is, and presentation layers translate.

Severity mapping:
    overdue     → critical
    current_due → success   (window is open: "go ahead, it's time")
    due_soon    → warning
    weight missing / stale / upcoming → warning

Sort order: critical, success, warning. Ties keep generation order (weight
first, then categories in display order).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_add_days
from .weight_engine import WeightEngine

if TYPE_CHECKING:
    from datetime import date

    from ..data_builders import PetContext
    from ..type_defs import CategorySummary, HealthAlert

_CATEGORY_SEVERITY: dict[str, str] = {
    const.SLOT_STATUS_OVERDUE: const.ALERT_SEVERITY_CRITICAL,
    const.SLOT_STATUS_CURRENT_DUE: const.ALERT_SEVERITY_SUCCESS,
    const.SLOT_STATUS_DUE_SOON: const.ALERT_SEVERITY_WARNING,
}


class AlertEngine:
    """Pure logic building sorted HealthAlert lists."""

    @staticmethod
    def weight_alert(pet: PetContext, today: date) -> HealthAlert | None:
        """Alert for a missing, stale or soon-stale weight, else None.

        The alert date is the expiry day for an upcoming weight, today
        otherwise.
        """
        status = WeightEngine.weight_status(
            pet.birth_date, pet.last_weight_update, today
        )
        if status == const.WEIGHT_STATUS_FRESH:
            return None

        alert_date = today
        if status == const.WEIGHT_STATUS_UPCOMING and pet.last_weight_update:
            alert_date = dt_add_days(
                pet.last_weight_update,
                WeightEngine.freshness_window_days(pet.birth_date, today),
            )

        return {
            "alert_id": f"weight-{pet.pet_id or 'pet'}-{status}",
            "kind": const.ALERT_KIND_WEIGHT,
            "severity": const.ALERT_SEVERITY_WARNING,
            "status": status,
            "category": None,
            "action": const.ACTION_UPDATE_WEIGHT,
            "slot_id": None,
            "date": alert_date,
        }

    @staticmethod
    def category_alert(
        pet: PetContext,
        summary: CategorySummary,
        today: date,
    ) -> HealthAlert | None:
        """Alert for an actionable or overdue category card, else None."""
        severity = _CATEGORY_SEVERITY.get(summary["status"])
        if severity is None:
            return None
        return {
            "alert_id": f"health-alert-{summary['category']}-{pet.pet_id or 'pet'}",
            "kind": const.ALERT_KIND_TREATMENT,
            "severity": severity,
            "status": summary["status"],
            "category": summary["category"],
            "action": summary["action"],
            "slot_id": summary["slot_id"],
            "date": summary["due_date"] or today,
        }

    @staticmethod
    def build_alerts(
        pet: PetContext,
        categories: Mapping[str, CategorySummary],
        today: date,
    ) -> list[HealthAlert]:
        """Build every alert for a pet, most severe first.

        Args:
            pet: Pet context (weight fields already resolved)
            categories: Category summaries keyed by category
            today: Evaluation date

        Returns:
            Alerts sorted by const.ALERT_SEVERITY_PRIORITY.
        """
        alerts: list[HealthAlert] = []

        weight = AlertEngine.weight_alert(pet, today)
        if weight is not None:
            alerts.append(weight)

        for summary in categories.values():
            alert = AlertEngine.category_alert(pet, summary, today)
            if alert is not None:
                alerts.append(alert)

        alerts.sort(key=lambda a: const.ALERT_SEVERITY_PRIORITY[a["severity"]])
        return alerts

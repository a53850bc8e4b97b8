"""Aggregation Engine - rolls slot statuses up into what owners see.

Three reductions over a list of SlotEvaluation:

- Visibility: per family, keep only the most recently completed slot and the
  first slot still open, so an adult's card never shows a wall of stale
  puppy milestones.
- Category judgment: one representative slot per category card plus the
  recommended action (update weight, visit vet, buy medication, none).
- Pet summary: status counts, "is up to date" and rabies coverage.

ARCHITECTURE: Pure logic, static methods only.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .. import const
from .slot_matcher import SlotMatcher
from .status_engine import StatusEngine

if TYPE_CHECKING:
    from datetime import date

    from ..type_defs import CategorySummary, PetSummary
    from .status_engine import SlotEvaluation

# Family order used when partitioning
_FAMILY_ORDER: tuple[str, ...] = (*const.CATEGORIES, const.FAMILY_OTHER)


class AggregationEngine:
    """Pure logic for family, category and pet-level rollups."""

    # =========================================================================
    # FAMILIES / VISIBILITY
    # =========================================================================

    @staticmethod
    def partition_by_family(
        evaluations: Iterable[SlotEvaluation],
    ) -> dict[str, list[SlotEvaluation]]:
        """Group evaluations by family, each ordered by min_age_weeks.

        Every family key is present, possibly with an empty list.
        """
        families: dict[str, list[SlotEvaluation]] = {
            family: [] for family in _FAMILY_ORDER
        }
        for evaluation in evaluations:
            families[SlotMatcher.slot_family(evaluation.slot)].append(evaluation)
        for members in families.values():
            # sort() is stable: equal ages keep schedule order
            members.sort(key=lambda ev: ev.slot.min_age_weeks)
        return families

    @staticmethod
    def visible_evaluations(
        evaluations: Iterable[SlotEvaluation],
    ) -> list[SlotEvaluation]:
        """Collapse each family down to at most two entries.

        Heuristic tuned for UI ergonomics: within a family keep the most
        recently completed slot and the first slot that is neither completed
        nor missed_replaced. Output keeps the input (schedule) order.
        """
        evaluations = list(evaluations)
        keep: set[str] = set()

        for members in AggregationEngine.partition_by_family(evaluations).values():
            completed = [
                ev for ev in members if ev.status == const.SLOT_STATUS_COMPLETED
            ]
            if completed:
                keep.add(completed[-1].slot_id)

            open_slot = next(
                (
                    ev
                    for ev in members
                    if ev.status
                    not in (
                        const.SLOT_STATUS_COMPLETED,
                        const.SLOT_STATUS_MISSED_REPLACED,
                    )
                ),
                None,
            )
            if open_slot is not None:
                keep.add(open_slot.slot_id)

        return [ev for ev in evaluations if ev.slot_id in keep]

    # =========================================================================
    # CATEGORY JUDGMENT
    # =========================================================================

    @staticmethod
    def recommend_action(
        category: str,
        status: str,
        weight_fresh: bool,
    ) -> str:
        """Derive the next action for a category card.

        Order:
        1. Nothing actionable → none
        2. Weight stale → update_weight (dosing needs a current weight)
        3. Vaccines, or overdue deworming → visit_vet
        4. Deworming due now/soon → buy_medication
        """
        if (
            status != const.SLOT_STATUS_OVERDUE
            and status not in const.SLOT_STATUSES_ACTIONABLE
        ):
            return const.ACTION_NONE
        if not weight_fresh:
            return const.ACTION_UPDATE_WEIGHT
        if (
            category not in const.DEWORMING_FAMILIES
            or status == const.SLOT_STATUS_OVERDUE
        ):
            return const.ACTION_VISIT_VET
        return const.ACTION_BUY_MEDICATION

    @staticmethod
    def category_summary(
        category: str,
        evaluations: Iterable[SlotEvaluation],
        weight_fresh: bool,
    ) -> CategorySummary:
        """Judge one category from all its slot evaluations.

        Args:
            category: One of const.CATEGORIES
            evaluations: Evaluations of the whole schedule (other categories
                         are ignored)
            weight_fresh: Result of the weight gate

        Returns:
            CategorySummary with the representative slot and action.
        """
        members = [
            ev
            for ev in evaluations
            if SlotMatcher.slot_family(ev.slot) == category
        ]

        if not members:
            return {
                "category": category,
                "status": const.CATEGORY_STATUS_NOT_APPLICABLE,
                "action": const.ACTION_NONE,
                "slot_id": None,
                "label": None,
                "due_date": None,
                "weight_fresh": weight_fresh,
            }

        primary = StatusEngine.primary_evaluation(members)
        if primary is None:
            # Nothing due yet: show the next upcoming slot
            upcoming = sorted(
                (ev for ev in members if ev.status == const.SLOT_STATUS_PENDING),
                key=lambda ev: ev.slot.min_age_weeks,
            )
            status = const.SLOT_STATUS_PENDING
            primary = upcoming[0] if upcoming else None
        else:
            status = primary.status

        return {
            "category": category,
            "status": status,
            "action": AggregationEngine.recommend_action(
                category, status, weight_fresh
            ),
            "slot_id": primary.slot_id if primary else None,
            "label": primary.slot.label if primary else None,
            "due_date": primary.due_date if primary else None,
            "weight_fresh": weight_fresh,
        }

    @staticmethod
    def category_summaries(
        evaluations: Iterable[SlotEvaluation],
        weight_fresh: bool,
    ) -> dict[str, CategorySummary]:
        """Judge every category card, in display order."""
        evaluations = list(evaluations)
        return {
            category: AggregationEngine.category_summary(
                category, evaluations, weight_fresh
            )
            for category in const.CATEGORIES
        }

    # =========================================================================
    # PET SUMMARY
    # =========================================================================

    @staticmethod
    def rabies_expiry(
        evaluations: Iterable[SlotEvaluation],
        today: date,
    ) -> date | None:
        """Return the latest still-valid rabies protection date, if any.

        A rabies slot covers the pet when it is completed or due_soon (the
        protection has not lapsed yet) and its due date is not in the past.
        """
        expiries = [
            ev.due_date
            for ev in evaluations
            if SlotMatcher.slot_family(ev.slot) == const.FAMILY_VACCINE_RABIES
            and ev.status
            in (const.SLOT_STATUS_COMPLETED, const.SLOT_STATUS_DUE_SOON)
            and ev.matched_record is not None
            and ev.due_date is not None
            and ev.due_date >= today
        ]
        return max(expiries) if expiries else None

    @staticmethod
    def pet_summary(
        evaluations: Iterable[SlotEvaluation],
        today: date,
    ) -> PetSummary:
        """Summarize a pet over its visible (family-collapsed) slots.

        Rabies coverage looks at every evaluation, since a superseded puppy
        dose may be the one still protecting the pet.
        """
        evaluations = list(evaluations)
        visible = AggregationEngine.visible_evaluations(evaluations)

        counts = {status: 0 for status in const.SLOT_STATUSES}
        for evaluation in visible:
            counts[evaluation.status] += 1

        overdue = counts[const.SLOT_STATUS_OVERDUE]
        due_now = counts[const.SLOT_STATUS_CURRENT_DUE]
        rabies_expires = AggregationEngine.rabies_expiry(evaluations, today)

        return {
            "status_counts": counts,
            "overdue_count": overdue,
            "due_now_count": due_now,
            "upcoming_count": counts[const.SLOT_STATUS_DUE_SOON],
            "is_up_to_date": overdue == 0 and due_now == 0,
            "has_rabies_coverage": rabies_expires is not None,
            "rabies_expires": rabies_expires,
        }

"""Slot Matcher - decides which records can satisfy which slots.

Treatment data is often typed as free text by owners, so matching uses an
ordered precedence, implemented once and shared by every slot category:

1. Record kind must fit the slot family (deworming ↔ deworming slots,
   vaccine ↔ vaccine slots).
2. Record must not predate the slot's minimum age minus a buffer. The
   buffer comes from the caller's EngineSettings. Recurring slots skip
   this step and take the newest record of their category.
3. Deworming side: an explicit "internal"/"external" subtype decides the
   match outright. Without one, the side is inferred from the title and
   must agree with the slot.
4. Text fallback: the normalized title contains a slot tag, or the subtype
   equals a slot tag.

ARCHITECTURE: Pure logic, static methods only. No I/O, no clock access.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from typing import TYPE_CHECKING
import unicodedata

from .. import const
from ..data_builders import sort_treatment_records
from ..utils.dt_utils import dt_add_weeks

if TYPE_CHECKING:
    from datetime import date

    from ..data_builders import TreatmentRecord
    from .schedule_tables import TreatmentSlot


@lru_cache(maxsize=1024)
def normalize_text(text: str | None) -> str:
    """Lowercase a title and strip accents ("Antirrábica" → "antirrabica")."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


class SlotMatcher:
    """Pure logic for classifying slots and matching records to them."""

    # =========================================================================
    # SLOT CLASSIFICATION
    # =========================================================================

    @staticmethod
    def slot_family(slot: TreatmentSlot) -> str:
        """Return the family (const.FAMILY_*) a slot belongs to.

        External markers are checked first, since flea/tick products are
        also antiparasitic.
        """
        tags = set(slot.category_tags)
        if tags & const.TAGS_EXTERNAL:
            return const.FAMILY_DEWORMING_EXTERNAL
        if tags & const.TAGS_DEWORMING:
            return const.FAMILY_DEWORMING_INTERNAL
        if tags & const.TAGS_RABIES:
            return const.FAMILY_VACCINE_RABIES
        if tags & const.TAGS_POLYVALENT:
            return const.FAMILY_VACCINE_POLY
        return const.FAMILY_OTHER

    @staticmethod
    def is_deworming_slot(slot: TreatmentSlot) -> bool:
        """Return True for internal or external deworming slots."""
        return SlotMatcher.slot_family(slot) in const.DEWORMING_FAMILIES

    @staticmethod
    def is_external_slot(slot: TreatmentSlot) -> bool:
        """Return True for external parasiticide slots."""
        return SlotMatcher.slot_family(slot) == const.FAMILY_DEWORMING_EXTERNAL

    # =========================================================================
    # RECORD CLASSIFICATION
    # =========================================================================

    @staticmethod
    def infer_deworming_side(record: TreatmentRecord) -> str:
        """Return "internal" or "external" for a deworming record.

        An explicit subtype wins. Otherwise external product keywords in the
        title imply external, and anything else is internal.
        """
        if record.subtype in (const.SUBTYPE_INTERNAL, const.SUBTYPE_EXTERNAL):
            return record.subtype
        title = normalize_text(record.title)
        if any(keyword in title for keyword in const.EXTERNAL_TITLE_KEYWORDS):
            return const.SUBTYPE_EXTERNAL
        return const.SUBTYPE_INTERNAL

    @staticmethod
    def kind_compatible(slot: TreatmentSlot, record: TreatmentRecord) -> bool:
        """Deworming records fit deworming slots; vaccines fit vaccine slots."""
        if SlotMatcher.is_deworming_slot(slot):
            return record.kind == const.RECORD_KIND_DEWORMING
        return record.kind == const.RECORD_KIND_VACCINE

    # =========================================================================
    # MATCHING
    # =========================================================================

    @staticmethod
    def matches_category(slot: TreatmentSlot, record: TreatmentRecord) -> bool:
        """Apply steps 1, 3 and 4 (everything except the age gate)."""
        if not SlotMatcher.kind_compatible(slot, record):
            return False

        if SlotMatcher.is_deworming_slot(slot):
            slot_side = (
                const.SUBTYPE_EXTERNAL
                if SlotMatcher.is_external_slot(slot)
                else const.SUBTYPE_INTERNAL
            )
            # Explicit subtype is authoritative
            if record.subtype in (const.SUBTYPE_INTERNAL, const.SUBTYPE_EXTERNAL):
                return record.subtype == slot_side
            if SlotMatcher.infer_deworming_side(record) != slot_side:
                return False

        title = normalize_text(record.title)
        return any(
            tag in title or record.subtype == tag for tag in slot.category_tags
        )

    @staticmethod
    def matches(
        slot: TreatmentSlot,
        record: TreatmentRecord,
        birth_date: date,
        buffer_weeks: float,
    ) -> bool:
        """Return True if the record is eligible to satisfy the slot.

        Args:
            slot: Slot being evaluated
            record: Candidate record
            birth_date: Pet's birth date
            buffer_weeks: Early-administration tolerance (StatusEngine.buffer_weeks)
        """
        earliest = dt_add_weeks(birth_date, slot.min_age_weeks - buffer_weeks)
        if record.applied_at < earliest:
            return False
        return SlotMatcher.matches_category(slot, record)

    @staticmethod
    def find_candidates(
        slot: TreatmentSlot,
        records: Iterable[TreatmentRecord],
        birth_date: date,
        buffer_weeks: float,
    ) -> list[TreatmentRecord]:
        """Return the records eligible for a slot, newest first."""
        return sort_treatment_records(
            record
            for record in records
            if SlotMatcher.matches(slot, record, birth_date, buffer_weeks)
        )

    @staticmethod
    def find_category_records(
        slot: TreatmentSlot,
        records: Iterable[TreatmentRecord],
    ) -> list[TreatmentRecord]:
        """Return the records of the slot's category at any age, newest first.

        Used for renewals: an annual booster counts from the last dose of the
        vaccine, even when that dose was a puppy one.
        """
        return sort_treatment_records(
            record
            for record in records
            if SlotMatcher.matches_category(slot, record)
        )

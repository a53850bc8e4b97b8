"""Schedule Tables - hand-curated preventive-care slots per species.

Each species has one ordered list of TreatmentSlot entries. Slots are grouped
into families (internal deworming, external parasiticides, core vaccine
series, rabies) and ordered by ascending min_age_weeks within a family.

Only dogs and cats are supported. Unknown species resolve to an empty
schedule, which callers render as "no schedule available"; it is not an
error.

IMPORTANT: Tables are module-level constants built once at import time and
never mutated. Slots are frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .. import const

# =============================================================================
# SLOT DATA STRUCTURE
# =============================================================================


@dataclass(frozen=True)
class TreatmentSlot:
    """One required or recommended treatment event.

    Attributes:
        slot_id: Stable identifier, e.g. "pup_poly_1"
        label: Display name (the only display string the engine returns)
        age_label: Human milestone description, informational only
        min_age_weeks: Age at which the slot becomes due
        max_age_weeks: Age after which a one-time slot is overdue
        category_tags: Lowercase, accent-free keywords used for matching
        is_core: Mandatory (True) or optional informational slot
        is_recurring: Renews indefinitely after each application
        supersedes: One-time slot ids this slot's fulfillment makes moot
        renewal_months: Renewal interval for recurring slots; None for
                        one-time slots and product-driven (external) slots
    """

    slot_id: str
    label: str
    age_label: str
    min_age_weeks: float
    max_age_weeks: float
    category_tags: tuple[str, ...]
    is_core: bool = True
    is_recurring: bool = False
    supersedes: tuple[str, ...] = ()
    renewal_months: int | None = None

    def __post_init__(self) -> None:
        """Reject inverted age windows."""
        if self.min_age_weeks > self.max_age_weeks:
            raise ValueError(
                f"Slot {self.slot_id}: min_age_weeks {self.min_age_weeks} "
                f"exceeds max_age_weeks {self.max_age_weeks}"
            )


# =============================================================================
# SHARED TAG SETS
# =============================================================================

_DEWORMING_TAGS: Final = ("desparasitacion", "deworming", "antiparasitario")
_EXTERNAL_TAGS: Final = (
    "pipeta",
    "pulgas",
    "garrapatas",
    "bravecto",
    "nexgard",
    "simparica",
    "seresto",
    "external",
    "externa",
)
_RABIES_TAGS: Final = ("rabia", "antirrabica", "rabies")
_DOG_POLY_TAGS: Final = ("polivalente", "sextuple", "quintuple")
_CAT_TRIPLE_TAGS: Final = (
    "triple",
    "felina",
    "panleucopenia",
    "rinotraqueitis",
    "calicivirus",
)

# Open-ended upper bound for recurring slots
_OPEN_ENDED_WEEKS: Final = 1000


def _deworming_bands(prefix: str) -> list[TreatmentSlot]:
    """Build the eight one-time internal deworming age bands."""
    bands = (
        ("1", "Desparasitación 15 días", "2-3 Semanas", 2, 3),
        ("2", "Desparasitación 30 días", "4-5 Semanas", 4, 5),
        ("3", "Desparasitación 45 días", "6-7 Semanas", 6, 7),
        ("2m", "Desparasitación 2 Meses", "8-9 Semanas", 8, 9),
        ("3m", "Desparasitación 3 Meses", "3 Meses", 12, 13),
        ("4m", "Desparasitación 4 Meses", "4 Meses", 16, 17),
        ("5m", "Desparasitación 5 Meses", "5 Meses", 20, 21),
        ("6m", "Desparasitación 6 Meses", "6 Meses", 24, 25),
    )
    return [
        TreatmentSlot(
            slot_id=f"{prefix}_deworm_{suffix}",
            label=label,
            age_label=age_label,
            min_age_weeks=min_weeks,
            max_age_weeks=max_weeks,
            category_tags=_DEWORMING_TAGS,
        )
        for suffix, label, age_label, min_weeks, max_weeks in bands
    ]


def _adult_deworming(slot_id: str) -> TreatmentSlot:
    """Quarterly adult deworming, from 6 months of age."""
    return TreatmentSlot(
        slot_id=slot_id,
        label="Desparasitación Adultos",
        age_label="Cada 3-4 Meses",
        min_age_weeks=26,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_DEWORMING_TAGS,
        is_recurring=True,
        renewal_months=const.RENEWAL_MONTHS_QUARTERLY,
    )


def _external_control(slot_id: str) -> TreatmentSlot:
    """Flea/tick control; renewal depends on the product applied."""
    return TreatmentSlot(
        slot_id=slot_id,
        label="Control Pulgas/Garrapatas",
        age_label="Mensual / Según Producto",
        min_age_weeks=8,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_EXTERNAL_TAGS,
        is_core=False,
        is_recurring=True,
    )


# =============================================================================
# DOG
# =============================================================================

DOG_SCHEDULE: Final[tuple[TreatmentSlot, ...]] = (
    *_deworming_bands("pup"),
    _adult_deworming("adult_deworm_trimestral"),
    _external_control("pup_external"),
    TreatmentSlot(
        slot_id="pup_poly_1",
        label="Polivalente 1º Dosis",
        age_label="6-8 Semanas",
        min_age_weeks=6,
        max_age_weeks=9,
        category_tags=(*_DOG_POLY_TAGS, "triple", "moquillo"),
    ),
    TreatmentSlot(
        slot_id="pup_poly_2",
        label="Polivalente 2º Dosis",
        age_label="10-12 Semanas",
        min_age_weeks=10,
        max_age_weeks=13,
        category_tags=_DOG_POLY_TAGS,
    ),
    TreatmentSlot(
        slot_id="pup_poly_3",
        label="Polivalente 3º Dosis",
        age_label="14-16 Semanas",
        min_age_weeks=14,
        max_age_weeks=18,
        category_tags=_DOG_POLY_TAGS,
    ),
    TreatmentSlot(
        slot_id="adult_annual_poly",
        label="Polivalente Anual",
        age_label="Anual",
        min_age_weeks=52,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_DOG_POLY_TAGS,
        is_recurring=True,
        supersedes=("pup_poly_1", "pup_poly_2", "pup_poly_3"),
        renewal_months=const.RENEWAL_MONTHS_ANNUAL,
    ),
    TreatmentSlot(
        slot_id="pup_rabies",
        label="Antirrábica",
        age_label="14-16 Semanas",
        min_age_weeks=14,
        max_age_weeks=24,
        category_tags=_RABIES_TAGS,
    ),
    TreatmentSlot(
        slot_id="adult_annual_rabies",
        label="Antirrábica Anual",
        age_label="Anual",
        min_age_weeks=52,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_RABIES_TAGS,
        is_recurring=True,
        supersedes=("pup_rabies",),
        renewal_months=const.RENEWAL_MONTHS_ANNUAL,
    ),
)

# =============================================================================
# CAT
# =============================================================================

CAT_SCHEDULE: Final[tuple[TreatmentSlot, ...]] = (
    *_deworming_bands("cat"),
    _adult_deworming("cat_deworm_trimestral"),
    _external_control("cat_external"),
    TreatmentSlot(
        slot_id="cat_triple_1",
        label="Triple Felina 1º Dosis",
        age_label="8 Semanas",
        min_age_weeks=8,
        max_age_weeks=10,
        category_tags=_CAT_TRIPLE_TAGS,
    ),
    TreatmentSlot(
        slot_id="cat_triple_2",
        label="Triple Felina 2º Dosis",
        age_label="10-12 Semanas",
        min_age_weeks=10,
        max_age_weeks=13,
        category_tags=_CAT_TRIPLE_TAGS,
    ),
    TreatmentSlot(
        slot_id="cat_triple_3",
        label="Triple Felina 3º Dosis",
        age_label="14-16 Semanas",
        min_age_weeks=14,
        max_age_weeks=18,
        category_tags=_CAT_TRIPLE_TAGS,
    ),
    TreatmentSlot(
        slot_id="cat_annual_triple",
        label="Triple Felina Anual",
        age_label="Anual",
        min_age_weeks=52,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_CAT_TRIPLE_TAGS,
        is_recurring=True,
        supersedes=("cat_triple_1", "cat_triple_2", "cat_triple_3"),
        renewal_months=const.RENEWAL_MONTHS_ANNUAL,
    ),
    TreatmentSlot(
        slot_id="cat_rabies",
        label="Antirrábica",
        age_label="3-4 Meses",
        min_age_weeks=12,
        max_age_weeks=24,
        category_tags=_RABIES_TAGS,
    ),
    TreatmentSlot(
        slot_id="cat_annual_rabies",
        label="Antirrábica Anual",
        age_label="Anual",
        min_age_weeks=52,
        max_age_weeks=_OPEN_ENDED_WEEKS,
        category_tags=_RABIES_TAGS,
        is_recurring=True,
        supersedes=("cat_rabies",),
        renewal_months=const.RENEWAL_MONTHS_ANNUAL,
    ),
)

_SCHEDULES: Final[dict[str, tuple[TreatmentSlot, ...]]] = {
    const.SPECIES_DOG: DOG_SCHEDULE,
    const.SPECIES_CAT: CAT_SCHEDULE,
}


# =============================================================================
# LOOKUPS
# =============================================================================


def normalize_species(species: str | None) -> str | None:
    """Resolve a species string or alias to its canonical name.

    Examples:
        normalize_species(" Perro ") → "dog"
        normalize_species("GATO") → "cat"
        normalize_species("iguana") → None
    """
    if not species or not isinstance(species, str):
        return None
    return const.SPECIES_ALIASES.get(species.strip().lower())


def is_supported_species(species: str | None) -> bool:
    """Return True if a schedule exists for the species."""
    return normalize_species(species) is not None


def get_schedule(species: str | None) -> list[TreatmentSlot]:
    """Return the ordered slot list for a species.

    Args:
        species: Species name or alias, case-insensitive

    Returns:
        New list of slots (safe for the caller to reorder), or [] when the
        species is unsupported.
    """
    canonical = normalize_species(species)
    if canonical is None:
        const.LOGGER.debug("No schedule for species %r", species)
        return []
    return list(_SCHEDULES[canonical])


def get_slot(species: str | None, slot_id: str) -> TreatmentSlot | None:
    """Look up one slot of a species' schedule by id."""
    for slot in get_schedule(species):
        if slot.slot_id == slot_id:
            return slot
    return None


def superseding_slots(
    schedule: list[TreatmentSlot] | tuple[TreatmentSlot, ...],
    slot_id: str,
) -> list[TreatmentSlot]:
    """Return the slots whose `supersedes` list names `slot_id`."""
    return [slot for slot in schedule if slot_id in slot.supersedes]

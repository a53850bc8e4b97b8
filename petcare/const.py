# File: const.py
"""Constants for the petcare scheduling engine.

This file centralizes record/pet field keys, status values, category names,
species aliases and the tunable defaults used by the engines, so every
module reads them from a single place.
"""

import logging
from typing import Final

# ------------------------------------------------------------------------------------------------
# General
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Species
# ------------------------------------------------------------------------------------------------
SPECIES_DOG = "dog"
SPECIES_CAT = "cat"

# Aliases accepted by normalize_species (lowercase, stripped)
SPECIES_ALIASES: Final[dict[str, str]] = {
    "dog": SPECIES_DOG,
    "perro": SPECIES_DOG,
    "canine": SPECIES_DOG,
    "canino": SPECIES_DOG,
    "cat": SPECIES_CAT,
    "gato": SPECIES_CAT,
    "feline": SPECIES_CAT,
    "felino": SPECIES_CAT,
}

# ------------------------------------------------------------------------------------------------
# Treatment Record Keys
# ------------------------------------------------------------------------------------------------
DATA_RECORD_ID = "record_id"
DATA_RECORD_KIND = "kind"
DATA_RECORD_SUBTYPE = "subtype"
DATA_RECORD_TITLE = "title"
DATA_RECORD_APPLIED_AT = "applied_at"
DATA_RECORD_NEXT_DUE_AT = "next_due_at"
DATA_RECORD_WEIGHT_VALUE = "weight_value"
DATA_RECORD_CREATED_AT = "created_at"

# Record kinds
RECORD_KIND_VACCINE = "vaccine"
RECORD_KIND_DEWORMING = "deworming"
RECORD_KIND_CONSULTATION = "consultation"
RECORD_KIND_WEIGHT = "weight"

RECORD_KINDS: Final[tuple[str, ...]] = (
    RECORD_KIND_VACCINE,
    RECORD_KIND_DEWORMING,
    RECORD_KIND_CONSULTATION,
    RECORD_KIND_WEIGHT,
)

# Deworming subtypes (authoritative when present)
SUBTYPE_INTERNAL = "internal"
SUBTYPE_EXTERNAL = "external"

# ------------------------------------------------------------------------------------------------
# Pet Keys
# ------------------------------------------------------------------------------------------------
DATA_PET_ID = "pet_id"
DATA_PET_SPECIES = "species"
DATA_PET_BIRTH_DATE = "birth_date"
DATA_PET_LAST_WEIGHT_VALUE = "last_weight_value"
DATA_PET_LAST_WEIGHT_UPDATE = "last_weight_update"

# ------------------------------------------------------------------------------------------------
# Slot Statuses
# ------------------------------------------------------------------------------------------------
SLOT_STATUS_PENDING = "pending"
SLOT_STATUS_DUE_SOON = "due_soon"
SLOT_STATUS_CURRENT_DUE = "current_due"
SLOT_STATUS_OVERDUE = "overdue"
SLOT_STATUS_COMPLETED = "completed"
SLOT_STATUS_MISSED_REPLACED = "missed_replaced"

SLOT_STATUSES: Final[tuple[str, ...]] = (
    SLOT_STATUS_PENDING,
    SLOT_STATUS_DUE_SOON,
    SLOT_STATUS_CURRENT_DUE,
    SLOT_STATUS_OVERDUE,
    SLOT_STATUS_COMPLETED,
    SLOT_STATUS_MISSED_REPLACED,
)

# Statuses that ask the owner to do something now or soon
SLOT_STATUSES_ACTIONABLE: Final[frozenset[str]] = frozenset(
    {SLOT_STATUS_CURRENT_DUE, SLOT_STATUS_DUE_SOON}
)

# Category-only status (species has no slot in the category)
CATEGORY_STATUS_NOT_APPLICABLE = "not_applicable"

# ------------------------------------------------------------------------------------------------
# Families / Categories
# ------------------------------------------------------------------------------------------------
FAMILY_DEWORMING_INTERNAL = "deworming_internal"
FAMILY_DEWORMING_EXTERNAL = "deworming_external"
FAMILY_VACCINE_POLY = "vaccine_poly"
FAMILY_VACCINE_RABIES = "vaccine_rabies"
FAMILY_OTHER = "other"

# Families with a category card, in display order
CATEGORIES: Final[tuple[str, ...]] = (
    FAMILY_DEWORMING_INTERNAL,
    FAMILY_DEWORMING_EXTERNAL,
    FAMILY_VACCINE_POLY,
    FAMILY_VACCINE_RABIES,
)

DEWORMING_FAMILIES: Final[frozenset[str]] = frozenset(
    {FAMILY_DEWORMING_INTERNAL, FAMILY_DEWORMING_EXTERNAL}
)

# Tag markers used to classify a slot into its family
TAGS_DEWORMING: Final[frozenset[str]] = frozenset(
    {"desparasitacion", "deworming", "antiparasitario"}
)
TAGS_EXTERNAL: Final[frozenset[str]] = frozenset(
    {"external", "externa", "pipeta", "pulgas", "garrapatas"}
)
TAGS_RABIES: Final[frozenset[str]] = frozenset({"rabia", "rabies", "antirrabica"})
TAGS_POLYVALENT: Final[frozenset[str]] = frozenset(
    {"polivalente", "sextuple", "quintuple", "triple"}
)

# Title keywords implying external deworming when no subtype is given
EXTERNAL_TITLE_KEYWORDS: Final[tuple[str, ...]] = (
    "pipeta",
    "externa",
    "external",
    "pulgas",
    "garrapatas",
    "bravecto",
    "nexgard",
    "simparica",
    "seresto",
)

# ------------------------------------------------------------------------------------------------
# Actions
# ------------------------------------------------------------------------------------------------
ACTION_UPDATE_WEIGHT = "update_weight"
ACTION_VISIT_VET = "visit_vet"
ACTION_BUY_MEDICATION = "buy_medication"
ACTION_NONE = "none"

# ------------------------------------------------------------------------------------------------
# Weight
# ------------------------------------------------------------------------------------------------
WEIGHT_STATUS_MISSING = "missing"
WEIGHT_STATUS_STALE = "stale"
WEIGHT_STATUS_UPCOMING = "upcoming"
WEIGHT_STATUS_FRESH = "fresh"

# Age tiers for weight freshness
WEIGHT_VERY_YOUNG_AGE_DAYS = 60
WEIGHT_YOUNG_AGE_MONTHS = 6

WEIGHT_FRESHNESS_VERY_YOUNG_DAYS = 7
WEIGHT_FRESHNESS_YOUNG_DAYS = 15
WEIGHT_FRESHNESS_ADULT_DAYS = 30

# Days of freshness left at which a weight check is flagged as upcoming
WEIGHT_UPCOMING_NOTICE_DAYS = 3

# ------------------------------------------------------------------------------------------------
# Alerts
# ------------------------------------------------------------------------------------------------
ALERT_KIND_WEIGHT = "weight"
ALERT_KIND_TREATMENT = "treatment"

ALERT_SEVERITY_CRITICAL = "critical"
ALERT_SEVERITY_SUCCESS = "success"
ALERT_SEVERITY_WARNING = "warning"

# Lower sorts first
ALERT_SEVERITY_PRIORITY: Final[dict[str, int]] = {
    ALERT_SEVERITY_CRITICAL: 0,
    ALERT_SEVERITY_SUCCESS: 1,
    ALERT_SEVERITY_WARNING: 2,
}

# ------------------------------------------------------------------------------------------------
# Engine Settings Keys
# ------------------------------------------------------------------------------------------------
CONF_DEWORMING_BUFFER_WEEKS = "deworming_buffer_weeks"
CONF_VACCINE_BUFFER_WEEKS = "vaccine_buffer_weeks"
CONF_DEWORMING_ANTICIPATION_DAYS = "deworming_anticipation_days"
CONF_VACCINE_ANTICIPATION_DAYS = "vaccine_anticipation_days"
CONF_RECURRING_DUE_SOON_DAYS = "recurring_due_soon_days"
CONF_EXTERNAL_DUE_SOON_DAYS = "external_due_soon_days"
CONF_EXTERNAL_DEFAULT_DURATION_DAYS = "external_default_duration_days"

# ------------------------------------------------------------------------------------------------
# Defaults (tunable heuristics, not veterinary contracts)
# ------------------------------------------------------------------------------------------------
DEFAULT_DEWORMING_BUFFER_WEEKS = 0.5
DEFAULT_VACCINE_BUFFER_WEEKS = 1.0
DEFAULT_DEWORMING_ANTICIPATION_DAYS = 7
DEFAULT_VACCINE_ANTICIPATION_DAYS = 21
DEFAULT_RECURRING_DUE_SOON_DAYS = 30
DEFAULT_EXTERNAL_DUE_SOON_DAYS = 7
DEFAULT_EXTERNAL_DEFAULT_DURATION_DAYS = 30

# Renewal intervals (months)
RENEWAL_MONTHS_ANNUAL = 12
RENEWAL_MONTHS_QUARTERLY = 3

# Series doses given before this age are followed by a booster in 21 days
SERIES_BOOSTER_MAX_AGE_WEEKS = 20
SERIES_BOOSTER_INTERVAL_DAYS = 21

# External parasiticide durations, checked in order against the normalized title
EXTERNAL_PRODUCT_DURATIONS: Final[tuple[tuple[tuple[str, ...], int], ...]] = (
    (("bravecto", "90 dias", "3 meses", "trimestral", "12 semanas"), 90),
    (("simparica",), 35),
    (("nexgard",), 30),
    (("seresto",), 240),
)

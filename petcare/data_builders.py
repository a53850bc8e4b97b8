"""Input validation and normalization helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Treatment record validation (voluptuous schema) and normalization
- Pet context validation
- Engine settings defaults and validation
- Stable record ordering
- Date shifting for "simulate elapsed time" tooling

### Build Functions
Each input type has a `build_<thing>()` function that:
- Takes a raw mapping as stored by the calling system
- Validates it against a voluptuous schema
- Applies field defaults
- Returns a frozen value the engines can trust

Malformed input raises ValidationError. The batch helper
build_treatment_records() collects those errors instead, so one bad
historical entry never hides the other records of the same pet.

Consumers:
- health_report.py (pipeline entry points)
- engines (type imports only)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Any, cast

import voluptuous as vol

from . import const
from .type_defs import EngineSettings
from .utils.dt_utils import dt_add_days, dt_parse_date, dt_parse_datetime

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class ValidationError(ValueError):
    """Raised when caller input cannot be turned into engine values.

    Attributes:
        record_ref: Identifies the offending input (record id, "#<index>",
                    "pet" or "settings")
        field: Name of the field that failed, or None for whole-input errors
        reason: Human-readable reason from the validator

    Example:
        raise ValidationError(
            record_ref="rec-42",
            field=const.DATA_RECORD_APPLIED_AT,
            reason="not a calendar date",
        )
    """

    def __init__(
        self,
        record_ref: str,
        field: str | None,
        reason: str,
    ) -> None:
        """Initialize ValidationError.

        Args:
            record_ref: Identifies the offending input
            field: Field that failed validation, if known
            reason: Why validation failed
        """
        self.record_ref = record_ref
        self.field = field
        self.reason = reason
        location = f"{record_ref}.{field}" if field else record_ref
        super().__init__(f"Invalid input {location}: {reason}")


# ==============================================================================
# VALUE TYPES
# ==============================================================================


@dataclass(frozen=True)
class TreatmentRecord:
    """Normalized treatment record. The engine only reads it."""

    kind: str
    applied_at: date
    title: str = ""
    subtype: str | None = None
    next_due_at: date | None = None
    weight_value: float | None = None
    record_id: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class PetContext:
    """Read-only pet context passed into every evaluation."""

    species: str
    birth_date: date
    last_weight_value: float | None = None
    last_weight_update: date | None = None
    pet_id: str | None = None


# ==============================================================================
# FIELD VALIDATORS
# ==============================================================================


def _calendar_date(value: Any) -> date:
    """Voluptuous validator: value must resolve to a calendar date."""
    parsed = dt_parse_date(value)
    if parsed is None:
        raise vol.Invalid(f"not a calendar date: {value!r}")
    return parsed


def _optional_calendar_date(value: Any) -> date | None:
    """Voluptuous validator: empty values become None, others must parse."""
    if value is None or value == "":
        return None
    return _calendar_date(value)


def _optional_timestamp(value: Any) -> datetime | None:
    """Voluptuous validator for ordering timestamps."""
    if value is None or value == "":
        return None
    parsed = dt_parse_datetime(value)
    if parsed is None:
        raise vol.Invalid(f"not a timestamp: {value!r}")
    return parsed


def _optional_text(value: Any) -> str | None:
    """Voluptuous validator: strip text, empty becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise vol.Invalid(f"expected text, got {type(value).__name__}")
    text = value.strip()
    return text or None


# ==============================================================================
# SCHEMAS
# ==============================================================================

RECORD_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_RECORD_KIND): vol.All(
            str, vol.Strip, vol.Lower, vol.In(const.RECORD_KINDS)
        ),
        vol.Required(const.DATA_RECORD_APPLIED_AT): _calendar_date,
        vol.Optional(const.DATA_RECORD_TITLE, default=None): _optional_text,
        vol.Optional(const.DATA_RECORD_SUBTYPE, default=None): _optional_text,
        vol.Optional(const.DATA_RECORD_NEXT_DUE_AT, default=None): (
            _optional_calendar_date
        ),
        vol.Optional(const.DATA_RECORD_WEIGHT_VALUE, default=None): vol.Any(
            None, vol.All(vol.Coerce(float), vol.Range(min=0))
        ),
        vol.Optional(const.DATA_RECORD_ID, default=None): vol.Any(
            None, vol.Coerce(str)
        ),
        vol.Optional(const.DATA_RECORD_CREATED_AT, default=None): _optional_timestamp,
    },
    extra=vol.ALLOW_EXTRA,
)

PET_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_PET_SPECIES): vol.Any(None, str),
        vol.Required(const.DATA_PET_BIRTH_DATE): _calendar_date,
        vol.Optional(const.DATA_PET_ID, default=None): vol.Any(None, vol.Coerce(str)),
        vol.Optional(const.DATA_PET_LAST_WEIGHT_VALUE, default=None): vol.Any(
            None, vol.All(vol.Coerce(float), vol.Range(min=0))
        ),
        vol.Optional(const.DATA_PET_LAST_WEIGHT_UPDATE, default=None): (
            _optional_calendar_date
        ),
    },
    extra=vol.ALLOW_EXTRA,
)

_NON_NEGATIVE_WEEKS = vol.All(vol.Coerce(float), vol.Range(min=0))
_NON_NEGATIVE_DAYS = vol.All(vol.Coerce(int), vol.Range(min=0))

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(
            const.CONF_DEWORMING_BUFFER_WEEKS,
            default=const.DEFAULT_DEWORMING_BUFFER_WEEKS,
        ): _NON_NEGATIVE_WEEKS,
        vol.Optional(
            const.CONF_VACCINE_BUFFER_WEEKS,
            default=const.DEFAULT_VACCINE_BUFFER_WEEKS,
        ): _NON_NEGATIVE_WEEKS,
        vol.Optional(
            const.CONF_DEWORMING_ANTICIPATION_DAYS,
            default=const.DEFAULT_DEWORMING_ANTICIPATION_DAYS,
        ): _NON_NEGATIVE_DAYS,
        vol.Optional(
            const.CONF_VACCINE_ANTICIPATION_DAYS,
            default=const.DEFAULT_VACCINE_ANTICIPATION_DAYS,
        ): _NON_NEGATIVE_DAYS,
        vol.Optional(
            const.CONF_RECURRING_DUE_SOON_DAYS,
            default=const.DEFAULT_RECURRING_DUE_SOON_DAYS,
        ): _NON_NEGATIVE_DAYS,
        vol.Optional(
            const.CONF_EXTERNAL_DUE_SOON_DAYS,
            default=const.DEFAULT_EXTERNAL_DUE_SOON_DAYS,
        ): _NON_NEGATIVE_DAYS,
        vol.Optional(
            const.CONF_EXTERNAL_DEFAULT_DURATION_DAYS,
            default=const.DEFAULT_EXTERNAL_DEFAULT_DURATION_DAYS,
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
    }
)


def _invalid_to_error(record_ref: str, err: vol.Invalid) -> ValidationError:
    """Translate a voluptuous error into a ValidationError."""
    field = str(err.path[0]) if err.path else None
    return ValidationError(record_ref=record_ref, field=field, reason=str(err.msg))


# ==============================================================================
# TREATMENT RECORDS
# ==============================================================================


def build_treatment_record(
    raw: Mapping[str, Any] | TreatmentRecord,
    record_ref: str | None = None,
) -> TreatmentRecord:
    """Validate and normalize one treatment record.

    Args:
        raw: Record mapping with DATA_RECORD_* keys, or an already-built
             TreatmentRecord (returned unchanged)
        record_ref: How to name the record in errors. Defaults to its
                    record_id, or "record" when it has none.

    Returns:
        Frozen TreatmentRecord.

    Raises:
        ValidationError: If the kind is unknown, a date does not resolve to a
            calendar date, or a numeric field is not numeric.

    Examples:
        build_treatment_record({"kind": "vaccine", "title": "Antirrábica",
                                "applied_at": "2025-03-01"})
    """
    if isinstance(raw, TreatmentRecord):
        return raw

    if not isinstance(raw, Mapping):
        raise ValidationError(
            record_ref=record_ref or "record",
            field=None,
            reason=f"expected a mapping, got {type(raw).__name__}",
        )

    ref = record_ref or str(raw.get(const.DATA_RECORD_ID) or "record")

    try:
        data = RECORD_SCHEMA(dict(raw))
    except vol.Invalid as err:
        raise _invalid_to_error(ref, err) from err

    subtype = data[const.DATA_RECORD_SUBTYPE]
    return TreatmentRecord(
        kind=data[const.DATA_RECORD_KIND],
        applied_at=data[const.DATA_RECORD_APPLIED_AT],
        title=data[const.DATA_RECORD_TITLE] or "",
        subtype=subtype.lower() if subtype else None,
        next_due_at=data[const.DATA_RECORD_NEXT_DUE_AT],
        weight_value=data[const.DATA_RECORD_WEIGHT_VALUE],
        record_id=data[const.DATA_RECORD_ID],
        created_at=data[const.DATA_RECORD_CREATED_AT],
    )


def build_treatment_records(
    raws: Iterable[Mapping[str, Any] | TreatmentRecord] | None,
) -> tuple[list[TreatmentRecord], list[ValidationError]]:
    """Validate a batch of records, skipping (not aborting on) bad ones.

    Args:
        raws: Records as stored by the caller. None is treated as empty.

    Returns:
        Tuple of (valid records in input order, errors for skipped records).
    """
    records: list[TreatmentRecord] = []
    errors: list[ValidationError] = []

    for index, raw in enumerate(raws or []):
        ref = f"#{index}"
        if isinstance(raw, Mapping) and raw.get(const.DATA_RECORD_ID):
            ref = str(raw[const.DATA_RECORD_ID])
        try:
            records.append(build_treatment_record(raw, record_ref=ref))
        except ValidationError as err:
            const.LOGGER.warning("Skipping treatment record %s: %s", ref, err.reason)
            errors.append(err)

    return records, errors


def sort_treatment_records(
    records: Iterable[TreatmentRecord],
) -> list[TreatmentRecord]:
    """Sort records newest-first with a stable tie-break.

    Order:
    1. applied_at (descending)
    2. created_at (descending, missing sorts last)
    3. record_id (descending, missing sorts last)
    """
    oldest = datetime.min.replace(tzinfo=UTC)
    return sorted(
        records,
        key=lambda r: (r.applied_at, r.created_at or oldest, r.record_id or ""),
        reverse=True,
    )


# ==============================================================================
# PET CONTEXT
# ==============================================================================


def build_pet_context(raw: Mapping[str, Any] | PetContext) -> PetContext:
    """Validate and normalize the pet context.

    Raises:
        ValidationError: If the birth date is missing or malformed. Nothing
            can be evaluated without it, so this is not skipped.
    """
    if isinstance(raw, PetContext):
        return raw

    if not isinstance(raw, Mapping):
        raise ValidationError(
            record_ref="pet",
            field=None,
            reason=f"expected a mapping, got {type(raw).__name__}",
        )

    try:
        data = PET_SCHEMA(dict(raw))
    except vol.Invalid as err:
        raise _invalid_to_error("pet", err) from err

    return PetContext(
        species=data[const.DATA_PET_SPECIES] or "",
        birth_date=data[const.DATA_PET_BIRTH_DATE],
        last_weight_value=data[const.DATA_PET_LAST_WEIGHT_VALUE],
        last_weight_update=data[const.DATA_PET_LAST_WEIGHT_UPDATE],
        pet_id=data[const.DATA_PET_ID],
    )


# ==============================================================================
# ENGINE SETTINGS
# ==============================================================================


def build_engine_settings(
    overrides: Mapping[str, Any] | None = None,
) -> EngineSettings:
    """Build complete engine settings from optional overrides.

    Args:
        overrides: Partial mapping of CONF_* keys. Missing keys take the
                   const.DEFAULT_* value.

    Returns:
        Complete EngineSettings.

    Raises:
        ValidationError: On unknown keys or out-of-range values.
    """
    try:
        data = SETTINGS_SCHEMA(dict(overrides or {}))
    except vol.Invalid as err:
        raise _invalid_to_error("settings", err) from err
    return cast("EngineSettings", data)


# ==============================================================================
# TIME TRAVEL
# ==============================================================================


def shift_history(
    pet: PetContext,
    records: Iterable[TreatmentRecord],
    days: int,
) -> tuple[PetContext, list[TreatmentRecord]]:
    """Move every date of a pet's history `days` into the past.

    Administrative tooling uses this to simulate time passing without
    touching the clock: evaluating the shifted history at `today` gives the
    same statuses as evaluating the original history at `today + days`.

    Args:
        pet: Pet context
        records: The pet's records
        days: Days to shift (negative values move dates forward)

    Returns:
        Tuple of (shifted pet, shifted records). Inputs are not modified.
    """

    def _shift(value: date | None) -> date | None:
        return dt_add_days(value, -days) if value is not None else None

    shifted_pet = replace(
        pet,
        birth_date=dt_add_days(pet.birth_date, -days),
        last_weight_update=_shift(pet.last_weight_update),
    )
    shifted_records = [
        replace(
            record,
            applied_at=dt_add_days(record.applied_at, -days),
            next_due_at=_shift(record.next_due_at),
        )
        for record in records
    ]
    return shifted_pet, shifted_records

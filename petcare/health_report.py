"""Health report pipeline - the library's entry points.

Wires the engines together for one pet:

    raw pet + raw records
      → data_builders (validate, skip bad records)
      → schedule_tables (species schedule)
      → StatusEngine (one SlotEvaluation per slot)
      → WeightEngine (freshness gate)
      → AggregationEngine (visible slots, category cards, pet summary)
      → AlertEngine (sorted semantic alerts)

These are the only functions that may default `today` to the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from . import const
from .data_builders import (
    PetContext,
    TreatmentRecord,
    build_engine_settings,
    build_pet_context,
    build_treatment_records,
)
from .engines.aggregation_engine import AggregationEngine
from .engines.alert_engine import AlertEngine
from .engines.schedule_tables import get_schedule, normalize_species
from .engines.status_engine import SlotEvaluation, StatusEngine
from .engines.weight_engine import WeightEngine
from .type_defs import DateInput, HealthReport, PetData, TreatmentRecordData
from .utils.dt_utils import dt_resolve_today


def resolve_last_weight(
    pet: PetContext,
    records: Iterable[TreatmentRecord],
) -> PetContext:
    """Return the pet with its most recent weight, from either source.

    The pet's own weight fields and the newest weight record are compared,
    and the later one wins. A pet counts as weighed only when it has both a
    weight value and its date; a date alone is dropped.
    """
    if pet.last_weight_value is None and pet.last_weight_update is not None:
        pet = replace(pet, last_weight_update=None)

    record_date, record_value = WeightEngine.last_weight_from_records(records)
    if record_date is None:
        return pet
    if pet.last_weight_update is not None and pet.last_weight_update >= record_date:
        return pet
    return replace(
        pet, last_weight_update=record_date, last_weight_value=record_value
    )


def build_health_report(
    pet: PetData | Mapping[str, Any] | PetContext,
    records: (
        Iterable[TreatmentRecordData | Mapping[str, Any] | TreatmentRecord] | None
    ),
    today: DateInput | None = None,
    settings: Mapping[str, Any] | None = None,
) -> HealthReport:
    """Run the full pipeline for one pet.

    Args:
        pet: Pet mapping (DATA_PET_* keys) or PetContext
        records: The pet's treatment records; invalid ones are skipped and
                 reported in the result's "errors"
        today: Evaluation date. Defaults to the local date.
        settings: Partial EngineSettings overrides

    Returns:
        HealthReport. An unsupported species yields an empty schedule, every
        category not_applicable and no alerts.

    Raises:
        ValidationError: If the pet or the settings are malformed.
        ValueError: If an explicit `today` cannot be parsed.
    """
    pet_context = build_pet_context(pet)
    valid_records, errors = build_treatment_records(records)
    pet_context = resolve_last_weight(pet_context, valid_records)
    evaluation_date = dt_resolve_today(today)
    engine = StatusEngine(build_engine_settings(settings))

    species = normalize_species(pet_context.species)
    schedule = get_schedule(species)
    evaluations = engine.evaluate_schedule(
        schedule, pet_context.birth_date, valid_records, evaluation_date
    )

    weight_fresh = WeightEngine.is_weight_fresh(
        pet_context.birth_date, pet_context.last_weight_update, evaluation_date
    )
    categories = AggregationEngine.category_summaries(evaluations, weight_fresh)
    alerts = (
        AlertEngine.build_alerts(pet_context, categories, evaluation_date)
        if schedule
        else []
    )

    const.LOGGER.debug(
        "Health report for pet %s (%s): %d slots, %d alerts, %d skipped records",
        pet_context.pet_id,
        species,
        len(evaluations),
        len(alerts),
        len(errors),
    )

    return {
        "species": species,
        "is_supported": species is not None,
        "today": evaluation_date,
        "evaluations": evaluations,
        "visible": AggregationEngine.visible_evaluations(evaluations),
        "categories": categories,
        "summary": AggregationEngine.pet_summary(evaluations, evaluation_date),
        "weight_fresh": weight_fresh,
        "alerts": alerts,
        "errors": errors,
    }


def evaluate_schedule(
    species: str | None,
    birth_date: DateInput,
    records: (
        Iterable[TreatmentRecordData | Mapping[str, Any] | TreatmentRecord] | None
    ),
    today: DateInput | None = None,
    settings: Mapping[str, Any] | None = None,
) -> list[SlotEvaluation]:
    """Evaluate every slot of a species' schedule.

    Lighter entry point than build_health_report(): no weight gate, no
    aggregation. Invalid records are skipped (and logged).

    Returns:
        One SlotEvaluation per slot in schedule order, or [] for an
        unsupported species.

    Raises:
        ValidationError: If the birth date or the settings are malformed.
    """
    pet_context = build_pet_context(
        {const.DATA_PET_SPECIES: species, const.DATA_PET_BIRTH_DATE: birth_date}
    )
    valid_records, _errors = build_treatment_records(records)
    engine = StatusEngine(build_engine_settings(settings))
    return engine.evaluate_schedule(
        get_schedule(pet_context.species),
        pet_context.birth_date,
        valid_records,
        dt_resolve_today(today),
    )

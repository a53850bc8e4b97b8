"""Shared fixtures for petcare tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import pytest

from petcare.data_builders import TreatmentRecord, build_treatment_record
from petcare.engines.schedule_tables import TreatmentSlot, get_slot
from petcare.engines.status_engine import StatusEngine
from petcare.utils import dt_utils
from tests.helpers import SCENARIO_TODAY


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Any:
    """Keep every test on UTC, even if one changes the default timezone."""
    original = dt_utils.get_default_timezone()
    yield
    dt_utils.set_default_timezone(original)


@pytest.fixture
def today() -> date:
    """Fixed evaluation date."""
    return SCENARIO_TODAY


@pytest.fixture
def engine() -> StatusEngine:
    """Status engine with default settings."""
    return StatusEngine()


@pytest.fixture
def make_record() -> Callable[..., TreatmentRecord]:
    """Factory building validated records from keyword arguments."""

    def _make_record(kind: str, applied_at: Any, **fields: Any) -> TreatmentRecord:
        return build_treatment_record(
            {"kind": kind, "applied_at": applied_at, **fields}
        )

    return _make_record


@pytest.fixture
def dog_slot() -> Callable[[str], TreatmentSlot]:
    """Look up a dog slot by id, failing loudly on typos."""

    def _dog_slot(slot_id: str) -> TreatmentSlot:
        slot = get_slot("dog", slot_id)
        assert slot is not None, f"unknown dog slot {slot_id}"
        return slot

    return _dog_slot

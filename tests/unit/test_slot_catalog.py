"""
Unit tests for the slot catalog.
"""

from datetime import datetime

import pytest

from deepwork.models.slot import Slot
from deepwork.services.slot_catalog import (
    DEFAULT_CAPACITY_HOURS,
    FALLBACK_EVENT_SLOT,
    SlotCatalog,
    default_catalog,
    migrate_legacy_slot,
)


def test_catalog_has_nine_slots_in_display_order():
    assert default_catalog.keys() == [
        "morning_routine",
        "deep_work_1",
        "admin_block",
        "lunch",
        "gym",
        "afternoon",
        "evening_review",
        "meetings",
        "buffer",
    ]


def test_known_slot_capacity_and_label():
    assert default_catalog.capacity_hours("deep_work_1") == 2
    assert default_catalog.capacity_hours("afternoon") == 8
    assert default_catalog.label("gym") == "Gym / Workout"
    assert default_catalog.is_valid_slot("buffer")


def test_unknown_slot_uses_default_capacity_and_key_as_label():
    assert not default_catalog.is_valid_slot("siesta")
    assert not default_catalog.is_valid_slot(None)
    assert default_catalog.capacity_hours("siesta") == DEFAULT_CAPACITY_HOURS
    assert default_catalog.label("siesta") == "siesta"


def test_configurable_default_capacity():
    catalog = SlotCatalog(default_capacity_hours=6.0)
    assert catalog.capacity_hours("unknown") == 6.0
    assert catalog.capacity_hours("lunch") == 1


def test_duplicate_slot_keys_rejected():
    slot = Slot(key="a", label="A", time_range="-", capacity_hours=1, start_hour=0, end_hour=1)
    with pytest.raises(ValueError):
        SlotCatalog(slots=[slot, slot])


@pytest.mark.parametrize(
    "legacy,canonical",
    [
        ("morning", "morning_routine"),
        ("midday", "admin_block"),
        ("afternoon", "afternoon"),
        ("evening", "evening_review"),
        ("anytime", "buffer"),
    ],
)
def test_migrate_legacy_slot(legacy, canonical):
    assert migrate_legacy_slot(legacy) == canonical


def test_migrate_passes_through_other_keys():
    assert migrate_legacy_slot("deep_work_1") == "deep_work_1"
    assert migrate_legacy_slot("future_slot") == "future_slot"
    assert migrate_legacy_slot(None) is None


def test_slot_for_time():
    assert default_catalog.slot_for_time(datetime(2025, 3, 12, 9, 30)) == "deep_work_1"
    assert default_catalog.slot_for_time(datetime(2025, 3, 12, 11, 0)) == "admin_block"
    assert default_catalog.slot_for_time(datetime(2025, 3, 12, 16, 45)) == "afternoon"
    assert default_catalog.slot_for_time(datetime(2025, 3, 12, 23, 15)) == "evening_review"


def test_slot_for_time_falls_back_to_meetings():
    assert default_catalog.slot_for_time(None) == FALLBACK_EVENT_SLOT
    assert default_catalog.slot_for_time(datetime(2025, 3, 12, 3, 0)) == FALLBACK_EVENT_SLOT

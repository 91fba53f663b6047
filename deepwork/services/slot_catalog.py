"""
Slot catalog.

The canonical catalog has nine slots covering the full day. The older
four-slot catalog (morning/midday/afternoon/evening/anytime) is deprecated;
its keys are translated by migrate_legacy_slot when rows are read.
"""

from datetime import datetime
from typing import Iterable, Optional

from deepwork.models.slot import Slot

DEFAULT_CAPACITY_HOURS = 8.0

# Slot used for events without a start time or outside every timed slot
FALLBACK_EVENT_SLOT = "meetings"

FOCUS_SLOTS: tuple[Slot, ...] = (
    Slot(key="morning_routine", label="Morning Routine", time_range="7:00-9:00 AM",
         capacity_hours=2, start_hour=7, end_hour=9),
    Slot(key="deep_work_1", label="Deep Work 1", time_range="9:00-11:00 AM",
         capacity_hours=2, start_hour=9, end_hour=11),
    Slot(key="admin_block", label="Admin Block", time_range="11:00 AM-12:00 PM",
         capacity_hours=1, start_hour=11, end_hour=12),
    Slot(key="lunch", label="Lunch", time_range="12:00-1:00 PM",
         capacity_hours=1, start_hour=12, end_hour=13),
    Slot(key="gym", label="Gym / Workout", time_range="1:00-3:00 PM",
         capacity_hours=2, start_hour=13, end_hour=15),
    Slot(key="afternoon", label="Afternoon", time_range="3:00-11:00 PM",
         capacity_hours=8, start_hour=15, end_hour=23),
    Slot(key="evening_review", label="Evening Review", time_range="11:00 PM-12:00 AM",
         capacity_hours=1, start_hour=23, end_hour=24),
    Slot(key="meetings", label="Meetings", time_range="Flexible",
         capacity_hours=4, start_hour=0, end_hour=24, flexible=True),
    Slot(key="buffer", label="Buffer", time_range="Flexible",
         capacity_hours=2, start_hour=0, end_hour=24, flexible=True),
)

LEGACY_SLOT_MAP: dict[str, str] = {
    "morning": "morning_routine",
    "midday": "admin_block",
    "afternoon": "afternoon",
    "evening": "evening_review",
    "anytime": "buffer",
}


def migrate_legacy_slot(slot_key: Optional[str]) -> Optional[str]:
    """Translate a deprecated four-slot key; any other key passes through."""
    if slot_key is None:
        return None
    return LEGACY_SLOT_MAP.get(slot_key, slot_key)


class SlotCatalog:
    """
    Read-only lookup over an ordered set of slots.

    Unknown keys are not errors: they get the default capacity and use the
    key itself as their label, so slot keys added by the backend later
    still render.
    """

    def __init__(
        self,
        slots: Iterable[Slot] = FOCUS_SLOTS,
        default_capacity_hours: float = DEFAULT_CAPACITY_HOURS,
    ):
        self._slots = tuple(slots)
        self._by_key = {slot.key: slot for slot in self._slots}
        if len(self._by_key) != len(self._slots):
            raise ValueError("Slot keys must be unique")
        self.default_capacity_hours = default_capacity_hours

    def slots(self) -> list[Slot]:
        """Catalog entries in display order."""
        return list(self._slots)

    def keys(self) -> list[str]:
        return [slot.key for slot in self._slots]

    def get(self, slot_key: str) -> Optional[Slot]:
        return self._by_key.get(slot_key)

    def is_valid_slot(self, slot_key: Optional[str]) -> bool:
        return slot_key is not None and slot_key in self._by_key

    def capacity_hours(self, slot_key: str) -> float:
        slot = self._by_key.get(slot_key)
        return slot.capacity_hours if slot else self.default_capacity_hours

    def label(self, slot_key: str) -> str:
        slot = self._by_key.get(slot_key)
        return slot.label if slot else slot_key

    def slot_for_time(self, start: Optional[datetime]) -> str:
        """
        Map an event start time onto the first timed slot containing it.

        Flexible slots never match by time.
        """
        if start is None:
            return FALLBACK_EVENT_SLOT
        hour = start.hour + start.minute / 60
        for slot in self._slots:
            if slot.flexible:
                continue
            if slot.start_hour <= hour < slot.end_hour:
                return slot.key
        return FALLBACK_EVENT_SLOT


default_catalog = SlotCatalog()

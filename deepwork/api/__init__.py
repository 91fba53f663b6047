"""API routers."""

from deepwork.api import (
    realtime,
    schedule,
    slots,
    tasks,
    ventures,
)

__all__ = [
    "tasks",
    "ventures",
    "slots",
    "schedule",
    "realtime",
]

"""Abstract interfaces for infrastructure abstraction."""

from deepwork.interfaces.task_repository import ITaskRepository
from deepwork.interfaces.venture_repository import IVentureRepository

__all__ = [
    "ITaskRepository",
    "IVentureRepository",
]

"""
Slot catalog endpoint.
"""

from fastapi import APIRouter

from deepwork.api.deps import Catalog
from deepwork.models.slot import Slot

router = APIRouter()


@router.get("", response_model=list[Slot])
async def list_slots(catalog: Catalog):
    """Catalog slots in display order."""
    return catalog.slots()

"""
Ventures API endpoints.
"""

from fastapi import APIRouter

from deepwork.api.deps import VentureRepo
from deepwork.models.venture import Venture

router = APIRouter()


@router.get("", response_model=list[Venture])
async def list_ventures(repo: VentureRepo):
    return await repo.list()

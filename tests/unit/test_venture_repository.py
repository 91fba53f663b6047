"""
Unit tests for Venture repository.
"""

from uuid import uuid4

import pytest

from deepwork.models.venture import VentureCreate


@pytest.mark.asyncio
async def test_list_orders_by_name(venture_repo):
    await venture_repo.create(VentureCreate(name="Trading", color="#22c55e", icon="T"))
    await venture_repo.create(VentureCreate(name="Consulting", color="#3b82f6"))

    ventures = await venture_repo.list()

    assert [venture.name for venture in ventures] == ["Consulting", "Trading"]
    assert ventures[1].color == "#22c55e"


@pytest.mark.asyncio
async def test_get_venture(venture_repo):
    created = await venture_repo.create(VentureCreate(name="Studio"))

    assert (await venture_repo.get(created.id)).name == "Studio"
    assert await venture_repo.get(uuid4()) is None

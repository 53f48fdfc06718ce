"""Tenant store registry tests. Each test drives its coroutines in one event loop."""

import asyncio

import pytest
from sqlalchemy import inspect

from app.db.tenant_registry import TenantStoreRegistry


def run_with_registry(tmp_path, scenario):
    async def main():
        registry = TenantStoreRegistry(tmp_path / "data")
        try:
            return await scenario(registry)
        finally:
            await registry.shutdown()

    return asyncio.run(main())


@pytest.mark.db
def test_resolve_creates_file_and_tables(tmp_path):
    async def scenario(registry):
        store = await registry.resolve(7)
        async with store.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        return store, tables

    store, tables = run_with_registry(tmp_path, scenario)

    assert store.tenant_id == 7
    assert store.path == tmp_path / "data" / "tenant_7.db"
    assert store.path.exists()
    assert {"commitments", "payments"} <= set(tables)


@pytest.mark.db
def test_resolve_is_idempotent_and_ids_never_share_a_store(tmp_path):
    async def scenario(registry):
        first = await registry.resolve(1)
        again = await registry.resolve(1)
        other = await registry.resolve(2)
        return first, again, other, registry.open_tenant_ids()

    first, again, other, open_ids = run_with_registry(tmp_path, scenario)

    assert first is again
    assert other is not first
    assert other.path != first.path
    assert open_ids == [1, 2]


@pytest.mark.db
def test_concurrent_first_resolution_opens_one_store(tmp_path):
    async def scenario(registry):
        return await asyncio.gather(*(registry.resolve(3) for _ in range(5)))

    stores = run_with_registry(tmp_path, scenario)

    assert all(store is stores[0] for store in stores)


@pytest.mark.db
def test_shutdown_empties_the_registry(tmp_path):
    async def scenario(registry):
        await registry.resolve(1)
        await registry.shutdown()
        return registry.open_tenant_ids()

    assert run_with_registry(tmp_path, scenario) == []


@pytest.mark.unit
@pytest.mark.parametrize("bad_id", [0, -1, "1", 1.0, True, None])
def test_resolve_rejects_non_positive_or_non_integer_ids(tmp_path, bad_id):
    async def scenario(registry):
        with pytest.raises(ValueError):
            await registry.resolve(bad_id)
        return registry.open_tenant_ids()

    assert run_with_registry(tmp_path, scenario) == []
    assert not (tmp_path / "data").exists()

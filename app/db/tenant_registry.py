"""
Tenant store registry.

Each company gets its own SQLite file. The registry is the only place that
knows how a company id maps to a file, and it keeps one open engine per
company for as long as the registry lives.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.db.base import TenantBase
from app.db.session import create_session_maker, create_sqlite_engine

# Register tenant tables on TenantBase.metadata
from app.models.commitment import Commitment  # noqa: F401
from app.models.payment import Payment  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass
class TenantStore:
    """Ready-to-use handle to one company's isolated store."""

    tenant_id: int
    path: Path
    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession] = field(repr=False)

    def session(self) -> AsyncSession:
        return self.session_maker()


class TenantStoreRegistry:
    """
    Lazily opens tenant stores and caches them by company id.

    Construct one per process (the app lifespan does this), pass it to
    whatever needs a tenant store, and call shutdown() on exit.
    """

    def __init__(self, data_dir: Path | str, echo: bool = False):
        self.data_dir = Path(data_dir)
        self.echo = echo
        self._stores: Dict[int, TenantStore] = {}
        self._lock = asyncio.Lock()

    def store_path(self, tenant_id: int) -> Path:
        """File backing a tenant's store. One id, one file."""
        return self.data_dir / f"tenant_{tenant_id}.db"

    async def resolve(self, tenant_id: int) -> TenantStore:
        """
        Return the store for a company, creating file and schema on first use.

        Repeated calls with the same id return the same live handle.

        Raises:
            ValueError: if tenant_id is not a positive integer
        """
        if isinstance(tenant_id, bool) or not isinstance(tenant_id, int) or tenant_id <= 0:
            raise ValueError(f"Tenant id must be a positive integer, got {tenant_id!r}")

        store = self._stores.get(tenant_id)
        if store is not None:
            return store

        async with self._lock:
            # Another request may have opened it while we waited
            store = self._stores.get(tenant_id)
            if store is not None:
                return store

            self.data_dir.mkdir(parents=True, exist_ok=True)
            path = self.store_path(tenant_id)
            engine = create_sqlite_engine(f"sqlite+aiosqlite:///{path}", echo=self.echo)

            async with engine.begin() as conn:
                await conn.run_sync(TenantBase.metadata.create_all)

            store = TenantStore(
                tenant_id=tenant_id,
                path=path,
                engine=engine,
                session_maker=create_session_maker(engine),
            )
            self._stores[tenant_id] = store
            logger.info("Opened tenant store %s at %s", tenant_id, path)
            return store

    def open_tenant_ids(self) -> List[int]:
        return sorted(self._stores)

    async def shutdown(self) -> None:
        """Dispose every cached engine. The registry is empty afterwards."""
        async with self._lock:
            stores = list(self._stores.values())
            self._stores.clear()
        for store in stores:
            await store.engine.dispose()
        if stores:
            logger.info("Closed %d tenant store(s)", len(stores))

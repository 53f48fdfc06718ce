"""Health check router."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_registry
from app.db.session import get_db
from app.db.tenant_registry import TenantStoreRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(
    db: AsyncSession = Depends(get_db),
    registry: TenantStoreRegistry = Depends(get_registry),
):
    """Lightweight health endpoint: master directory probe + open tenant stores."""

    db_ok = False
    try:
        await db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError:
        logger.warning("Master directory health probe failed", exc_info=True)

    return {
        "api_ok": True,
        "db_ok": db_ok,
        "open_tenant_stores": registry.open_tenant_ids(),
    }

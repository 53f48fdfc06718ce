"""
Database engine and session configuration.

This file sets up async SQLite connections using SQLAlchemy + aiosqlite.
Both the master directory and every tenant store are built with
create_sqlite_engine so they share the same connection behaviour.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

# Execution option read by the begin hook of every SQLite engine
BEGIN_MODE_OPTION = "sqlite_begin_mode"


def create_sqlite_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for a SQLite file.

    Every connection gets foreign keys switched on, and the driver's own
    implicit transaction handling is replaced by an explicit BEGIN emitted
    when SQLAlchemy starts a transaction. That way the reads inside a unit
    of work (e.g. summing payments) run in the same native transaction as
    its writes, and a rollback undoes all of it.
    """
    engine = create_async_engine(
        url,
        echo=echo,  # When DEBUG=True, prints SQL queries to console
        connect_args={"timeout": 15},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # disable the driver's emitting of BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        # "IMMEDIATE" takes the write lock up front; default is a deferred BEGIN
        mode = conn.get_execution_options().get(BEGIN_MODE_OPTION)
        conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")

    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to one engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Keeps data accessible after commit
    )


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a master directory session.

    The session factory is created in the app lifespan and kept on
    app.state. Services commit their own units of work; anything left
    open when the request fails is rolled back here.

    Usage in a FastAPI endpoint:
        @router.get("/companies")
        async def list_companies(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with request.app.state.master_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def atomic(session: AsyncSession, immediate: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Run a unit of work in the session's transaction.

    Commits when the block finishes, rolls back everything on any error
    and re-raises it.

    With immediate=True a transaction that is not open yet starts with
    BEGIN IMMEDIATE, so the unit holds the store's write lock from its
    first read and concurrent units on the same store run one after
    another (each waits up to the connection timeout).
    """
    try:
        if immediate and not session.in_transaction():
            await session.connection(execution_options={BEGIN_MODE_OPTION: "IMMEDIATE"})
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise


@asynccontextmanager
async def session_scope(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """Context manager helper for DB sessions outside a request (seeding, tests, scripts)."""
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

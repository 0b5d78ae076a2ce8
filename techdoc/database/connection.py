from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from techdoc.config.settings import Settings
from techdoc.logging.logger import Log

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )


def init_pool(settings: Settings) -> None:
    """Open the process-wide pool shared by request handlers and worker threads."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        return
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        name="techdoc",
        open=True,
    )
    Log.info(
        f"Database pool opened for {settings.db_host}:{settings.db_port}/{settings.db_database} "
        f"(size {settings.db_pool_min_size}-{settings.db_pool_max_size})"
    )


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is None:
        return
    _pool.close()
    _pool = None
    Log.info("Database pool closed")


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Borrow a pooled connection. Caller manages commit/rollback.

    Every call checks out its own connection, so a processing job never shares a
    connection with the request that enqueued it or with another job.
    """
    if _pool is None:
        raise RuntimeError("Database pool is not open; call init_pool() at startup")
    with _pool.connection() as conn:
        yield conn

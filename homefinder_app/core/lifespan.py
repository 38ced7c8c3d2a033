import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from .get_db import AsyncSessionLocal, async_engine

logger = logging.getLogger("startup")


async def check_database_connection(db) -> bool:
    try:
        await db.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("Database connection check failed")
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")

    async with AsyncSessionLocal() as db:
        if await check_database_connection(db):
            logger.info("Database connected.")
        else:
            logger.error("Database unreachable; requests will fail until it is up.")

    logger.info("Application startup complete.")

    yield

    try:
        await async_engine.dispose()
        logger.info("Database connections closed.")
    except Exception:
        logger.exception("Failed to dispose database engine")

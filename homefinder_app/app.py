import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from core.catch_error_middleware import ErrorHandlerMiddleware, RequestLogMiddleware
from core.errors import AppError
from core.exception_handler import AppErrorHandler, ValidationErrorHandler
from core.get_db import get_db_async
from core.lifespan import check_database_connection, lifespan
from core.settings import settings
from routes.auth_routes import router as auth_router
from routes.message_routes import router as message_router
from routes.profile_routes import router as profile_router
from routes.property_routes import router as property_router

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(
    lifespan=lifespan,
    title=settings.PROJECT_NAME,
    version="1.0.0",
)

API = settings.API_PREFIX

app.include_router(auth_router, prefix=f"{API}/auth")
app.include_router(profile_router, prefix=f"{API}/users")
app.include_router(property_router, prefix=API)
app.include_router(message_router, prefix=API)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["System"])
async def health_check(db: AsyncSession = Depends(get_db_async)):
    database = "up" if await check_database_connection(db) else "down"
    return {"status": "ok", "database": database}


app.add_exception_handler(RequestValidationError, ValidationErrorHandler())
app.add_exception_handler(AppError, AppErrorHandler())

app.add_middleware(RequestLogMiddleware)
app.add_middleware(ErrorHandlerMiddleware)


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8001)

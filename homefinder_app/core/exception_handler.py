from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import AppError

LOCATION_PREFIXES = {"body", "query", "path", "header"}


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError):

        errors = []

        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ())]
            if loc and loc[0] in LOCATION_PREFIXES:
                loc = loc[1:]
            errors.append(
                {
                    "field": ".".join(loc),
                    "message": str(err.get("msg")),
                    "type": err.get("type"),
                }
            )

        return JSONResponse(
            status_code=400,
            content={
                "message": "Validation failed",
                "errors": errors,
            },
        )


class AppErrorHandler:
    async def __call__(self, request: Request, exc: AppError):
        content = {"message": exc.detail, "detail": exc.detail}
        field = getattr(exc, "field", None)
        if field:
            content["field"] = field
        return JSONResponse(
            status_code=exc.status_code, content=content, headers=exc.headers
        )

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from microgreens.utils.datetime_utils import InvalidDateFormat

def _normalize_errors(errs):
    norm = []
    for e in errs:
        e = dict(e)
        val = e.get("input")
        if isinstance(val, (bytes, bytearray)):
            e["input"] = val.decode("utf-8", errors="ignore")
        ctx = e.get("ctx")
        if isinstance(ctx, dict) and isinstance(ctx.get("error"), Exception):
            e["ctx"] = {**ctx, "error": str(ctx["error"])}
        norm.append(e)
    return norm

def install_error_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "validation_error", "detail": _normalize_errors(exc.errors())},
        )

    @app.exception_handler(InvalidDateFormat)
    async def invalid_date_handler(request: Request, exc: InvalidDateFormat):
        return JSONResponse(status_code=422, content={"error": "invalid_date_format", "detail": str(exc)})

    @app.exception_handler(IntegrityError)
    async def integrity_handler(request: Request, exc: IntegrityError):
        return JSONResponse(status_code=409, content={"error": "conflict", "detail": str(exc.orig)})

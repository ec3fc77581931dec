"""Exception handlers that shape every error body the API returns."""

from typing import Any, Dict, List

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

SERVER_ERROR = "Server Error"

# Request keys for fields that pydantic reports by Python name
PARAM_ALIASES = {"from_date": "from"}


def format_validation_errors(errors) -> List[Dict[str, Any]]:
    """Flatten pydantic errors into ``{msg, param, location}`` entries."""
    formatted = []
    for error in errors:
        loc = error.get("loc", ())
        location = loc[0] if loc else "body"
        param = ".".join(str(PARAM_ALIASES.get(part, part)) for part in loc[1:]) or None

        ctx_error = error.get("ctx", {}).get("error")
        if error.get("type") == "value_error" and ctx_error is not None:
            # Message raised by our own validators, without pydantic's prefix
            msg = str(ctx_error)
        else:
            msg = error.get("msg", "Invalid value")

        formatted.append({"msg": msg, "param": param, "location": location})
    return formatted


def error_list(*messages: str) -> Dict[str, List[Dict[str, str]]]:
    """Body for errors reported in the same shape as validation failures."""
    return {"errors": [{"msg": m} for m in messages]}


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": format_validation_errors(exc.errors())},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"msg": exc.detail}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"msg": SERVER_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

# app/core/exceptions.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DataAccessError(Exception):
    """The persistence layer could not return one or more collections."""


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(DataAccessError)
    async def data_access_error_handler(request: Request, exc: DataAccessError):
        logger.error("Failed to serve %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Failed to fetch analytics data"},
        )

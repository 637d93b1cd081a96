"""Stream routes — GET /api/stream serves the last built stream document."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from backend.models.stream import StreamErrorResponse
from backend.services.stream_store import StreamStore, StreamUnavailable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["stream"])

NO_STREAM_DATA = "No stream data available"


def get_stream_store(request: Request) -> StreamStore:
    """The store the app was created with."""
    return request.app.state.stream_store


@router.get(
    "/stream",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": StreamErrorResponse}},
)
def get_stream(store: StreamStore = Depends(get_stream_store)) -> Any:
    """
    Return the current stream document.

    The file is re-read on every request. If it is missing or corrupt the
    response is a 500 with {"error": "No stream data available"}.
    """
    try:
        document = store.read_current()
    except StreamUnavailable as e:
        logger.warning("Serving stream failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=StreamErrorResponse(error=NO_STREAM_DATA).model_dump(),
        )

    return JSONResponse(content=document)

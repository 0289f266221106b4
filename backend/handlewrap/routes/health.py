"""
Handlewrap — Health Check Handler
===================================

What:  Liveness check for the demo application, written as a Handler.
How:   Writes a HealthResponse as JSON. Registered through the translator
       like any other route, so it also shows the Handler contract end to end.
"""

import time

from starlette.requests import Request

from handlewrap import __version__
from handlewrap.response import ResponseWriter
from handlewrap.schemas.health import HealthResponse

_start_time = time.time()


async def health_check(w: ResponseWriter, request: Request) -> None:
    body = HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    w.headers["content-type"] = "application/json"
    w.write(body.model_dump_json())

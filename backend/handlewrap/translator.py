"""
Handlewrap — Error Translator
===============================

What:  Turns a handler that may raise into a Starlette endpoint that always
       answers with a response.
How:   Runs the handler against a fresh ResponseWriter. On error, finds the
       status and message to send (HandlerError or anything with
       status_msg()), writes the error response once, then writes the full
       error text to the error sink.
Who:   Applied once per route, outermost, around the composed handler chain.

Per-request flow:
    handler OK          → writer's response returned unchanged
    handler raises      → classify → reset writer → error_func(writer, msg, status) → sink
                          ├── classified     → its status + message
                          └── unclassified   → 500 "Internal Server Error"

The client only ever sees a status and a message. The error sink is the only
place the original cause is exposed.
"""

import logging
import sys
from http import HTTPStatus
from typing import Awaitable, Callable, Optional, Protocol, Tuple

from starlette.requests import Request
from starlette.responses import Response

from handlewrap.exceptions import StatusMessage, find_cause
from handlewrap.middleware.chain import Handler, Middleware, wrap, wrap_common
from handlewrap.response import ResponseWriter

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]
ToStd = Callable[[Handler], Endpoint]
ErrFunc = Callable[[ResponseWriter, str, int], None]


class ErrorSink(Protocol):
    def write(self, text: str) -> object:
        ...


class LoggerSink:
    """Error sink that emits each error line as a log record."""

    def __init__(self, logger: logging.Logger, level: int = logging.ERROR):
        self.logger = logger
        self.level = level

    def write(self, text: str) -> int:
        message = text.rstrip("\n")
        if message:
            self.logger.log(self.level, message)
        return len(text)

    def write_exception(self, text: str, exc: BaseException) -> None:
        """Log one record for a failed request, with the traceback attached."""
        self.logger.log(self.level, text, exc_info=exc)


# ══════════════════════════════════════════════════════════════════════════
# Classification
# ══════════════════════════════════════════════════════════════════════════

def status_text(status_code: int) -> str:
    """Standard reason phrase for ``status_code``; empty for unknown codes."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def classify(exc: BaseException) -> Tuple[int, str]:
    """
    Pick the status and client message for ``exc``.

    Walks the explicit cause chain for the first error exposing status_msg();
    anything else is a 500 with the generic reason phrase.
    """
    classified = find_cause(exc, StatusMessage)
    if classified is not None:
        return classified.status_msg()
    status = int(HTTPStatus.INTERNAL_SERVER_ERROR)
    return status, status_text(status)


def http_error(w: ResponseWriter, message: str, status_code: int) -> None:
    """
    Default error function: plain-text body with the given status.

    An empty message is replaced with the reason phrase for ``status_code``.
    """
    if not message:
        message = status_text(status_code)

    del w.headers["content-length"]
    w.headers["content-type"] = "text/plain; charset=utf-8"
    w.headers["x-content-type-options"] = "nosniff"
    w.write_header(status_code)
    w.write(message)


# ══════════════════════════════════════════════════════════════════════════
# Adapters
# ══════════════════════════════════════════════════════════════════════════

def handle_err(
    error_sink: Optional[ErrorSink] = None,
    error_func: Optional[ErrFunc] = None,
) -> ToStd:
    """
    Build the adapter from a raising Handler to a Starlette endpoint.

    Args:
        error_sink: Destination for the raw error text. Defaults to
                    ``sys.stderr`` as of this call.
        error_func: Writes the client-visible error. Defaults to http_error.
    """
    if error_sink is None:
        error_sink = sys.stderr
    if error_func is None:
        error_func = http_error

    def to_std(handler: Handler) -> Endpoint:
        async def endpoint(request: Request) -> Response:
            w = ResponseWriter()
            try:
                await handler(w, request)
            except Exception as exc:
                status, message = classify(exc)
                # Still buffered: the error response replaces any partial write.
                w.reset()
                try:
                    error_func(w, message, status)
                finally:
                    _write_error(error_sink, exc)
            return w.to_response()

        return endpoint

    return to_std


def _write_error(error_sink: ErrorSink, exc: BaseException) -> None:
    # Exceptions like TimeoutError() have no text; the line must still say what failed.
    text = str(exc) or repr(exc)
    # Best effort: a broken sink must not change the response.
    try:
        if isinstance(error_sink, LoggerSink):
            error_sink.write_exception(text, exc)
        else:
            error_sink.write(f"{text}\n")
    except Exception:
        logger.debug("error sink write failed", exc_info=True)


def wrap_to_std(
    handler: Handler,
    to_std: Optional[ToStd] = None,
    *middleware: Middleware,
) -> Endpoint:
    """Wrap ``middleware`` around ``handler`` and adapt it with ``to_std``."""
    if to_std is None:
        to_std = handle_err()
    return to_std(wrap(handler, *middleware))


def wrap_common_to_std(to_std: ToStd, *common: Middleware) -> Callable[..., Endpoint]:
    """
    Like wrap_common, but each route comes out as a Starlette endpoint.

    Usage:
        route = wrap_common_to_std(handle_err(), request_timer)
        app.add_api_route("/notes/{id}", route(get_note, require_user))
    """
    wrap_route = wrap_common(*common)

    def wrap_route_to_std(handler: Handler, *specific: Middleware) -> Endpoint:
        return to_std(wrap_route(handler, *specific))

    return wrap_route_to_std

"""
Handlewrap — Package Initializer
==================================

What: Handlers that raise instead of writing error responses, middleware
      composition for them, and one adapter that turns raised errors into
      HTTP responses.

Layers:

    ┌─────────────────────────────────────┐
    │   Translator (handle_err, to-std)   │  ← only place errors become responses
    ├─────────────────────────────────────┤
    │   Middleware chain (wrap, common)   │  ← ordering of cross-cutting logic
    ├─────────────────────────────────────┤
    │   Handlers (ResponseWriter, raise)  │  ← application code
    └─────────────────────────────────────┘

Quick start:

    from handlewrap import handle_err, new_error, wrap_common_to_std

    async def get_note(w, request):
        try:
            note = NOTES[request.path_params["id"]]
        except KeyError as exc:
            raise new_error(exc, 404, "note not found")
        w.write(note)

    route = wrap_common_to_std(handle_err())
    app.add_api_route("/notes/{id}", route(get_note))
"""

__version__ = "1.0.0"

from handlewrap.exceptions import (  # noqa: E402
    HandlerError,
    StatusMessage,
    find_cause,
    has_cause,
    iter_causes,
    new_error,
)
from handlewrap.middleware.chain import Handler, Middleware, wrap, wrap_common  # noqa: E402
from handlewrap.response import ResponseWriter  # noqa: E402
from handlewrap.translator import (  # noqa: E402
    ErrFunc,
    LoggerSink,
    ToStd,
    classify,
    handle_err,
    http_error,
    status_text,
    wrap_common_to_std,
    wrap_to_std,
)

__all__ = [
    "ErrFunc",
    "Handler",
    "HandlerError",
    "LoggerSink",
    "Middleware",
    "ResponseWriter",
    "StatusMessage",
    "ToStd",
    "classify",
    "find_cause",
    "handle_err",
    "has_cause",
    "http_error",
    "iter_causes",
    "new_error",
    "status_text",
    "wrap",
    "wrap_common",
    "wrap_common_to_std",
    "wrap_to_std",
]

"""
Handlewrap — Handler and Middleware Types
===========================================

What:  The handler contract, the middleware contract, and the two composition
       entry points.
When:  Composition happens once at setup time; nothing here runs per request
       until the composed handler is awaited.

A handler writes its success response to the ResponseWriter and signals
failure by raising. A middleware takes a handler and returns a new one,
typically awaiting the inner handler between its own pre- and post-logic:

    def timing(next_handler: Handler) -> Handler:
        async def handler(w: ResponseWriter, request: Request) -> None:
            start = time.perf_counter()
            try:
                await next_handler(w, request)
            finally:
                logger.info("%s took %.1fms", request.url.path,
                            (time.perf_counter() - start) * 1000)
        return handler
"""

from typing import Awaitable, Callable

from starlette.requests import Request

from handlewrap.response import ResponseWriter

Handler = Callable[[ResponseWriter, Request], Awaitable[None]]
Middleware = Callable[[Handler], Handler]
RouteWrapper = Callable[..., Handler]


def wrap(handler: Handler, *middleware: Middleware) -> Handler:
    """
    Wrap ``middleware`` around ``handler``.

    The first middleware provided is the first invoked on a request. With no
    middleware the handler is returned unchanged.
    """
    if not callable(handler):
        raise TypeError(f"handler must be callable, got {handler!r}")

    # Innermost first: the last middleware wraps the handler directly.
    for mw in reversed(middleware):
        handler = mw(handler)
    return handler


def wrap_common(*common: Middleware) -> RouteWrapper:
    """
    Pre-configure a set of middleware shared by many routes.

    Returns a function ``(handler, *specific) -> Handler`` that wraps the
    route-specific middleware first and then the common set around that, so
    the common middleware is always outermost.
    """
    def wrap_route(handler: Handler, *specific: Middleware) -> Handler:
        return wrap(wrap(handler, *specific), *common)

    return wrap_route

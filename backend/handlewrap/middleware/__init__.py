# Middleware package init
"""
Handlewrap — Middleware Composition
=====================================

What:  Builds one handler out of a terminal handler and an ordered list of
       middleware.

Middleware Chain (order matters!):
    wrap(handler, m1, m2, m3)

    Request → [m1] → [m2] → [m3] → handler
    Return  ← [m1] ← [m2] ← [m3] ← handler

    The first middleware listed is the outermost: its pre-logic runs first and
    its post-logic runs last.

Common + specific:
    route = wrap_common(c1)
    route(handler, s1)   → c1 → s1 → handler

    Common middleware always ends up outside the route-specific ones.
"""

from handlewrap.middleware.chain import Handler, Middleware, wrap, wrap_common

__all__ = ["Handler", "Middleware", "wrap", "wrap_common"]

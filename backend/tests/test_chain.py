"""
Handlewrap — Middleware Composition Tests
===========================================

What:  Tests for wrap() and wrap_common() nesting order.
How:   Middleware append pre/post markers to a shared list; the terminal
       handler appends "terminal".
"""

import pytest

from handlewrap.middleware.chain import wrap, wrap_common
from handlewrap.response import ResponseWriter


class TestWrap:
    """Tests for specific-only composition."""

    @pytest.mark.asyncio
    async def test_first_middleware_is_outermost(self, marking, terminal, markers, make_request):
        handler = wrap(terminal, marking("m1"), marking("m2"), marking("m3"))

        await handler(ResponseWriter(), make_request())

        assert markers == [
            "m1", "m2", "m3", "terminal", "m3-post", "m2-post", "m1-post",
        ]

    def test_no_middleware_returns_terminal(self, terminal):
        """Composing with zero middleware is the identity."""
        assert wrap(terminal) is terminal

    @pytest.mark.asyncio
    async def test_single_middleware(self, marking, terminal, markers, make_request):
        w = ResponseWriter()
        await wrap(terminal, marking("only"))(w, make_request())

        assert markers == ["only", "terminal", "only-post"]
        assert w.body == b"ok"

    def test_composition_has_no_side_effects(self, marking, terminal, markers):
        wrap(terminal, marking("m1"), marking("m2"))
        assert markers == []

    def test_non_callable_handler_rejected(self, marking):
        with pytest.raises(TypeError, match="callable"):
            wrap(None, marking("m1"))

    @pytest.mark.asyncio
    async def test_errors_propagate_through_post_logic(self, marking, markers, make_request):
        """The chain never swallows errors; post-logic still runs on the way out."""

        async def failing(w, request):
            markers.append("terminal")
            raise LookupError("missing")

        handler = wrap(failing, marking("m1"), marking("m2"))

        with pytest.raises(LookupError, match="missing"):
            await handler(ResponseWriter(), make_request())
        assert markers == ["m1", "m2", "terminal", "m2-post", "m1-post"]

    @pytest.mark.asyncio
    async def test_middleware_can_short_circuit(self, marking, terminal, markers, make_request):
        def deny(next_handler):
            async def handler(w, request):
                markers.append("deny")
                w.write_header(403)

            return handler

        await wrap(terminal, marking("m1"), deny)(ResponseWriter(), make_request())

        assert markers == ["m1", "deny", "m1-post"]


class TestWrapCommon:
    """Tests for common-plus-specific composition."""

    @pytest.mark.asyncio
    async def test_common_is_outermost(self, marking, terminal, markers, make_request):
        route = wrap_common(marking("c1"))

        await route(terminal, marking("s1"))(ResponseWriter(), make_request())

        assert markers == ["c1", "s1", "terminal", "s1-post", "c1-post"]

    @pytest.mark.asyncio
    async def test_many_common_and_specific(self, marking, terminal, markers, make_request):
        route = wrap_common(marking("c1"), marking("c2"))

        await route(terminal, marking("s1"), marking("s2"))(ResponseWriter(), make_request())

        assert markers == [
            "c1", "c2", "s1", "s2", "terminal",
            "s2-post", "s1-post", "c2-post", "c1-post",
        ]

    @pytest.mark.asyncio
    async def test_common_reused_across_routes(self, marking, markers, make_request):
        route = wrap_common(marking("c1"))

        async def first(w, request):
            markers.append("first")

        async def second(w, request):
            markers.append("second")

        await route(first)(ResponseWriter(), make_request())
        await route(second, marking("s1"))(ResponseWriter(), make_request())

        assert markers == [
            "c1", "first", "c1-post",
            "c1", "s1", "second", "s1-post", "c1-post",
        ]

    @pytest.mark.asyncio
    async def test_no_middleware_at_all(self, terminal, markers, make_request):
        handler = wrap_common()(terminal)

        assert handler is terminal
        await handler(ResponseWriter(), make_request())
        assert markers == ["terminal"]

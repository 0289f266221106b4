"""
Handlewrap — Classified Handler Errors
========================================

What:  The error envelope handlers raise to choose an HTTP status and a
       client-safe message, plus helpers that walk an exception's cause chain.
How:   HandlerError keeps the original exception as its explicit cause
       (``__cause__``). The translator looks for anything exposing
       ``status_msg()`` along that chain; application code can still match the
       underlying cause with find_cause() / has_cause().
Who:   Raised by handlers and middleware; consumed by handlewrap.translator.
When:  At most once per failing request.

Taxonomy:
    HandlerError (status_msg available)  → chosen status + message
    any other exception                  → 500 Internal Server Error

Only the status and message ever reach the client. ``str(HandlerError)``
includes the cause and is meant for the server-side error sink.
"""

from typing import Iterator, Optional, Protocol, Tuple, Type, TypeVar, Union, runtime_checkable

E = TypeVar("E", bound=BaseException)

MIN_STATUS = 100
MAX_STATUS = 599


@runtime_checkable
class StatusMessage(Protocol):
    """Capability of an error that knows which HTTP status and message to send."""

    def status_msg(self) -> Tuple[int, str]:
        ...


def validate_status(status: int) -> int:
    """Return ``status`` if it is a valid HTTP status code, else raise ValueError."""
    if isinstance(status, bool) or not isinstance(status, int):
        raise ValueError(f"HTTP status must be an int, got {status!r}")
    if not MIN_STATUS <= status <= MAX_STATUS:
        raise ValueError(
            f"HTTP status {status} is outside the range {MIN_STATUS}-{MAX_STATUS}"
        )
    return status


class HandlerError(Exception):
    """
    An error annotated with the HTTP status and message to return to the client.

    Attributes:
        err:          The original exception (logged, never sent to the client)
        status:       HTTP status code, 100-599
        response_msg: Client-facing message; empty means "use the generic
                      reason phrase for the status"
    """

    def __init__(
        self,
        err: Optional[BaseException],
        status: int,
        response_msg: str = "",
    ):
        if err is not None and not isinstance(err, BaseException):
            raise TypeError(
                f"cause must be an exception or None, got {type(err).__name__}"
            )
        self.status = validate_status(status)
        self.err = err
        self.response_msg = response_msg
        super().__init__(err, status, response_msg)
        self.__cause__ = err

    def status_msg(self) -> Tuple[int, str]:
        """Return the status code and message to send to the client."""
        return self.status, self.response_msg

    def unwrap(self) -> Optional[BaseException]:
        """Return the wrapped cause."""
        return self.err

    def __str__(self) -> str:
        return f"status={self.status} msg={self.response_msg!r} err={str(self.err)!r}"

    def __repr__(self) -> str:
        return f"HandlerError({self.err!r}, {self.status}, {self.response_msg!r})"


def new_error(err: Optional[BaseException], status: int, *response_msg: str) -> HandlerError:
    """
    Build a HandlerError for the translator.

    The error itself is not sent back to the client but written to the error
    sink. ``status`` and the space-joined ``response_msg`` parts form the
    client response.

    Usage:
        try:
            note = notes[note_id]
        except KeyError as exc:
            raise new_error(exc, 404, "note", note_id, "not found")
    """
    return HandlerError(err, status, " ".join(response_msg))


# ── Cause-chain inspection ──────────────────────────────────────────────

def iter_causes(exc: Optional[BaseException]) -> Iterator[BaseException]:
    """
    Yield ``exc`` and every exception it explicitly wraps, depth-first.

    Follows ``__cause__`` (``raise ... from ...``), not the implicit
    ``__context__``. Members of exception groups are visited before the
    group's own cause. Each exception is yielded at most once.
    """
    seen = set()
    stack = [exc]
    while stack:
        current = stack.pop()
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        stack.append(current.__cause__)
        if isinstance(current, BaseExceptionGroup):
            stack.extend(reversed(current.exceptions))


def find_cause(
    exc: Optional[BaseException],
    cls: Union[Type[E], Tuple[Type[BaseException], ...]],
) -> Optional[E]:
    """Return the first exception in ``exc``'s chain that is an instance of ``cls``."""
    for candidate in iter_causes(exc):
        if isinstance(candidate, cls):
            return candidate
    return None


def has_cause(exc: Optional[BaseException], target: BaseException) -> bool:
    """Report whether ``target`` itself appears anywhere in ``exc``'s chain."""
    return any(candidate is target for candidate in iter_causes(exc))

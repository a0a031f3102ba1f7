"""Capability probing for arbitrary exceptions.

The accessors here work on any exception, annotated or not. Each optional
capability is a runtime-checkable protocol; an exception that does not
implement one (or implements it with a value of the wrong type) gets the
default. Third-party exception classes can opt in by exposing the same
attributes.
"""

from __future__ import annotations

import logging
import traceback
from typing import Iterator, Protocol, runtime_checkable

from weberr.core.kinds import ErrorKind
from weberr.core.stack import StackTrace

logger = logging.getLogger(__name__)


@runtime_checkable
class Typed(Protocol):
    """Exception carrying an ErrorKind."""

    @property
    def kind(self) -> ErrorKind: ...


@runtime_checkable
class UserMessager(Protocol):
    """Exception carrying a message safe for end users."""

    @property
    def user_message(self) -> str: ...


@runtime_checkable
class StackTracer(Protocol):
    """Exception carrying a captured StackTrace."""

    @property
    def stack_trace(self) -> StackTrace: ...


@runtime_checkable
class Causer(Protocol):
    """Exception that can be unwrapped to its cause."""

    @property
    def cause(self) -> BaseException | None: ...


def get_type(err: BaseException | None) -> ErrorKind:
    """Return the kind of ``err``, UNTYPED when it has none."""
    if isinstance(err, Typed):
        kind = err.kind
        if isinstance(kind, ErrorKind):
            return kind
    return ErrorKind.UNTYPED


def get_user_message(err: BaseException | None) -> str:
    """Return the user message of ``err``, "" when it has none."""
    if isinstance(err, UserMessager):
        message = err.user_message
        if isinstance(message, str):
            return message
    return ""


def _cause_of(err: BaseException) -> BaseException | None:
    if isinstance(err, Causer):
        cause = err.cause
        if cause is None or isinstance(cause, BaseException):
            return cause
    return err.__cause__


def _captured_trace(err: BaseException) -> StackTrace | None:
    if isinstance(err, StackTracer):
        trace = err.stack_trace
        if isinstance(trace, StackTrace) and len(trace):
            return trace
    return None


def iter_causes(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and then each cause down to the root.

    Annotated errors are unwrapped through ``cause``; other exceptions
    through ``__cause__``. A cycle stops the walk at the first repeat.
    """
    seen: set[int] = set()
    while err is not None:
        if id(err) in seen:
            logger.warning(
                "cause_chain.cycle_detected",
                extra={"error_type": type(err).__name__},
            )
            return
        seen.add(id(err))
        yield err
        err = _cause_of(err)


def root_cause(err: BaseException | None) -> BaseException | None:
    """Return the innermost exception of the chain, None for None."""
    root = None
    for root in iter_causes(err):
        pass
    return root


def get_stack_trace(err: BaseException | None) -> str:
    """Return the stack trace of the first error created in the chain.

    The deepest layer carrying a captured trace wins, since later wraps
    usually happen in propagation code rather than at the fault site.
    When no layer has one, the full traceback representation of ``err``
    is returned instead.

    Args:
        err: Any exception, or None.

    Returns:
        Rendered trace without the capture frame, "" for None.
    """
    if err is None:
        return ""

    origin = None
    for node in iter_causes(err):
        trace = _captured_trace(node)
        if trace is not None:
            origin = trace

    if origin is None:
        logger.debug(
            "stack_trace.fallback",
            extra={"error_type": type(err).__name__},
        )
        return "".join(traceback.format_exception(err))

    return origin.format()

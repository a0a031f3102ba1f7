"""Annotated error type and the construction rules behind ErrorKind.

An AnnotatedError wraps exactly one cause (or none, for a root error) and
adds a kind, a user message and the stack captured where it was created.
The private helpers below must only be called from the ErrorKind methods:
each captures the stack with ``skip=1`` so that frame 0 of the trace is
that method, and rendering drops frame 0.
"""

from __future__ import annotations

from typing import Any

from weberr.core.capabilities import get_type, get_user_message
from weberr.core.kinds import ErrorKind
from weberr.core.stack import StackTrace, capture_stack
from weberr.utils.formatting import sprintf


class AnnotatedError(Exception):
    """Exception carrying a kind, a user message and a stack trace.

    Attributes:
        cause: Wrapped exception, None for a root error.
        kind: Effective ErrorKind of this layer.
        user_message: Message safe to show end users, "" when unset.
        stack_trace: Frames captured at construction.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.UNTYPED,
        user_message: str = "",
        cause: BaseException | None = None,
        stack_trace: StackTrace | None = None,
    ) -> None:
        super().__init__(message)
        self._kind = ErrorKind(kind)
        self._user_message = user_message
        self._cause = cause
        self._stack_trace = stack_trace if stack_trace is not None else StackTrace()
        # Lets the interpreter print the chain in tracebacks
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def user_message(self) -> str:
        return self._user_message

    @property
    def stack_trace(self) -> StackTrace:
        return self._stack_trace

    def __reduce__(self):
        # The default reduce drops __cause__, which lives outside __dict__
        kwargs = {
            "kind": self._kind,
            "user_message": self._user_message,
            "cause": self._cause,
            "stack_trace": self._stack_trace,
        }
        return _rebuild, (type(self), str(self), kwargs), self.__dict__

    def __repr__(self) -> str:
        parts = [repr(str(self)), f"kind={self._kind.name}"]
        if self._user_message:
            parts.append(f"user_message={self._user_message!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


def _rebuild(cls: type[AnnotatedError], message: str, kwargs: dict[str, Any]) -> AnnotatedError:
    return cls(message, **kwargs)


def _check_cause(err: Any) -> None:
    if not isinstance(err, BaseException):
        raise TypeError(f"expected an exception to wrap, got {type(err).__name__}")


def _resolve_kind(kind: ErrorKind, err: BaseException) -> ErrorKind:
    if kind != ErrorKind.UNTYPED:
        return kind
    return get_type(err)


def _new_error(kind: ErrorKind, msg: str, args: tuple[Any, ...]) -> AnnotatedError:
    return AnnotatedError(
        sprintf(msg, args),
        kind=kind,
        stack_trace=capture_stack(skip=1),
    )


def _new_user_error(kind: ErrorKind, msg: str, args: tuple[Any, ...]) -> AnnotatedError:
    message = sprintf(msg, args)
    return AnnotatedError(
        message,
        kind=kind,
        user_message=message,
        stack_trace=capture_stack(skip=1),
    )


def _wrap(
    kind: ErrorKind, err: BaseException | None, msg: str, args: tuple[Any, ...]
) -> AnnotatedError | None:
    if err is None:
        return None
    _check_cause(err)

    return AnnotatedError(
        f"{sprintf(msg, args)}: {err}",
        kind=_resolve_kind(kind, err),
        user_message=get_user_message(err),
        cause=err,
        stack_trace=capture_stack(skip=1),
    )


def _user_wrap(
    kind: ErrorKind, err: BaseException | None, msg: str, args: tuple[Any, ...]
) -> AnnotatedError | None:
    if err is None:
        return None
    _check_cause(err)

    user_message = sprintf(msg, args)
    existing = get_user_message(err)
    if existing:
        user_message = f"{user_message}: {existing}"

    return AnnotatedError(
        str(err),
        kind=_resolve_kind(kind, err),
        user_message=user_message,
        cause=err,
        stack_trace=capture_stack(skip=1),
    )


def _set_kind(kind: ErrorKind, err: BaseException | None) -> AnnotatedError | None:
    if err is None:
        return None
    _check_cause(err)

    return AnnotatedError(
        str(err),
        kind=kind,
        user_message=get_user_message(err),
        cause=err,
        stack_trace=capture_stack(skip=1),
    )

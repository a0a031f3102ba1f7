"""Tests for diagnostic and user message propagation.

Wrapping logic:
- Wrapped errors are displayed using str(), in the form "external: internal"
- user_wrapf doesn't change the diagnostic message
- wrapf doesn't change the user message
- user_errorf sets both messages initially
"""

import copy
import pickle

import pytest

from weberr import (
    AnnotatedError,
    ErrorKind,
    errorf,
    get_type,
    get_user_message,
    user_errorf,
    user_wrapf,
    wrapf,
)


class TestNoneIsAbsorbed:
    """Wrapping None returns None for every operation."""

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_wraps_of_none(self, kind):
        assert kind.wrapf(None, "msg") is None
        assert kind.user_wrapf(None, "msg") is None
        assert kind.set(None) is None

    def test_kind_free_wraps_of_none(self):
        assert wrapf(None, "msg %d", 1) is None
        assert user_wrapf(None, "msg") is None

    def test_accessors_of_none(self):
        assert get_type(None) is ErrorKind.UNTYPED
        assert get_user_message(None) == ""


class TestDiagnosticMessage:
    """Verify str() of wrapped errors."""

    @pytest.mark.parametrize(
        "build, expected",
        [
            (lambda eof: eof, "EOF"),
            (lambda eof: wrapf(eof, "End Of File"), "End Of File: EOF"),
            (lambda eof: errorf("New Error!"), "New Error!"),
            (lambda eof: wrapf(ErrorKind.BAD_REQUEST.errorf("Internal"), "External"), "External: Internal"),
            (lambda eof: user_wrapf(ErrorKind.BAD_REQUEST.errorf("Internal"), "External"), "Internal"),
            (lambda eof: wrapf(ErrorKind.BAD_REQUEST.user_errorf("Internal"), "External"), "External: Internal"),
            (
                lambda eof: wrapf(ErrorKind.UNAUTHORIZED.wrapf(wrapf(eof, "%d", 1), "%s", "2"), "3"),
                "3: 2: 1: EOF",
            ),
        ],
    )
    def test_str(self, eof, build, expected):
        assert str(build(eof)) == expected

    def test_nested_wrapf(self, eof):
        assert str(wrapf(wrapf(eof, "inner"), "outer")) == "outer: inner: EOF"

    def test_user_wrapf_does_not_alter_message(self, eof):
        err = wrapf(eof, "reading header")
        assert str(user_wrapf(err, "X")) == str(err)

    def test_set_does_not_alter_message(self, eof):
        err = wrapf(eof, "reading header")
        assert str(ErrorKind.NOT_FOUND.set(err)) == str(err)


class TestUserMessage:
    """Verify get_user_message() across layers."""

    @pytest.mark.parametrize(
        "build, expected",
        [
            (lambda eof: eof, ""),
            (lambda eof: user_wrapf(eof, "End Of File"), "End Of File"),
            (lambda eof: ErrorKind.UNTYPED.user_errorf("New User Message!"), "New User Message!"),
            (lambda eof: user_wrapf(ErrorKind.BAD_REQUEST.user_errorf("Internal"), "External"), "External: Internal"),
            (lambda eof: user_wrapf(user_wrapf(user_wrapf(eof, "%d", 1), "%s", "2"), "3"), "3: 2: 1"),
            (lambda eof: errorf("internal only"), ""),
        ],
    )
    def test_get_user_message(self, eof, build, expected):
        assert get_user_message(build(eof)) == expected

    def test_user_errorf_sets_both_messages(self):
        err = user_errorf("msg")
        assert get_user_message(err) == "msg"
        assert str(err) == "msg"

    def test_wrapf_inherits_user_message(self):
        err = wrapf(user_errorf("try again later"), "calling billing")
        assert get_user_message(err) == "try again later"
        assert str(err) == "calling billing: try again later"

    def test_layers_evolve_independently(self, eof):
        err = wrapf(eof, "reading config")
        err = user_wrapf(err, "service unavailable")
        err = wrapf(err, "starting worker %d", 7)

        assert str(err) == "starting worker 7: reading config: EOF"
        assert get_user_message(err) == "service unavailable"


def test_user_and_diagnostic_chain_scenario():
    err = ErrorKind.UNTYPED.user_errorf("user error")
    err = ErrorKind.UNTYPED.user_wrapf(err, "wrap user")
    err = ErrorKind.UNTYPED.wrapf(err, "Wrapf")

    assert str(err) == "Wrapf: user error"
    assert get_user_message(err) == "wrap user: user error"
    assert get_type(err) is ErrorKind.UNTYPED


class TestAnnotatedError:
    """Verify the value type itself."""

    def test_is_an_exception(self):
        err = ErrorKind.NOT_FOUND.errorf("user %s not found", "bob")
        assert isinstance(err, AnnotatedError)
        with pytest.raises(AnnotatedError, match="user bob not found"):
            raise err

    def test_cause_chain_is_linked(self, eof):
        inner = wrapf(eof, "inner")
        outer = user_wrapf(inner, "outer")

        assert outer.cause is inner
        assert inner.cause is eof
        assert outer.__cause__ is inner
        assert errorf("root").cause is None

    def test_attributes_are_read_only(self):
        err = ErrorKind.CONFLICT.user_errorf("taken")
        with pytest.raises(AttributeError):
            err.kind = ErrorKind.UNTYPED
        with pytest.raises(AttributeError):
            err.user_message = "changed"
        with pytest.raises(AttributeError):
            err.cause = None

    def test_repr(self):
        err = ErrorKind.BAD_REQUEST.user_errorf("bad input")
        assert repr(err) == "AnnotatedError('bad input', kind=BAD_REQUEST, user_message='bad input')"
        assert repr(errorf("x")) == "AnnotatedError('x', kind=UNTYPED)"

    @pytest.mark.parametrize("value", ["not an error", 42, object()])
    def test_wrapping_a_non_exception_raises(self, value):
        with pytest.raises(TypeError):
            wrapf(value, "msg")
        with pytest.raises(TypeError):
            user_wrapf(value, "msg")
        with pytest.raises(TypeError):
            ErrorKind.NOT_FOUND.set(value)

    @pytest.mark.parametrize("clone", [copy.copy, lambda err: pickle.loads(pickle.dumps(err))])
    def test_clone_keeps_annotations_and_chain(self, eof, clone):
        err = ErrorKind.NOT_FOUND.user_wrapf(wrapf(eof, "reading"), "missing file")

        back = clone(err)

        assert str(back) == "reading: EOF"
        assert back.kind is ErrorKind.NOT_FOUND
        assert back.user_message == "missing file"
        assert back.stack_trace == err.stack_trace
        assert str(back.cause) == "reading: EOF"
        assert back.__cause__ is back.cause
        assert get_user_message(back) == "missing file"

"""Error annotation for services.

Errors get a kind (mapped to a status code by the caller), an optional
message that is safe to show users, and the stack trace of where they
originated.

Usage:
    from weberr import ErrorKind, get_type, get_user_message, wrapf

    err = ErrorKind.NOT_FOUND.user_errorf("no such user")
    err = wrapf(err, "loading profile %s", user_id)
"""

import logging

from weberr.core.capabilities import (
    Causer,
    StackTracer,
    Typed,
    UserMessager,
    get_stack_trace,
    get_type,
    get_user_message,
    iter_causes,
    root_cause,
)
from weberr.core.errors import AnnotatedError
from weberr.core.kinds import ErrorKind
from weberr.core.stack import Frame, StackTrace

__version__ = "0.1.0"

# Kind-free constructors
errorf = ErrorKind.UNTYPED.errorf
wrapf = ErrorKind.UNTYPED.wrapf
user_errorf = ErrorKind.UNTYPED.user_errorf
user_wrapf = ErrorKind.UNTYPED.user_wrapf

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AnnotatedError",
    "Causer",
    "ErrorKind",
    "Frame",
    "StackTrace",
    "StackTracer",
    "Typed",
    "UserMessager",
    "errorf",
    "get_stack_trace",
    "get_type",
    "get_user_message",
    "iter_causes",
    "root_cause",
    "user_errorf",
    "user_wrapf",
    "wrapf",
    "__version__",
]

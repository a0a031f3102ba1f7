"""Error kinds and the kind-bound constructors.

Each member of ErrorKind carries the constructors, so callers write
``ErrorKind.NOT_FOUND.wrapf(err, "user %s", user_id)``. The kind-free
constructors exported by the package are the bound methods of
``ErrorKind.UNTYPED``.
"""

from __future__ import annotations

from enum import IntEnum
from types import ModuleType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from weberr.core.errors import AnnotatedError


def _errors() -> ModuleType:
    # Imported on first use: errors imports ErrorKind from this module
    from weberr.core import errors

    return errors


class ErrorKind(IntEnum):
    """Categorical tag attached to an error.

    Values are persisted and compared by callers: append new members,
    never reorder existing ones.
    """

    # Unset; callers usually treat it as an internal error (500)
    UNTYPED = 0
    # 400
    BAD_REQUEST = 1
    # 404
    NOT_FOUND = 2
    # 401
    UNAUTHORIZED = 3
    # 409
    CONFLICT = 4

    def errorf(self, msg: str, *args: Any) -> AnnotatedError:
        """Create a root error with a formatted diagnostic message."""
        return _errors()._new_error(self, msg, args)

    def user_errorf(self, msg: str, *args: Any) -> AnnotatedError:
        """Create a root error whose user message equals its diagnostic one."""
        return _errors()._new_user_error(self, msg, args)

    def wrapf(self, err: BaseException | None, msg: str, *args: Any) -> AnnotatedError | None:
        """Wrap ``err`` adding operator context to the diagnostic message.

        The user message is inherited. The kind is this member unless it is
        UNTYPED, in which case the kind of ``err`` is kept.

        Returns:
            The new error, or None when ``err`` is None.
        """
        return _errors()._wrap(self, err, msg, args)

    def user_wrapf(self, err: BaseException | None, msg: str, *args: Any) -> AnnotatedError | None:
        """Wrap ``err`` adding context to the user message only.

        The diagnostic message is left as ``str(err)``. An existing user
        message is kept after the new one as ``"new: existing"``.

        Returns:
            The new error, or None when ``err`` is None.
        """
        return _errors()._user_wrap(self, err, msg, args)

    def set(self, err: BaseException | None) -> AnnotatedError | None:
        """Force this kind on ``err``, even UNTYPED.

        Returns:
            The new error, or None when ``err`` is None.
        """
        return _errors()._set_kind(self, err)


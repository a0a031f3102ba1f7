"""printf-style message formatting for error constructors."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


def sprintf(msg: str, args: tuple[Any, ...]) -> str:
    """Format ``msg`` with ``args`` the way logging does.

    A single non-empty mapping argument is used for ``%(name)s`` lookups.
    Without args the message is returned untouched, so a literal ``%`` is
    safe. Bad format strings never raise: the arguments are appended as
    ``%!(EXTRA ...)`` and a warning is logged.

    Examples:
        >>> sprintf("%d items", (3,))
        '3 items'
        >>> sprintf("100%", ())
        '100%'
        >>> sprintf("%d", ("x",))
        "%d %!(EXTRA 'x')"
    """
    if not args:
        return msg

    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]

    try:
        return msg % values
    except (TypeError, ValueError, KeyError) as exc:
        logger.warning(
            "format.failed",
            extra={
                "format_string": msg,
                "arg_count": len(args),
                "reason": str(exc),
            },
        )
        extra = ", ".join(repr(arg) for arg in args)
        return f"{msg} %!(EXTRA {extra})"

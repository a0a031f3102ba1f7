"""Stack trace capture and rendering.

A trace is an immutable tuple of frames ordered innermost first. Frame 0 is
always the library constructor that captured it; rendering drops it so the
output starts at the caller's code.
"""

from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from itertools import islice
from typing import Iterator

from weberr.core.config import settings


@dataclass(frozen=True)
class Frame:
    """A single call-frame descriptor."""

    function: str
    filename: str
    lineno: int


@dataclass(frozen=True)
class StackTrace:
    """Frames captured at error construction, innermost first."""

    frames: tuple[Frame, ...] = ()

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.frames)

    def __getitem__(self, index: int) -> Frame:
        return self.frames[index]

    def format(self) -> str:
        """Render the trace in traceback style, most recent call last.

        The first captured frame (the capture site) is omitted.

        Returns:
            Multi-line text, empty when there is nothing left to render.
        """

        summary = traceback.StackSummary.from_list(
            [
                (frame.filename, frame.lineno, frame.function, None)
                for frame in reversed(self.frames[1:])
            ]
        )
        return "".join(summary.format())


def capture_stack(skip: int = 0) -> StackTrace:
    """Capture the current call stack.

    Args:
        skip: Extra frames to skip above the caller of this function.

    Returns:
        StackTrace starting at the selected frame, or an empty trace when
        capture is disabled.
    """

    cfg = settings.stack
    if not cfg.enabled:
        return StackTrace()

    start = sys._getframe(skip + 1)
    frames = tuple(
        Frame(f.f_code.co_name, f.f_code.co_filename, lineno)
        for f, lineno in islice(traceback.walk_stack(start), cfg.max_frames)
    )
    return StackTrace(frames)

"""Utility helpers used across ``ctxlog`` modules."""

import os
import traceback
from types import FrameType


def short_caller(frame: FrameType) -> str:
    """Render a frame as ``parent_dir/file.py:line``."""
    path = frame.f_code.co_filename
    parent = os.path.basename(os.path.dirname(path))
    name = os.path.basename(path)
    location = f"{parent}/{name}" if parent else name
    return f"{location}:{frame.f_lineno}"


# the call stack leading to (and including) a frame, as printed by traceback.
def format_stack(frame: FrameType) -> str:
    """
    Render the call stack ending at *frame*, innermost call last.

    Args:
        frame (FrameType): The innermost frame to include.

    Returns:
        str: The formatted stack without a trailing newline.
    """
    return "".join(traceback.format_stack(frame)).rstrip("\n")

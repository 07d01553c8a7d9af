"""Reading the memory figures of the running process from the proc filesystem."""

from __future__ import annotations

import os
import sys
from typing import Dict, Optional, TextIO

_FIELDS = ("VmData:", "VmSize:")


def read_mem_usage(status_path: Optional[str] = None) -> Dict[str, str]:
    """The VmData and VmSize entries of a proc status file, in file order.

    By default the status file of the current process is read.
    """
    if status_path is None:
        status_path = f"/proc/{os.getpid()}/status"
    with open(status_path, encoding="utf-8", errors="replace") as handle:
        tokens = handle.read().split()
    usage: Dict[str, str] = {}
    pending = iter(tokens)
    for token in pending:
        if token in _FIELDS:
            value = next(pending, None)
            if value is not None:
                usage[token[:-1]] = value
    return usage


def print_mem_usage(stream: Optional[TextIO] = None) -> None:
    """Print the memory figures of this process; prints nothing if they cannot be read."""
    if stream is None:
        stream = sys.stderr
    try:
        usage = read_mem_usage()
    except OSError:
        return
    for name, value in usage.items():
        stream.write(f"#{name}:\t{value}\n")
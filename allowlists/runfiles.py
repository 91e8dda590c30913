"""Runtime-resources (runfiles) root resolution.

Follows the Bazel runfiles conventions:
  1. ``RUNFILES_DIR`` (set by ``bazel run`` and most launchers)
  2. ``TEST_SRCDIR`` (set by ``bazel test``)
  3. ``<argv[0]>.runfiles`` when that directory exists next to the binary

Returns an empty string when no runfiles tree is available; callers then
skip the runfiles tier and fall back to working-directory paths.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

_RUNFILES_ENV_VARS = ("RUNFILES_DIR", "TEST_SRCDIR")


def get_runfiles_dir(argv0: Optional[str] = None) -> str:
    for var in _RUNFILES_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value

    program = argv0 if argv0 is not None else (sys.argv[0] if sys.argv else "")
    if program:
        candidate = f"{program}.runfiles"
        if os.path.isdir(candidate):
            return candidate
    return ""

"""Allowlist file loader.

Each allowlist lives in ``<path_prefix><name>.txt``. The file is looked up in
two tiers:

  1. ``<runfiles_root>/<workspace>/<relative path>`` (skipped with no root)
  2. ``<relative path>`` opened from the current working directory

A tier is "absent" only when its file cannot be opened. When both tiers are
absent the allowlist is empty; that is not an error, and the list's
EmptyPolicy decides what the empty list means.

File format: UTF-8, one entry per line, split on ``\\n`` only. Lines starting
with ``//`` are comments. Every other line, blank lines included, is taken
verbatim. Invalid UTF-8 bytes survive as surrogate escapes and never match a
well-formed path.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional

from allowlists.config import Config
from allowlists.constants import (
    ALLOWLIST_ENCODING,
    ALLOWLIST_FILE_SUFFIX,
    ALLOWLIST_PATH_PREFIX,
    COMMENT_MARKER,
    DEFAULT_RUNFILES_WORKSPACE,
)
from allowlists.info import AllowlistInfo, EmptyPolicy
from allowlists.runfiles import get_runfiles_dir
from allowlists.utils.logger import get_logger

logger = get_logger(__name__)


def allowlist_relative_path(name: str, prefix: str = ALLOWLIST_PATH_PREFIX) -> str:
    return f"{prefix}{name}{ALLOWLIST_FILE_SUFFIX}"


# ─── Tiered file reading ──────────────────────────────────────────────────────


def _read_lines(path: str) -> Optional[list[str]]:
    """Read ``path`` line by line, or return None if it cannot be opened.

    Lines are split on ``b"\\n"`` and decoded one at a time; bytes that are
    not valid UTF-8 are kept as surrogate escapes, so a bad byte only affects
    its own line. An I/O failure after the file is open ends the read early;
    lines read so far are kept, the same as reaching end of file.
    """
    try:
        fh = open(path, "rb")
    except OSError:
        return None

    lines: list[str] = []
    with fh:
        try:
            for raw in fh:
                if raw.endswith(b"\n"):
                    raw = raw[:-1]
                lines.append(raw.decode(ALLOWLIST_ENCODING, errors="surrogateescape"))
        except OSError as exc:
            logger.debug(
                "Allowlist read stopped early — keeping lines read so far",
                path=path,
                lines=len(lines),
                error=str(exc),
            )
    return lines


def read_allowlist_lines(
    relative_path: str,
    runfiles_root: str = "",
    workspace: str = DEFAULT_RUNFILES_WORKSPACE,
) -> list[str]:
    """Return the raw lines of an allowlist file, or [] if no tier opens."""
    if runfiles_root:
        full_path = os.path.join(runfiles_root, workspace, relative_path)
        lines = _read_lines(full_path)
        if lines is not None:
            logger.debug("Allowlist read from runfiles", path=full_path)
            return lines

    lines = _read_lines(relative_path)
    if lines is not None:
        logger.debug("Allowlist read from working directory", path=relative_path)
        return lines

    logger.debug(
        "Allowlist file not found — empty allowlist",
        path=relative_path,
        runfiles_root=runfiles_root or None,
    )
    return []


# ─── Parsing ──────────────────────────────────────────────────────────────────


def parse_entries(lines: Iterable[str]) -> frozenset[str]:
    """Drop comment lines; every other line is an entry as-is."""
    return frozenset(line for line in lines if not line.startswith(COMMENT_MARKER))


def load_allowlist(
    name: str,
    policy: EmptyPolicy = EmptyPolicy.DENY_ALL_WHEN_EMPTY,
    config: Optional[Config] = None,
) -> AllowlistInfo:
    """Load one named allowlist into an AllowlistInfo. Never raises for I/O."""
    if config is None:
        config = Config.defaults()

    runfiles_root = config.runfiles_dir
    if runfiles_root is None:
        runfiles_root = get_runfiles_dir()

    relative_path = allowlist_relative_path(name, config.path_prefix)
    entries = parse_entries(
        read_allowlist_lines(relative_path, runfiles_root, config.runfiles_workspace)
    )
    logger.debug(
        "Allowlist loaded",
        allowlist=name,
        count=len(entries),
        policy=policy.value,
    )
    return AllowlistInfo(entries=entries, policy=policy)

"""Shared constants for the allowlist registry.

Path layout and file-format markers used by the loader and the config
defaults. Import from here rather than repeating literals.
"""

# ─── Backing file layout ─────────────────────────────────────────────────────

# Directory prefix every allowlist file lives under, relative to the
# workspace root (runfiles tier) or the working directory (fallback tier).
ALLOWLIST_PATH_PREFIX: str = "third_party/protobuf/compiler/allowlists/"

# Suffix appended to the logical allowlist name.
ALLOWLIST_FILE_SUFFIX: str = ".txt"

# Workspace directory joined between the runfiles root and the relative path.
DEFAULT_RUNFILES_WORKSPACE: str = "google3"

# ─── File format ─────────────────────────────────────────────────────────────

# Lines starting with this marker are comments and never become entries.
COMMENT_MARKER: str = "//"

# Encoding of allowlist files.
ALLOWLIST_ENCODING: str = "utf-8"

# ─── Logging ─────────────────────────────────────────────────────────────────

# Registry loads slower than this are logged at WARNING instead of DEBUG.
SLOW_LOAD_THRESHOLD_MS: float = 50.0

# Value of the ``component`` key on every log event.
LOG_COMPONENT: str = "allowlists"

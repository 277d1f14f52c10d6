"""Global configuration and constants for the preference tree."""

from __future__ import annotations

import os
from typing import Final, Optional

BREADCRUMB_DELIMITER: Final = os.environ.get("PREFTREE_BREADCRUMB_DELIMITER", "#")

# Application-level default category (pre-selected / visible on open). None = show all.
DEFAULT_CATEGORY: Final[Optional[str]] = os.environ.get("PREFTREE_DEFAULT_CATEGORY") or None

# Opt-in acyclicity checks when stamping / building trees
DEBUG_TREE_CHECKS: Final = os.environ.get("PREFTREE_DEBUG_TREE_CHECKS", "").lower() in {
    "1",
    "true",
    "yes",
}

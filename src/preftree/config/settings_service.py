"""Runtime settings service for the preference tree.

Centralizes the toggles consumed by the breadcrumb builder, the filterable
tree and the search service. Defaults are seeded from ``config.settings``
(environment aware) and can be replaced at runtime or by tests through the
``SettingsService.instance`` singleton.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from . import settings as _config


@dataclass
class SettingsService:
    """Runtime settings and feature flags.

    Attributes:
        breadcrumb_delimiter: Separator placed between labels in a breadcrumb.
        default_category: Description of the category shown when the tree
            opens. ``None`` keeps every category visible.
        debug_tree_checks: When True, category trees are checked for cycles
            before being stamped or wrapped.
        search_case_sensitive: When False (default), search matches ignore case.
    """

    # singleton convenience instance; tests may replace it with a fresh one.
    instance: ClassVar["SettingsService"]

    breadcrumb_delimiter: str = _config.BREADCRUMB_DELIMITER
    default_category: Optional[str] = _config.DEFAULT_CATEGORY
    debug_tree_checks: bool = _config.DEBUG_TREE_CHECKS
    search_case_sensitive: bool = False


# Initialize default singleton
SettingsService.instance = SettingsService()

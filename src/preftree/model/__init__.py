"""Preference category model: categories, groups, settings and breadcrumbs."""

from .breadcrumbs import CyclicCategoryError, ensure_acyclic, join_breadcrumb, stamp_breadcrumbs
from .category import Category, flatten_categories, translate_categories
from .group import Group, Setting, groups_to_settings
from .observable import ObservableValue, ValueChange

__all__ = [
    "Category",
    "CyclicCategoryError",
    "Group",
    "ObservableValue",
    "Setting",
    "ValueChange",
    "ensure_acyclic",
    "flatten_categories",
    "groups_to_settings",
    "join_breadcrumb",
    "stamp_breadcrumbs",
    "translate_categories",
]

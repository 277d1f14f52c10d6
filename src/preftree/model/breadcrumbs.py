"""Breadcrumb stamping for category trees.

Every category gets a human readable path built from the labels of its
ancestors, e.g. ``Screen#Scaling#Zoom``. Groups attached to a category
receive the category's own breadcrumb. The walk is recursive and pre-order;
the category graph must be a tree (see ``ensure_acyclic`` for the opt-in
debug check).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence, Set

from preftree.config.settings_service import SettingsService

if TYPE_CHECKING:  # pragma: no cover
    from .category import Category

__all__ = [
    "CyclicCategoryError",
    "join_breadcrumb",
    "stamp_breadcrumbs",
    "ensure_acyclic",
]

_logger = logging.getLogger(__name__)


class CyclicCategoryError(RecursionError):
    """Raised by the debug check when a category is its own ancestor."""


def join_breadcrumb(parent: str, label: str, delimiter: Optional[str] = None) -> str:
    """Append ``label`` to ``parent``; an empty parent yields ``label`` alone."""
    if delimiter is None:
        delimiter = SettingsService.instance.breadcrumb_delimiter
    if not parent:
        return label
    return f"{parent}{delimiter}{label}"


def stamp_breadcrumbs(
    categories: Optional[Sequence["Category"]],
    parent_breadcrumb: str = "",
    delimiter: Optional[str] = None,
) -> None:
    """Assign breadcrumbs to ``categories`` and everything below them.

    Parameters
    ----------
    categories : Sequence[Category] | None
        Categories sharing the parent identified by ``parent_breadcrumb``.
        ``None`` is treated as an empty sequence.
    parent_breadcrumb : str
        Breadcrumb of the parent; empty for top-level categories.
    delimiter : str | None
        Separator override; defaults to the configured delimiter.
    """
    if not categories:
        return
    if delimiter is None:
        delimiter = SettingsService.instance.breadcrumb_delimiter
    if SettingsService.instance.debug_tree_checks:
        ensure_acyclic(categories)
    _stamp(categories, parent_breadcrumb, delimiter)
    _logger.debug("Stamped breadcrumbs below %r", parent_breadcrumb or "<root>")


def _stamp(categories: Sequence["Category"], parent_breadcrumb: str, delimiter: str) -> None:
    for category in categories:
        category.breadcrumb = join_breadcrumb(parent_breadcrumb, category.description, delimiter)
        if category.groups is not None:
            for group in category.groups:
                group.add_to_breadcrumb(category.breadcrumb, delimiter)
        if category.children is not None:
            _stamp(category.children, category.breadcrumb, delimiter)


def ensure_acyclic(categories: Iterable["Category"]) -> None:
    """Raise ``CyclicCategoryError`` if any category is reachable from itself.

    Shared sub-trees (the same category below two parents) are allowed; only
    a category appearing on its own ancestor path is rejected.
    """
    path: Set[int] = set()

    def visit(items: Iterable["Category"]) -> None:
        for category in items:
            key = id(category)
            if key in path:
                raise CyclicCategoryError(f"Category {category.description!r} is its own ancestor")
            if category.children:
                path.add(key)
                try:
                    visit(category.children)
                finally:
                    path.discard(key)

    visit(categories)

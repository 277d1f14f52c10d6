"""Category: a node of the preference hierarchy.

A category carries a translatable description, optional groups of settings,
optional sub-categories, a breadcrumb, an icon and an expand flag. Trees are
built with the fluent API::

    Category.of("Screen", icon=screen_icon).sub_categories(
        Category.of("Scaling", Setting.of("Zoom", 100)),
        Category.of("Colors", colors_group),
    ).expand()

Structure is only changed while the tree is being defined. Once a tree is
handed to ``FilterableCategoryTree`` the categories are sealed; later
fluent calls are logged as warnings.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .breadcrumbs import stamp_breadcrumbs
from .group import Group, GroupLike, Setting, Translator, groups_to_settings
from .observable import ObservableValue, Subscription, ValueChange

__all__ = ["Category", "flatten_categories", "translate_categories"]

_logger = logging.getLogger(__name__)


class Category:
    def __init__(
        self,
        description: str,
        groups: Optional[Sequence[GroupLike]] = None,
        item_icon: Any = None,
    ) -> None:
        self._description_key = description
        self._description: ObservableValue[str] = ObservableValue(description)
        self._breadcrumb: ObservableValue[str] = ObservableValue("")
        self._groups: Optional[Tuple[GroupLike, ...]] = tuple(groups) if groups is not None else None
        self._children: Optional[Tuple["Category", ...]] = None
        self._item_icon = item_icon
        self._auto_expand = False
        self._sealed = False
        self.translate(None)
        self.breadcrumb = description

    # Construction ---------------------------------------------------
    @classmethod
    def of(cls, description: str, *items: Any, icon: Any = None) -> "Category":
        """Create a category from a description and optional content.

        ``items`` are either groups, used as given, or settings, each wrapped
        into its own single-setting group. Without items the category has no
        groups at all (``groups is None``).
        """
        if not items:
            return cls(description, item_icon=icon)
        if all(isinstance(item, Setting) for item in items):
            return cls(description, [Group.of(setting) for setting in items], icon)
        if any(isinstance(item, Setting) for item in items):
            raise TypeError("Category.of() takes either groups or settings, not both")
        return cls(description, items, icon)

    def sub_categories(self, *children: "Category") -> "Category":
        """Attach ``children`` as sub-categories; returns self for chaining."""
        self._warn_if_sealed("sub_categories")
        self._children = tuple(children)
        return self

    def expand(self) -> "Category":
        """Auto-expand this category in the tree view; returns self for chaining."""
        self._warn_if_sealed("expand")
        self._auto_expand = True
        return self

    def seal(self) -> None:
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _warn_if_sealed(self, operation: str) -> None:
        if self._sealed:
            _logger.warning(
                "%s() called on category %r after it was registered with a tree",
                operation,
                self._description_key,
            )

    # Breadcrumbs ----------------------------------------------------
    def create_breadcrumbs(self, categories: Optional[Sequence["Category"]]) -> None:
        """Stamp ``categories`` (and their subtrees) using this category as parent."""
        stamp_breadcrumbs(categories, self.breadcrumb)

    # Search marking -------------------------------------------------
    def unmark_settings(self) -> None:
        if self._groups is not None:
            for setting in groups_to_settings(self._groups):
                setting.unmark()

    def unmark_groups(self) -> None:
        if self._groups is not None:
            for group in self._groups:
                group.unmark()

    def unmark_all(self) -> None:
        self.unmark_groups()
        self.unmark_settings()

    # Translation ----------------------------------------------------
    def translate(self, service: Optional[Translator]) -> None:
        """Refresh the description; ``None`` shows the raw key."""
        if service is None:
            self._description.set(self._description_key)
            return
        if self._description_key:
            self._description.set(service.translate(self._description_key))

    def update_group_descriptions(self, service: Optional[Translator] = None) -> None:
        if self._groups is None:
            return
        for group in self._groups:
            if service is None:
                group.retranslate()
            else:
                group.retranslate(service)

    # Accessors ------------------------------------------------------
    @property
    def description_key(self) -> str:
        return self._description_key

    @property
    def description(self) -> str:
        return self._description.value

    @property
    def groups(self) -> Optional[Tuple[GroupLike, ...]]:
        return self._groups

    @property
    def children(self) -> Optional[Tuple["Category", ...]]:
        return self._children

    @property
    def breadcrumb(self) -> str:
        return self._breadcrumb.value

    @breadcrumb.setter
    def breadcrumb(self, value: str) -> None:
        self._breadcrumb.set(value)

    @property
    def item_icon(self) -> Any:
        return self._item_icon

    @property
    def auto_expand(self) -> bool:
        return self._auto_expand

    # Change notification --------------------------------------------
    def on_description_changed(self, handler: Callable[[ValueChange], Any]) -> Subscription:
        return self._description.subscribe(handler)

    def on_breadcrumb_changed(self, handler: Callable[[ValueChange], Any]) -> Subscription:
        return self._breadcrumb.subscribe(handler)

    @property
    def description_changed(self) -> ObservableValue[str]:
        return self._description

    @property
    def breadcrumb_changed(self) -> ObservableValue[str]:
        return self._breadcrumb

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"Category({self._description_key!r})"


def flatten_categories(categories: Optional[Sequence[Category]]) -> List[Category]:
    """Return every category reachable from ``categories`` in pre-order."""
    out: List[Category] = []
    for category in categories or ():
        out.append(category)
        out.extend(flatten_categories(category.children))
    return out


def translate_categories(categories: Sequence[Category], service: Optional[Translator]) -> None:
    """Retranslate a whole tree and restamp its breadcrumbs from an empty root."""
    for category in flatten_categories(categories):
        category.translate(service)
        category.update_group_descriptions(service)
    stamp_breadcrumbs(categories)
